"""
Registro diario: lectura y escritura completa del día de un empleado.

Cada operación es un read-modify-write: se lee el registro, se valida con el
motor de jornada (app.core.workday) y se reemplaza el registro completo.
"""

import logging

from app.core.constants import MONTH_NAMES, WEEKDAY_NAMES
from app.core.models import (
    Activity,
    ActivityDraft,
    DayConfig,
    DayRecord,
    DayRecordUpsert,
    FieldError,
    ValidationResult,
    WorkSchedule,
)
from app.core.records import RecordStore
from app.core.schedule_lookup import ScheduleLookup
from app.core.time_utils import build_iso_interval, parse_date_key, weekday_of
from app.core.errors import InvalidFormat
from app.core.workday import (
    ValidationContext,
    derive_span,
    effective_hours,
    ensure_within_span,
    has_config_changes,
    quantize_time,
    resolve_quota_hours,
    span_for_config,
    summarize_progress,
    validate_activity,
    validate_day_config,
)

logger = logging.getLogger(__name__)


class RecordLockedError(Exception):
    """El día ya fue aprobado por supervisión o RR. HH. y no admite cambios."""

    def __init__(self, date_key: str):
        super().__init__(f"El registro del {date_key} ya fue aprobado y no se puede modificar")
        self.date_key = date_key


class ActivityNotFoundError(Exception):
    def __init__(self, index: int):
        super().__init__(f"No existe la actividad {index + 1}")
        self.index = index


class ActivityRejected(Exception):
    """La actividad no pasó la validación; lleva el mapa de errores por campo."""

    def __init__(self, result: ValidationResult):
        super().__init__("La actividad no es válida")
        self.result = result


class DayConfigRejected(Exception):
    def __init__(self, errors: dict[str, FieldError]):
        super().__init__("La configuración del día no es válida")
        self.errors = errors


def format_date_es(date_key: str) -> str:
    """Fecha legible, por ejemplo "martes, 4 de marzo de 2025"."""
    date = parse_date_key(date_key)
    return f"{WEEKDAY_NAMES[date.weekday()]}, {date.day} de {MONTH_NAMES[date.month - 1]} de {date.year}"


def config_from_schedule(schedule: WorkSchedule) -> DayConfig:
    return DayConfig(
        entry_time=schedule.entry_time,
        exit_time=schedule.exit_time,
        is_free_day=schedule.is_free_day,
        continuous_shift=schedule.continuous_shift,
        shift_label=schedule.shift_label,
    )


def _quantized(value: str) -> str:
    """Redondea a 15 minutos; un valor mal formado se deja para que la validación lo reporte."""
    try:
        return quantize_time(value)
    except InvalidFormat:
        return value


def _iso_bounds(date_key: str, config: DayConfig) -> tuple[str, str]:
    # La salida va al día siguiente si no es posterior a la entrada
    return build_iso_interval(date_key, config.entry_time, config.exit_time)


class TimesheetService:
    def __init__(self, store: RecordStore, schedules: ScheduleLookup):
        self.store = store
        self.schedules = schedules

    def _load(self, user_id: int, date_key: str) -> tuple[DayRecord | None, WorkSchedule, DayConfig]:
        record = self.store.get_by_date(user_id, date_key)
        schedule = self.schedules.get_work_schedule(user_id, date_key)
        config = record.config() if record else config_from_schedule(schedule)
        return record, schedule, config

    def _quota(self, config: DayConfig, schedule: WorkSchedule, date_key: str) -> float:
        # Día libre o feriado: solo horas extra
        if config.is_free_day:
            return 0.0
        return resolve_quota_hours(config, schedule, weekday_of(date_key))

    def day_view(self, user_id: int, date_key: str) -> dict:
        """
        Todo lo que muestra la pantalla del registro diario para un día.

        Returns:
            dict con configuración, rango, cuota, avance y actividades; cada
            actividad lleva sus horas efectivas recalculadas
        """
        record, schedule, config = self._load(user_id, date_key)
        activities = record.activities if record else []
        quota = self._quota(config, schedule, date_key)
        span = span_for_config(config)

        return {
            "date_key": date_key,
            "date_label": format_date_es(date_key),
            "has_record": record is not None,
            "read_only": record.read_only if record else False,
            "schedule": schedule.model_dump(),
            "config": config.model_dump(),
            "span": span.model_dump() if span else None,
            "quota_hours": quota,
            "force_overtime": quota == 0,
            "progress": summarize_progress(activities, config, quota).model_dump(),
            "activities": [
                {
                    "index": idx,
                    **act.model_dump(),
                    "start_hhmm": act.start_hhmm or None,
                    "end_hhmm": act.end_hhmm or None,
                    "effective_hours": effective_hours(act, config),
                }
                for idx, act in enumerate(activities)
            ],
        }

    def save_activity(
        self,
        user_id: int,
        date_key: str,
        draft: ActivityDraft,
        index: int | None = None,
    ) -> DayRecord:
        """
        Agrega una actividad o reemplaza la que está en index.

        Raises:
            RecordLockedError: el día está aprobado
            ActivityNotFoundError: no existe index
            ActivityRejected: la validación falló
        """
        record, schedule, config = self._load(user_id, date_key)
        if record and record.read_only:
            raise RecordLockedError(date_key)

        draft = draft.model_copy(update={"start": _quantized(draft.start), "end": _quantized(draft.end)})
        existing = list(record.activities) if record else []
        if index is not None and not 0 <= index < len(existing):
            raise ActivityNotFoundError(index)

        context = ValidationContext(
            config=config,
            quota_hours=self._quota(config, schedule, date_key),
            activities=existing,
            editing_index=index,
        )
        result = validate_activity(draft, context)
        if not result.accepted:
            raise ActivityRejected(result)

        if draft.is_overtime:
            start_iso, end_iso = build_iso_interval(date_key, draft.start, draft.end)
        else:
            start_iso, end_iso = None, None

        activity = Activity(
            description=draft.description.strip(),
            job_id=draft.job_id,
            duration_hours=result.duration_hours,
            is_overtime=draft.is_overtime,
            class_name=draft.class_name or None,
            start=start_iso,
            end=end_iso,
        )

        if index is None:
            activities = existing + [activity]
        else:
            activities = existing[:index] + [activity] + existing[index + 1 :]

        return self._write(user_id, date_key, record, config, activities)

    def delete_activity(self, user_id: int, date_key: str, index: int) -> DayRecord:
        record = self.store.get_by_date(user_id, date_key)
        if record is None or not 0 <= index < len(record.activities):
            raise ActivityNotFoundError(index)
        if record.read_only:
            raise RecordLockedError(date_key)

        activities = [act for i, act in enumerate(record.activities) if i != index]
        return self._write(user_id, date_key, record, record.config(), activities)

    def save_day_config(self, user_id: int, date_key: str, config: DayConfig) -> DayRecord:
        """
        Guarda la configuración del día conservando las actividades.

        Raises:
            RecordLockedError: el día está aprobado
            DayConfigRejected: falta la entrada o la salida, o está mal formada
            ActivitiesOutOfRange: el nuevo rango dejaría actividades por fuera
        """
        record = self.store.get_by_date(user_id, date_key)
        if record and record.read_only:
            raise RecordLockedError(date_key)

        config = config.model_copy(
            update={"entry_time": _quantized(config.entry_time), "exit_time": _quantized(config.exit_time)}
        )
        errors = validate_day_config(config)
        if errors:
            raise DayConfigRejected(errors)

        if record is not None and not has_config_changes(config, record):
            logger.debug("Day config unchanged for %s, nothing to save", date_key)
            return record

        activities = list(record.activities) if record else []
        ensure_within_span(derive_span(config.entry_time, config.exit_time), activities)

        entry_iso, exit_iso = _iso_bounds(date_key, config)
        return self._upsert(user_id, date_key, entry_iso, exit_iso, config, activities)

    def _write(
        self,
        user_id: int,
        date_key: str,
        record: DayRecord | None,
        config: DayConfig,
        activities: list[Activity],
    ) -> DayRecord:
        if record is not None:
            entry_iso, exit_iso = record.entry_time, record.exit_time
        elif config.entry_time and config.exit_time:
            entry_iso, exit_iso = _iso_bounds(date_key, config)
        else:
            raise DayConfigRejected(validate_day_config(config))
        return self._upsert(user_id, date_key, entry_iso, exit_iso, config, activities)

    def _upsert(
        self,
        user_id: int,
        date_key: str,
        entry_iso: str,
        exit_iso: str,
        config: DayConfig,
        activities: list[Activity],
    ) -> DayRecord:
        params = DayRecordUpsert(
            date_key=date_key,
            entry_time=entry_iso,
            exit_time=exit_iso,
            shift_label=config.shift_label,
            is_free_day=config.is_free_day,
            continuous_shift=config.continuous_shift,
            comment=config.comment,
            activities=activities,
        )
        return self.store.upsert(user_id, params)

