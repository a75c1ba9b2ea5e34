"""
Validación de actividades contra la configuración del día.

Una actividad enviada pasa por todas las reglas en orden y los errores se
acumulan en un mapa por campo. Se acepta solo si el mapa queda vacío; no hay
aceptación parcial.
"""

import logging
import math

from pydantic import BaseModel, ConfigDict, Field

from app.core.config import MINUTES_PER_DAY
from app.core.errors import ErrorCode, InvalidFormat
from app.core.models import Activity, ActivityDraft, DayConfig, DaySpan, FieldError, ValidationResult

from .boundary import lunch_deduction_applies, span_for_config
from .duration import compute_from_interval
from .progress import is_overtime_eligible, normal_hours_worked, progress_percent
from .time_math import normalize_interval, overlap_minutes, parse_time, round_hours

logger = logging.getLogger(__name__)

MSG_DESCRIPTION_REQUIRED = "La descripción es obligatoria"
MSG_JOB_REQUIRED = "El job es obligatorio"
MSG_OVERTIME_NOT_ELIGIBLE = (
    "Solo puedes ingresar horas extra cuando hayas completado el 100% de las horas normales del día"
)
MSG_START_REQUIRED = "Hora inicio obligatoria para hora extra"
MSG_END_REQUIRED = "Hora fin obligatoria para hora extra"
MSG_INVALID_COMPUTED = "Las horas calculadas no son válidas"
MSG_DURATION_REQUIRED = "Las horas invertidas son obligatorias para actividades normales"
MSG_INVALID_DURATION = "Ingresa un número válido mayor a 0"
MSG_INVERTED = "La hora final debe ser posterior a la inicial"
MSG_OVERLAP = "Este horario se solapa con otra actividad"
MSG_NO_NORMAL_HOURS = "Este día no tiene horas normales; usa Hora Extra"


def exceeds_quota_message(remaining: float) -> str:
    return f"Las horas exceden el límite disponible. Solo quedan {remaining:.2f} horas para completar el día"


def outside_workday_message(config: DayConfig, overnight: bool) -> str:
    if overnight:
        allowed = f"entre {config.exit_time} y {config.entry_time}"
    else:
        allowed = f"antes de {config.entry_time} o después de {config.exit_time}"
    return f"La hora extra debe estar {allowed}"


class ValidationContext(BaseModel):
    """Estado del día contra el que se valida una actividad."""

    model_config = ConfigDict(frozen=True)

    config: DayConfig
    quota_hours: float
    activities: list[Activity] = Field(default_factory=list)
    editing_index: int | None = None

    @property
    def editing(self) -> Activity | None:
        if self.editing_index is None or not 0 <= self.editing_index < len(self.activities):
            return None
        return self.activities[self.editing_index]

    @property
    def overtime_eligible(self) -> bool:
        worked = normal_hours_worked(self.activities)
        return is_overtime_eligible(self.quota_hours, progress_percent(worked, self.quota_hours))


def _parse_optional_time(value: str, field: str, errors: dict[str, FieldError]) -> int | None:
    if not value:
        return None
    try:
        return parse_time(value)
    except InvalidFormat as e:
        errors[field] = FieldError(code=ErrorCode.INVALID_FORMAT, message=e.message)
        return None


def _parse_hours(value: str | float | None) -> float | None:
    try:
        hours = float(str(value).strip().replace(",", "."))
    except ValueError:
        return None
    if math.isnan(hours) or math.isinf(hours):
        return None
    return hours


def _is_outside_workday(start: int, end: int, config: DayConfig) -> tuple[bool, bool]:
    """
    (fuera_de_jornada, turno_nocturno) para un intervalo de hora extra.

    Turno normal: antes de la entrada o después de la salida. Turno nocturno:
    completamente dentro de la ventana libre [salida, entrada] del mismo día.
    """
    entry = parse_time(config.entry_time)
    exit = parse_time(config.exit_time)
    overnight = entry > exit

    if end <= start:
        end += MINUTES_PER_DAY

    if overnight:
        return start >= exit and end <= entry, True
    return end <= entry or start >= exit, False


def _overlaps_existing(start: int, end: int, span: DaySpan | None, context: ValidationContext) -> bool:
    span_start = span.start if span else 0
    crosses = span.crosses_midnight if span else False
    s, e = normalize_interval(start, end, span_start, crosses)

    for idx, act in enumerate(context.activities):
        if idx == context.editing_index:
            continue
        if not act.has_interval:
            continue
        try:
            a1, a2 = normalize_interval(parse_time(act.start_hhmm), parse_time(act.end_hhmm), span_start, crosses)
        except InvalidFormat:
            logger.warning("Skipping stored activity with unreadable times. index=%s", idx)
            continue
        if overlap_minutes(s, e, a1, a2) > 0:
            return True
    return False


def validate_activity(draft: ActivityDraft, context: ValidationContext) -> ValidationResult:
    """
    Valida una actividad nueva o editada.

    Reglas, en orden:
    1. descripción y job obligatorios
    2. hora extra solo con 100% de horas normales (o cuota 0)
    3. hora extra: inicio y fin obligatorios, duración calculada > 0
    4. actividad normal: horas > 0 y dentro de lo que falta de la cuota
    5. hora extra fuera de la jornada
    6. inicio antes que fin
    7. sin solaparse con otras actividades del día
    8. un día sin horas normales solo admite hora extra

    Returns:
        ValidationResult con el mapa de errores por campo y la duración
        resultante (calculada para hora extra, ingresada para normal)
    """
    errors: dict[str, FieldError] = {}
    config = context.config
    duration: float | None = None

    try:
        span = span_for_config(config)
    except InvalidFormat as e:
        logger.warning("Day config has invalid times: %s", e.message)
        span = None

    # 1
    if not draft.description.strip():
        errors["description"] = FieldError(code=ErrorCode.REQUIRED_FIELD_MISSING, message=MSG_DESCRIPTION_REQUIRED)
    if draft.job_id is None:
        errors["job_id"] = FieldError(code=ErrorCode.REQUIRED_FIELD_MISSING, message=MSG_JOB_REQUIRED)

    # 2
    if draft.is_overtime and not context.overtime_eligible:
        errors["is_overtime"] = FieldError(code=ErrorCode.OVERTIME_NOT_ELIGIBLE, message=MSG_OVERTIME_NOT_ELIGIBLE)

    start = _parse_optional_time(draft.start, "start", errors)
    end = _parse_optional_time(draft.end, "end", errors)

    if draft.is_overtime:
        # 3
        if not draft.start:
            errors["start"] = FieldError(code=ErrorCode.MISSING_TIME_FIELDS, message=MSG_START_REQUIRED)
        if not draft.end:
            errors["end"] = FieldError(code=ErrorCode.MISSING_TIME_FIELDS, message=MSG_END_REQUIRED)
        if start is not None and end is not None:
            duration = compute_from_interval(draft.start, draft.end, lunch_deduction_applies(config), span)
            if duration <= 0:
                errors["duration_hours"] = FieldError(
                    code=ErrorCode.INVALID_COMPUTED_DURATION, message=MSG_INVALID_COMPUTED
                )
    else:
        # 4
        raw = draft.duration_hours
        if raw is None or not str(raw).strip():
            errors["duration_hours"] = FieldError(
                code=ErrorCode.REQUIRED_FIELD_MISSING, message=MSG_DURATION_REQUIRED
            )
        else:
            hours = _parse_hours(raw)
            if hours is None or hours <= 0:
                errors["duration_hours"] = FieldError(code=ErrorCode.INVALID_DURATION, message=MSG_INVALID_DURATION)
            else:
                duration = round_hours(hours)
                remaining = round_hours(
                    max(0.0, context.quota_hours - normal_hours_worked(context.activities))
                )
                available = remaining
                editing = context.editing
                if editing is not None and not editing.is_overtime:
                    available = round_hours(available + float(editing.duration_hours or 0))
                if duration > available:
                    errors["duration_hours"] = FieldError(
                        code=ErrorCode.EXCEEDS_REMAINING_QUOTA, message=exceeds_quota_message(remaining)
                    )

    if start is not None and end is not None:
        # 5
        if span is not None:
            outside, overnight = _is_outside_workday(start, end, config)
            if not outside:
                message = outside_workday_message(config, overnight)
                error = FieldError(code=ErrorCode.OVERTIME_WITHIN_WORKDAY, message=message)
                errors["start"] = error
                errors["end"] = error

        # 6: la ventana libre de un turno nocturno no cruza medianoche
        if end <= start:
            errors["end"] = FieldError(code=ErrorCode.INVERTED_INTERVAL, message=MSG_INVERTED)

        # 7
        if _overlaps_existing(start, end, span, context):
            error = FieldError(code=ErrorCode.OVERLAPPING_ACTIVITY, message=MSG_OVERLAP)
            errors["start"] = error
            errors["end"] = error

    # 8
    if not draft.is_overtime and context.quota_hours == 0:
        errors["duration_hours"] = FieldError(code=ErrorCode.DAY_HAS_NO_NORMAL_HOURS, message=MSG_NO_NORMAL_HOURS)

    if errors:
        logger.debug("Activity rejected: %s", {field: err.code.value for field, err in errors.items()})
        duration = None

    return ValidationResult(errors=errors, duration_hours=duration)
