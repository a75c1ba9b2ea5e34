"""Cambios de horario del día frente a las actividades ya registradas."""

import logging

from app.core.constants import OUT_OF_RANGE_SAMPLE_SIZE
from app.core.errors import ActivitiesOutOfRange, ErrorCode, InvalidFormat
from app.core.models import Activity, DayConfig, DayRecord, DaySpan, FieldError, OutOfRangeActivity

from .time_math import format_minutes, normalize_interval, parse_time

logger = logging.getLogger(__name__)


def is_activity_outside_span(activity: Activity, span: DaySpan) -> bool:
    """True si una actividad con inicio/fin queda fuera del rango dado."""
    if not activity.has_interval:
        return False
    s, e = normalize_interval(
        parse_time(activity.start_hhmm),
        parse_time(activity.end_hhmm),
        span.start,
        span.crosses_midnight,
    )
    return s < span.start or e > span.end


def find_out_of_range(span: DaySpan, activities: list[Activity]) -> list[OutOfRangeActivity]:
    """Actividades que quedarían fuera de un nuevo rango del día, en orden."""
    flagged = []
    for idx, act in enumerate(activities):
        if is_activity_outside_span(act, span):
            flagged.append(
                OutOfRangeActivity(
                    index=idx,
                    job=act.job_code or str(act.job_id),
                    start=act.start_hhmm,
                    end=act.end_hhmm,
                )
            )
    return flagged


def ensure_within_span(span: DaySpan, activities: list[Activity]) -> None:
    """
    Bloquea el cambio de horario si deja actividades fuera de rango.

    No hay guardado parcial ni recorte automático: el empleado debe ajustar el
    horario o editar/eliminar las actividades primero.

    Raises:
        ActivitiesOutOfRange: con la cantidad y hasta tres ejemplos
    """
    flagged = find_out_of_range(span, activities)
    if not flagged:
        return

    samples = [f.describe() for f in flagged]
    logger.info("Day config change blocked, %s activities out of range", len(flagged))
    raise ActivitiesOutOfRange(
        count=len(flagged),
        samples=samples[:OUT_OF_RANGE_SAMPLE_SIZE],
        entry_time=format_minutes(span.start),
        exit_time=format_minutes(span.end),
    )


def validate_day_config(config: DayConfig) -> dict[str, FieldError]:
    """Entrada y salida son obligatorias y deben ser HH:MM."""
    errors: dict[str, FieldError] = {}
    labels = {"entry_time": "La hora de entrada es obligatoria", "exit_time": "La hora de salida es obligatoria"}

    for field, message in labels.items():
        value = getattr(config, field)
        if not value:
            errors[field] = FieldError(code=ErrorCode.REQUIRED_FIELD_MISSING, message=message)
            continue
        try:
            parse_time(value)
        except InvalidFormat as e:
            errors[field] = FieldError(code=ErrorCode.INVALID_FORMAT, message=e.message)
    return errors


def has_config_changes(config: DayConfig, record: DayRecord | None) -> bool:
    """True si la configuración editada difiere de la guardada."""
    if record is None:
        return False
    return config != record.config()
