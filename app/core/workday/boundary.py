"""Rango de la jornada y cuota de horas normales."""

import logging

from app.core.config import (
    H2_NIGHT_TUESDAY_QUOTA_HOURS,
    LUNCH_DEDUCTION_MINUTES,
    MINUTES_PER_DAY,
)
from app.core.constants import SCHEDULE_TYPE_H2, SHIFT_LABEL_NIGHT, TUESDAY
from app.core.errors import MissingConfig
from app.core.models import DayConfig, DaySpan, WorkSchedule

from .time_math import format_minutes, minutes_to_hours, parse_time, round_hours

logger = logging.getLogger(__name__)


def derive_span(entry: str, exit: str) -> DaySpan:
    """
    Rango [inicio, fin) de la jornada en minutos.

    Si la salida no es posterior a la entrada (22:00 → 06:00) la jornada cruza
    medianoche y el fin se guarda como salida + 1440.
    """
    start = parse_time(entry)
    end = parse_time(exit)
    crosses_midnight = end <= start
    if crosses_midnight:
        end += MINUTES_PER_DAY
    return DaySpan(start=start, end=end, crosses_midnight=crosses_midnight)


def span_for_config(config: DayConfig) -> DaySpan | None:
    """derive_span de una DayConfig, o None si falta entrada o salida."""
    if not config.entry_time or not config.exit_time:
        return None
    return derive_span(config.entry_time, config.exit_time)


def lunch_deduction_applies(config: DayConfig) -> bool:
    """Hay descuento de almuerzo salvo en hora corrida."""
    return not config.continuous_shift


def _quota_override(schedule_type: str | None, shift_label: str, weekday: int | None) -> float | None:
    # H2 en jornada nocturna los martes: 6 horas fijas
    if schedule_type == SCHEDULE_TYPE_H2 and shift_label == SHIFT_LABEL_NIGHT and weekday == TUESDAY:
        return H2_NIGHT_TUESDAY_QUOTA_HOURS
    return None


def derive_quota_hours(
    config: DayConfig,
    schedule_type: str | None = None,
    weekday: int | None = None,
) -> float:
    """
    Horas normales esperadas para el día.

    1. Horas entre entrada y salida (turno nocturno: hasta medianoche + desde
       medianoche).
    2. Menos 60 minutos de almuerzo, salvo hora corrida o turno nocturno.
    3. Nunca negativo.
    4. Excepciones por tipo de horario reemplazan el resultado.

    Args:
        config: configuración del día
        schedule_type: tipo de horario del empleado ("H1", "H2", ...)
        weekday: datetime.weekday() del día (0 = lunes)

    Raises:
        MissingConfig: si falta la hora de entrada o de salida
    """
    missing = [name for name in ("entry_time", "exit_time") if not getattr(config, name)]
    if missing:
        raise MissingConfig(missing)

    entry = parse_time(config.entry_time)
    exit = parse_time(config.exit_time)
    overnight = entry > exit

    if overnight:
        minutes = (MINUTES_PER_DAY - entry) + exit
    else:
        minutes = exit - entry
        if lunch_deduction_applies(config):
            minutes -= LUNCH_DEDUCTION_MINUTES

    quota = max(0.0, minutes_to_hours(minutes))

    override = _quota_override(schedule_type, config.shift_label, weekday)
    if override is not None:
        return override
    return round_hours(quota)


def resolve_quota_hours(
    config: DayConfig,
    schedule: WorkSchedule | None,
    weekday: int | None = None,
) -> float:
    """
    Cuota del día con respaldo externo.

    Si la configuración local no tiene entrada/salida se usa la cuota que
    entrega el horario (ScheduleLookup) en vez de fallar.
    """
    schedule_type = schedule.schedule_type if schedule else None
    try:
        return derive_quota_hours(config, schedule_type, weekday)
    except MissingConfig as e:
        logger.debug("Using schedule quota: %s", e.message)

    override = _quota_override(schedule_type, config.shift_label, weekday)
    if override is not None:
        return override
    if schedule is None:
        return 0.0
    return round_hours(max(0.0, schedule.quota_hours))


def adjust_exit_for_continuous_shift(entry: str, exit: str, enabled: bool) -> str:
    """
    Corre la hora de salida al activar/desactivar hora corrida.

    Activar adelanta la salida una hora (ya no hay almuerzo); desactivar la
    atrasa una hora. Los turnos nocturnos no se tocan.
    """
    entry_min = parse_time(entry)
    exit_min = parse_time(exit)

    if entry_min > exit_min:
        return exit

    if enabled:
        exit_min -= LUNCH_DEDUCTION_MINUTES
    else:
        exit_min += LUNCH_DEDUCTION_MINUTES
    return format_minutes(exit_min)
