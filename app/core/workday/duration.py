"""Duración efectiva de una actividad."""

from app.core.config import LUNCH_END_MINUTES, LUNCH_START_MINUTES, MINUTES_PER_DAY
from app.core.models import Activity, DayConfig, DaySpan

from .boundary import lunch_deduction_applies, span_for_config
from .time_math import minutes_to_hours, normalize_interval, overlap_minutes, parse_time, round_hours


def compute_from_interval(
    start: str,
    end: str,
    lunch_deduction_enabled: bool,
    span: DaySpan | None = None,
) -> float:
    """
    Horas entre inicio y fin ("HH:MM"), descontando el almuerzo.

    Si el fin no es posterior al inicio la actividad cruza medianoche (+24h).
    Con descuento de almuerzo se resta la parte del intervalo que cae en
    12:00–13:00, con el intervalo normalizado contra el rango del día.

    Returns:
        Horas con 2 decimales, nunca negativas
    """
    s = parse_time(start)
    e = parse_time(end)

    minutes = e - s
    if minutes <= 0:
        minutes += MINUTES_PER_DAY

    if lunch_deduction_enabled:
        span_start = span.start if span else 0
        crosses = span.crosses_midnight if span else False
        ns, ne = normalize_interval(s, e, span_start, crosses)
        minutes -= overlap_minutes(ns, ne, LUNCH_START_MINUTES, LUNCH_END_MINUTES)

    return round_hours(max(0.0, minutes_to_hours(minutes)))


def effective_hours(activity: Activity, config: DayConfig) -> float:
    """
    Horas a mostrar para una actividad.

    Actividades sin inicio/fin (normales) devuelven duration_hours tal como se
    ingresó. Con inicio/fin se recalcula siempre contra la configuración
    actual del día: cambiar hora corrida cambia la duración mostrada de las
    horas extra sin reescribir lo guardado.
    """
    if not activity.has_interval:
        return max(0.0, float(activity.duration_hours or 0))

    return compute_from_interval(
        activity.start_hhmm,
        activity.end_hhmm,
        lunch_deduction_applies(config),
        span_for_config(config),
    )
