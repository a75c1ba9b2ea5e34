"""Aritmética de minutos del día: parseo, redondeo, solapamiento y medianoche."""

import re

from app.core.config import (
    HOURS_DECIMALS,
    MINUTES_PER_DAY,
    MINUTES_PER_HOUR,
    QUARTER_HOUR_MINUTES,
)
from app.core.errors import InvalidFormat

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_time(value: str) -> int:
    """
    Convierte "HH:MM" a minutos desde medianoche.

    Raises:
        InvalidFormat: si no es HH:MM con 0 <= HH <= 23 y 0 <= MM <= 59
    """
    if not isinstance(value, str):
        raise InvalidFormat(value)

    match = _HHMM_RE.match(value.strip())
    if match is None:
        raise InvalidFormat(value)

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidFormat(value)
    return hours * MINUTES_PER_HOUR + minutes


def format_minutes(minutes: int) -> str:
    """Minutos (posiblemente >= 1440) a "HH:MM" dentro del día."""
    minutes %= MINUTES_PER_DAY
    return f"{minutes // MINUTES_PER_HOUR:02d}:{minutes % MINUTES_PER_HOUR:02d}"


def round_to_quarter_hour(value: str) -> str:
    """
    Redondea a la grilla de 15 minutos.

    La mitad se redondea hacia arriba. "23:53" da "24:00": el cruce de día lo
    resuelve quien normaliza contra el rango del día, no esta función.
    """
    if not value:
        return value

    total = parse_time(value)
    rounded = (total + QUARTER_HOUR_MINUTES // 2) // QUARTER_HOUR_MINUTES * QUARTER_HOUR_MINUTES
    return f"{rounded // MINUTES_PER_HOUR:02d}:{rounded % MINUTES_PER_HOUR:02d}"


def normalize_against_span(t: int, span_start: int, crosses_midnight: bool) -> int:
    """Ubica una hora de madrugada después de una entrada nocturna."""
    if crosses_midnight and t < span_start:
        return t + MINUTES_PER_DAY
    return t


def overlap_minutes(a1: int, a2: int, b1: int, b2: int) -> int:
    return max(0, min(a2, b2) - max(a1, b1))


def normalize_interval(start: int, end: int, span_start: int = 0, crosses_midnight: bool = False) -> tuple[int, int]:
    """
    Lleva un intervalo a una línea de tiempo continua.

    Primero se normaliza contra el rango del día; si el fin sigue sin ser
    posterior al inicio, el intervalo cruza medianoche.
    """
    s = normalize_against_span(start, span_start, crosses_midnight)
    e = normalize_against_span(end, span_start, crosses_midnight)
    if e <= s:
        e += MINUTES_PER_DAY
    return s, e


def round_hours(hours: float) -> float:
    return round(hours, HOURS_DECIMALS)


def minutes_to_hours(minutes: int) -> float:
    return minutes / MINUTES_PER_HOUR


def quantize_time(value: str) -> str:
    """round_to_quarter_hour() envuelto al día: "23:53" da "00:00"."""
    if not value:
        return value
    rounded = round_to_quarter_hour(value)
    hours, minutes = rounded.split(":")
    return format_minutes(int(hours) * MINUTES_PER_HOUR + int(minutes))
