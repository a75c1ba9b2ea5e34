from fastapi import HTTPException, status

from app.core.errors import InvalidFormat
from app.core.time_utils import parse_date_key
from app.core.workday import parse_time


def validate_date_key(date_key: str) -> str:
    """
    Asegura que date_key sea una fecha "YYYY-MM-DD" válida.

    Devuelve date_key si es válida; si no, responde 400.
    """
    try:
        parse_date_key(date_key)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid date",
        )
    return date_key


def validate_hhmm(value: str, field: str) -> str:
    """Valida un parámetro "HH:MM"; si no, responde 400."""
    try:
        parse_time(value)
    except InvalidFormat as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"field": field, "code": e.code.value, "message": e.message},
        )
    return value


def validate_activity_index(index: int) -> int:
    """Las posiciones de actividad empiezan en 0; un valor negativo da 404."""
    if index < 0:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Activity not found",
        )
    return index
