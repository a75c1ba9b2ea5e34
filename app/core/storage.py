# app/core/storage.py
"""
Carga de los archivos de datos de configuración.
"""

import json
import logging
from functools import cache
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from app.core.config import SCHEDULE_TYPES_PATH
from app.core.models import ScheduleType

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Error general al cargar archivos de datos."""

    pass


def _load_json(file_path: Path) -> list[Any] | dict[str, Any]:
    """
    Lee y decodifica un archivo JSON.
    Args:
        file_path: Ruta del archivo JSON
    Returns:
        Datos decodificados como lista o dict
    Raises:
        StorageError: Si el archivo no se puede leer o el JSON no es válido
    """
    try:
        raw = file_path.read_text(encoding="utf-8")
    except OSError as e:
        logger.exception("Failed to read JSON file %s", file_path)
        raise StorageError(f"Could not read JSON file {file_path}: {e}") from e

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        logger.exception("Invalid JSON in file %s", file_path)
        raise StorageError(f"Invalid JSON in file {file_path}: {e}") from e


def load_schedule_types(file_path: Path | None = None) -> dict[str, ScheduleType]:
    """
    Carga los tipos de horario (H1, H2, ...) desde el archivo de datos.
    Returns:
        Tipos de horario indexados por código
    Raises:
        StorageError: Si el archivo no se puede cargar o interpretar
    """
    file_path = file_path or SCHEDULE_TYPES_PATH
    data = _load_json(file_path)
    try:
        if not isinstance(data, list):
            raise TypeError("Expected list of schedule types")
        schedule_types = [ScheduleType(**item) for item in data]
    except (TypeError, ValidationError) as e:
        logger.exception("Failed to parse schedule types from %s", file_path)
        raise StorageError(f"Could not parse schedule types from {file_path}: {e}") from e
    return {st.code: st for st in schedule_types}


@cache
def get_schedule_types() -> dict[str, ScheduleType]:
    """load_schedule_types() en caché para la ruta configurada."""
    return load_schedule_types()


def clear_storage_cache() -> None:
    get_schedule_types.cache_clear()
