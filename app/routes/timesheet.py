# app/routes/timesheet.py
"""
API del registro diario: vista del día, configuración y CRUD de actividades.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.errors import ActivitiesOutOfRange, ErrorCode
from app.core.jobs import JobCatalog
from app.core.models import ActivityDraft, DayConfig, DayRecord, FieldError
from app.core.time_utils import date_key_in_tz
from app.core.timesheet import (
    ActivityNotFoundError,
    ActivityRejected,
    DayConfigRejected,
    RecordLockedError,
    TimesheetService,
)
from app.core.validators import validate_activity_index, validate_date_key, validate_hhmm
from app.core.workday import adjust_exit_for_continuous_shift
from app.routes.shared import get_current_user_id, get_job_catalog, get_timesheet_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/timesheet", tags=["timesheet"])


def _field_errors(errors: dict[str, FieldError]) -> dict:
    return {field: {"code": err.code.value, "message": err.message} for field, err in errors.items()}


def _record_payload(record: DayRecord) -> dict:
    return {"status": "saved", "record": record.model_dump()}


def _check_job(draft: ActivityDraft, catalog: JobCatalog) -> None:
    if draft.job_id is not None and not catalog.exists(draft.job_id):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "errors": {
                    "job_id": {
                        "code": ErrorCode.REQUIRED_FIELD_MISSING.value,
                        "message": "Selecciona un trabajo activo",
                    }
                }
            },
        )


def _translate(exc: Exception, date_key: str) -> HTTPException:
    """Traduce los errores del servicio y del motor a respuestas HTTP."""
    if isinstance(exc, ActivityRejected):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"errors": _field_errors(exc.result.errors)},
        )
    if isinstance(exc, DayConfigRejected):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"errors": _field_errors(exc.errors)},
        )
    if isinstance(exc, ActivitiesOutOfRange):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "code": exc.code.value,
                "message": exc.message,
                "count": exc.count,
                "samples": exc.samples,
                "entry_time": exc.entry_time,
                "exit_time": exc.exit_time,
            },
        )
    if isinstance(exc, RecordLockedError):
        return HTTPException(status_code=status.HTTP_423_LOCKED, detail=str(exc))
    if isinstance(exc, ActivityNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    logger.warning("Unhandled timesheet error for %s: %s", date_key, exc)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


HANDLED_ERRORS = (
    ActivityRejected,
    DayConfigRejected,
    ActivitiesOutOfRange,
    RecordLockedError,
    ActivityNotFoundError,
    ValueError,
)


@router.get("/today")
async def get_today(
    user_id: int = Depends(get_current_user_id),
    service: TimesheetService = Depends(get_timesheet_service),
):
    """Vista del día de hoy en la zona horaria del negocio."""
    return service.day_view(user_id, date_key_in_tz())


@router.get("/adjust-exit")
async def adjust_exit(entry: str, exit: str, enabled: bool):
    """Vista previa de la salida al activar o desactivar la hora corrida."""
    validate_hhmm(entry, "entry")
    validate_hhmm(exit, "exit")
    return {"exit_time": adjust_exit_for_continuous_shift(entry, exit, enabled)}


@router.get("/{date_key}")
async def get_day(
    date_key: str,
    user_id: int = Depends(get_current_user_id),
    service: TimesheetService = Depends(get_timesheet_service),
):
    date_key = validate_date_key(date_key)
    return service.day_view(user_id, date_key)


@router.put("/{date_key}/config")
async def save_day_config(
    date_key: str,
    config: DayConfig,
    user_id: int = Depends(get_current_user_id),
    service: TimesheetService = Depends(get_timesheet_service),
):
    """
    Guarda entrada/salida, jornada, día libre y comentario del día.

    La lista de actividades se conserva. Un cambio que deje actividades con
    horario fuera del nuevo rango se rechaza con 409.
    """
    date_key = validate_date_key(date_key)
    try:
        record = service.save_day_config(user_id, date_key, config)
    except HANDLED_ERRORS as e:
        raise _translate(e, date_key) from e
    return _record_payload(record)


@router.post("/{date_key}/activities", status_code=status.HTTP_201_CREATED)
async def add_activity(
    date_key: str,
    draft: ActivityDraft,
    user_id: int = Depends(get_current_user_id),
    service: TimesheetService = Depends(get_timesheet_service),
    catalog: JobCatalog = Depends(get_job_catalog),
):
    date_key = validate_date_key(date_key)
    _check_job(draft, catalog)
    try:
        record = service.save_activity(user_id, date_key, draft)
    except HANDLED_ERRORS as e:
        raise _translate(e, date_key) from e
    return _record_payload(record)


@router.put("/{date_key}/activities/{index}")
async def update_activity(
    date_key: str,
    index: int,
    draft: ActivityDraft,
    user_id: int = Depends(get_current_user_id),
    service: TimesheetService = Depends(get_timesheet_service),
    catalog: JobCatalog = Depends(get_job_catalog),
):
    """Reemplaza la actividad en index; no se compara consigo misma al buscar traslapes."""
    date_key = validate_date_key(date_key)
    index = validate_activity_index(index)
    _check_job(draft, catalog)
    try:
        record = service.save_activity(user_id, date_key, draft, index=index)
    except HANDLED_ERRORS as e:
        raise _translate(e, date_key) from e
    return _record_payload(record)


@router.delete("/{date_key}/activities/{index}")
async def delete_activity(
    date_key: str,
    index: int,
    user_id: int = Depends(get_current_user_id),
    service: TimesheetService = Depends(get_timesheet_service),
):
    date_key = validate_date_key(date_key)
    index = validate_activity_index(index)
    try:
        record = service.delete_activity(user_id, date_key, index)
    except HANDLED_ERRORS as e:
        raise _translate(e, date_key) from e
    return _record_payload(record)
