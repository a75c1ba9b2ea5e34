# app/routes/shared.py
"""
Dependencias comunes de las rutas: usuario actual y armado de servicios.
"""

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.orm import Session

from app.core.jobs import JobCatalog
from app.core.records import RecordStore
from app.core.schedule_lookup import ScheduleLookup
from app.core.sentry_config import set_user_context
from app.core.timesheet import TimesheetService
from app.database.database import User, get_db


def get_current_user_id(
    request: Request,
    x_user_id: int | None = Header(default=None),
    db: Session = Depends(get_db),
) -> int:
    """
    Usuario actual según el encabezado X-User-Id.

    La autenticación ocurre antes de llegar aquí; solo se verifica que el
    usuario exista.
    """
    if x_user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing X-User-Id header")

    user = db.get(User, x_user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    request.state.user_id = user.id
    set_user_context(user.id)
    return user.id


def get_timesheet_service(db: Session = Depends(get_db)) -> TimesheetService:
    return TimesheetService(RecordStore(db), ScheduleLookup(db))


def get_job_catalog(db: Session = Depends(get_db)) -> JobCatalog:
    return JobCatalog(db)
