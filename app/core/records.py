"""Persistencia del registro diario con SQLAlchemy."""

import logging

from sqlalchemy.orm import Session

from app.core.models import Activity, DayRecord, DayRecordUpsert
from app.database.database import ActivityRow, DayRecordRow

logger = logging.getLogger(__name__)


def _to_activity(row: ActivityRow) -> Activity:
    return Activity(
        id=row.id,
        description=row.description,
        job_id=row.job_id,
        job_code=row.job.code if row.job else None,
        duration_hours=row.duration_hours,
        is_overtime=row.is_overtime,
        class_name=row.class_name,
        start=row.start,
        end=row.end,
    )


def _to_record(row: DayRecordRow) -> DayRecord:
    return DayRecord(
        id=row.id,
        user_id=row.user_id,
        date_key=row.date_key,
        entry_time=row.entry_time,
        exit_time=row.exit_time,
        shift_label=row.shift_label,
        is_free_day=row.is_free_day,
        continuous_shift=row.continuous_shift,
        comment=row.comment or "",
        supervisor_approved=row.supervisor_approved,
        hr_approved=row.hr_approved,
        activities=[_to_activity(act) for act in row.activities],
    )


class RecordStore:
    """
    Lectura y escritura por reemplazo completo del registro diario.

    Cada cambio reescribe la configuración del día y la lista completa de
    actividades. No hay detección de conflictos: gana la última escritura.
    """

    def __init__(self, session: Session):
        self.session = session

    def _get_row(self, user_id: int, date_key: str) -> DayRecordRow | None:
        return (
            self.session.query(DayRecordRow)
            .filter(DayRecordRow.user_id == user_id, DayRecordRow.date_key == date_key)
            .first()
        )

    def get_by_date(self, user_id: int, date_key: str) -> DayRecord | None:
        """
        Registro de un usuario para un día.

        Returns:
            DayRecord, o None si el día nunca se guardó
        """
        row = self._get_row(user_id, date_key)
        return _to_record(row) if row else None

    def upsert(self, user_id: int, params: DayRecordUpsert) -> DayRecord:
        """Crea o reemplaza por completo el registro de params.date_key."""
        row = self._get_row(user_id, params.date_key)
        created = row is None
        if created:
            row = DayRecordRow(user_id=user_id, date_key=params.date_key)
            self.session.add(row)

        row.entry_time = params.entry_time
        row.exit_time = params.exit_time
        row.shift_label = params.shift_label
        row.is_free_day = params.is_free_day
        row.continuous_shift = params.continuous_shift
        row.comment = params.comment

        row.activities.clear()
        self.session.flush()
        for position, act in enumerate(params.activities):
            row.activities.append(
                ActivityRow(
                    position=position,
                    description=act.description,
                    job_id=act.job_id,
                    duration_hours=act.duration_hours,
                    is_overtime=act.is_overtime,
                    class_name=act.class_name,
                    start=act.start,
                    end=act.end,
                )
            )

        self.session.commit()
        self.session.refresh(row)

        logger.info(
            "Day record %s for user %s on %s (%s activities)",
            "created" if created else "replaced",
            user_id,
            params.date_key,
            len(params.activities),
            extra={"extra_fields": {"user_id": user_id, "date_key": params.date_key}},
        )
        return _to_record(row)
