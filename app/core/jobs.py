"""Catálogo de trabajos para el formulario de actividades."""

from sqlalchemy.orm import Session

from app.core.models import Job
from app.database.database import JobRow


class JobCatalog:
    def __init__(self, session: Session):
        self.session = session

    def list_active(self) -> list[Job]:
        rows = self.session.query(JobRow).filter(JobRow.active.is_(True)).order_by(JobRow.code).all()
        return [Job(id=row.id, code=row.code, name=row.name, active=row.active) for row in rows]

    def exists(self, job_id: int) -> bool:
        return self.session.query(JobRow.id).filter(JobRow.id == job_id, JobRow.active.is_(True)).first() is not None
