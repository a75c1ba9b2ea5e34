# app/routes/jobs.py
"""API del catálogo de trabajos que usa el formulario de actividades."""

from fastapi import APIRouter, Depends

from app.core.jobs import JobCatalog
from app.routes.shared import get_current_user_id, get_job_catalog

router = APIRouter(prefix="/api", tags=["jobs"])


@router.get("/jobs")
async def list_jobs(
    user_id: int = Depends(get_current_user_id),
    catalog: JobCatalog = Depends(get_job_catalog),
):
    """Trabajos activos, ordenados por código."""
    return {"jobs": [job.model_dump() for job in catalog.list_active()]}
