# app/main.py
"""
Punto de entrada de la aplicación FastAPI.
"""

import sys
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.core.config import CORS_ORIGINS, IS_PRODUCTION, SCHEDULE_TYPES_PATH
from app.core.logging_config import get_logger, setup_logging
from app.core.request_logging import RequestLoggingMiddleware
from app.core.sentry_config import init_sentry
from app.core.storage import load_schedule_types
from app.database.database import create_tables, get_db
from app.routes.jobs import router as jobs_router
from app.routes.timesheet import router as timesheet_router

APP_VERSION = "0.3.0"

# Logging primero, antes de cualquier import que registre mensajes
setup_logging()
logger = get_logger(__name__)

# Sentry para seguimiento de errores (solo producción)
sentry_enabled = init_sentry()


def validate_required_data_files():
    """
    Verifica que el catálogo de tipos de horario exista y se pueda leer.

    Raises:
        RuntimeError: Si el archivo falta o tiene datos inválidos
    """
    if not SCHEDULE_TYPES_PATH.exists():
        raise RuntimeError(
            f"Required data file missing: {SCHEDULE_TYPES_PATH}\n"
            f"Ensure you are running from the correct directory and all data files are present."
        )

    try:
        schedule_types = load_schedule_types(SCHEDULE_TYPES_PATH)
    except Exception as e:
        raise RuntimeError(f"Invalid schedule types in {SCHEDULE_TYPES_PATH}: {e}") from e

    logger.info(f"Schedule types validated: {', '.join(sorted(schedule_types))}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Eventos de arranque y cierre de la aplicación."""
    # Arranque
    logger.info(
        "Application starting up",
        extra={
            "extra_fields": {
                "production": IS_PRODUCTION,
                "python_version": sys.version,
            }
        },
    )

    try:
        validate_required_data_files()
    except Exception as e:
        logger.error(f"Data file validation failed: {e}", exc_info=True)
        raise

    try:
        create_tables()
        logger.info("Database tables created/verified")
    except Exception as e:
        logger.error(f"Failed to create database tables: {e}", exc_info=True)
        raise

    yield

    # Cierre
    logger.info("Application shutting down")


app = FastAPI(
    title="Registro de Actividades",
    description="Registro diario: cómputo de la jornada y validación de actividades",
    version=APP_VERSION,
    lifespan=lifespan,
)

if IS_PRODUCTION:
    # Producción: CORS estricto, solo los orígenes configurados
    if not CORS_ORIGINS:
        logger.warning(
            "Production mode but no CORS_ORIGINS set. CORS will block all cross-origin requests. "
            "Set CORS_ORIGINS environment variable if you need to allow specific origins."
        )

    allowed_origins = CORS_ORIGINS
    allowed_methods = ["GET", "POST", "PUT", "DELETE"]

    logger.info(f"CORS configured for production with origins: {allowed_origins}")
else:
    # Desarrollo: CORS permisivo
    allowed_origins = ["*"]
    allowed_methods = ["*"]

    logger.info("CORS configured for development (permissive)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=allowed_methods,
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(timesheet_router)
app.include_router(jobs_router)


@app.get("/health", tags=["health"])
async def health_check(db: Session = Depends(get_db)):
    """
    Chequeo de salud para monitoreo.

    Responde 200 si la base de datos contesta, 503 si no.
    """
    try:
        db.execute(text("SELECT 1"))
        return JSONResponse(
            status_code=200,
            content={
                "status": "healthy",
                "service": "registro-actividades",
                "version": APP_VERSION,
                "database": "connected",
            },
        )
    except Exception as e:
        logger.error(f"Health check failed - database connection error: {e}", exc_info=True)
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "service": "registro-actividades",
                "database": "disconnected",
                "error": "Database connection failed",
            },
        ) from e
