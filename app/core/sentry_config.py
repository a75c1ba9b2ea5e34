# app/core/sentry_config.py
"""
Configuración de Sentry para seguimiento de errores en producción.

Solo las fallas de almacenamiento o de consulta y los errores de programación
llegan a Sentry; los resultados de validación se devuelven como respuestas
estructuradas, nunca como excepciones.
"""

import logging
import os

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from app.core.config import IS_PRODUCTION

logger = logging.getLogger(__name__)

SENSITIVE_HEADERS = ("cookie", "authorization", "x-user-id")

# Campos de texto libre que el empleado escribe en el registro diario
SENSITIVE_BODY_FIELDS = ("comment", "description")


def init_sentry() -> bool:
    """
    Inicializa el seguimiento de errores con Sentry.

    Returns:
        True si Sentry quedó inicializado, False si no.
    """
    sentry_dsn = os.getenv("SENTRY_DSN", "").strip()

    if not IS_PRODUCTION:
        logger.info("Sentry disabled in development mode")
        return False

    if not sentry_dsn:
        logger.warning(
            "SENTRY_DSN not set. Error tracking disabled. "
            "Set SENTRY_DSN environment variable to enable Sentry in production."
        )
        return False

    try:
        sentry_sdk.init(
            dsn=sentry_dsn,
            integrations=[
                FastApiIntegration(),
                StarletteIntegration(),
                LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
            ],
            traces_sample_rate=0.1,
            sample_rate=1.0,
            release=os.getenv("RELEASE_VERSION", "registro-actividades@0.3.0"),
            environment=os.getenv("SENTRY_ENVIRONMENT", "production"),
            send_default_pii=False,
            attach_stacktrace=True,
            before_send=before_send_hook,
        )
    except Exception as e:
        logger.error("Failed to initialize Sentry: %s", e, exc_info=True)
        return False

    logger.info("Sentry initialized (environment: %s)", os.getenv("SENTRY_ENVIRONMENT", "production"))
    return True


def before_send_hook(event, hint):
    """
    Filtra datos sensibles antes de enviar a Sentry.

    Args:
        event: Datos del evento de Sentry
        hint: Contexto adicional

    Returns:
        Evento modificado
    """
    request = event.get("request")
    if not request:
        return event

    headers = request.get("headers") or {}
    for name in list(headers):
        if name.lower() in SENSITIVE_HEADERS:
            headers[name] = "[Filtered]"

    data = request.get("data")
    if isinstance(data, dict):
        for field in SENSITIVE_BODY_FIELDS:
            if field in data:
                data[field] = "[Filtered]"

    return event


def set_user_context(user_id: int) -> None:
    """Marca los eventos siguientes de Sentry con el id del usuario actual."""
    sentry_sdk.set_user({"id": user_id})
