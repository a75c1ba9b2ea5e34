# app/core/request_logging.py
"""
Middleware que registra todas las solicitudes HTTP.
"""

import re
import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.logging_config import get_logger

logger = get_logger(__name__)

# /api/timesheet/2025-03-04/activities -> 2025-03-04
DATE_KEY_IN_PATH = re.compile(r"^/api/timesheet/(\d{4}-\d{2}-\d{2})(?:/|$)")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Registra cada solicitud HTTP con su duración y código de estado.

    Asigna a cada solicitud un ID único para trazabilidad.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()
        status_code = 500
        error = None

        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception as e:
            error = str(e)
            raise
        finally:
            duration_ms = (time.time() - start_time) * 1000

            log_data = {
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "duration": duration_ms,
            }
            user_id = getattr(request.state, "user_id", None)
            if user_id:
                log_data["user_id"] = user_id
            match = DATE_KEY_IN_PATH.match(request.url.path)
            if match:
                log_data["date_key"] = match.group(1)

            extra = {"extra_fields": log_data}
            summary = f"{request.method} {request.url.path} - {status_code} ({duration_ms:.2f}ms)"

            if error:
                logger.error(f"{summary} - ERROR: {error}", extra=extra, exc_info=True)
            elif status_code >= 500:
                logger.error(summary, extra=extra)
            elif status_code >= 400:
                # Los 4xx son sobre todo actividades rechazadas, tráfico normal
                logger.info(summary, extra=extra)
            elif request.url.path == "/health":
                logger.debug(summary, extra=extra)
            else:
                logger.info(summary, extra=extra)

        response.headers["X-Request-ID"] = request_id
        return response
