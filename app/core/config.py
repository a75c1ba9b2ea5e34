# app/core/config.py

import os
from pathlib import Path
from typing import Final


# ==========================
# Zona horaria y formatos
# ==========================

#: Zona horaria fija para calcular la clave del día (UTC-6, sin horario de verano).
#: La clave de fecha nunca se calcula en la zona del navegador del usuario.
TIMEZONE_NAME: Final[str] = "America/Tegucigalpa"

#: Formato ISO de la clave de fecha, "YYYY-MM-DD".
DATE_FORMAT_ISO: Final[str] = "%Y-%m-%d"

#: Formato de horas en la configuración del día y en las actividades ("07:30").
TIME_FORMAT_HM: Final[str] = "%H:%M"

#: Posición del substring "HH:MM" dentro de un instante ISO-8601
#: ("2025-03-04T07:30:00.000Z"[11:16] == "07:30").
ISO_TIME_SLICE: Final[slice] = slice(11, 16)


# ==========================
# Aritmética de minutos
# ==========================

#: Minutos en un día. Se suma a una hora "de madrugada" para ubicarla
#: después de una entrada nocturna en la misma línea de tiempo.
MINUTES_PER_DAY: Final[int] = 1440

#: Minutos por hora.
MINUTES_PER_HOUR: Final[int] = 60

#: Todas las horas ingresadas se redondean a esta grilla.
QUARTER_HOUR_MINUTES: Final[int] = 15

#: Decimales para todas las duraciones en horas.
HOURS_DECIMALS: Final[int] = 2


# ==========================
# Almuerzo
# ==========================

#: Inicio de la ventana de almuerzo (12:00) en minutos.
LUNCH_START_MINUTES: Final[int] = 720

#: Fin de la ventana de almuerzo (13:00) en minutos.
LUNCH_END_MINUTES: Final[int] = 780

#: Descuento de almuerzo en minutos cuando el día no es "hora corrida".
LUNCH_DEDUCTION_MINUTES: Final[int] = 60


# ==========================
# Excepciones de cuota
# ==========================

#: Cuota fija para el horario H2 en jornada nocturna los martes.
H2_NIGHT_TUESDAY_QUOTA_HOURS: Final[float] = 6.0


# ==========================
# Entorno
# ==========================

#: Modo producción (JSON-logging, Sentry, CORS estricto).
IS_PRODUCTION: Final[bool] = os.getenv("PRODUCTION", "false").lower() == "true"

#: Raíz del proyecto.
PROJECT_ROOT: Final[Path] = Path(__file__).resolve().parents[2]

#: Base de datos SQLAlchemy.
DATABASE_URL: Final[str] = os.getenv("DATABASE_URL", f"sqlite:///{PROJECT_ROOT / 'app' / 'database' / 'registro.db'}")

#: Catálogo de tipos de horario (H1, H2, ...).
SCHEDULE_TYPES_PATH: Final[Path] = Path(
    os.getenv("SCHEDULE_TYPES_PATH", str(PROJECT_ROOT / "data" / "schedule_types.json"))
)

#: Orígenes permitidos para CORS en producción, separados por coma.
CORS_ORIGINS: Final[list[str]] = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "").split(",") if origin.strip()
]
