# app/core/constants.py
from typing import Final

# ==========================
# Jornada
# ==========================

#: Etiqueta de jornada diurna.
SHIFT_LABEL_DAY: Final[str] = "D"

#: Etiqueta de jornada nocturna.
SHIFT_LABEL_NIGHT: Final[str] = "N"

#: Etiquetas válidas para DayConfig.shift_label.
SHIFT_LABELS: Final[tuple[str, ...]] = (SHIFT_LABEL_DAY, SHIFT_LABEL_NIGHT)


# ==========================
# Tipos de horario
# ==========================

#: Horario rotativo día/noche. Es el único que muestra el selector de jornada.
SCHEDULE_TYPE_H2: Final[str] = "H2"

#: Tipo de horario por defecto cuando el usuario no tiene uno asignado.
DEFAULT_SCHEDULE_TYPE: Final[str] = "H1"


# ==========================
# Días de la semana
# ==========================

#: Índice de martes según datetime.weekday() (0 = lunes).
TUESDAY: Final[int] = 1

#: Nombres en español, indexados como datetime.weekday().
WEEKDAY_NAMES: Final[tuple[str, ...]] = (
    "lunes",
    "martes",
    "miércoles",
    "jueves",
    "viernes",
    "sábado",
    "domingo",
)

#: Meses en español, índice 0 = enero.
MONTH_NAMES: Final[tuple[str, ...]] = (
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
)


# ==========================
# Reconciliación
# ==========================

#: Cantidad de actividades de ejemplo que se reportan cuando un cambio de
#: horario deja actividades fuera de rango.
OUT_OF_RANGE_SAMPLE_SIZE: Final[int] = 3
