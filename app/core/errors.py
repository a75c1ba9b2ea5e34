"""Códigos de error y excepciones del motor de jornada."""

import enum


class ErrorCode(str, enum.Enum):
    """Códigos de un error de validación por campo."""

    REQUIRED_FIELD_MISSING = "RequiredFieldMissing"
    INVALID_FORMAT = "InvalidFormat"
    MISSING_CONFIG = "MissingConfig"
    OVERTIME_NOT_ELIGIBLE = "OvertimeNotEligible"
    MISSING_TIME_FIELDS = "MissingTimeFields"
    INVALID_COMPUTED_DURATION = "InvalidComputedDuration"
    INVALID_DURATION = "InvalidDuration"
    EXCEEDS_REMAINING_QUOTA = "ExceedsRemainingQuota"
    OVERTIME_WITHIN_WORKDAY = "OvertimeWithinWorkday"
    INVERTED_INTERVAL = "InvertedInterval"
    OVERLAPPING_ACTIVITY = "OverlappingActivity"
    DAY_HAS_NO_NORMAL_HOURS = "DayHasNoNormalHours"
    ACTIVITIES_OUT_OF_RANGE = "ActivitiesOutOfRange"


class WorkdayError(Exception):
    """Error base del motor de jornada."""

    code: ErrorCode

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidFormat(WorkdayError):
    """Una hora no es un "HH:MM" válido."""

    code = ErrorCode.INVALID_FORMAT

    def __init__(self, value: object):
        super().__init__(f"Formato de hora inválido: {value!r} (se espera HH:MM)")
        self.value = value


class MissingConfig(WorkdayError):
    """Falta la entrada o la salida; la cuota no se puede derivar localmente."""

    code = ErrorCode.MISSING_CONFIG

    def __init__(self, missing: list[str]):
        super().__init__(f"Falta configuración del día: {', '.join(missing)}")
        self.missing = missing


class ActivitiesOutOfRange(WorkdayError):
    """Un cambio de configuración dejaría actividades fuera del nuevo rango."""

    code = ErrorCode.ACTIVITIES_OUT_OF_RANGE

    def __init__(self, count: int, samples: list, entry_time: str, exit_time: str):
        noun = "actividad" if count == 1 else "actividades"
        super().__init__(
            f"Hay {count} {noun} fuera del nuevo rango ({entry_time} - {exit_time}). "
            "Debes actualizar las actividades antes de cambiar el horario"
        )
        self.count = count
        self.samples = samples
        self.entry_time = entry_time
        self.exit_time = exit_time
