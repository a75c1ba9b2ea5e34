from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.constants import SHIFT_LABEL_DAY, SHIFT_LABELS
from app.core.errors import ErrorCode
from app.core.time_utils import extract_hhmm


class DayConfig(BaseModel):
    """Configuración del día tal como la edita el empleado; horas en "HH:MM"."""

    model_config = ConfigDict(frozen=True)

    entry_time: str = ""
    exit_time: str = ""
    is_free_day: bool = False
    continuous_shift: bool = False
    shift_label: str = SHIFT_LABEL_DAY
    comment: str = ""

    @field_validator("shift_label")
    @classmethod
    def _known_shift_label(cls, value: str) -> str:
        if value not in SHIFT_LABELS:
            raise ValueError(f"shift_label must be one of {SHIFT_LABELS}")
        return value


class DaySpan(BaseModel):
    """Rango de la jornada en minutos; siempre end > start."""

    model_config = ConfigDict(frozen=True)

    start: int
    end: int
    crosses_midnight: bool


class Activity(BaseModel):
    """Actividad guardada. start/end son instantes ISO, solo en horas extra."""

    id: int | None = None
    description: str
    job_id: int | None = None
    job_code: str | None = None
    duration_hours: float = 0.0
    is_overtime: bool = False
    class_name: str | None = None
    start: str | None = None
    end: str | None = None

    @property
    def start_hhmm(self) -> str:
        return extract_hhmm(self.start)

    @property
    def end_hhmm(self) -> str:
        return extract_hhmm(self.end)

    @property
    def has_interval(self) -> bool:
        return bool(self.start and self.end)


class ActivityDraft(BaseModel):
    """Actividad tal como llega del formulario, antes de validarla."""

    model_config = ConfigDict(frozen=True)

    description: str = ""
    job_id: int | None = None
    is_overtime: bool = False
    duration_hours: str | float | None = None
    start: str = ""
    end: str = ""
    class_name: str | None = None


class DayRecord(BaseModel):
    """Registro de un usuario para un día; entrada/salida como instantes ISO."""

    id: int | None = None
    user_id: int
    date_key: str
    entry_time: str
    exit_time: str
    shift_label: str = SHIFT_LABEL_DAY
    is_free_day: bool = False
    continuous_shift: bool = False
    comment: str = ""
    supervisor_approved: bool = False
    hr_approved: bool = False
    activities: list[Activity] = Field(default_factory=list)

    @property
    def read_only(self) -> bool:
        return self.supervisor_approved or self.hr_approved

    def config(self) -> DayConfig:
        return DayConfig(
            entry_time=extract_hhmm(self.entry_time),
            exit_time=extract_hhmm(self.exit_time),
            is_free_day=self.is_free_day,
            continuous_shift=self.continuous_shift,
            shift_label=self.shift_label,
            comment=self.comment or "",
        )


class DayRecordUpsert(BaseModel):
    """Parámetros de reemplazo completo para RecordStore.upsert."""

    date_key: str
    entry_time: str
    exit_time: str
    shift_label: str = SHIFT_LABEL_DAY
    is_free_day: bool = False
    continuous_shift: bool = False
    comment: str = ""
    activities: list[Activity] = Field(default_factory=list)


class WeekdayHours(BaseModel):
    """Entrada/salida propias de un día de la semana dentro de un tipo de horario."""

    entry_time: str
    exit_time: str


class ScheduleType(BaseModel):
    """Tipo de horario (H1, H2, ...) cargado desde data/schedule_types.json."""

    code: str
    label: str | None = None
    entry_time: str
    exit_time: str
    continuous_shift: bool = False
    work_days: list[int] = Field(default_factory=lambda: [0, 1, 2, 3, 4])
    weekday_hours: dict[int, WeekdayHours] = Field(default_factory=dict)
    shift_selectable: bool = False


class WorkSchedule(BaseModel):
    """Resultado de ScheduleLookup para un usuario y un día."""

    schedule_type: str
    entry_time: str
    exit_time: str
    quota_hours: float
    is_free_day: bool = False
    continuous_shift: bool = False
    shift_label: str = SHIFT_LABEL_DAY
    holiday_name: str | None = None
    shift_selectable: bool = False


class Job(BaseModel):
    """Trabajo al que se carga una actividad."""

    id: int
    code: str
    name: str
    active: bool = True


class FieldError(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: ErrorCode
    message: str


class ValidationResult(BaseModel):
    """Resultado de validar una actividad: aceptada si errors está vacío."""

    model_config = ConfigDict(frozen=True)

    errors: dict[str, FieldError] = Field(default_factory=dict)
    duration_hours: float | None = None

    @property
    def accepted(self) -> bool:
        return not self.errors

    def codes(self) -> set[ErrorCode]:
        return {error.code for error in self.errors.values()}


class OutOfRangeActivity(BaseModel):
    """Actividad existente que quedaría fuera del rango propuesto."""

    index: int
    job: str
    start: str
    end: str

    def describe(self) -> str:
        return f"Act {self.index + 1} ({self.job}) {self.start}-{self.end}"


class DayProgress(BaseModel):
    """Avance de horas normales del día."""

    quota_hours: float
    normal_hours_worked: float
    overtime_hours: float
    progress_percent: float
    overtime_eligible: bool
    remaining_hours: float
    remaining_message: str
