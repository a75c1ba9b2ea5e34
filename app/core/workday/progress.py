"""Progreso de horas normales y habilitación de horas extra."""

from collections.abc import Iterable

from app.core.models import Activity, DayConfig, DayProgress

from .duration import effective_hours
from .time_math import round_hours


def normal_hours_worked(activities: Iterable[Activity]) -> float:
    """Suma de duration_hours de las actividades que no son hora extra."""
    return round_hours(sum(float(act.duration_hours or 0) for act in activities if not act.is_overtime))


def overtime_hours_worked(activities: Iterable[Activity], config: DayConfig) -> float:
    return round_hours(sum(effective_hours(act, config) for act in activities if act.is_overtime))


def progress_percent(worked: float, quota: float) -> float:
    """
    Porcentaje de la cuota cubierto por horas normales.

    Puede superar 100 si se registró de más; solo la vista debe recortarlo.
    """
    if quota == 0:
        return 100.0
    return max(0.0, worked / quota * 100)


def is_overtime_eligible(quota: float, percent: float) -> bool:
    return quota == 0 or percent >= 100


def remaining_hours(worked: float, quota: float) -> float:
    return round_hours(max(0.0, quota - worked))


def remaining_message(worked: float, quota: float) -> str:
    if worked >= quota:
        return "Jornada completada"
    return f"Faltan {remaining_hours(worked, quota):.2f} horas para completar la jornada"


def summarize_progress(activities: list[Activity], config: DayConfig, quota: float) -> DayProgress:
    """Arma el resumen de progreso que muestra la vista del día."""
    worked = normal_hours_worked(activities)
    percent = progress_percent(worked, quota)
    return DayProgress(
        quota_hours=quota,
        normal_hours_worked=worked,
        overtime_hours=overtime_hours_worked(activities, config),
        progress_percent=round_hours(percent),
        overtime_eligible=is_overtime_eligible(quota, percent),
        remaining_hours=remaining_hours(worked, quota),
        remaining_message=remaining_message(worked, quota),
    )
