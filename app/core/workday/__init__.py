"""
Motor de jornada: cálculo y validación de horas del día.

Único lugar donde viven las reglas de cuota, duración, horas extra,
solapamiento y cambios de horario. Todas las vistas lo consumen.
"""

from .boundary import (
    adjust_exit_for_continuous_shift,
    derive_quota_hours,
    derive_span,
    lunch_deduction_applies,
    resolve_quota_hours,
    span_for_config,
)
from .duration import compute_from_interval, effective_hours
from .progress import (
    is_overtime_eligible,
    normal_hours_worked,
    overtime_hours_worked,
    progress_percent,
    remaining_hours,
    remaining_message,
    summarize_progress,
)
from .reconciliation import (
    ensure_within_span,
    find_out_of_range,
    has_config_changes,
    is_activity_outside_span,
    validate_day_config,
)
from .time_math import (
    format_minutes,
    normalize_against_span,
    normalize_interval,
    overlap_minutes,
    parse_time,
    quantize_time,
    round_hours,
    round_to_quarter_hour,
)
from .validator import ValidationContext, validate_activity

__all__ = [
    # time_math
    "parse_time",
    "format_minutes",
    "round_to_quarter_hour",
    "quantize_time",
    "normalize_against_span",
    "normalize_interval",
    "overlap_minutes",
    "round_hours",
    # boundary
    "derive_span",
    "span_for_config",
    "derive_quota_hours",
    "resolve_quota_hours",
    "lunch_deduction_applies",
    "adjust_exit_for_continuous_shift",
    # duration
    "compute_from_interval",
    "effective_hours",
    # validator
    "ValidationContext",
    "validate_activity",
    # reconciliation
    "find_out_of_range",
    "ensure_within_span",
    "is_activity_outside_span",
    "validate_day_config",
    "has_config_changes",
    # progress
    "normal_hours_worked",
    "overtime_hours_worked",
    "progress_percent",
    "is_overtime_eligible",
    "remaining_hours",
    "remaining_message",
    "summarize_progress",
]
