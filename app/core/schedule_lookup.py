"""
Consulta de horario: cómo se ve el día de un usuario antes de guardar nada.

La entrada y la salida salen del tipo de horario del usuario en
data/schedule_types.json y la cuota se deriva con el motor de jornada. Los
días de descanso y los feriados nacionales vuelven como días libres con
cuota 0.
"""

import logging

from sqlalchemy.orm import Session

from app.core.constants import DEFAULT_SCHEDULE_TYPE, SHIFT_LABEL_DAY, SHIFT_LABEL_NIGHT
from app.core.holidays import holiday_name
from app.core.models import DayConfig, ScheduleType, WorkSchedule
from app.core.storage import StorageError, get_schedule_types
from app.core.time_utils import parse_date_key
from app.core.workday import derive_quota_hours, parse_time
from app.database.database import User

logger = logging.getLogger(__name__)


class ScheduleLookup:
    def __init__(self, session: Session, schedule_types: dict[str, ScheduleType] | None = None):
        self.session = session
        self._schedule_types = schedule_types

    @property
    def schedule_types(self) -> dict[str, ScheduleType]:
        if self._schedule_types is None:
            self._schedule_types = get_schedule_types()
        return self._schedule_types

    def _schedule_type_for(self, user_id: int) -> ScheduleType:
        user = self.session.get(User, user_id)
        code = (user.schedule_type if user else None) or DEFAULT_SCHEDULE_TYPE

        schedule_type = self.schedule_types.get(code)
        if schedule_type is None:
            logger.error("Unknown schedule type %r for user %s", code, user_id)
            raise StorageError(f"Unknown schedule type: {code}")
        return schedule_type

    def get_work_schedule(self, user_id: int, date_key: str) -> WorkSchedule:
        """
        Horario esperado de un usuario para un día.

        Args:
            user_id: Id del usuario (lo inyecta quien llama)
            date_key: "YYYY-MM-DD" en la zona horaria del negocio

        Returns:
            WorkSchedule con entrada/salida "HH:MM", cuota y día libre

        Raises:
            StorageError: si el catálogo de horarios no carga o el tipo de
                horario del usuario no existe
            ValueError: si date_key no es una fecha válida
        """
        date = parse_date_key(date_key)
        weekday = date.weekday()
        schedule_type = self._schedule_type_for(user_id)

        hours = schedule_type.weekday_hours.get(weekday)
        entry_time = hours.entry_time if hours else schedule_type.entry_time
        exit_time = hours.exit_time if hours else schedule_type.exit_time

        shift_label = SHIFT_LABEL_NIGHT if parse_time(entry_time) > parse_time(exit_time) else SHIFT_LABEL_DAY

        holiday = holiday_name(date)
        is_free_day = holiday is not None or weekday not in schedule_type.work_days

        if is_free_day:
            quota = 0.0
        else:
            config = DayConfig(
                entry_time=entry_time,
                exit_time=exit_time,
                continuous_shift=schedule_type.continuous_shift,
                shift_label=shift_label,
            )
            quota = derive_quota_hours(config, schedule_type.code, weekday)

        return WorkSchedule(
            schedule_type=schedule_type.code,
            entry_time=entry_time,
            exit_time=exit_time,
            quota_hours=quota,
            is_free_day=is_free_day,
            continuous_shift=schedule_type.continuous_shift,
            shift_label=shift_label,
            holiday_name=holiday,
            shift_selectable=schedule_type.shift_selectable,
        )
