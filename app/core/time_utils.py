import datetime
import logging
from zoneinfo import ZoneInfo

from app.core.config import DATE_FORMAT_ISO, ISO_TIME_SLICE, TIMEZONE_NAME, TIME_FORMAT_HM

logger = logging.getLogger(__name__)

TZ = ZoneInfo(TIMEZONE_NAME)


def date_key_in_tz(moment: datetime.datetime | None = None) -> str:
    """
    Clave "YYYY-MM-DD" de un instante en la zona horaria fija del negocio.

    Un datetime sin zona se toma como UTC. La clave nunca depende de la zona
    local de quien consulta.
    """
    if moment is None:
        moment = datetime.datetime.now(datetime.timezone.utc)
    elif moment.tzinfo is None:
        moment = moment.replace(tzinfo=datetime.timezone.utc)
    return moment.astimezone(TZ).strftime(DATE_FORMAT_ISO)


def parse_date_key(date_key: str) -> datetime.date:
    """Interpreta una clave "YYYY-MM-DD"; cualquier otra cosa da ValueError."""
    try:
        return datetime.datetime.strptime(date_key, DATE_FORMAT_ISO).date()
    except (TypeError, ValueError) as e:
        logger.warning("Invalid date key %r", date_key)
        raise ValueError(f"Invalid date key: {date_key!r}") from e


def extract_hhmm(instant: str | None) -> str:
    """
    Extrae "HH:MM" de un instante ISO-8601 sin convertir de zona.

    Un valor que ya es "HH:MM" se devuelve tal cual; None o "" dan "".
    """
    if not instant:
        return ""
    if "T" not in instant:
        return instant.strip()
    return instant[ISO_TIME_SLICE]


def build_iso(date_key: str, hhmm: str, add_days: int = 0) -> str:
    """
    Instante ISO que se guarda para una hora de reloj en un día.

    Los dígitos de la hora se conservan tal cual con sufijo "Z", así
    extract_hhmm() devuelve el mismo "HH:MM". add_days=1 lleva una hora final
    al día siguiente (turno o actividad que cruza medianoche).
    """
    day = parse_date_key(date_key) + datetime.timedelta(days=add_days)
    try:
        time_of_day = datetime.datetime.strptime(hhmm, TIME_FORMAT_HM).time()
    except (TypeError, ValueError) as e:
        logger.exception("Failed building ISO instant. date_key=%s hhmm=%r", date_key, hhmm)
        raise ValueError(f"Invalid time: {hhmm!r}") from e

    moment = datetime.datetime.combine(day, time_of_day)
    return moment.strftime("%Y-%m-%dT%H:%M:00.000Z")


def build_iso_interval(date_key: str, start_hhmm: str, end_hhmm: str) -> tuple[str, str]:
    """(start_iso, end_iso); el fin pasa al día siguiente si end <= start."""
    start_t = datetime.datetime.strptime(start_hhmm, TIME_FORMAT_HM).time()
    end_t = datetime.datetime.strptime(end_hhmm, TIME_FORMAT_HM).time()

    # Pasa medianoche
    add_days = 1 if end_t <= start_t else 0
    return build_iso(date_key, start_hhmm), build_iso(date_key, end_hhmm, add_days)


def weekday_of(date_key: str) -> int:
    """datetime.weekday() de una clave de fecha (0 = lunes)."""
    return parse_date_key(date_key).weekday()
