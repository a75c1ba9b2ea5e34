import datetime


def easter_sunday(year: int) -> datetime.date:
    """Algoritmo gregoriano anónimo."""
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7  # noqa: E741
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1
    return datetime.date(year, month, day)


def jueves_santo(year: int) -> datetime.date:
    """Jueves Santo: el jueves antes del Domingo de Resurrección."""
    return easter_sunday(year) - datetime.timedelta(days=3)


def viernes_santo(year: int) -> datetime.date:
    """Viernes Santo: el viernes antes del Domingo de Resurrección."""
    return easter_sunday(year) - datetime.timedelta(days=2)


def sabado_santo(year: int) -> datetime.date:
    """Sábado de Gloria."""
    return easter_sunday(year) - datetime.timedelta(days=1)


def semana_morazanica(year: int) -> list[datetime.date]:
    """
    Semana Morazánica: miércoles a viernes de la primera semana completa de octubre.

    Agrupa los feriados del 3, 12 y 21 de octubre en un solo bloque.
    """
    d = datetime.date(year, 10, 1)
    while d.weekday() != 0:  # 0 = lunes
        d += datetime.timedelta(days=1)
    return [d + datetime.timedelta(days=offset) for offset in (2, 3, 4)]


def fixed_holidays(year: int) -> dict[datetime.date, str]:
    return {
        datetime.date(year, 1, 1): "Año Nuevo",
        datetime.date(year, 4, 14): "Día de las Américas",
        datetime.date(year, 5, 1): "Día del Trabajo",
        datetime.date(year, 9, 15): "Día de la Independencia",
        datetime.date(year, 12, 25): "Navidad",
    }


def holidays_for_year(year: int) -> dict[datetime.date, str]:
    """Feriados nacionales de un año, fecha -> nombre."""
    holidays = fixed_holidays(year)
    holidays[jueves_santo(year)] = "Jueves Santo"
    holidays[viernes_santo(year)] = "Viernes Santo"
    holidays[sabado_santo(year)] = "Sábado Santo"
    for d in semana_morazanica(year):
        holidays[d] = "Semana Morazánica"
    return holidays


def holiday_name(date: datetime.date) -> str | None:
    return holidays_for_year(date.year).get(date)
