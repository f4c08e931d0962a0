"""
Reloj del secuenciador: hora del día <-> minutos desde medianoche, y sellado de fechas.
"""

import math
import re
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fieldsched.domain.errors import TimeParseError

MINUTES_PER_DAY = 24 * 60

# "8:00 AM", "12:30 pm", "08:00", "17:45:00"
_CLOCK_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::(\d{2}))?\s*([AaPp][Mm])?\s*$")


def parse_clock_minutes(value: object, resource_id: str, field: str = "shiftStart") -> int:
    """
    Convierte 'HH:MM' (24h) o 'h:MM AM/PM' a minutos desde medianoche.
    Los segundos, si vienen, se ignoran. Lanza TimeParseError si no es una hora válida.
    """
    if not isinstance(value, str):
        raise TimeParseError(resource_id, value, field)
    m = _CLOCK_RE.match(value)
    if m is None:
        raise TimeParseError(resource_id, value, field)
    hours, minutes = int(m.group(1)), int(m.group(2))
    period = m.group(4)
    if period is not None:
        if not 1 <= hours <= 12:
            raise TimeParseError(resource_id, value, field)
        period = period.upper()
        if period == "PM" and hours != 12:
            hours += 12
        elif period == "AM" and hours == 12:
            hours = 0
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise TimeParseError(resource_id, value, field)
    return hours * 60 + minutes


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """None -> hora local del proceso (se resuelve al sellar)."""
    if name is None:
        return None
    if name.upper() in ("UTC", "Z"):
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown timezone {name!r}") from exc


def today_in(tz: Optional[tzinfo]) -> date:
    if tz is None:
        return date.today()
    return datetime.now(tz).date()


def stamp(
    reference_date: date,
    minute: float,
    tz: Optional[tzinfo],
    resource_id: str,
) -> datetime:
    """
    reference_date 00:00 + minute (minutos enteros, segundos a cero).
    Un cursor >= 1440 pasa al día siguiente.
    """
    if not math.isfinite(minute):
        raise TimeParseError(resource_id, minute, field="expectedStartDate")
    naive = datetime.combine(reference_date, time()) + timedelta(minutes=math.floor(minute))
    if tz is None:
        return naive.astimezone()
    return naive.replace(tzinfo=tz)
