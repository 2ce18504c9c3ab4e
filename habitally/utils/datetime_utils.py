# utils/datetime_utils.py

import calendar
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Optional, Union

import pytz
import tzlocal

UTC = pytz.utc


def get_timezone(name: Optional[str] = None) -> tzinfo:
    """
    Часовой пояс по имени IANA, либо системный локальный.

    Локальный пояс берётся из tzlocal как зона с правилами перехода на
    летнее время, а не как фиксированное смещение текущего момента.
    """
    if name:
        return pytz.timezone(name)
    return tzlocal.get_localzone()


def localize(naive: datetime, tz: tzinfo) -> datetime:
    # pytz требует localize(), обычные tzinfo - replace()
    if hasattr(tz, "localize"):
        return tz.localize(naive)
    return naive.replace(tzinfo=tz)


def to_local(dt: datetime, tz: tzinfo) -> datetime:
    if dt.tzinfo is None:
        dt = UTC.localize(dt)
    return dt.astimezone(tz)


def now_in(tz: Optional[tzinfo] = None) -> datetime:
    return datetime.now(tz or UTC)


def local_date(dt: datetime, tz: tzinfo) -> date:
    """Календарная дата момента в заданном часовом поясе"""
    return to_local(dt, tz).date()


def is_same_calendar_day(a: datetime, b: datetime, tz: tzinfo) -> bool:
    return local_date(a, tz) == local_date(b, tz)


def start_of_day(reference: datetime, tz: tzinfo) -> datetime:
    day = local_date(reference, tz)
    return localize(datetime.combine(day, time.min), tz)


def start_of_week(reference: datetime, tz: tzinfo, first_weekday: int = calendar.SUNDAY) -> datetime:
    """
    Первый момент календарной недели, содержащей reference.

    first_weekday в нумерации Python (понедельник = 0, воскресенье = 6).
    """
    day = local_date(reference, tz)
    offset = (day.weekday() - first_weekday) % 7
    return localize(datetime.combine(day - timedelta(days=offset), time.min), tz)


def end_of_week(reference: datetime, tz: tzinfo, first_weekday: int = calendar.SUNDAY) -> datetime:
    """Первый момент следующей недели (граница не включается)"""
    return days_ago(-7, start_of_week(reference, tz, first_weekday), tz)


def days_ago(n: int, from_dt: datetime, tz: tzinfo) -> datetime:
    """from_dt минус n календарных дней с тем же локальным временем суток"""
    local = to_local(from_dt, tz)
    shifted = local.replace(tzinfo=None) - timedelta(days=n)
    return localize(shifted, tz)


def days_until(target: datetime, from_dt: datetime, tz: tzinfo) -> int:
    """Число календарных дней до target, не меньше нуля"""
    delta = (local_date(target, tz) - local_date(from_dt, tz)).days
    return max(delta, 0)


def add_months(dt: datetime, months: int, tz: tzinfo) -> datetime:
    """Сдвиг на N месяцев; день обрезается до длины целевого месяца"""
    local = to_local(dt, tz).replace(tzinfo=None)
    month_index = local.month - 1 + months
    year = local.year + month_index // 12
    month = month_index % 12 + 1
    day = min(local.day, calendar.monthrange(year, month)[1])
    return localize(local.replace(year=year, month=month, day=day), tz)


def at_clock_time(reference: datetime, hour: int, minute: int, tz: tzinfo) -> datetime:
    day = local_date(reference, tz)
    return localize(datetime.combine(day, time(hour, minute)), tz)


def to_iso(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = UTC.localize(dt)
    return dt.isoformat()


def parse_iso(value: Union[str, datetime]) -> datetime:
    """Разбор ISO-8601; наивные значения считаются UTC"""
    if isinstance(value, datetime):
        dt = value
    else:
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = UTC.localize(dt)
    return dt


def format_date(dt: datetime, tz: tzinfo, fmt: str = "%d.%m.%Y") -> str:
    return to_local(dt, tz).strftime(fmt)
