"""Date, time and time-zone helpers built on aware UTC datetimes."""

from __future__ import annotations

import re
import time
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Iterable
from zoneinfo import ZoneInfo

from utilkit.formatting import format_relative_time

DEFAULT_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_DATE_FORMAT = "%Y-%m-%d"
DEFAULT_TIME_FORMAT = "%H:%M:%S"
ISO8601_FORMAT = "%Y-%m-%dT%H:%M:%S%.3fZ"
TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_FRACTION_RE = re.compile(r"%(%|\.?[369]f|\.f|f)")

_COMMON_TIMEZONES = (
    ("北京", "Asia/Shanghai"),
    ("东京", "Asia/Tokyo"),
    ("首尔", "Asia/Seoul"),
    ("新加坡", "Asia/Singapore"),
    ("孟买", "Asia/Kolkata"),
    ("迪拜", "Asia/Dubai"),
    ("伦敦", "Europe/London"),
    ("巴黎", "Europe/Paris"),
    ("柏林", "Europe/Berlin"),
    ("莫斯科", "Europe/Moscow"),
    ("罗马", "Europe/Rome"),
    ("纽约", "America/New_York"),
    ("洛杉矶", "America/Los_Angeles"),
    ("芝加哥", "America/Chicago"),
    ("丹佛", "America/Denver"),
    ("圣保罗", "America/Sao_Paulo"),
    ("悉尼", "Australia/Sydney"),
    ("墨尔本", "Australia/Melbourne"),
    ("开罗", "Africa/Cairo"),
)

_DISPLAY_NAMES = {
    "Asia/Shanghai": "中国标准时间 (CST)",
    "Asia/Tokyo": "日本标准时间 (JST)",
    "Asia/Seoul": "韩国标准时间 (KST)",
    "Asia/Singapore": "新加坡标准时间 (SGT)",
    "Asia/Kolkata": "印度标准时间 (IST)",
    "Asia/Dubai": "阿联酋标准时间 (GST)",
    "Europe/London": "格林威治标准时间 (GMT)",
    "Europe/Paris": "中欧时间 (CET)",
    "Europe/Berlin": "中欧时间 (CET)",
    "Europe/Moscow": "莫斯科标准时间 (MSK)",
    "Europe/Rome": "中欧时间 (CET)",
    "America/New_York": "美国东部时间 (EST/EDT)",
    "America/Los_Angeles": "美国太平洋时间 (PST/PDT)",
    "America/Chicago": "美国中部时间 (CST/CDT)",
    "America/Denver": "美国山地时间 (MST/MDT)",
    "America/Sao_Paulo": "巴西时间 (BRT)",
    "Australia/Sydney": "澳大利亚东部时间 (AEST/AEDT)",
    "Australia/Melbourne": "澳大利亚东部时间 (AEST/AEDT)",
    "Africa/Cairo": "东欧时间 (EET)",
}


def _zone(tz: tzinfo | str) -> tzinfo:
    return ZoneInfo(tz) if isinstance(tz, str) else tz


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


def _offset_seconds(moment: datetime) -> int:
    offset = moment.utcoffset()
    return 0 if offset is None else int(offset.total_seconds())


def _midnight(day: date) -> datetime:
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)


def now_utc() -> datetime:
    """The current moment in UTC."""
    return datetime.now(timezone.utc)


def now_local() -> datetime:
    """The current moment in the local time zone."""
    return datetime.now().astimezone()


def timestamp() -> int:
    """Seconds since the Unix epoch."""
    return time.time_ns() // 1_000_000_000


def timestamp_millis() -> int:
    """Milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


def from_timestamp(ts: int) -> datetime | None:
    """UTC datetime for a Unix timestamp in seconds, or None if out of range."""
    try:
        return _EPOCH + timedelta(seconds=ts)
    except OverflowError:
        return None


def from_timestamp_millis(ms: int) -> datetime | None:
    """UTC datetime for a Unix timestamp in milliseconds, or None if out of range."""
    try:
        return _EPOCH + timedelta(milliseconds=ms)
    except OverflowError:
        return None


def _expand_fractions(moment: datetime, fmt: str) -> str:
    micros = moment.microsecond
    nanos = f"{micros * 1000:09d}"

    def replace(match: re.Match[str]) -> str:
        token = match.group(1)
        if token == "%":
            return "%%"
        if token == "f":
            return nanos
        if token == ".f":
            if micros == 0:
                return ""
            return "." + (nanos[:3] if micros % 1000 == 0 else nanos[:6])
        dotted = token.startswith(".")
        digits = int(token[-2])
        return ("." if dotted else "") + nanos[:digits]

    return _FRACTION_RE.sub(replace, fmt)


def _parse_format(fmt: str) -> str:
    def replace(match: re.Match[str]) -> str:
        token = match.group(1)
        if token == "%":
            return "%%"
        return ".%f" if token.startswith(".") else "%f"

    return _FRACTION_RE.sub(replace, fmt)


def format_datetime(moment: datetime, fmt: str) -> str:
    """Format a moment in UTC; '%.3f' and kin give fractional seconds."""
    utc = _as_utc(moment)
    return utc.strftime(_expand_fractions(utc, fmt))


def format_default(moment: datetime) -> str:
    return format_datetime(moment, DEFAULT_DATETIME_FORMAT)


def format_iso8601(moment: datetime) -> str:
    return format_datetime(moment, ISO8601_FORMAT)


def parse_datetime(text: str, fmt: str) -> datetime:
    """Parse a wall-clock time taken as UTC; raise ValueError on mismatch."""
    return datetime.strptime(text, _parse_format(fmt)).replace(tzinfo=timezone.utc)


def parse_default(text: str) -> datetime:
    return parse_datetime(text, DEFAULT_DATETIME_FORMAT)


def parse_iso8601(text: str) -> datetime:
    """Parse an RFC 3339 timestamp with an offset; raise ValueError otherwise."""
    stripped = text.strip()
    if stripped[-1:] in ("Z", "z"):
        stripped = stripped[:-1] + "+00:00"
    parsed = datetime.fromisoformat(stripped)
    if parsed.tzinfo is None:
        raise ValueError("timestamp has no UTC offset")
    return parsed.astimezone(timezone.utc)


def add_days(moment: datetime, days: int) -> datetime:
    return moment + timedelta(days=days)


def add_hours(moment: datetime, hours: int) -> datetime:
    return moment + timedelta(hours=hours)


def add_minutes(moment: datetime, minutes: int) -> datetime:
    return moment + timedelta(minutes=minutes)


def add_seconds(moment: datetime, seconds: int) -> datetime:
    return moment + timedelta(seconds=seconds)


def diff(a: datetime, b: datetime) -> timedelta:
    """a minus b."""
    return _as_utc(a) - _as_utc(b)


def is_same_day(a: datetime, b: datetime) -> bool:
    """True if both moments fall on the same UTC calendar day."""
    return _as_utc(a).date() == _as_utc(b).date()


def start_of_day(moment: datetime) -> datetime:
    return _midnight(_as_utc(moment).date())


def end_of_day(moment: datetime) -> datetime:
    return start_of_day(moment).replace(hour=23, minute=59, second=59)


def start_of_week(moment: datetime) -> datetime:
    """Monday 00:00:00 UTC of the moment's week."""
    day = _as_utc(moment).date()
    return _midnight(day - timedelta(days=day.weekday()))


def start_of_month(moment: datetime) -> datetime:
    return _midnight(_as_utc(moment).date().replace(day=1))


def start_of_year(moment: datetime) -> datetime:
    return _midnight(_as_utc(moment).date().replace(month=1, day=1))


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def to_timezone(moment: datetime, tz: tzinfo | str) -> datetime:
    """Express a moment in another time zone."""
    return _as_utc(moment).astimezone(_zone(tz))


def to_utc(moment: datetime) -> datetime:
    return _as_utc(moment)


def from_offset(moment: datetime, offset_hours: int) -> datetime:
    """Express a moment at a fixed offset; out-of-range offsets fall back to UTC."""
    seconds = offset_hours * 3600
    if abs(seconds) >= 86400:
        seconds = 0
    return _as_utc(moment).astimezone(timezone(timedelta(seconds=seconds)))


def timezone_offset(moment: datetime) -> int:
    """Whole hours of the moment's UTC offset, truncated toward zero."""
    return _trunc_div(_offset_seconds(moment), 3600)


def convert_timezone(moment: datetime, to_tz: tzinfo | str) -> datetime:
    return _as_utc(moment).astimezone(_zone(to_tz))


def now_in_timezone(tz: tzinfo | str) -> datetime:
    return now_utc().astimezone(_zone(tz))


def parse_in_timezone(text: str, fmt: str, tz: tzinfo | str) -> datetime:
    """Parse a wall-clock time in a zone; raise ValueError if it is ambiguous or skipped."""
    zone = _zone(tz)
    naive = datetime.strptime(text, _parse_format(fmt))
    first = naive.replace(tzinfo=zone, fold=0)
    second = naive.replace(tzinfo=zone, fold=1)
    if first.utcoffset() != second.utcoffset():
        raise ValueError("Failed to parse datetime in timezone")
    return first


def common_timezones() -> dict[str, ZoneInfo]:
    """Frequently used zones keyed by Chinese city name."""
    return {name: ZoneInfo(key) for name, key in _COMMON_TIMEZONES}


def timezone_by_name(name: str) -> ZoneInfo | None:
    return common_timezones().get(name)


def timezone_display_name(tz: tzinfo | str) -> str:
    zone = _zone(tz)
    key = getattr(zone, "key", None)
    if key in _DISPLAY_NAMES:
        return _DISPLAY_NAMES[key]
    return str(zone)


def is_same_day_in_timezone(a: datetime, b: datetime, tz: tzinfo | str) -> bool:
    zone = _zone(tz)
    return _as_utc(a).astimezone(zone).date() == _as_utc(b).astimezone(zone).date()


def _seasonal_offsets(zone: tzinfo, year: int) -> tuple[int, int]:
    january = datetime(year, 1, 1, 12, tzinfo=zone)
    july = datetime(year, 7, 1, 12, tzinfo=zone)
    return _offset_seconds(january), _offset_seconds(july)


def is_dst_active(tz: tzinfo | str, moment: datetime | None = None) -> bool:
    """True if the zone is on its summer offset at the moment (default: now)."""
    zone = _zone(tz)
    utc = _as_utc(moment) if moment is not None else now_utc()
    jan, jul = _seasonal_offsets(zone, utc.year)
    if jan == jul:
        return False
    return _offset_seconds(utc.astimezone(zone)) != min(jan, jul)


def timezone_offsets(tz: tzinfo | str, year: int) -> tuple[int, int]:
    """(standard, daylight) offsets in whole hours for a year."""
    jan, jul = (_trunc_div(s, 3600) for s in _seasonal_offsets(_zone(tz), year))
    if jan == jul:
        return jan, jan
    return min(jan, jul), max(jan, jul)


def timezone_difference(
    tz1: tzinfo | str, tz2: tzinfo | str, moment: datetime | None = None
) -> int:
    """Hours tz1 is ahead of tz2 at the moment (default: now)."""
    utc = _as_utc(moment) if moment is not None else now_utc()
    return timezone_offset(utc.astimezone(_zone(tz1))) - timezone_offset(
        utc.astimezone(_zone(tz2))
    )


@dataclass(frozen=True)
class WorldClockEntry:
    """The local time of one city."""

    city_name: str
    timezone: tzinfo
    local_time: datetime
    utc_offset: int
    is_dst: bool


def world_clock(timezones: Iterable[tuple[str, tzinfo | str]]) -> list[WorldClockEntry]:
    """Current local time for each (city, zone) pair."""
    now = now_utc()
    entries = []
    for name, tz in timezones:
        zone = _zone(tz)
        local = now.astimezone(zone)
        entries.append(
            WorldClockEntry(
                city_name=name,
                timezone=zone,
                local_time=local,
                utc_offset=timezone_offset(local),
                is_dst=is_dst_active(zone, now),
            )
        )
    return entries


def find_timezone_by_offset(offset_hours: int) -> list[ZoneInfo]:
    """Common zones whose current offset is the given number of hours."""
    now = now_utc()
    return [
        zone
        for zone in common_timezones().values()
        if timezone_offset(now.astimezone(zone)) == offset_hours
    ]


def relative_time(moment: datetime, now: datetime | None = None) -> str:
    """Describe how long ago a moment was, in Chinese."""
    return format_relative_time(moment, now)


@dataclass(frozen=True)
class TimeRange:
    """A closed interval between two moments."""

    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end

    def duration(self) -> timedelta:
        return self.end - self.start

    def overlaps(self, other: TimeRange) -> bool:
        return self.start <= other.end and self.end >= other.start


@dataclass(frozen=True)
class TimezoneConverter:
    """Converts moments from a source zone to a target zone."""

    source_timezone: tzinfo
    target_timezone: tzinfo

    def convert(self, moment: datetime) -> datetime:
        return convert_timezone(moment, self.target_timezone)

    def convert_now(self) -> datetime:
        return self.convert(now_in_timezone(self.source_timezone))

    def convert_batch(self, moments: Iterable[datetime]) -> list[datetime]:
        return [self.convert(moment) for moment in moments]

    def time_difference(self) -> int:
        """Hours the source zone is ahead of the target zone right now."""
        return timezone_difference(self.source_timezone, self.target_timezone)