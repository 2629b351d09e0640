"""Date parsing and formatting with Java-style date patterns.

Patterns use the SimpleDateFormat letters mobile backends and apps already
exchange (e.g. "yyyy-MM-dd HH:mm:ss"), not strftime directives.

Supported letters:
- y     year ("yy" is a two-digit year, anything else the full year)
- M     month (M/MM numeric, MMM abbreviated name, MMMM full name)
- d     day of month
- H     hour 0-23
- h     hour 1-12, usually paired with "a"
- m     minute
- s     second
- S     milliseconds
- E     day of week (E..EEE abbreviated, EEEE full name)
- a     AM/PM marker
- Z     UTC offset as +HHMM

Text inside single quotes is copied literally and '' is a literal quote.
Month/day names and the AM/PM marker follow the process LC_TIME locale.
"""

import calendar
import locale
import re
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import NamedTuple, Optional

from ui_extensions.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_DATE_PATTERN = "yyyy-MM-dd HH:mm:ss"

SUPPORTED_LETTERS = frozenset("yMdHhmsSEaZ")

# Two-digit years below this pivot land in the 2000s (POSIX %y rule)
TWO_DIGIT_YEAR_PIVOT = 69

_TOKEN_RE = re.compile(
    r"(?P<quoted>'(?:[^']|'')*')"
    r"|(?P<field>(?P<letter>[A-Za-z])(?P=letter)*)"
    r"|(?P<literal>[^A-Za-z']+)"
)
_OFFSET_RE = re.compile(r"([+-])([0-9]{2})([0-9]{2})")


class DatePatternError(ValueError):
    """Raised when a date pattern cannot be compiled."""

    pass


class _Token(NamedTuple):
    letter: Optional[str]
    count: int
    literal: str


class _LocaleNames(NamedTuple):
    months: tuple[str, ...]
    month_abbrs: tuple[str, ...]
    days: tuple[str, ...]
    day_abbrs: tuple[str, ...]
    am_pm: tuple[str, str]


def _current_locale_names() -> _LocaleNames:
    am = datetime(2000, 1, 1, 1).strftime("%p") or "AM"
    pm = datetime(2000, 1, 1, 13).strftime("%p") or "PM"
    return _LocaleNames(
        months=tuple(calendar.month_name[i] for i in range(1, 13)),
        month_abbrs=tuple(calendar.month_abbr[i] for i in range(1, 13)),
        days=tuple(calendar.day_name[i] for i in range(7)),
        day_abbrs=tuple(calendar.day_abbr[i] for i in range(7)),
        am_pm=(am, pm),
    )


def _current_locale() -> str:
    return locale.setlocale(locale.LC_TIME)


@lru_cache(maxsize=128)
def _tokenize(pattern: str) -> tuple[_Token, ...]:
    """Split a pattern into field and literal tokens."""
    tokens = []
    pos = 0
    while pos < len(pattern):
        match = _TOKEN_RE.match(pattern, pos)
        if match is None:
            raise DatePatternError(f"Unterminated quote in pattern {pattern!r} at index {pos}")

        if match.group("quoted"):
            quoted = match.group("quoted")
            literal = "'" if quoted == "''" else quoted[1:-1].replace("''", "'")
            tokens.append(_Token(None, 0, literal))
        elif match.group("field"):
            letter = match.group("letter")
            if letter not in SUPPORTED_LETTERS:
                raise DatePatternError(f"Unsupported pattern letter {letter!r} in pattern {pattern!r}")
            tokens.append(_Token(letter, len(match.group("field")), ""))
        else:
            tokens.append(_Token(None, 0, match.group("literal")))

        pos = match.end()
    return tuple(tokens)


def _alternation(names: tuple[str, ...]) -> str:
    unique = {name for name in names if name}
    return "|".join(re.escape(name) for name in sorted(unique, key=len, reverse=True))


def _field_regex(token: _Token, names: _LocaleNames) -> str:
    letter, count = token.letter, token.count
    if letter == "M" and count >= 3:
        return _alternation(names.month_abbrs if count == 3 else names.months)
    if letter == "E":
        return _alternation(names.day_abbrs if count <= 3 else names.days)
    if letter == "a":
        return _alternation(names.am_pm)
    if letter == "Z":
        return r"[+-][0-9]{4}"
    if letter == "y" and count == 2:
        return r"[0-9]{2}"
    # Exactly `count` digits, or a longer value without zero padding
    return rf"[0-9]{{{count}}}|[1-9][0-9]{{{count},}}"


@lru_cache(maxsize=128)
def _compile_parser(pattern: str, locale_name: str):
    """Build the matching regex for a pattern.

    locale_name only keys the cache; names are read from the active locale.
    """
    names = _current_locale_names()
    parts = []
    fields = []
    for index, token in enumerate(_tokenize(pattern)):
        if token.letter is None:
            parts.append(re.escape(token.literal))
            continue
        group = f"f{index}"
        parts.append(f"(?P<{group}>{_field_regex(token, names)})")
        fields.append((group, token.letter, token.count))
    return re.compile("".join(parts)), tuple(fields), names


def _name_index(text: str, names: tuple[str, ...]) -> int:
    try:
        return names.index(text)
    except ValueError:
        raise ValueError(f"Unknown name: {text!r}") from None


def _build_datetime(match: re.Match, fields, names: _LocaleNames) -> datetime:
    parts = {"year": 1970, "month": 1, "day": 1, "hour": 0, "minute": 0, "second": 0, "microsecond": 0}
    hour_of_half_day = None
    is_pm = False
    weekday = None
    tzinfo = None

    for group, letter, count in fields:
        text = match.group(group)
        if letter == "y":
            year = int(text)
            if count == 2:
                year += 2000 if year < TWO_DIGIT_YEAR_PIVOT else 1900
            parts["year"] = year
        elif letter == "M":
            if count <= 2:
                parts["month"] = int(text)
            else:
                parts["month"] = _name_index(text, names.month_abbrs if count == 3 else names.months) + 1
        elif letter == "d":
            parts["day"] = int(text)
        elif letter == "H":
            parts["hour"] = int(text)
        elif letter == "h":
            hour_of_half_day = int(text)
        elif letter == "m":
            parts["minute"] = int(text)
        elif letter == "s":
            parts["second"] = int(text)
        elif letter == "S":
            millis = int(text)
            if millis > 999:
                raise ValueError(f"Milliseconds out of range: {millis}")
            parts["microsecond"] = millis * 1000
        elif letter == "E":
            weekday = _name_index(text, names.day_abbrs if count <= 3 else names.days)
        elif letter == "a":
            is_pm = _name_index(text, names.am_pm) == 1
        elif letter == "Z":
            sign, hours, minutes = _OFFSET_RE.fullmatch(text).groups()
            if int(minutes) > 59:
                raise ValueError(f"Offset minutes out of range: {text}")
            if sign == "-" and hours == minutes == "00":
                raise ValueError("Zero offset must be written as +0000")
            offset = timedelta(hours=int(hours), minutes=int(minutes))
            tzinfo = timezone(-offset if sign == "-" else offset)

    if hour_of_half_day is not None:
        if not 1 <= hour_of_half_day <= 12:
            raise ValueError(f"Hour out of range: {hour_of_half_day}")
        parts["hour"] = hour_of_half_day % 12 + (12 if is_pm else 0)

    value = datetime(tzinfo=tzinfo, **parts)
    if weekday is not None and weekday != value.weekday():
        raise ValueError(f"{value.date()} is not a {names.days[weekday]}")
    return value


def _format_offset(value: datetime) -> str:
    offset = value.utcoffset() if value.tzinfo is not None else value.astimezone().utcoffset()
    total_minutes = int(offset.total_seconds()) // 60
    sign = "-" if total_minutes < 0 else "+"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{sign}{hours:02d}{minutes:02d}"


def _format_field(value: datetime, letter: str, count: int, names: _LocaleNames) -> str:
    if letter == "y":
        if count == 2:
            return f"{value.year % 100:02d}"
        return str(value.year).zfill(count)
    elif letter == "M":
        if count <= 2:
            return str(value.month).zfill(count)
        if count == 3:
            return names.month_abbrs[value.month - 1]
        return names.months[value.month - 1]
    elif letter == "d":
        return str(value.day).zfill(count)
    elif letter == "H":
        return str(value.hour).zfill(count)
    elif letter == "h":
        return str(value.hour % 12 or 12).zfill(count)
    elif letter == "m":
        return str(value.minute).zfill(count)
    elif letter == "s":
        return str(value.second).zfill(count)
    elif letter == "S":
        return str(value.microsecond // 1000).zfill(count)
    elif letter == "E":
        if count <= 3:
            return names.day_abbrs[value.weekday()]
        return names.days[value.weekday()]
    elif letter == "a":
        return names.am_pm[1 if value.hour >= 12 else 0]
    elif letter == "Z":
        return _format_offset(value)
    else:
        # Should never reach here, letters are checked when tokenizing
        raise DatePatternError(f"Unsupported pattern letter: {letter!r}")


def to_date(text: str, pattern: str = DEFAULT_DATE_PATTERN) -> Optional[datetime]:
    """Parse a string with a Java-style date pattern.

    The parse is strict: only the text `to_string_format` would produce for
    the result is accepted. Numbers carry exactly the pattern's zero padding,
    names must match the locale's spelling and case, and a day-of-week field
    must agree with the date.

    Args:
        text: String to parse (e.g., "2023-05-01 10:00:00")
        pattern: Date pattern (default "yyyy-MM-dd HH:mm:ss")

    Returns:
        Naive datetime, or an aware one when the pattern has a "Z" field.
        None if the string does not match the pattern or names an
        impossible date.

    Raises:
        DatePatternError: If the pattern itself is invalid

    Examples:
        >>> to_date("2023-05-01 10:00:00")
        datetime.datetime(2023, 5, 1, 10, 0)

        >>> to_date("2023-05-001 10:00:00") is None
        True
    """
    regex, fields, names = _compile_parser(pattern, _current_locale())

    match = regex.fullmatch(text)
    if match is None:
        logger.debug("date_parse_failed", text=text, pattern=pattern, reason="pattern_mismatch")
        return None

    try:
        value = _build_datetime(match, fields, names)
    except ValueError as e:
        logger.debug("date_parse_failed", text=text, pattern=pattern, reason=str(e))
        return None

    # Repeated or conflicting fields (e.g. "HH hh") can still disagree
    if to_string_format(value, pattern) != text:
        logger.debug("date_parse_failed", text=text, pattern=pattern, reason="conflicting_fields")
        return None
    return value


def to_string_format(value: datetime, pattern: str = DEFAULT_DATE_PATTERN) -> str:
    """Format a datetime with a Java-style date pattern.

    Args:
        value: Datetime to format
        pattern: Date pattern (default "yyyy-MM-dd HH:mm:ss")

    Returns:
        Formatted string

    Raises:
        DatePatternError: If the pattern is invalid

    Examples:
        >>> to_string_format(datetime(2023, 5, 1, 10, 0))
        '2023-05-01 10:00:00'

        >>> to_string_format(datetime(2023, 5, 1, 22, 5), "h:mm a")
        '10:05 PM'
    """
    tokens = _tokenize(pattern)
    names = _current_locale_names()
    return "".join(
        token.literal if token.letter is None else _format_field(value, token.letter, token.count, names)
        for token in tokens
    )
