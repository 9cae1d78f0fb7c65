"""Reads time log lines and converts their time notation into decimal hours."""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from hours_parser.errors import MalformedTimeToken

MINUTES_SUFFIX = 'm'
MINUTES_PER_HOUR = Decimal(60)
MAX_MINUTES = 59
CENTS = Decimal('0.01')

# "45m", "45 m"
MINUTES_ONLY_RE = re.compile(r'^(\d+(?:\.\d+)?)\s*m$')
# "3", "2.5", "3h", "3h30", "3h 30m", "3:30", "3 30"
HOURS_MINUTES_RE = re.compile(r'^(\d+(?:\.\d+)?)(?:(?:\s*[h:]\s*|\s+)(\d+m?)?)?$')


@dataclass(frozen=True)
class LogEntry:
    line: str
    date: str
    time_token: str
    notes: str
    hours: Decimal


def round_hours(value: Decimal) -> Decimal:
    """Rounds hours (or money) to 2 decimal places."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def _to_number(field: str, token: str) -> Decimal:
    try:
        value = Decimal(field)
    except InvalidOperation:
        raise MalformedTimeToken(token, f'"{field}" is not a number') from None

    if not value.is_finite() or value < 0:
        raise MalformedTimeToken(token, f'"{field}" is not a non-negative number')

    return value


def parse_time_fields(hours_field: str, minutes_field: str = '') -> Decimal:
    """Converts the hours and minutes parts of a time token to decimal hours.

    When the hours part carries the minutes suffix the whole part is a number
    of minutes and the second part is ignored.
    """
    token = f'{hours_field}{minutes_field}'

    if hours_field.endswith(MINUTES_SUFFIX):
        minutes = _to_number(hours_field[:-len(MINUTES_SUFFIX)], token)
        return round_hours(minutes / MINUTES_PER_HOUR)

    hours = _to_number(hours_field, token)
    minutes = Decimal(0)
    if minutes_field:
        minutes = _to_number(minutes_field.rstrip(MINUTES_SUFFIX), token)
        if minutes > MAX_MINUTES:
            raise MalformedTimeToken(token, f'minutes must be within 0..{MAX_MINUTES}')

    return round_hours(hours + minutes / MINUTES_PER_HOUR)


def split_time_token(token: str) -> tuple[str, str]:
    """Splits a time token into its hours and minutes parts."""
    token = token.strip()

    minutes_only = MINUTES_ONLY_RE.match(token)
    if minutes_only:
        return minutes_only.group(1) + MINUTES_SUFFIX, ''

    hours_minutes = HOURS_MINUTES_RE.match(token)
    if hours_minutes is None:
        raise MalformedTimeToken(token)

    return hours_minutes.group(1), hours_minutes.group(2) or ''


def parse_time_token(token: str) -> Decimal:
    """Converts a time token like "3h30" or "45m" to decimal hours."""
    hours_field, minutes_field = split_time_token(token)
    try:
        return parse_time_fields(hours_field, minutes_field)
    except MalformedTimeToken as e:
        raise MalformedTimeToken(token.strip(), e.reason) from None


def date_range_pattern(date_prefix: str) -> re.Pattern:
    """Pattern for log lines starting with the date prefix and holding a "|"."""
    return re.compile('^' + re.escape(date_prefix) + r'.*\|')


def parse_log_line(pline: str) -> LogEntry:
    """Parses one "date|time|notes" log line."""
    columns = pline.split('|')
    time_token = columns[1].strip() if len(columns) > 1 else ''

    return LogEntry(
        line=pline,
        date=columns[0].strip(),
        time_token=time_token,
        notes='|'.join(columns[2:]).strip(),
        hours=parse_time_token(time_token),
    )


def match_log_stream(stream, date_prefix: str) -> list[LogEntry]:
    """Returns entries of the stream logged within the date prefix."""
    result = []
    pattern = date_range_pattern(date_prefix)

    for line in stream:
        line = line.rstrip('\r\n')
        if pattern.match(line):
            result.append(parse_log_line(line))

    return result

