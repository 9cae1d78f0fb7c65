"""Resolves the hourly rate a time log is billed at."""

import re
from decimal import Decimal, InvalidOperation

from hours_parser.errors import MalformedRateDirective, UnreadableLog
from hours_parser.settings import DEFAULT_RATE, parse_rate

RATE_DIRECTIVE_RE = re.compile(r'^# Time Sheet - [0-9]*\.?[0-9]*')
# "#", "Time", "Sheet", "-", "<rate>"
RATE_FIELD_INDEX = 4


def read_rate_directive(lines) -> str | None:
    """Returns the first rate directive line, if any."""
    for line in lines:
        if RATE_DIRECTIVE_RE.match(line):
            return line.rstrip('\r\n')

    return None


def parse_rate_directive(line: str) -> Decimal:
    fields = line.split()

    try:
        rate = Decimal(fields[RATE_FIELD_INDEX])
    except (IndexError, InvalidOperation):
        raise MalformedRateDirective(line) from None

    if not rate.is_finite():
        raise MalformedRateDirective(line)

    return rate


def resolve_rate(lines, explicit_rate=None, default_rate: Decimal = DEFAULT_RATE) -> Decimal:
    """Picks the explicit rate, the log's own directive or the default rate."""
    if explicit_rate is not None and str(explicit_rate).strip():
        return parse_rate(explicit_rate)

    directive = read_rate_directive(lines)
    if directive is None:
        return default_rate

    return parse_rate_directive(directive)


def resolve_file_rate(file_to_path: str, explicit_rate=None,
                      default_rate: Decimal = DEFAULT_RATE) -> Decimal:
    if explicit_rate is not None and str(explicit_rate).strip():
        return parse_rate(explicit_rate)

    with open(file_to_path, encoding='utf-8') as log_file:
        try:
            return resolve_rate(log_file, default_rate=default_rate)
        except UnicodeDecodeError as e:
            raise UnreadableLog(str(file_to_path), str(e)) from None
