"""Sums logged hours for a date range and turns them into a billable amount."""

import os
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path

from loguru import logger

from hours_parser.errors import UnreadableLog
from hours_parser.parser import LogEntry, match_log_stream, round_hours
from hours_parser.rates import resolve_rate
from hours_parser.reports import format_debug_line
from hours_parser.settings import Settings

STDIN_SOURCE = '-'


@dataclass(frozen=True)
class AggregationResult:
    amount: Decimal
    total_hours: Decimal
    hourly_rate: Decimal
    day_count: int
    project_name: str
    source: str = STDIN_SOURCE
    entries: list[LogEntry] = field(default_factory=list, compare=False, repr=False)


def project_name_for(file_to_path: str) -> str:
    """Name of the directory holding the log, the cwd for a bare file name."""
    return Path(os.path.abspath(file_to_path)).parent.name


def sum_hours(entries: list[LogEntry]) -> Decimal:
    total_hours = Decimal(0)
    for entry in entries:
        total_hours = round_hours(total_hours + entry.hours)

    return total_hours


def aggregate_log_stream(stream, date_prefix: str, project_name: str, explicit_rate=None,
                         settings: Settings | None = None,
                         source: str = STDIN_SOURCE) -> AggregationResult | None:
    """Aggregates the log entries of the stream within the date prefix.

    Returns None when nothing was logged within the range. The rate is only
    resolved once at least one entry matched.
    """
    settings = settings or Settings()
    try:
        lines = list(stream)
    except UnicodeDecodeError as e:
        raise UnreadableLog(source, str(e)) from None

    entries = match_log_stream(lines, date_prefix)
    if not entries:
        logger.debug(f'no entries for {date_prefix} in {source}')
        return None

    if settings.debug:
        for entry in entries:
            logger.debug(format_debug_line(entry))

    total_hours = sum_hours(entries)
    hourly_rate = resolve_rate(lines, explicit_rate, settings.default_rate)

    return AggregationResult(
        amount=total_hours * hourly_rate,
        total_hours=total_hours,
        hourly_rate=hourly_rate,
        day_count=len(entries),
        project_name=project_name,
        source=source,
        entries=entries,
    )


def aggregate_log_file(file_to_path: str, date_prefix: str, explicit_rate=None,
                       settings: Settings | None = None) -> AggregationResult | None:
    file_to_path = str(file_to_path)
    logger.info(f'parse a log file {file_to_path}')

    with open(file_to_path, encoding='utf-8') as log_file:
        try:
            lines = log_file.readlines()
        except UnicodeDecodeError as e:
            raise UnreadableLog(file_to_path, str(e)) from None

    return aggregate_log_stream(lines, date_prefix, project_name_for(file_to_path),
                                explicit_rate, settings, source=file_to_path)
