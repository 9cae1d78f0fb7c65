"""Formats aggregated time logs for the terminal."""

from decimal import Decimal

from hours_parser.parser import LogEntry, round_hours


def format_money(value) -> str:
    return f'${round_hours(Decimal(value)):.2f}'


def format_report_line(result) -> str:
    """One space separated report line: amount, hours, rate, days, project."""
    return ' '.join([
        format_money(result.amount),
        f'{round_hours(result.total_hours):.2f}',
        format_money(result.hourly_rate),
        str(result.day_count),
        result.project_name,
    ])


def format_debug_line(entry: LogEntry) -> str:
    return f'{entry.line} => {entry.hours:.2f}'


def print_report(results) -> int:
    """Prints a line per result and returns how many were printed."""
    printed = 0
    for result in results:
        print(format_report_line(result), flush=True)
        printed += 1

    return printed
