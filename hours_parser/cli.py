"""Command line entry: bills the time logs of one project or a directory of them."""

import os
import sys

from dotenv import load_dotenv
from loguru import logger

from hours_parser.errors import MalformedRate, MalformedSettings
from hours_parser.reports import print_report
from hours_parser.scanner import ProjectScan
from hours_parser.settings import configure_logging, load_settings, parse_rate

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_FAILED_LOGS = 2

USAGE = """Usage: {program} <path> <date> [hourly_rate]

  path         time log file, directory of project folders holding a log.md,
               or "-" to read a log from stdin
  date         date prefix to bill: YYYY, YYYY/MM or YYYY/MM/DD
  hourly_rate  rate overriding the "# Time Sheet - <rate>" line of the logs

Prints "$<amount> <hours> $<rate> <days> <project>" for every log with entries.
Set DEBUG=1 to print every matched log line with its hours."""


def usage(program: str) -> str:
    return USAGE.format(program=os.path.basename(program))


def main(argv=None) -> int:
    if argv is None:
        argv = sys.argv

    if len(argv) < 3:
        print(usage(argv[0] if argv else 'hours-parser'))
        return EXIT_USAGE

    load_dotenv()

    try:
        settings = load_settings()
    except (MalformedRate, MalformedSettings) as e:
        configure_logging()
        logger.error(f'invalid settings: {e}')
        return EXIT_USAGE

    configure_logging(settings.debug)

    path, date_prefix = argv[1], argv[2]
    explicit_rate = None
    if len(argv) > 3 and argv[3].strip():
        try:
            explicit_rate = parse_rate(argv[3])
        except MalformedRate as e:
            logger.error(str(e))
            return EXIT_USAGE

    scan = ProjectScan(path, date_prefix, explicit_rate, settings)
    try:
        printed = print_report(scan)
    except OSError as e:
        logger.error(f'cannot read {path}: {e}')
        return EXIT_USAGE

    logger.info(f'Projects billed: {printed}')

    if scan.failures:
        logger.warning(f'{len(scan.failures)} log(s) skipped')
        return EXIT_FAILED_LOGS

    return EXIT_OK


def run() -> None:
    sys.exit(main())
