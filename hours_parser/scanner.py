"""Finds the project logs to bill and aggregates each of them."""

import errno
import os
import sys

from loguru import logger

from hours_parser.aggregator import (
    STDIN_SOURCE,
    aggregate_log_file,
    aggregate_log_stream,
    project_name_for,
)
from hours_parser.errors import HoursParserError
from hours_parser.settings import Settings


def find_log_files(path: str, log_file_name: str = 'log.md'):
    """Yields the log itself, or the log of every project directory.

    Only immediate subdirectories are looked at, in the order the filesystem
    lists them.
    """
    path = str(path)

    if os.path.isdir(path):
        with os.scandir(path) as project_dirs:
            for project_dir in project_dirs:
                if not project_dir.is_dir():
                    continue
                log_path = os.path.join(project_dir.path, log_file_name)
                if os.path.isfile(log_path):
                    yield log_path
    elif os.path.exists(path):
        yield path
    else:
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)


class ProjectScan:
    """Aggregates every log found under the path.

    Logs that cannot be billed are skipped and kept in `failures`, I/O errors
    are raised.
    """

    def __init__(self, path: str, date_prefix: str, explicit_rate=None,
                 settings: Settings | None = None, stdin=None):
        self._path = str(path)
        self._date_prefix = date_prefix
        self._explicit_rate = explicit_rate
        self._settings = settings or Settings()
        self._stdin = stdin
        self.failures = []
        self.files_count = 0

    def __iter__(self):
        if self._path == STDIN_SOURCE:
            yield from self._scan_stdin()
            return

        for log_path in find_log_files(self._path, self._settings.log_file_name):
            self.files_count += 1
            try:
                result = aggregate_log_file(log_path, self._date_prefix, self._explicit_rate,
                                            self._settings)
            except HoursParserError as e:
                logger.error(f'{log_path}: {e}')
                self.failures.append((log_path, e))
                continue

            if result is not None:
                yield result

        logger.info(f'Logs count: {self.files_count}')

    def _scan_stdin(self):
        logger.info('read logs stream')
        self.files_count += 1
        stream = self._stdin if self._stdin is not None else sys.stdin
        try:
            result = aggregate_log_stream(stream, self._date_prefix, project_name_for('log'),
                                          self._explicit_rate, self._settings)
        except HoursParserError as e:
            logger.error(f'{STDIN_SOURCE}: {e}')
            self.failures.append((STDIN_SOURCE, e))
            return

        if result is not None:
            yield result


def scan_projects(path: str, date_prefix: str, explicit_rate=None,
                  settings: Settings | None = None) -> ProjectScan:
    return ProjectScan(path, date_prefix, explicit_rate, settings)
