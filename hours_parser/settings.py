"""Runtime settings and logging setup."""

import os
import sys
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

import yaml
from loguru import logger
from yaml.loader import SafeLoader

from hours_parser.errors import MalformedRate, MalformedSettings

DEFAULT_RATE = Decimal(150)
DEFAULT_LOG_FILE_NAME = 'log.md'
DEFAULT_CONFIG_FILE = 'hours.yaml'

LOG_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS zz}</green> | <level>{level}</level> | <b>{message}</b>"


@dataclass(frozen=True)
class Settings:
    default_rate: Decimal = DEFAULT_RATE
    debug: bool = False
    log_file_name: str = DEFAULT_LOG_FILE_NAME


def parse_rate(rate) -> Decimal:
    """Converts a user supplied hourly rate to a number."""
    try:
        value = Decimal(str(rate).strip())
    except InvalidOperation:
        raise MalformedRate(rate) from None

    if not value.is_finite() or value < 0:
        raise MalformedRate(rate)

    return value


def read_config_file(config_path: str) -> dict:
    if not os.path.isfile(config_path):
        return {}

    with open(config_path, encoding='utf-8') as f:
        try:
            config = yaml.load(f, Loader=SafeLoader)
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            raise MalformedSettings(config_path, str(e)) from None

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise MalformedSettings(config_path, f'expected a mapping, got {type(config).__name__}')

    logger.debug(f'settings loaded from {config_path}')
    return config


def load_settings(environ=None, config_path: str | None = None) -> Settings:
    """Builds settings from the environment, then the YAML file, then defaults."""
    if environ is None:
        environ = os.environ
    if config_path is None:
        config_path = environ.get('HOURS_CONFIG', DEFAULT_CONFIG_FILE)

    config = read_config_file(config_path)

    default_rate = environ.get('HOURS_DEFAULT_RATE') or config.get('default_rate')
    log_file_name = environ.get('HOURS_LOG_FILE') or config.get('log_file_name')
    debug = bool(environ.get('DEBUG')) or config.get('debug') is True

    return Settings(
        default_rate=parse_rate(default_rate) if default_rate is not None else DEFAULT_RATE,
        debug=debug,
        log_file_name=log_file_name or DEFAULT_LOG_FILE_NAME,
    )


def configure_logging(debug: bool = False) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if debug else "WARNING", format=LOG_FORMAT,
               colorize=True, backtrace=True, diagnose=True)
