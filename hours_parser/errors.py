"""Errors raised while reading time logs."""


class HoursParserError(Exception):
    """Base error for a single log file that cannot be billed."""


class MalformedTimeToken(HoursParserError, ValueError):
    """Time token does not follow the hours/minutes notation."""

    def __init__(self, token: str, reason: str = 'unrecognised time notation'):
        self.token = token
        self.reason = reason
        super().__init__(f'malformed time token "{token}": {reason}')


class MalformedRateDirective(HoursParserError, ValueError):
    """Rate directive line has no usable rate."""

    def __init__(self, line: str):
        self.line = line
        super().__init__(f'malformed rate directive "{line}"')


class MalformedRate(HoursParserError, ValueError):
    """Hourly rate given by the user or the settings is not a number."""

    def __init__(self, rate):
        self.rate = rate
        super().__init__(f'malformed hourly rate "{rate}"')


class UnreadableLog(HoursParserError, ValueError):
    """Log file is not valid UTF-8 text."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f'cannot decode log {source}: {reason}')


class MalformedSettings(HoursParserError, ValueError):
    """Settings file is not a YAML mapping."""

    def __init__(self, config_path: str, reason: str):
        self.config_path = config_path
        self.reason = reason
        super().__init__(f'malformed settings file {config_path}: {reason}')
