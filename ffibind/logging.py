import logging as _logging
import sys
from typing import Any, Dict, Optional, Union

_LOGGER_NAMESPACE = "ffibind"

_FORMAT = "%(levelname)-8s %(name)s: %(message)s"

_LEVEL_COLORS = {
    _logging.DEBUG: "\033[36m",
    _logging.WARNING: "\033[33m",
    _logging.ERROR: "\033[31m",
    _logging.CRITICAL: "\033[41m",
}
_RESET = "\033[0m"


class _ColorFormatter(_logging.Formatter):
    def __init__(self, use_color: bool) -> None:
        super().__init__(fmt=_FORMAT)
        self.use_color = use_color

    def format(self, record: _logging.LogRecord) -> str:
        message = super().format(record)
        color = _LEVEL_COLORS.get(record.levelno) if self.use_color else None
        return f"{color}{message}{_RESET}" if color else message


class _BelowLevelFilter(_logging.Filter):
    def __init__(self, level: int) -> None:
        super().__init__()
        self.level = level

    def filter(self, record: _logging.LogRecord) -> bool:
        return record.levelno < self.level


def _parse_level(value: Union[str, int, None], default: int) -> int:
    if value is None:
        return default
    if isinstance(value, int):
        return value
    level = _logging.getLevelName(value.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value}")
    return level


def get_logger(name: Optional[str] = None) -> _logging.Logger:
    """Return the package logger, or a child of it for `name`."""
    if name is None:
        return _logging.getLogger(_LOGGER_NAMESPACE)
    if name == _LOGGER_NAMESPACE or name.startswith(_LOGGER_NAMESPACE + "."):
        return _logging.getLogger(name)
    return _logging.getLogger(f"{_LOGGER_NAMESPACE}.{name}")


def configure_logging(
    config: Dict[str, Any],
    *,
    console_level_override: Optional[str] = None,
    disable_color: bool = False,
    force_reconfigure: bool = False,
) -> int:
    """Attach console handlers to the package logger from the `[logging]` table.

    Records below ERROR go to stdout and the rest to stderr. Returns the
    effective console level. An already configured logger is left alone
    unless `force_reconfigure` is set.
    """
    logger = get_logger()
    if logger.handlers and not force_reconfigure:
        return logger.level

    logging_cfg: Dict[str, Any] = config.get("logging", {}) if config else {}
    level = _parse_level(console_level_override, _parse_level(logging_cfg.get("console_level"), _logging.INFO))
    use_color = bool(logging_cfg.get("color", True)) and not disable_color

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)
    logger.propagate = False

    stdout_handler = _logging.StreamHandler(stream=sys.stdout)
    stdout_handler.addFilter(_BelowLevelFilter(_logging.ERROR))
    stdout_handler.setFormatter(_ColorFormatter(use_color and sys.stdout.isatty()))
    logger.addHandler(stdout_handler)

    stderr_handler = _logging.StreamHandler(stream=sys.stderr)
    stderr_handler.setLevel(_logging.ERROR)
    stderr_handler.setFormatter(_ColorFormatter(use_color and sys.stderr.isatty()))
    logger.addHandler(stderr_handler)

    logger.debug("console logging at %s", _logging.getLevelName(level))
    return level
