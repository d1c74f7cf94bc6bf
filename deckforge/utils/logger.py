"""
Logging configuration for deckforge using Logfire.

Falls back to standard Python logging when no LOGFIRE_TOKEN is configured
or the Logfire SDK cannot be initialised.
"""
import logging
from typing import Optional

import logfire

from config.settings import get_settings

# Configure Logfire once at module import
LOGFIRE_CONFIGURED = False

_settings = get_settings()

if _settings.LOGFIRE_TOKEN:
    try:
        logfire.configure(
            token=_settings.LOGFIRE_TOKEN,
            service_name="deckforge",
            environment=_settings.APP_ENV,
            console=False
        )
        LOGFIRE_CONFIGURED = True
    except Exception as config_error:
        logging.getLogger(__name__).warning(
            "Logfire configuration failed, using standard logging: %s", config_error
        )
        LOGFIRE_CONFIGURED = False


class LogfireLogger:
    """Wrapper to make Logfire work like standard Python logging."""

    def __init__(self, name: str):
        self.name = name

    def _format(self, message, args) -> str:
        if args:
            message = message % args
        return f"[{self.name}] {message}"

    def info(self, message, *args, **kwargs):
        logfire.info(self._format(message, args), **kwargs)

    def warning(self, message, *args, **kwargs):
        logfire.warn(self._format(message, args), **kwargs)

    def error(self, message, *args, **kwargs):
        kwargs.pop('exc_info', None)
        logfire.error(self._format(message, args), **kwargs)

    def debug(self, message, *args, **kwargs):
        logfire.debug(self._format(message, args), **kwargs)

    def exception(self, message, *args, **kwargs):
        kwargs.pop('exc_info', None)
        logfire.exception(self._format(message, args), **kwargs)

    def setLevel(self, level):
        # No-op for compatibility
        pass


class StandardLogger:
    """Standard Python logger when Logfire is not configured."""

    def __init__(self, name: str, level: Optional[str] = None):
        self.logger = logging.getLogger(name)

        level_name = (level or _settings.LOG_LEVEL or "INFO").upper()
        log_level = getattr(logging, level_name, logging.INFO)
        self.logger.setLevel(log_level)

        # Add console handler if not already present
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setLevel(log_level)
            handler.setFormatter(logging.Formatter('[%(levelname)s %(name)s] %(message)s'))
            self.logger.addHandler(handler)

    def info(self, message, *args, **kwargs):
        self.logger.info(message, *args, **kwargs)

    def warning(self, message, *args, **kwargs):
        self.logger.warning(message, *args, **kwargs)

    def error(self, message, *args, **kwargs):
        self.logger.error(message, *args, **kwargs)

    def debug(self, message, *args, **kwargs):
        self.logger.debug(message, *args, **kwargs)

    def exception(self, message, *args, **kwargs):
        self.logger.exception(message, *args, **kwargs)

    def setLevel(self, level):
        self.logger.setLevel(level)


def setup_logger(name: str, level: Optional[str] = None):
    """
    Set up a logger using Logfire or standard Python logging if not configured.

    Args:
        name: Logger name (usually __name__)
        level: Logging level (used for standard logger)

    Returns:
        LogfireLogger or StandardLogger instance
    """
    if LOGFIRE_CONFIGURED:
        return LogfireLogger(name)
    return StandardLogger(name, level)
