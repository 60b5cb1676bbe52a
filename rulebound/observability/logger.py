"""
Structured logging for rulebound

Every module logs through a child of the "rulebound" package logger, so one
call to setup_logger() controls level and format for the whole library.
Records are rendered as JSON by python-json-logger unless the text format is
selected (RULEBOUND_LOG_FORMAT=text).
"""
import logging
import sys

from pythonjsonlogger import jsonlogger

from rulebound.config import get_settings

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

DEFAULT_LOGGER_NAME = "rulebound"

JSON_FIELDS = "%(timestamp)s %(level)s %(logger)s %(module)s %(function)s %(message)s"
TEXT_FIELDS = "%(asctime)s %(levelname)-8s %(name)s [%(module)s.%(funcName)s] %(message)s"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter stamping each record with its origin

    Fields passed through ``extra=`` (failed_fields, collection, ...) are kept
    as top-level keys next to these.
    """

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = log_record.get("timestamp") or self.formatTime(record, self.datefmt)
        log_record["level"] = (log_record.get("level") or record.levelname).upper()
        log_record["logger"] = record.name
        log_record["module"] = record.module
        log_record["function"] = record.funcName


def build_formatter(format_type: str) -> logging.Formatter:
    """Return the formatter for "json" or "text" output."""
    if format_type == "json":
        return CustomJsonFormatter(fmt=JSON_FIELDS, datefmt="%Y-%m-%dT%H:%M:%S")
    return logging.Formatter(fmt=TEXT_FIELDS, datefmt="%Y-%m-%d %H:%M:%S")


def setup_logger(
    name: str = DEFAULT_LOGGER_NAME,
    level: str | None = None,
    format_type: str | None = None,
) -> logging.Logger:
    """
    Configure a logger with a single stderr handler

    Calling it again replaces the previous handler, so the CLI can raise or
    lower the level after modules have already created their loggers.

    Args:
        name: Logger name
        level: Log level name (defaults to Settings.log_level)
        format_type: "json" or "text" (defaults to Settings.log_format)

    Returns:
        Configured logger instance
    """
    settings = get_settings()
    log_level = LOG_LEVELS.get((level or settings.log_level).upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(build_formatter(format_type or settings.log_format))

    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    logger.handlers = [handler]
    logger.propagate = False
    return logger


def get_logger(name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """
    Return a logger below the package logger

    The package logger is configured from Settings on first use.
    """
    if not logging.getLogger(DEFAULT_LOGGER_NAME).handlers:
        setup_logger(DEFAULT_LOGGER_NAME)
    return logging.getLogger(name)
