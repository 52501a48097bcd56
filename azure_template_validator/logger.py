import logging
import sys
from typing import TYPE_CHECKING

from colorlog import ColoredFormatter

from azure_template_validator.constants import LOGGER_NAME

if TYPE_CHECKING:
    from azure_template_validator.settings import ValidatorSettings


def setup_logger(debug_mode=False):
    """
    Configure the package logger with a colored console handler.

    Modules log through logging.getLogger(__name__), which propagates to this
    logger. The handler is attached only once; calling again only changes the
    level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    level = logging.DEBUG if debug_mode else logging.INFO
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = ColoredFormatter(
            "%(log_color)s[%(levelname)s] %(name)s: %(message)s",
            log_colors={
                "DEBUG":    "cyan",
                "INFO":     "green",
                "WARNING":  "yellow",
                "ERROR":    "red",
                "CRITICAL": "red,bg_white",
            }
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger


def configure_logger_from_settings(settings: 'ValidatorSettings'):
    """Re-setup the logger with the mode from settings ("DEBUG" enables debug output)."""
    logger = setup_logger(debug_mode=settings.debug_mode)
    if settings.debug_mode:
        logger.debug("Debug mode is active.")
    return logger


def log_report(accumulator, logger=None):
    """Log a summary of an accumulator's records, one line per record."""
    logger = logger or logging.getLogger(LOGGER_NAME)
    records = accumulator.records
    if not records:
        logger.info("Validation passed with no findings.")
        return
    logger.warning(f"Validation finished with {len(records)} finding(s):")
    for record in records:
        key = record.key or "<generic>"
        logger.warning(f"  - [{record.severity.value}] {key}: {record.message}")
