"""
Routing for the SDK's own log records.

Every module logs under the ``phant_sdk`` logger. configure_logging attaches
colored console and rotating file handlers to that logger only; the root
logger and handlers installed by the application are left untouched.
"""

import os
import logging
import logging.handlers
import colorlog

from .config import LoggingConfig

SDK_LOGGER_NAME = 'phant_sdk'

LOG_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'red,bg_white',
}

# Marks handlers installed here so a later call replaces exactly those
_SDK_HANDLER_ATTR = '_phant_sdk_handler'


def _installed_handlers(logger: logging.Logger):
    return [h for h in logger.handlers if getattr(h, _SDK_HANDLER_ATTR, False)]


def _install(logger: logging.Logger, handler: logging.Handler, level: int):
    handler.setLevel(level)
    setattr(handler, _SDK_HANDLER_ATTR, True)
    logger.addHandler(handler)


def reset_logging() -> logging.Logger:
    """Remove the handlers installed by configure_logging and restore defaults"""
    sdk_logger = logging.getLogger(SDK_LOGGER_NAME)
    for handler in _installed_handlers(sdk_logger):
        sdk_logger.removeHandler(handler)
        handler.close()
    sdk_logger.setLevel(logging.NOTSET)
    sdk_logger.propagate = True
    return sdk_logger


def configure_logging(logging_config: LoggingConfig) -> logging.Logger:
    """
    Apply the logging section of a PhantConfig to the phant_sdk logger.

    Calling it again replaces the handlers from the previous call instead of
    stacking new ones.

    Args:
        logging_config: Level, propagation and console/file handler settings

    Returns:
        The phant_sdk logger
    """
    sdk_logger = reset_logging()
    sdk_logger.setLevel(logging_config.get_level())
    sdk_logger.propagate = logging_config.propagate

    console = logging_config.console
    if console.enabled:
        handler = logging.StreamHandler()
        handler.setFormatter(colorlog.ColoredFormatter(
            fmt='%(log_color)s' + console.format,
            datefmt=console.date_format,
            reset=True,
            log_colors=LOG_COLORS
        ))
        _install(sdk_logger, handler, console.get_level())

    file = logging_config.file
    if file.enabled:
        os.makedirs(file.log_dir, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            os.path.join(file.log_dir, file.filename),
            maxBytes=file.max_bytes,
            backupCount=file.backup_count
        )
        handler.setFormatter(logging.Formatter(fmt=file.format, datefmt=file.date_format))
        _install(sdk_logger, handler, file.get_level())

    sdk_logger.debug(f"phant_sdk logging configured at {logging_config.level}")
    return sdk_logger
