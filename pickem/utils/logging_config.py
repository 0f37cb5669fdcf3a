"""
Logging for the pick'em pool

Everything is routed through the root logger: a console stream plus,
when LOG_TO_FILE is set, rotating pickem.log and errors.log files.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from flask import has_request_context, request
from flask.logging import default_handler

CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
FILE_FORMAT = CONSOLE_FORMAT + " [%(method)s %(url)s]"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class RequestContextFilter(logging.Filter):
    """Stamp records with the current request's method and url"""

    def filter(self, record):
        in_request = has_request_context()
        record.method = request.method if in_request else "-"
        record.url = request.url if in_request else "-"
        return True


def _file_handler(path, level, max_bytes, backups):
    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backups)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    handler.addFilter(RequestContextFilter())
    return handler


def setup_logging(app):
    level = getattr(logging, app.config.get("LOG_LEVEL", "INFO").upper())

    # app.logger shares the "pickem" namespace; let its records reach the
    # root handlers once instead of also going through Flask's stderr handler
    app.logger.removeHandler(default_handler)
    app.logger.setLevel(logging.NOTSET)

    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    if app.config.get("LOG_TO_CONSOLE", True):
        console = logging.StreamHandler()
        console.setLevel(level)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
        root.addHandler(console)

    if app.config.get("LOG_TO_FILE", True):
        log_dir = app.config.get("LOG_DIR", "logs")
        os.makedirs(log_dir, exist_ok=True)
        root.addHandler(
            _file_handler(os.path.join(log_dir, "pickem.log"), level, 10 * 1024 * 1024, 5)
        )
        root.addHandler(
            _file_handler(os.path.join(log_dir, "errors.log"), logging.ERROR, 5 * 1024 * 1024, 3)
        )

    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    app.logger.info(f"Logging configured at {logging.getLevelName(level)}")


class ContextualLogger:
    """Logger that appends key=value context to every message"""

    def __init__(self, name, context=None):
        self.logger = logging.getLogger(name)
        self.context = context or {}

    def _format(self, message):
        if not self.context:
            return message
        pairs = " ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{message} [{pairs}]"

    def debug(self, message, **kwargs):
        self.logger.debug(self._format(message), **kwargs)

    def info(self, message, **kwargs):
        self.logger.info(self._format(message), **kwargs)

    def warning(self, message, **kwargs):
        self.logger.warning(self._format(message), **kwargs)

    def error(self, message, **kwargs):
        self.logger.error(self._format(message), **kwargs)
