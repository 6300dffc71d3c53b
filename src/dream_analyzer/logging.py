import logging
import os
import sys

from pythonjsonlogger.json import JsonFormatter

SERVICE_NAME = "dream-analyzer"
UVICORN_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error")

_handler: logging.Handler | None = None


def _build_handler() -> logging.Handler:
    formatter = JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s",
        static_fields={"service": SERVICE_NAME},
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    return handler


def setup_logging():
    """
    Configures structured JSON logging and returns the root logger.

    Every record is written to stdout as one JSON object with timestamp,
    level, logger name, message, the ddtrace trace_id/span_id and the
    service name; values passed through ``extra`` become top-level keys.
    Uvicorn's loggers are rerouted through the same handler so request logs
    share the format. The level comes from ``LOG_LEVEL`` (default INFO).

    Safe to call from every module: handlers are installed only once.

    Returns:
        logging.Logger: The configured root logger instance.
    """
    global _handler

    root_logger = logging.getLogger()
    if _handler is not None:
        return root_logger

    level = os.getenv("LOG_LEVEL", "INFO").upper()
    _handler = _build_handler()

    root_logger.setLevel(level)
    root_logger.handlers = [_handler]

    for logger_name in UVICORN_LOGGERS:
        u_logger = logging.getLogger(logger_name)
        u_logger.setLevel(level)
        u_logger.handlers = [_handler]
        u_logger.propagate = False

    return root_logger
