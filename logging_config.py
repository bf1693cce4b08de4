"""
Centralized logging configuration for PrintDelivery.

Quotes, uploads and invoices are handled on Flask worker threads, and one
request usually logs from the route, the quote service and the packer.
Every record is tagged with the worker thread and with a short request
id, so the lines belonging to one request can be pulled out of a busy log.

The request id is taken from an incoming ``X-Request-ID`` header when it
looks sane (so ids set by a proxy carry through), otherwise generated.
It is echoed back on the response.

Log Format:
    2026-10-19 10:15:30 [INFO    ] [MainThread -] print_delivery.app - Starting PrintDelivery
    2026-10-19 10:15:31 [INFO    ] [Thread-3 5f2c9a1be07d] print_delivery.services.quote_service - Photo quote: 2 line(s)

Usage:
    # In create_app()
    setup_logging(log_level=logging.INFO, enable_file_logging=True)
    init_request_logging(app)

    # In modules
    logger = get_logger(__name__)
"""

import logging
import re
import sys
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional
from uuid import uuid4

from flask import Flask, g, has_request_context, request


APP_NAMESPACE = "print_delivery"
REQUEST_ID_HEADER = "X-Request-ID"
NO_REQUEST = "-"

_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

LOG_FORMAT = (
    "%(asctime)s [%(levelname)-8s] [%(thread_name)s %(request_id)s] "
    "%(name)s - %(message)s"
)


# =============================================================================
# REQUEST CONTEXT
# =============================================================================

def current_request_id() -> str:
    """Id of the request being served on this thread, or "-" outside one."""
    if has_request_context():
        return g.get("request_id", NO_REQUEST)
    return NO_REQUEST


def _incoming_request_id() -> str:
    supplied = request.headers.get(REQUEST_ID_HEADER, "")
    if _VALID_REQUEST_ID.match(supplied):
        return supplied
    return uuid4().hex[:12]


def init_request_logging(app: Flask) -> None:
    """Assign a request id to every request and return it in a response header."""

    @app.before_request
    def _assign_request_id():
        g.request_id = _incoming_request_id()

    @app.after_request
    def _echo_request_id(response):
        response.headers[REQUEST_ID_HEADER] = current_request_id()
        return response


class RequestContextFilter(logging.Filter):
    """
    Adds ``thread_name`` and ``request_id`` to every record.

    Records logged outside a request (startup, tests calling the core
    directly) get "-" as their request id.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.thread_name = threading.current_thread().name
        record.request_id = current_request_id()
        return True


# =============================================================================
# LOGGING SETUP
# =============================================================================

def _rotating_handler(path: Path, level: int, formatter, context_filter) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=path,
        maxBytes=10 * 1024 * 1024,  # 10 MB per file
        backupCount=5,
        encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(context_filter)
    return handler


def setup_logging(
    app_name: str = APP_NAMESPACE,
    log_level: int = logging.INFO,
    log_dir: Optional[Path] = None,
    enable_file_logging: bool = True,
) -> logging.Logger:
    """
    Configure the application logger.

    Installs a console handler and, when file logging is enabled, a
    rotating application log plus a rotating ERROR-only log. Calling it
    again replaces the handlers, so each create_app() starts clean.

    Args:
        app_name: Name of the application logger and log file stem
        log_level: Minimum log level (default: INFO)
        log_dir: Directory for log files (default: ./logs next to this file)
        enable_file_logging: Whether to write log files (default: True)

    Returns:
        Configured application logger
    """
    logger = logging.getLogger(app_name)
    logger.setLevel(log_level)
    logger.propagate = False
    logger.handlers.clear()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    context_filter = RequestContextFilter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(context_filter)
    logger.addHandler(console_handler)

    if enable_file_logging:
        log_dir = log_dir or Path(__file__).parent / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)

        app_log_file = log_dir / f"{app_name}.log"
        logger.addHandler(_rotating_handler(app_log_file, log_level, formatter, context_filter))
        logger.addHandler(_rotating_handler(
            log_dir / f"{app_name}_error.log", logging.ERROR, formatter, context_filter
        ))
        logger.info(f"File logging enabled: {app_log_file}")

    logger.info(f"Logging configured at level {logging.getLevelName(log_level)}")
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Logger under the application namespace.

    ``get_logger("modules.layout_packer")`` returns
    ``print_delivery.modules.layout_packer``, which inherits the handlers
    installed by setup_logging().
    """
    if not name.startswith(APP_NAMESPACE):
        name = f"{APP_NAMESPACE}.{name}"
    return logging.getLogger(name)
