"""Structured logging setup shared by the LSDrinks service.

structlog renders on top of the standard library: a console renderer while
developing, JSON lines in production and staging. Log files rotate under
``LOG_DIR`` (``logs/`` by default); errors also go to a dedicated file.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

_LEVEL_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

_ROTATE_BYTES = 10 * 1024 * 1024
_ROTATE_BACKUPS = 5


def current_env() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    """``LOG_LEVEL`` wins; otherwise derive the level from the environment name."""
    return os.getenv("LOG_LEVEL", _LEVEL_BY_ENV.get(current_env(), "INFO")).upper()


def _rotating_handler(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=_ROTATE_BYTES,
        backupCount=_ROTATE_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(log_dir: str | None = None) -> None:
    log_level = get_log_level()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    # Tests log to the console only
    if current_env() != "test":
        directory = Path(log_dir or os.getenv("LOG_DIR", "logs"))
        directory.mkdir(parents=True, exist_ok=True)
        root_logger.addHandler(_rotating_handler(directory / "lsdrinks.log", log_level))
        root_logger.addHandler(_rotating_handler(directory / "lsdrinks_error.log", logging.ERROR))

    for noisy in ("urllib3", "asyncio", "stripe", "httpx"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def setup_structlog() -> None:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if current_env() in ("production", "staging"):
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=4),
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(log_dir: str | None = None) -> None:
    setup_stdlib_logging(log_dir)
    setup_structlog()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind key/values onto every log line emitted by the current request."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
