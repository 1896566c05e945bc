import logging
import os
import sys
import uuid
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from loguru import logger

from app.core.config import Environment, settings

if TYPE_CHECKING:
    from loguru import Record

# Set by LoggingMiddleware for the duration of a request
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

LOG_DIR = Path("logs")
LOG_FILE = LOG_DIR / "app.log"

LOG_LEVELs = {
    logging.CRITICAL: "CRITICAL",
    logging.ERROR: "ERROR",
    logging.WARNING: "WARNING",
    logging.INFO: "INFO",
    logging.DEBUG: "DEBUG",
    5: "TRACE",
    logging.NOTSET: "NOTSET",
}

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>PID:{extra[process_id]}</magenta> | "
    "<yellow>ReqID:{extra[request_id]}</yellow> | "
    "<cyan>{name}:{function}:{line}</cyan> | "
    "<level>{message}</level>"
)

FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss!UTC} | {level: <8} | PID:{extra[process_id]} | "
    "ReqID:{extra[request_id]} | {name}:{function}:{line} | {message}"
)

# Loggers of the servers and libraries routed through loguru
INTERCEPTED_LOGGER_PREFIXES = ("uvicorn", "gunicorn", "sqlalchemy")


def correlation_filter(record: "Record") -> bool:
    """
    Stamp every record with the current request id and the worker PID.

    Records emitted outside a request get a fresh random id.
    """
    record["extra"]["request_id"] = request_id_var.get() or str(uuid.uuid4())[:8]
    record["extra"]["process_id"] = os.getpid()

    return True


class InterceptHandler(logging.Handler):
    """Hands standard library log records over to loguru."""

    def emit(self, record: logging.LogRecord):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip the logging module's own frames so loguru reports the real caller
        frame = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logger():
    """
    Replace loguru's default sink with the application sinks.

    Console output is always on and runs at DEBUG in the dev environment.
    When ``log_to_file`` is set, a rotating file sink is added; it is shared
    by all workers, hence ``enqueue=True`` on both sinks.

    Call once at startup, from the lifespan or a CLI command.
    """
    logger.remove()

    log_level = LOG_LEVELs.get(settings.log_level, "INFO")
    console_level = "DEBUG" if settings.current_environment == Environment.DEV else log_level

    logger.add(
        sys.stdout,
        format=CONSOLE_FORMAT,
        level=console_level,
        colorize=True,
        enqueue=True,
        filter=correlation_filter,
    )

    if settings.log_to_file:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        logger.add(
            LOG_FILE,
            format=FILE_FORMAT,
            level=log_level,
            rotation="10 MB",
            retention="3 months",
            compression="gz",
            enqueue=True,
            filter=correlation_filter,
            backtrace=True,
            diagnose=settings.current_environment != Environment.PRD,
        )

    logger.info(
        f"Logger ready | env={settings.current_environment.value} | level={log_level} | "
        f"file={LOG_FILE if settings.log_to_file else 'off'}"
    )


def configure_uvicorn_logging():
    """Route uvicorn, gunicorn and SQLAlchemy logging through loguru."""
    # Level filtering happens in the loguru sinks
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for name in list(logging.root.manager.loggerDict):
        if name.startswith(INTERCEPTED_LOGGER_PREFIXES):
            std_logger = logging.getLogger(name)
            std_logger.handlers = [InterceptHandler()]
            std_logger.propagate = False

    logger.debug("Standard logging intercepted")


def shutdown_logger():
    """Wait for enqueued records to be written."""
    logger.info("Flushing logs")
    logger.complete()
