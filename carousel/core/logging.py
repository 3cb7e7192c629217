"""
Logging configuration using Loguru.

Standard library loggers (uvicorn, httpx, yt-dlp's warnings) are routed
into Loguru so every line carries the same format and request id.
"""
import logging
import sys
from typing import Any, Optional

from loguru import logger

from carousel.core.config import settings

INTERCEPTED_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error", "httpx")

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{extra[request_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | "
    "{extra[request_id]} | {name}:{function}:{line} - {message}"
)


class InterceptHandler(logging.Handler):
    """Handler that redirects standard logging records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging's own frames so Loguru reports the real caller
        frame = logging.currentframe()
        depth = 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def add_request_id(record: dict[str, Any]) -> None:
    record["extra"].setdefault("request_id", "N/A")


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    Configure Loguru with a console sink and an optional rotating file sink.

    Args:
        level: Minimum level, defaults to settings.LOG_LEVEL.
        log_file: File sink path, defaults to settings.LOG_FILE. No file
            sink is added when both are empty.
    """
    level = level or settings.LOG_LEVEL
    log_file = log_file or settings.LOG_FILE

    logging.root.handlers = []
    logging.basicConfig(handlers=[InterceptHandler()], level=0)

    for logger_name in INTERCEPTED_LOGGERS:
        logging_logger = logging.getLogger(logger_name)
        logging_logger.handlers = [InterceptHandler()]
        logging_logger.propagate = False

    logger.remove()
    logger.configure(patcher=add_request_id)

    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level)

    if log_file:
        logger.add(
            log_file,
            rotation="10 MB",
            retention="30 days",
            compression="zip",
            enqueue=True,
            level=level,
            format=FILE_FORMAT,
        )
