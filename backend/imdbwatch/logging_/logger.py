import inspect
import logging
import os
import sys
from datetime import datetime
from typing import Any

import pytz
import requests
from loguru import logger
from loguru._logger import Logger

from imdbwatch.core.config import settings

TIMEZONE = pytz.timezone("Europe/Amsterdam")

# (file name, level, retention, only when DEBUG)
FILE_SINKS = (
    ("trace.log", "TRACE", "3 days", True),
    ("debug.log", "DEBUG", "7 days", True),
    ("error.log", "ERROR", "30 days", False),
    ("info.log", "INFO", None, False),
)


class InterceptHandler(logging.Handler):
    """Forward stdlib logging records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def dynamic_formatter(record: Any) -> str:
    base = "[{time:HH:mm:ss}] [{level}] {name}:{function}:{line} - {message}"

    extras = record.get("extra", {})
    if extras:
        base += " (" + ", ".join(f"{key}={value}" for key, value in extras.items()) + ")"
    base += "\n"

    if record["exception"]:
        base += "{exception}"

    return base


def dynamic_console_formatter(record: Any) -> str:
    base = "[<green>{time:HH:mm:ss}</green>] <level>[{level}]</level> {name}:{function}:<blue>{line}</blue> - {message}\n"

    if record["exception"]:
        base += "{exception}"

    return base


def notify_on_error(message: Any) -> None:
    record = message.record
    text = f"Error in {record['name']}:{record['function']} at line {record['line']}\n\n{record['message']}"

    requests.post(
        f"https://api.telegram.org/bot{settings.TELEGRAM_BOT_TOKEN}/sendMessage",
        data={
            "chat_id": settings.TELEGRAM_USER_ID,
            "text": text,
        },
        timeout=10,
    )


def setup_logger(name: str, log_dir: str | None = None) -> Logger:
    """
    Configure loguru for one process (`server`, `warm`) and route the
    package's stdlib loggers into it.

    Files land in `<log_dir>/<date>/<name>/`, rotated at midnight.
    """
    today = datetime.now(TIMEZONE).strftime("%Y-%m-%d")
    log_path = os.path.join(log_dir or settings.LOG_DIR, today, name)
    os.makedirs(log_path, exist_ok=True)

    logger.remove()

    for file_name, level, retention, debug_only in FILE_SINKS:
        if debug_only and not settings.DEBUG:
            continue
        logger.add(
            os.path.join(log_path, file_name),
            format=dynamic_formatter,
            level=level,
            rotation="00:00",
            compression="zip",
            enqueue=True,
            backtrace=True,
            diagnose=True,
            retention=retention,
        )

    logger.add(
        sys.stderr,
        format=dynamic_console_formatter,
        level="DEBUG" if settings.DEBUG else "INFO",
        enqueue=True,
        backtrace=True,
        diagnose=True,
        colorize=True,
    )

    if settings.ENABLE_TELEGRAM:
        logger.add(notify_on_error, level="ERROR")

    # Route every stdlib logger of the package through loguru.
    package_logger = logging.getLogger("imdbwatch")
    package_logger.handlers = [InterceptHandler()]
    package_logger.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)
    package_logger.propagate = False

    return logger  # type: ignore
