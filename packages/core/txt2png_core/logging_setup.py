"""JSON-lines render log and crash hook setup."""

from __future__ import annotations

import faulthandler
import json
import logging
import logging.handlers
import sys
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .config import config_path

_LOGGER_NAME = "txt2png"
_LOG_FILE = "txt2png.log"
_FAULT_FILE = "fault.log"

# Extra record attributes copied into the JSON payload when present.
_EXTRA_FIELDS = ("event", "crash_id", "keys", "line_count", "width", "height", "bytes")


def log_dir() -> Path:
    path = config_path().parent / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


class JsonFormatter(logging.Formatter):
    """One JSON object per record, including render and config extras."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts_utc": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                payload[name] = getattr(record, name)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def configure_logging(
    keep_files: int = 7,
    console: bool = True,
    level: int = logging.INFO,
    directory: Path | None = None,
) -> logging.Logger:
    """Attach the rotating JSON file handler to the ``txt2png`` logger once.

    Formatter, layout, session and config loggers are children of it, so
    their DEBUG geometry lines and config events land in the same file.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(level)
    target = directory or log_dir()
    target.mkdir(parents=True, exist_ok=True)
    file_handler = logging.handlers.TimedRotatingFileHandler(
        filename=str(target / _LOG_FILE),
        when="midnight",
        backupCount=max(2, keep_files),
        encoding="utf-8",
    )
    file_handler.setFormatter(JsonFormatter())
    logger.addHandler(file_handler)

    if console:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(logging.Formatter("%(levelname)s %(name)s %(message)s"))
        logger.addHandler(stream_handler)

    logger.info("logging to %s", target / _LOG_FILE, extra={"event": "logging_configured"})
    return logger


def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)


def _crash_reporter(logger: logging.Logger, event: str):
    def report(exc_type, exc_value, exc_tb) -> str:
        crash_id = str(uuid.uuid4())
        logger.critical(
            "%s crash_id=%s",
            event.replace("_", " "),
            crash_id,
            exc_info=(exc_type, exc_value, exc_tb),
            extra={"event": event, "crash_id": crash_id},
        )
        return crash_id

    return report


def _install_fault_handler(logger: logging.Logger, directory: Path | None) -> None:
    fault_path = (directory or log_dir()) / _FAULT_FILE
    fh = fault_path.open("a", encoding="utf-8")
    faulthandler.enable(file=fh, all_threads=True)
    logger.info("fault handler writing to %s", fault_path, extra={"event": "fault_handler_enabled"})


def install_crash_hooks(directory: Path | None = None) -> None:
    """Diagnostics hook: uncaught errors are logged with a crash id, native faults go to fault.log."""
    logger = get_logger()
    report_uncaught = _crash_reporter(logger, "uncaught_exception")
    report_thread = _crash_reporter(logger, "thread_exception")

    def _log_uncaught(exc_type, exc_value, exc_tb) -> None:
        report_uncaught(exc_type, exc_value, exc_tb)

    def _thread_hook(args: threading.ExceptHookArgs) -> None:
        report_thread(args.exc_type, args.exc_value, args.exc_traceback)

    sys.excepthook = _log_uncaught
    threading.excepthook = _thread_hook
    _install_fault_handler(logger, directory)
