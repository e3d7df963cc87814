"""Logger construction from the log configuration."""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

LOGGER_NAME = "monsterinc"
TRACE = 5
_DISABLED = logging.CRITICAL + 10
_DEFAULT_MAX_SIZE_MB = 100
_KEEP_ALL_BACKUPS = 9999

logging.addLevelName(TRACE, "TRACE")

_LEVELS = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
    "panic": logging.CRITICAL,
    "disabled": _DISABLED,
}

# (threshold, json name, console abbreviation, ANSI colour)
_LEVEL_STYLES = [
    (logging.CRITICAL, "fatal", "FTL", "1;31"),
    (logging.ERROR, "error", "ERR", "1;31"),
    (logging.WARNING, "warn", "WRN", "31"),
    (logging.INFO, "info", "INF", "32"),
    (logging.DEBUG, "debug", "DBG", "33"),
    (TRACE, "trace", "TRC", "35"),
]

_STANDARD_ATTRS = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {
    "message",
    "asctime",
    "taskName",
}


@dataclass
class LogConfig:
    """Settings for the application logger."""

    log_level: str = "info"
    log_format: str = "console"
    log_file: str = ""
    max_log_size_mb: int = 0
    max_log_backups: int = 0


def _style(levelno: int) -> tuple[str, str, str]:
    for threshold, name, abbrev, colour in _LEVEL_STYLES:
        if levelno >= threshold:
            return name, abbrev, colour
    return "trace", "TRC", "35"


def _timestamp(record: logging.LogRecord) -> str:
    return datetime.fromtimestamp(record.created).astimezone().isoformat(timespec="seconds")


def _record_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in record.__dict__.items() if k not in _STANDARD_ATTRS}


class _JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {"level": _style(record.levelno)[0]}
        payload.update(_record_fields(record))
        if record.exc_info:
            payload["error"] = self.formatException(record.exc_info)
        payload["time"] = _timestamp(record)
        payload["message"] = record.getMessage()
        return json.dumps(payload, default=str)


class _ConsoleFormatter(logging.Formatter):
    def __init__(self, color: bool) -> None:
        super().__init__()
        self._color = color

    def _paint(self, text: str, code: str) -> str:
        return f"\x1b[{code}m{text}\x1b[0m" if self._color else text

    def format(self, record: logging.LogRecord) -> str:
        _, abbrev, colour = _style(record.levelno)
        parts = [
            self._paint(_timestamp(record), "90"),
            self._paint(abbrev, colour),
            record.getMessage(),
        ]
        fields = _record_fields(record)
        if record.exc_info:
            fields["error"] = self.formatException(record.exc_info)
        parts.extend(f"{self._paint(key + '=', '36')}{value}" for key, value in fields.items())
        return " ".join(parts)


def _prelim_warning(message: str, **fields: Any) -> None:
    payload = {"level": "warn", **fields}
    payload["time"] = datetime.now(timezone.utc).astimezone().isoformat(timespec="seconds")
    payload["message"] = message
    print(json.dumps(payload), file=sys.stderr)


def _parse_level(name: str) -> int:
    level = _LEVELS.get(name.lower())
    if level is None:
        _prelim_warning(
            "Invalid log level, defaulting to 'info'",
            provided_level=name,
            error=f"Unknown Level String: '{name}', defaulting to NoLevel",
        )
        return logging.INFO
    return level


def _console_formatter(log_format: str) -> logging.Formatter:
    fmt = log_format.lower()
    if fmt == "console":
        return _ConsoleFormatter(color=True)
    if fmt == "json":
        return _JSONFormatter()
    if fmt == "text":
        return _ConsoleFormatter(color=False)
    _prelim_warning("Unknown log format, defaulting to 'console'", provided_format=log_format)
    return _ConsoleFormatter(color=True)


def _file_handler(config: LogConfig, log_format: str) -> logging.Handler:
    path = Path(config.log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    size_mb = config.max_log_size_mb if config.max_log_size_mb > 0 else _DEFAULT_MAX_SIZE_MB
    backups = config.max_log_backups if config.max_log_backups > 0 else _KEEP_ALL_BACKUPS
    handler = RotatingFileHandler(
        path, maxBytes=size_mb * 1024 * 1024, backupCount=backups, encoding="utf-8"
    )
    if log_format.lower() in ("console", "text"):
        handler.setFormatter(_ConsoleFormatter(color=False))
    else:
        handler.setFormatter(_JSONFormatter())
    return handler


def create_logger(config: LogConfig) -> logging.Logger:
    """Configure and return the application logger.

    Output always goes to stderr in the chosen format; when a log file is set,
    it is also written there with size-based rotation.
    """
    level = _parse_level(config.log_level)
    console_formatter = _console_formatter(config.log_format)
    known = config.log_format.lower() in ("console", "json", "text")
    log_format = config.log_format if known else "console"

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(console_formatter)
    handlers: list[logging.Handler] = [console]
    if config.log_file:
        handlers.append(_file_handler(config, log_format))

    logger = logging.getLogger(LOGGER_NAME)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger