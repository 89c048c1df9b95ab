"""
Diagnostics channel for the logging core itself.

Every recoverable failure (argument-count mismatch, unopenable file, torn
control-file update) is reported here instead of being raised into the host.
The channel is a private structlog bound logger: it never calls
``structlog.configure`` and so never disturbs a host application's own
structlog setup.

Library: structlog for the processor pipeline, orjson for the JSON renderer.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Literal

import orjson
import structlog
from structlog.typing import EventDict, WrappedLogger

from .exceptions import SnakeLogError

DiagnosticsFormat = Literal["console", "json"]

DIAGNOSTICS_LOGGER_NAME = "snakelog"

# =============================================================================
# Global State
# =============================================================================

_diagnostics: Any = None


class _StderrProxy:
    """Resolve ``sys.stderr`` at write time so redirection keeps working."""

    def write(self, s: str) -> None:
        sys.stderr.write(s)

    def flush(self) -> None:
        sys.stderr.flush()

    def isatty(self) -> bool:
        return bool(getattr(sys.stderr, "isatty", lambda: False)())


def orjson_dumps(v: Any, *, default: Any = None) -> str:
    """Fast JSON serialization using orjson."""
    return orjson.dumps(v, default=default or str, option=orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC).decode()


# =============================================================================
# Structlog Processors
# =============================================================================


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add ISO 8601 timestamp to diagnostic event."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def add_logger_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("logger", DIAGNOSTICS_LOGGER_NAME)
    return event_dict


def expand_snakelog_error(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Flatten a ``SnakeLogError`` passed as ``error=`` into code/details keys."""
    error = event_dict.pop("error", None)
    if isinstance(error, SnakeLogError):
        event_dict["code"] = error.code
        for key, value in error.details.items():
            event_dict.setdefault(key, value)
    elif error is not None:
        event_dict["error"] = repr(error)
    return event_dict


# =============================================================================
# Renderers
# =============================================================================


class DiagnosticsFormatter:
    """Human-readable rendering: ``timestamp | LEVEL | logger | event key=value``."""

    _RESET = "\x1b[0m"
    _LEVEL_COLORS = {
        "DEBUG": "\x1b[36m",
        "INFO": "\x1b[32m",
        "WARNING": "\x1b[33m",
        "ERROR": "\x1b[31m",
        "CRITICAL": "\x1b[1;31m",
    }
    _DIM = "\x1b[2m"

    EXCLUDED_KEYS = {"level", "event", "logger", "timestamp"}
    TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
    SEPARATOR = " | "

    @classmethod
    def _format_timestamp(cls, raw_timestamp: str | None) -> str:
        if raw_timestamp:
            try:
                dt = datetime.fromisoformat(raw_timestamp.replace("Z", "+00:00"))
                return dt.astimezone().strftime(cls.TIMESTAMP_FORMAT)
            except (ValueError, TypeError):
                pass
        return datetime.now().strftime(cls.TIMESTAMP_FORMAT)

    @classmethod
    def format(cls, event_dict: EventDict, *, use_color: bool = False) -> str:
        level_upper = str(event_dict.get("level", "info")).upper()
        message = str(event_dict.get("event", ""))

        extras = []
        for k, v in event_dict.items():
            if k in cls.EXCLUDED_KEYS:
                continue
            value_text = str(v)
            if use_color:
                value_text = f"{cls._DIM}{value_text}{cls._RESET}"
            extras.append(f"{k}={value_text}")
        if extras:
            message = f"{message} " + " ".join(extras)

        level_text = level_upper
        color = cls._LEVEL_COLORS.get(level_upper)
        if use_color and color:
            level_text = f"{color}{level_upper}{cls._RESET}"

        return cls.SEPARATOR.join(
            [
                cls._format_timestamp(event_dict.get("timestamp")),
                level_text,
                str(event_dict.get("logger", DIAGNOSTICS_LOGGER_NAME)),
                message,
            ]
        )


def _console_renderer(stream: Any):
    use_color = bool(getattr(stream, "isatty", lambda: False)())

    def render(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
        return DiagnosticsFormatter.format(event_dict, use_color=use_color)

    return render


def _json_renderer(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
    return orjson_dumps(event_dict)


# =============================================================================
# Configuration Logic
# =============================================================================


def configure_diagnostics(
    *,
    level: str = "WARNING",
    fmt: DiagnosticsFormat = "console",
    stream: Any = None,
) -> None:
    """
    (Re)build the diagnostics channel.

    Args:
        level: Minimum level reported (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        fmt: Rendering, "console" or "json"
        stream: Output stream; defaults to whatever ``sys.stderr`` is at write time
    """
    global _diagnostics

    target = stream if stream is not None else _StderrProxy()
    renderer = _json_renderer if str(fmt).lower() == "json" else _console_renderer(target)

    processors = [
        structlog.processors.add_log_level,
        add_timestamp,
        add_logger_name,
        expand_snakelog_error,
        structlog.processors.format_exc_info,
        renderer,
    ]

    _diagnostics = structlog.wrap_logger(
        structlog.PrintLogger(file=target),
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, str(level).upper(), logging.WARNING)),
        context_class=dict,
    )


def get_diagnostics() -> Any:
    """Return the diagnostics logger, configuring it from settings on first use."""
    if _diagnostics is None:
        from .config import settings

        diag = settings.diagnostics
        configure_diagnostics(level=diag.level.value, fmt=diag.format.value)
    return _diagnostics


def report(error: SnakeLogError, **context: Any) -> None:
    """Report a recoverable failure. Never raises."""
    try:
        get_diagnostics().warning(str(error), error=error, **context)
    except Exception:
        pass
