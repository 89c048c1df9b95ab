"""
snakelog: a small embeddable logging core.

Leveled messages with ``{}`` placeholders are framed (``[name]``,
``[timestamp]``, level tag, console color) and written to one sink:

- console: stdout pass-through, ANSI colors on a tty
- file: a single append-only file
- size rotating: a ring of numbered files bounded by size
- date rotating: one file per calendar date, restart-safe via ``.new``/``.index``

Logging never raises into the caller; failures go to the diagnostics channel
(structlog, stderr). Sinks do no locking: use one Logger per file set.

Design Pattern: Strategy Pattern for sink abstraction.
Library: structlog + orjson for diagnostics, pydantic-settings for configuration.
"""

from .diagnostics import configure_diagnostics, get_diagnostics
from .exceptions import (
    ArgumentCountError,
    ControlFileError,
    SinkError,
    SinkOpenError,
    SinkWriteError,
    SnakeLogError,
    UnprintableArgumentError,
)
from .factory import ConsoleLog, DailyLog, FileLog, LoopFileLog, create_logger
from .formatter import RenderContext, format_message, render
from .levels import LogLevel
from .logger import Logger
from .sinks import BaseSink, ConsoleSink, DateRotatingFileSink, FileSink, SizeRotatingFileSink

__all__ = [
    "ArgumentCountError",
    "BaseSink",
    "ConsoleLog",
    "ConsoleSink",
    "ControlFileError",
    "DailyLog",
    "DateRotatingFileSink",
    "FileLog",
    "FileSink",
    "LogLevel",
    "Logger",
    "LoopFileLog",
    "RenderContext",
    "SinkError",
    "SinkOpenError",
    "SinkWriteError",
    "SizeRotatingFileSink",
    "SnakeLogError",
    "UnprintableArgumentError",
    "configure_diagnostics",
    "create_logger",
    "format_message",
    "get_diagnostics",
    "render",
]
