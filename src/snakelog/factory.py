"""
Ready-made loggers, one per sink kind, plus a settings-driven builder.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from .config import LoggerSettings, SinkKind, settings
from .levels import LogLevel
from .logger import Logger
from .sinks import (
    DEFAULT_MAX_FILE_COUNT,
    DEFAULT_MAX_SIZE_BYTES,
    BaseSink,
    ConsoleSink,
    DateRotatingFileSink,
    FileSink,
    SizeRotatingFileSink,
)


def ConsoleLog(
    threshold: LogLevel | int | str = LogLevel.INFO,
    name: str = "",
    time_format: str = "",
    *,
    stream: Any = None,
    color: Optional[bool] = None,
) -> Logger:
    """Logger writing to stdout (or ``stream``), colored on a tty."""
    return Logger(ConsoleSink(stream, color=color), threshold, name, time_format)


def FileLog(
    path: str | Path,
    threshold: LogLevel | int | str = LogLevel.INFO,
    name: str = "",
    time_format: str = "",
) -> Logger:
    return Logger(FileSink(path), threshold, name, time_format)


def LoopFileLog(
    directory: str | Path,
    threshold: LogLevel | int | str = LogLevel.INFO,
    name: str = "",
    time_format: str = "",
    *,
    max_size_bytes: int = DEFAULT_MAX_SIZE_BYTES,
    max_file_count: int = DEFAULT_MAX_FILE_COUNT,
) -> Logger:
    """Logger over a ring of ``max_file_count`` size-bounded files."""
    sink = SizeRotatingFileSink(directory, max_size_bytes=max_size_bytes, max_file_count=max_file_count)
    return Logger(sink, threshold, name, time_format)


def DailyLog(
    directory: str | Path,
    threshold: LogLevel | int | str = LogLevel.INFO,
    name: str = "",
    time_format: str = "",
) -> Logger:
    """Logger writing one file per calendar date."""
    return Logger(DateRotatingFileSink(directory), threshold, name, time_format)


def _build_sink(cfg: LoggerSettings) -> BaseSink:
    if cfg.sink == SinkKind.FILE:
        return FileSink(cfg.file_path)
    if cfg.sink == SinkKind.SIZE:
        return SizeRotatingFileSink(cfg.directory, max_size_bytes=cfg.max_size_bytes, max_file_count=cfg.max_file_count)
    if cfg.sink == SinkKind.DATE:
        return DateRotatingFileSink(cfg.directory)
    return ConsoleSink(color=cfg.color)


def create_logger(cfg: Optional[LoggerSettings] = None) -> Logger:
    """
    Build a logger from configuration.

    Args:
        cfg: Explicit settings; defaults to ``settings.logger`` (environment driven)
    """
    cfg = cfg or settings.logger
    return Logger(_build_sink(cfg), cfg.threshold, cfg.name, cfg.time_format)
