"""
Level-gated, framed message emission.

A ``Logger`` owns one sink. Each leveled call runs through the same steps:
threshold gate, frame prefix (color, ``[name]``, ``[timestamp]``, level tag),
placeholder rendering, color reset, hand-off to the sink. Failures along the
way are reported to the diagnostics channel and never reach the caller.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Optional

from .diagnostics import report
from .exceptions import ArgumentCountError, SnakeLogError
from .formatter import RenderContext, render
from .levels import LogLevel
from .sinks import BaseSink


class Logger:
    """Leveled logger bound to a single sink.

    Args:
        sink: Output target; owned by the logger and closed with it.
        threshold: Minimum level emitted; SILENCE suppresses everything.
        name: Emitted as ``[name]`` when non-empty.
        time_format: strftime format emitted as ``[timestamp]`` when non-empty.
        clock: Wall clock used for timestamps.
    """

    def __init__(
        self,
        sink: BaseSink,
        threshold: LogLevel | int | str = LogLevel.INFO,
        name: str = "",
        time_format: str = "",
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._sink = sink
        self._threshold = LogLevel.parse(threshold)
        self._name = name or ""
        self._time_format = time_format or ""
        self._clock = clock
        self._closed = False

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def sink(self) -> BaseSink:
        return self._sink

    @property
    def threshold(self) -> LogLevel:
        return self._threshold

    @threshold.setter
    def threshold(self, value: LogLevel | int | str) -> None:
        self._threshold = LogLevel.parse(value)

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = value or ""

    @property
    def time_format(self) -> str:
        return self._time_format

    @time_format.setter
    def time_format(self, value: str) -> None:
        self._time_format = value or ""

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level.is_message_level and self._threshold <= level

    # =========================================================================
    # Emission
    # =========================================================================

    def log(self, level: LogLevel | int | str, template: str, *args: Any) -> Optional[str]:
        """Emit ``template`` rendered with ``args`` at ``level``.

        Returns:
            The sink's write location, or None when gated out or dropped.
        """
        try:
            level = LogLevel.parse(level)
        except ValueError as exc:
            report(SnakeLogError(str(exc), code="INVALID_LEVEL", details={"level": str(level)}))
            return None
        if not level.is_message_level:
            report(SnakeLogError(f"{level.name} is not a message level", code="INVALID_LEVEL", details={"level": level.name}))
            return None
        if self._threshold > level:
            return None

        ctx = self._frame(level)
        try:
            render(template, args, ctx)
        except ArgumentCountError as exc:
            report(exc)
        return self._sink.write(ctx.finish())

    def verbose(self, template: str, *args: Any) -> Optional[str]:
        return self.log(LogLevel.VERBOSE, template, *args)

    def debug(self, template: str, *args: Any) -> Optional[str]:
        return self.log(LogLevel.DEBUG, template, *args)

    def info(self, template: str, *args: Any) -> Optional[str]:
        return self.log(LogLevel.INFO, template, *args)

    def warning(self, template: str, *args: Any) -> Optional[str]:
        return self.log(LogLevel.WARNING, template, *args)

    def error(self, template: str, *args: Any) -> Optional[str]:
        return self.log(LogLevel.ERROR, template, *args)

    def fatal(self, template: str, *args: Any) -> Optional[str]:
        return self.log(LogLevel.FATAL, template, *args)

    def _frame(self, level: LogLevel) -> RenderContext:
        prefix = []
        colored = self._sink.supports_color
        if colored:
            prefix.append(level.color)
        if self._name:
            prefix.append(f"[{self._name}]")
        if self._time_format:
            prefix.append(f"[{self._clock().strftime(self._time_format)}]")
        prefix.append(level.tag)
        return RenderContext(prefix="".join(prefix), is_colored=colored)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self) -> None:
        """Release the owned sink. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._sink.close()

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __del__(self) -> None:
        try:
            self.close()
        except Exception:
            pass
