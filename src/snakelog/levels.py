"""
Log levels, short tags and console colors.
"""

from __future__ import annotations

from enum import IntEnum

# =============================================================================
# ANSI Color Codes (console sinks only)
# =============================================================================

RESET = "\033[0m"


class LogLevel(IntEnum):
    """Totally ordered severity; ALL and SILENCE are thresholds only."""

    ALL = 0
    VERBOSE = 1
    DEBUG = 2
    INFO = 3
    WARNING = 4
    ERROR = 5
    FATAL = 6
    SILENCE = 7

    @classmethod
    def parse(cls, value: "LogLevel | int | str") -> "LogLevel":
        """Accept a member, its integer value or its name (case-insensitive)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls(value)
        text = str(value).strip()
        if text.isdigit():
            return cls(int(text))
        try:
            return cls[text.upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {value!r}") from None

    @property
    def is_message_level(self) -> bool:
        return self in _TAGS

    @property
    def tag(self) -> str:
        return _TAGS[self]

    @property
    def color(self) -> str:
        return _COLORS[self]


_TAGS = {
    LogLevel.VERBOSE: "[V]",
    LogLevel.DEBUG: "[D]",
    LogLevel.INFO: "[I]",
    LogLevel.WARNING: "[W]",
    LogLevel.ERROR: "[E]",
    LogLevel.FATAL: "[F]",
}

_COLORS = {
    LogLevel.VERBOSE: "\033[90m",  # Gray
    LogLevel.DEBUG: "\033[36m",  # Cyan
    LogLevel.INFO: "\033[37m",  # White
    LogLevel.WARNING: "\033[35m",  # Magenta
    LogLevel.ERROR: "\033[33m",  # Yellow
    LogLevel.FATAL: "\033[31m",  # Red
}
