"""
Unified exception hierarchy for snakelog.

Errors are split along two axes: message rendering (argument-count
mismatches) and sink I/O (open, write and control-file failures). None of
them escapes a Logger call; they are raised internally and reported to the
diagnostics channel at the Logger/Sink boundary.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class SnakeLogError(Exception):
    """Root of every snakelog exception.

    Carries a stable machine-readable ``code`` and a ``details`` mapping that
    the diagnostics channel renders as key/value pairs.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


# ================================
# Rendering errors
# ================================


class ArgumentCountError(SnakeLogError):
    """Placeholder count and argument count disagree.

    The rendered text up to the point of failure is still available in the
    render context that was being filled.
    """

    TOO_MANY = "TOO_MANY_ARGUMENTS"
    TOO_FEW = "TOO_FEW_ARGUMENTS"

    @classmethod
    def too_many(cls, *, template: str, surplus: Any, surplus_count: int) -> "ArgumentCountError":
        message = f"Extra argument provided, first surplus value: {surplus}"
        details = {
            "template": template,
            "surplus": str(surplus),
            "surplus_count": surplus_count,
        }
        return cls(message, code=cls.TOO_MANY, details=details)

    @classmethod
    def too_few(cls, *, template: str, given: int) -> "ArgumentCountError":
        message = f"Too few arguments: expected more than {given}, message truncated"
        details = {
            "template": template,
            "given": given,
            "expected_at_least": given + 1,
        }
        return cls(message, code=cls.TOO_FEW, details=details)


class UnprintableArgumentError(SnakeLogError):
    """An argument's ``__str__`` raised; a marker is rendered in its place."""

    def __init__(self, *, type_name: str, reason: str) -> None:
        message = f"Argument of type '{type_name}' could not be converted to text: {reason}"
        details = {"type": type_name, "reason": reason}
        super().__init__(message, code="UNPRINTABLE_ARGUMENT", details=details)


# ================================
# Sink errors
# ================================


class SinkError(SnakeLogError):
    """Base class for failures of a sink's underlying target."""

    pass


class SinkOpenError(SinkError):
    """The sink could not open its target file; the write is dropped."""

    def __init__(self, *, path: str, reason: str) -> None:
        message = f"Failed to open log file '{path}': {reason}"
        details = {"path": path, "reason": reason}
        super().__init__(message, code="SINK_OPEN_FAILED", details=details)


class SinkWriteError(SinkError):
    """Writing to an already opened target failed; the write is dropped."""

    def __init__(self, *, target: str, reason: str) -> None:
        message = f"Failed to write to '{target}': {reason}"
        details = {"target": target, "reason": reason}
        super().__init__(message, code="SINK_WRITE_FAILED", details=details)


class ControlFileError(SinkError):
    """Persisting date-rotation state (``.new`` / ``.index``) failed."""

    def __init__(self, *, path: str, operation: str, reason: str) -> None:
        message = f"Control file {operation} failed for '{path}': {reason}"
        details = {"path": path, "operation": operation, "reason": reason}
        super().__init__(message, code="CONTROL_FILE_FAILED", details=details)
