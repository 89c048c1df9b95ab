"""
Log sink abstractions and concrete implementations.

A sink receives fully composed text and decides where it physically lands.
Each sink exclusively owns its file handle; a single Logger per file or
control-file set is a caller obligation; sinks do no locking.
"""

from __future__ import annotations

import os
import sys
from abc import ABC, abstractmethod
from datetime import date, datetime
from pathlib import Path
from typing import IO, Any, Callable, Optional

from .diagnostics import report
from .exceptions import ControlFileError, SinkOpenError, SinkWriteError

DEFAULT_MAX_SIZE_BYTES = 5 * 1024 * 1024
DEFAULT_MAX_FILE_COUNT = 5
DEFAULT_DATE_FORMAT = "%Y-%m-%d"


def _open_file(path: Path, mode: str) -> IO[bytes]:
    try:
        return open(path, mode)
    except OSError as exc:
        raise SinkOpenError(path=str(path), reason=exc.strerror or str(exc)) from exc


def _ensure_directory(directory: Path) -> None:
    """Create ``directory`` if missing; failure shows up later as open errors."""
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        report(SinkOpenError(path=str(directory), reason=exc.strerror or str(exc)))


def _write_bytes(handle: IO[bytes], text: str, target: Path) -> bool:
    try:
        handle.write(text.encode("utf-8", errors="backslashreplace"))
        handle.flush()
    except OSError as exc:
        report(SinkWriteError(target=str(target), reason=exc.strerror or str(exc)))
        return False
    return True


# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks."""

    supports_color: bool = False

    @abstractmethod
    def write(self, text: str) -> Optional[str]:
        """Write composed text; return where it landed, or None if dropped."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the sink and release resources."""
        ...


class ConsoleSink(BaseSink):
    """Pass-through sink for a text stream.

    Args:
        stream: Output stream (default: sys.stdout, resolved at construction).
            The stream is borrowed and never closed.
        color: Force ANSI color on/off; by default enabled iff the stream is a tty.
    """

    def __init__(self, stream: Any = None, color: Optional[bool] = None):
        self._stream = stream or sys.stdout
        if color is None:
            color = bool(getattr(self._stream, "isatty", lambda: False)())
        self.supports_color = color

    @property
    def stream(self) -> Any:
        return self._stream

    def write(self, text: str) -> Optional[str]:
        name = str(getattr(self._stream, "name", "<stream>"))
        try:
            self._stream.write(text)
            self._stream.flush()
        except (OSError, ValueError) as exc:
            report(SinkWriteError(target=name, reason=str(exc)))
            return None
        return name

    def close(self) -> None:
        try:
            self._stream.flush()
        except (OSError, ValueError):
            pass


class FileSink(BaseSink):
    """Single append-only file, opened lazily on first write."""

    def __init__(self, path: str | Path):
        self._path = Path(path)
        _ensure_directory(self._path.parent)
        self._file: Optional[IO[bytes]] = None

    @property
    def path(self) -> Path:
        return self._path

    def write(self, text: str) -> Optional[str]:
        if self._file is None:
            try:
                self._file = _open_file(self._path, "ab")
            except SinkOpenError as exc:
                report(exc)
                return None
        if not _write_bytes(self._file, text, self._path):
            return None
        return str(self._path)

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None


class SizeRotatingFileSink(BaseSink):
    """Ring of numbered files ``0`` .. ``max_file_count - 1`` in ``directory``.

    Before each write the current file's size is checked; once it has reached
    ``max_size_bytes`` the sink moves to the next slot and truncates it. The
    check only runs between writes, so a single write may overshoot the limit.
    """

    def __init__(
        self,
        directory: str | Path,
        max_size_bytes: int = DEFAULT_MAX_SIZE_BYTES,
        max_file_count: int = DEFAULT_MAX_FILE_COUNT,
    ):
        if max_size_bytes <= 0:
            raise ValueError(f"max_size_bytes must be positive, got {max_size_bytes}")
        if max_file_count <= 0:
            raise ValueError(f"max_file_count must be positive, got {max_file_count}")

        self._directory = Path(directory)
        self._max_size_bytes = max_size_bytes
        self._max_file_count = max_file_count
        self._current_index = 0
        self._file: Optional[IO[bytes]] = None
        self._truncate_on_open = False

        _ensure_directory(self._directory)
        self._open_current()

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def max_size_bytes(self) -> int:
        return self._max_size_bytes

    @property
    def max_file_count(self) -> int:
        return self._max_file_count

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current_path(self) -> Path:
        return self._directory / str(self._current_index)

    def write(self, text: str) -> Optional[str]:
        if self._file is None and not self._open_current():
            return None
        if self._current_size() >= self._max_size_bytes:
            self._rotate()
            if self._file is None:
                return None

        path = self.current_path
        if not _write_bytes(self._file, text, path):
            return None
        return str(path)

    def _current_size(self) -> int:
        return os.fstat(self._file.fileno()).st_size

    def _open_current(self) -> bool:
        """Open the current slot; a slot entered by rotation stays pending truncation until opened."""
        mode = "wb" if self._truncate_on_open else "ab"
        try:
            self._file = _open_file(self.current_path, mode)
        except SinkOpenError as exc:
            report(exc)
            return False
        self._truncate_on_open = False
        return True

    def _rotate(self) -> None:
        self.close()
        self._current_index = (self._current_index + 1) % self._max_file_count
        self._truncate_on_open = True
        self._open_current()

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None


class DateRotatingFileSink(BaseSink):
    """One file per calendar date, with restart-safe rotation state.

    Control files in ``directory``:

    - ``.new``: exactly the most recent date written to (no newline).
    - ``.index``: every date that ever produced a file, one per line, in order
      of first use.

    A transition appends to ``.index`` first and then atomically replaces
    ``.new``. If a crash lands between the two, the next start sees ``.new``
    behind ``.index`` and repairs ``.new`` without a second ``.index`` entry.
    """

    CONTROL_FILE = ".new"
    INDEX_FILE = ".index"

    def __init__(
        self,
        directory: str | Path,
        date_format: str = DEFAULT_DATE_FORMAT,
        clock: Callable[[], date] = datetime.now,
    ):
        self._directory = Path(directory)
        self._date_format = date_format
        self._clock = clock
        self._file: Optional[IO[bytes]] = None

        _ensure_directory(self._directory)
        self._last_date = self._read_control_file()

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def last_date(self) -> Optional[str]:
        return self._last_date

    @property
    def control_path(self) -> Path:
        return self._directory / self.CONTROL_FILE

    @property
    def index_path(self) -> Path:
        return self._directory / self.INDEX_FILE

    def write(self, text: str) -> Optional[str]:
        today = self._clock().strftime(self._date_format)
        path = self._directory / today

        if self._file is None or self._last_date != today:
            self.close()
            if self._last_date != today:
                self._persist_transition(today)
                self._last_date = today
            try:
                self._file = _open_file(path, "ab")
            except SinkOpenError as exc:
                report(exc)
                return None

        if not _write_bytes(self._file, text, path):
            return None
        return str(path)

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    # =========================================================================
    # Control files
    # =========================================================================

    def _read_control_file(self) -> Optional[str]:
        try:
            content = self.control_path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as exc:
            report(ControlFileError(path=str(self.control_path), operation="read", reason=str(exc)))
            return None
        return content or None

    def _last_index_entry(self) -> Optional[str]:
        try:
            lines = self.index_path.read_text(encoding="utf-8").splitlines()
        except FileNotFoundError:
            return None
        except ValueError as exc:
            report(ControlFileError(path=str(self.index_path), operation="read", reason=str(exc)))
            return None
        for line in reversed(lines):
            if line.strip():
                return line.strip()
        return None

    def _persist_transition(self, today: str) -> None:
        try:
            if self._last_index_entry() != today:
                with open(self.index_path, "a", encoding="utf-8") as f:
                    f.write(today + "\n")
                    f.flush()
                    os.fsync(f.fileno())
            self._replace_control_file(today)
        except OSError as exc:
            report(ControlFileError(path=str(self._directory), operation="persist", reason=str(exc)))

    def _replace_control_file(self, today: str) -> None:
        tmp_path = self._directory / (self.CONTROL_FILE + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(today)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, self.control_path)
