"""
Logger Configuration.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..levels import LogLevel


class SinkKind(str, Enum):
    CONSOLE = "console"
    FILE = "file"
    SIZE = "size"
    DATE = "date"


class LoggerSettings(BaseSettings):
    """Configuration of the logger built by ``create_logger``."""

    model_config = SettingsConfigDict(
        env_prefix="SNAKELOG_",
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    threshold: LogLevel = Field(default=LogLevel.INFO, description="Minimum level emitted (name or number)")
    name: str = Field(default="", description="Logger name, omitted when empty")
    time_format: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="strftime format of the timestamp prefix, omitted when empty",
    )
    sink: SinkKind = Field(default=SinkKind.CONSOLE, description="Sink kind (console, file, size, date)")
    directory: str = Field(default="logs", description="Directory of the size/date rotating sinks")
    file_path: str = Field(default="logs/snakelog.log", description="Path of the plain file sink")
    max_size_bytes: int = Field(default=5 * 1024 * 1024, gt=0, description="Rotation threshold of the size sink")
    max_file_count: int = Field(default=5, gt=0, description="Number of slots of the size sink")
    color: Optional[bool] = Field(default=None, description="Force console color; auto-detected when unset")

    @field_validator("threshold", mode="before")
    @classmethod
    def _parse_threshold(cls, value: Any) -> LogLevel:
        return LogLevel.parse(value)
