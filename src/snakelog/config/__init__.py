"""
snakelog Configuration Module.

Nested Settings Pattern: each concern is an independent settings class with
its own environment variable prefix.

Usage:
    from snakelog.config import settings

    settings.logger.threshold  # LogLevel.INFO
    settings.logger.sink  # SinkKind.CONSOLE
    settings.diagnostics.format  # DiagnosticsFormat.CONSOLE

Values are read from the environment and from ``.env`` / ``.env.local``
(later files override earlier ones).
"""

from functools import cached_property

from pydantic_settings import BaseSettings, SettingsConfigDict

from .diagnostics import DiagnosticsFormat, DiagnosticsLevel, DiagnosticsSettings
from .logger import LoggerSettings, SinkKind


class Settings(BaseSettings):
    """Composite settings aggregating the logger and diagnostics domains."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @cached_property
    def logger(self) -> LoggerSettings:
        return LoggerSettings()

    @cached_property
    def diagnostics(self) -> DiagnosticsSettings:
        return DiagnosticsSettings()


settings = Settings()

__all__ = [
    "DiagnosticsFormat",
    "DiagnosticsLevel",
    "DiagnosticsSettings",
    "LoggerSettings",
    "Settings",
    "SinkKind",
    "settings",
]
