"""Logging configuration model."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from prguard.core.config.settings import LoggingConfig


class LogConfig(BaseModel):
    """Sinks and level applied by :func:`configure_logging`."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    level: str = "INFO"
    console_output: bool = True
    console_stream: Any = None
    file_output: bool = False
    file_path: str | None = None
    extra: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_settings(cls, settings: LoggingConfig, **overrides: Any) -> LogConfig:
        """Build from the ``[logging]`` section; a configured file enables the file sink."""

        values: dict[str, Any] = {
            "level": settings.level,
            "file_output": bool(settings.file),
            "file_path": settings.file,
        }
        values.update(overrides)
        return cls(**values)


__all__ = ["LogConfig"]
