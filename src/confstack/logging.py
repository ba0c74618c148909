from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class FileRotationSettings(BaseModel):
    """Daily rotation, matching TimedRotatingFileHandler(when="midnight")."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    backup_count: int = 5


class FileLoggingSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    path: Optional[str] = None
    rotation: FileRotationSettings = Field(default_factory=FileRotationSettings)


class LoggingSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    level: str = "WARNING"
    file: FileLoggingSettings = Field(default_factory=FileLoggingSettings)


def init_logging(settings: LoggingSettings = LoggingSettings()) -> None:
    root = logging.getLogger()
    root.setLevel(settings.level.upper())
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(_FORMAT)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    if settings.file.path:
        log_path = Path(settings.file.path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.TimedRotatingFileHandler(
            log_path,
            when="midnight",
            backupCount=settings.file.rotation.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
