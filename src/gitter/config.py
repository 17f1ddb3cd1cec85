"""Runtime configuration for gitter."""

import json
import os
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, field_validator

from gitter.logger import DEFAULT_LEVEL, LOG_LEVELS

DEFAULT_TIMEOUT = 180


class GitterConfig(BaseModel):
    """Settings for locating and running the git executable."""

    git_path: Optional[str] = None
    timeout: int = DEFAULT_TIMEOUT
    log_level: str = DEFAULT_LEVEL

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(
                f"Unknown log level {value!r}, expected one of {', '.join(LOG_LEVELS)}"
            )
        return level

    @classmethod
    def load(cls, config_file: Optional[Union[str, Path]] = None) -> "GitterConfig":
        """Build a config from defaults, an optional JSON file and the environment.

        Environment variables win over file values:
        ``GITTER_GIT_PATH`` (or ``GIT_CLIENT``), ``GITTER_TIMEOUT`` and ``LOG_LEVEL``.
        """
        values = {}

        if config_file is not None:
            path = Path(config_file)
            if path.exists():
                values.update(json.loads(path.read_text(encoding="utf-8")))

        git_path = os.environ.get("GITTER_GIT_PATH") or os.environ.get("GIT_CLIENT")
        if git_path:
            values["git_path"] = git_path

        timeout = os.environ.get("GITTER_TIMEOUT")
        if timeout:
            values["timeout"] = int(timeout)

        log_level = os.environ.get("LOG_LEVEL")
        if log_level:
            values["log_level"] = log_level

        return cls(**values)
