"""Runtime settings and logging setup.

Settings come from the environment, optionally seeded from a ``.env`` file:

    MOVIE_CONTESTS_STATE_PATH   JSON file the registry persists to (unset = memory only)
    MOVIE_CONTESTS_LOG_LEVEL    Standard logging level name (default INFO)
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

ENV_PREFIX = "MOVIE_CONTESTS_"

_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseModel):
    state_path: Path | None = None
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LEVELS)}")
        return level


def load_settings(env_file: Path | None = None) -> Settings:
    """Build Settings from the environment.

    Variables already set in the environment take precedence over the
    ``.env`` file.
    """
    load_dotenv(env_file, override=False)
    values = {}
    for field_name in Settings.model_fields:
        raw = os.environ.get(ENV_PREFIX + field_name.upper())
        if raw:
            values[field_name] = raw
    return Settings(**values)


def setup_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
