from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field
from pydantic.functional_validators import field_validator
from pydantic_settings import BaseSettings
from pydantic_settings.main import SettingsConfigDict

from todokeeper.logging_utils import parse_level
from todokeeper.storage import default_todo_file


class Settings(BaseSettings):
    """Runtime configuration, read from the environment and `.env`"""

    TODO_FILE: Path = Field(default_factory=default_todo_file)

    STORAGE: Literal["file", "memory"] = "file"

    LOG_LEVEL: str = "warning"

    SAVE_ATTEMPTS: int = Field(default=3, ge=1)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("LOG_LEVEL")
    @classmethod
    def _known_level(cls, value: str) -> str:
        parse_level(value)
        return value.lower()

    @field_validator("TODO_FILE")
    @classmethod
    def _expand_home(cls, value: Path) -> Path:
        return value.expanduser()

    @property
    def log_level(self) -> int:
        return parse_level(self.LOG_LEVEL)

    @classmethod
    def from_yaml(cls, config_path: Path, **overrides: Any) -> Settings:
        """
        Load settings from a YAML file.

        Keys may be written in any case (`todo_file` or `TODO_FILE`). Values in the file win over the
        environment, and `overrides` win over both.
        """
        assert config_path.exists(), f"Config file does not exist at {config_path}."

        with config_path.open() as cf:
            yaml_spec = yaml.safe_load(cf) or {}
        if not isinstance(yaml_spec, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping.")
        return cls(**{**{str(k).upper(): v for k, v in yaml_spec.items()}, **overrides})
