from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

DEFAULT_DATABASE_PATH = "~/.slashdot-headlines.json"
DEFAULT_BUFFER_NAME = "*Slashdot Headlines*"
DEFAULT_HEADLINE_FORMAT = "{time} - {title}"


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    headline_database: str = DEFAULT_DATABASE_PATH
    buffer_name: str = DEFAULT_BUFFER_NAME
    browse_command: str = "webbrowser"
    headline_format: str = DEFAULT_HEADLINE_FORMAT
    time_format: str = ""

    @field_validator("headline_database", "buffer_name", "browse_command")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("headline_database, buffer_name and browse_command must not be empty")
        return normalized

    @field_validator("headline_format")
    @classmethod
    def validate_headline_format(cls, value: str) -> str:
        try:
            value.format(time="", title="", url="")
        except (KeyError, IndexError, ValueError) as exc:
            raise ValueError(
                "headline_format may only use {time}, {title} and {url} placeholders"
            ) from exc
        return value

    def database_path(self) -> Path:
        return Path(self.headline_database).expanduser()


def load_config(path: str | Path | None = None) -> AppConfig:
    if path is None:
        return AppConfig()

    payload = _read_config_payload(Path(path))
    try:
        return AppConfig.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(f"Invalid configuration: {exc}") from exc


# YAML is a superset of the JSON configs, so one loader reads both.
def _read_config_payload(path: Path) -> dict[str, Any]:
    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid configuration: {path}: {exc}") from exc
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError("Configuration root must be an object.")
    return parsed
