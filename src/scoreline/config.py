"""Configuration loader for scoreline."""

from __future__ import annotations

import json
import tomllib
from typing import TYPE_CHECKING, Any

import tomlkit
from pydantic import BaseModel, Field, ValidationError

from scoreline.atomic import atomic_write
from scoreline.core.models import Durations
from scoreline.errors import ConfigError
from scoreline.limits import (
    DEFAULT_FADE_MS,
    DEFAULT_MAIN_LANGUAGE_MS,
    DEFAULT_SUB_LANGUAGE_MS,
    DEFAULT_UPDATE_INTERVAL_MS,
    FETCH_TIMEOUT,
)
from scoreline.paths import get_config_path

if TYPE_CHECKING:
    from pathlib import Path


class GeneralConfig(BaseModel):
    """Polling settings."""

    update_interval: int = Field(
        default=DEFAULT_UPDATE_INTERVAL_MS, gt=0, description="Poll interval in milliseconds"
    )
    data_url: str = Field(
        default="streamcontrol.json",
        description="StreamControl JSON location (http(s) URL or file path)",
    )
    request_timeout: float = Field(default=FETCH_TIMEOUT, gt=0, description="Fetch timeout in seconds")


class DurationConfig(BaseModel):
    """Default animation timings in milliseconds; snapshots may override them."""

    main_language: int = Field(default=DEFAULT_MAIN_LANGUAGE_MS, gt=0)
    sub_language: int = Field(default=DEFAULT_SUB_LANGUAGE_MS, gt=0)
    fade: int = Field(default=DEFAULT_FADE_MS, gt=0)

    def to_durations(self) -> Durations:
        return Durations(
            main_language=self.main_language,
            sub_language=self.sub_language,
            fade=self.fade,
        )


class ScorelineConfig(BaseModel):
    """Root configuration model."""

    general: GeneralConfig = Field(default_factory=GeneralConfig)
    durations: DurationConfig = Field(default_factory=DurationConfig)

    @classmethod
    def load(cls, config_path: Path | None = None) -> ScorelineConfig:
        """Load a TOML config, or a legacy ``appsettings.json``; defaults if missing."""
        if config_path is None:
            config_path = get_config_path()
        if not config_path.exists():
            return cls()

        try:
            if config_path.suffix.lower() == ".json":
                data = json.loads(config_path.read_text(encoding="utf-8"))
                return cls.from_appsettings(data)
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
            return cls.model_validate(data)
        except (OSError, json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
            raise ConfigError(f"Cannot read {config_path}: {exc}") from exc
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration in {config_path}:\n{exc}") from exc

    @classmethod
    def from_appsettings(cls, data: Any) -> ScorelineConfig:
        """Build a config from the StreamControl overlay's appsettings.json shape."""
        if not isinstance(data, dict):
            raise ConfigError("appsettings.json must contain a JSON object")
        general: dict[str, Any] = {}
        if "updateInterval" in data:
            general["update_interval"] = data["updateInterval"]
        if "streamControlDataUrl" in data:
            general["data_url"] = data["streamControlDataUrl"]

        durations: dict[str, Any] = {}
        raw_durations = data.get("duration") or {}
        if not isinstance(raw_durations, dict):
            raise ConfigError('appsettings.json "duration" must be a JSON object')
        for source_key, target_key in (
            ("mainLanguage", "main_language"),
            ("subLanguage", "sub_language"),
            ("fade", "fade"),
        ):
            if source_key in raw_durations:
                durations[target_key] = raw_durations[source_key]

        return cls.model_validate({"general": general, "durations": durations})

    def save(self, path: Path) -> None:
        """Serialize the config to a TOML file (created if missing)."""
        doc = tomlkit.document()
        doc.add(tomlkit.comment("scoreline overlay configuration (times in milliseconds)"))

        general_table = tomlkit.table()
        for key, value in self.general.model_dump().items():
            general_table[key] = value
        doc["general"] = general_table

        durations_table = tomlkit.table()
        for key, value in self.durations.model_dump().items():
            durations_table[key] = value
        doc["durations"] = durations_table

        atomic_write(path, tomlkit.dumps(doc))
