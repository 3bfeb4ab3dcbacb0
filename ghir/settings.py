"""Settings resolution: GHIR_* env vars, then an optional TOML file, then defaults."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import tomlkit
from pydantic import field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

# Where the resource image ships its defaults; overridden by GHIR_CONFIG_FILE.
CONFIG_PATH = Path("/opt/resource/config.toml")


def config_path() -> Path:
    override = os.environ.get("GHIR_CONFIG_FILE")
    return Path(override) if override else CONFIG_PATH


@lru_cache(maxsize=1)
def _load_toml() -> dict[str, Any]:
    """Load the config file as plain python values, returning {} if missing."""
    path = config_path()
    if not path.exists():
        return {}
    with path.open() as fh:
        return tomlkit.load(fh).unwrap()


class _TomlSource(PydanticBaseSettingsSource):
    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return _load_toml().get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        doc = _load_toml()
        return {name: doc[name] for name in self.settings_cls.model_fields if name in doc}


class GhirSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GHIR_",
        extra="ignore",
    )

    api_url: str = "https://api.github.com"  # GitHub Enterprise: https://host/api/v3
    api_version: str = "2022-11-28"
    timeout: float = 30.0

    @field_validator("api_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, env_settings, _TomlSource(settings_cls), file_secret_settings)


def get_settings() -> GhirSettings:
    return GhirSettings()
