"""Tests for ghir.settings — env vars over TOML file over defaults."""

from pathlib import Path

import pytest
import tomlkit

import ghir.settings as settings_module
from ghir.settings import GhirSettings, config_path, get_settings


def _write_config(tmp_path: Path, config: dict) -> Path:
    path = tmp_path / "config.toml"
    path.write_text(tomlkit.dumps(config))
    return path


class TestConfigPath:
    def test_default(self) -> None:
        assert config_path() == settings_module.CONFIG_PATH

    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GHIR_CONFIG_FILE", str(tmp_path / "other.toml"))
        assert config_path() == tmp_path / "other.toml"


class TestGetSettings:
    def test_defaults_without_config_file(self) -> None:
        s = get_settings()
        assert s.api_url == "https://api.github.com"
        assert s.api_version == "2022-11-28"
        assert s.timeout == 30.0

    def test_toml_file_used(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = _write_config(tmp_path, {"api_url": "https://ghe.example.com/api/v3", "timeout": 5.0})
        monkeypatch.setattr(settings_module, "CONFIG_PATH", path)

        s = get_settings()
        assert s.api_url == "https://ghe.example.com/api/v3"
        assert s.timeout == 5.0

    def test_env_var_takes_precedence_over_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = _write_config(tmp_path, {"api_url": "https://ghe.example.com/api/v3"})
        monkeypatch.setenv("GHIR_CONFIG_FILE", str(path))
        monkeypatch.setenv("GHIR_API_URL", "https://other.example.com/api/v3")

        assert get_settings().api_url == "https://other.example.com/api/v3"

    def test_unknown_toml_keys_ignored(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = _write_config(tmp_path, {"pat": "ghp_nope", "api_version": "2024-01-01"})
        monkeypatch.setattr(settings_module, "CONFIG_PATH", path)

        s = get_settings()
        assert s.api_version == "2024-01-01"
        assert not hasattr(s, "pat")

    def test_trailing_slash_stripped(self) -> None:
        assert GhirSettings(api_url="https://api.github.com/").api_url == "https://api.github.com"
