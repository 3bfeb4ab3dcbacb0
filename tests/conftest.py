"""Shared test fixtures."""

from pathlib import Path

import pytest

import ghir.settings as settings_module
from ghir.models import TicketRef
from ghir.payloads import Source


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point settings at an empty location so a real /opt/resource/config.toml never leaks in."""
    monkeypatch.setattr(settings_module, "CONFIG_PATH", tmp_path / "missing.toml")
    for var in ("GHIR_CONFIG_FILE", "GHIR_API_URL", "GHIR_API_VERSION", "GHIR_TIMEOUT"):
        monkeypatch.delenv(var, raising=False)
    settings_module._load_toml.cache_clear()
    yield
    settings_module._load_toml.cache_clear()


@pytest.fixture
def ticket_ref() -> TicketRef:
    return TicketRef(owner="acme", repo="widgets", number=42)


@pytest.fixture
def source() -> Source:
    return Source(pat="ghp_test", owner="acme", repo="widgets", number=42)


@pytest.fixture
def issue_node() -> dict:
    return {
        "id": 987654321,
        "number": 42,
        "title": "Build failed",
        "body": "The nightly pipeline failed.",
        "html_url": "https://github.com/acme/widgets/issues/42",
        "state": "open",
        "labels": [{"name": "ci"}],
        "assignees": [{"login": "octocat"}],
    }
