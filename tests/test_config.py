"""Tests for environment-driven settings."""

from pathlib import Path

import pytest

from heatwave.config import load_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "NEO4J_URI",
        "NEO4J_USER",
        "NEO4J_PASSWORD",
        "HEATWAVE_MIN_CALL_DURATION",
        "HEATWAVE_DEFAULT_REGION",
        "HEATWAVE_DIRECTORY_PATH",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = load_settings()
    assert settings.neo4j_uri == "bolt://localhost:7687"
    assert settings.min_call_duration == 120
    assert settings.default_region is None
    assert settings.directory_path is None


def test_overrides(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("HEATWAVE_MIN_CALL_DURATION", " 60 ")
    monkeypatch.setenv("HEATWAVE_DEFAULT_REGION", "us")
    monkeypatch.setenv("HEATWAVE_DIRECTORY_PATH", str(tmp_path / "snap.yaml"))
    settings = load_settings()
    assert settings.min_call_duration == 60
    assert settings.default_region == "US"
    assert settings.directory_path == Path(tmp_path / "snap.yaml").resolve()


@pytest.mark.parametrize("value", ["abc", "-1"])
def test_invalid_duration(monkeypatch, value) -> None:
    monkeypatch.setenv("HEATWAVE_MIN_CALL_DURATION", value)
    with pytest.raises(ValueError, match="HEATWAVE_MIN_CALL_DURATION"):
        load_settings()
