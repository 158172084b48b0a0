"""Settings read from the environment. Entrypoints load .env first (python-dotenv)."""

import os
from dataclasses import dataclass
from pathlib import Path

from heatwave.application.call_history import DEFAULT_MIN_DURATION


@dataclass(frozen=True)
class Settings:
    neo4j_uri: str = "bolt://localhost:7687"
    neo4j_user: str = "neo4j"
    neo4j_password: str = "password"
    min_call_duration: int = DEFAULT_MIN_DURATION
    default_region: str | None = None
    directory_path: Path | None = None


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must not be negative")
    return value


def load_settings() -> Settings:
    """Build Settings from NEO4J_* and HEATWAVE_* environment variables."""
    region = os.environ.get("HEATWAVE_DEFAULT_REGION", "").strip().upper() or None
    directory_path = os.environ.get("HEATWAVE_DIRECTORY_PATH", "").strip()
    return Settings(
        neo4j_uri=os.environ.get("NEO4J_URI", "bolt://localhost:7687").strip(),
        neo4j_user=os.environ.get("NEO4J_USER", "neo4j").strip(),
        neo4j_password=os.environ.get("NEO4J_PASSWORD", "password").strip(),
        min_call_duration=_int_env("HEATWAVE_MIN_CALL_DURATION", DEFAULT_MIN_DURATION),
        default_region=region,
        directory_path=Path(directory_path).resolve() if directory_path else None,
    )
