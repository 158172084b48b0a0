"""Infrastructure layer: concrete implementations of application ports."""

from heatwave.infrastructure.external import InMemoryCallLog, InMemoryContactDirectory
from heatwave.infrastructure.memory_repository import InMemoryWaveContactRepository
from heatwave.infrastructure.persistence.neo4j_repository import (
    Neo4jWaveContactRepository,
    ensure_constraints,
)
from heatwave.infrastructure.phone import dial_uri
from heatwave.infrastructure.snapshot import load_snapshot, parse_snapshot
from heatwave.infrastructure.wiring import build_service, load_external_sources

__all__ = [
    "InMemoryCallLog",
    "InMemoryContactDirectory",
    "InMemoryWaveContactRepository",
    "Neo4jWaveContactRepository",
    "build_service",
    "dial_uri",
    "ensure_constraints",
    "load_external_sources",
    "load_snapshot",
    "parse_snapshot",
]
