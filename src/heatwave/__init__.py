"""
Heatwave core: clean-architecture layout.

- domain: entities (Wave, Contact), partial updates, phone identity, errors. No outer dependencies.
- application: use cases (HeatwaveService, CallHistoryScanner, freshness), ports, DTOs.
- infrastructure: adapters (InMemoryWaveContactRepository, Neo4jWaveContactRepository,
  in-memory external sources, YAML snapshot loader).
"""

from heatwave.application import (
    AliasResolver,
    CallHistoryScanner,
    HeatwaveService,
    NoContactInfo,
    RankedContact,
    WaveContactRepository,
)
from heatwave.domain import (
    UNSET,
    Contact,
    ContactFields,
    ExternalSourceUnavailable,
    InvalidInterval,
    TransactionFailure,
    Wave,
    WaveFields,
    normalize_number,
)
from heatwave.infrastructure import InMemoryWaveContactRepository, Neo4jWaveContactRepository

__all__ = [
    "UNSET",
    "AliasResolver",
    "CallHistoryScanner",
    "Contact",
    "ContactFields",
    "ExternalSourceUnavailable",
    "HeatwaveService",
    "InMemoryWaveContactRepository",
    "InvalidInterval",
    "Neo4jWaveContactRepository",
    "NoContactInfo",
    "RankedContact",
    "TransactionFailure",
    "Wave",
    "WaveContactRepository",
    "WaveFields",
    "normalize_number",
]
