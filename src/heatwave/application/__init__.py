"""Application layer: use cases, ports, and DTOs. Depends only on domain."""

from heatwave.application.aliases import AliasResolver
from heatwave.application.call_history import DEFAULT_MIN_DURATION, CallHistoryScanner
from heatwave.application.dto import (
    BatchResult,
    CallRecord,
    CallType,
    DialTarget,
    DirectoryChoice,
    DirectoryEntry,
    NoContactInfo,
    PhoneRecord,
    RankedContact,
)
from heatwave.application.freshness import NEVER, rank, score
from heatwave.application.ports import (
    CallLog,
    ContactDirectory,
    PhoneNumberStore,
    RawContactDirectory,
    WaveContactRepository,
)
from heatwave.application.tracking_service import HeatwaveService

__all__ = [
    "DEFAULT_MIN_DURATION",
    "NEVER",
    "AliasResolver",
    "BatchResult",
    "CallHistoryScanner",
    "CallLog",
    "CallRecord",
    "CallType",
    "ContactDirectory",
    "DialTarget",
    "DirectoryChoice",
    "DirectoryEntry",
    "HeatwaveService",
    "NoContactInfo",
    "PhoneNumberStore",
    "PhoneRecord",
    "RankedContact",
    "RawContactDirectory",
    "WaveContactRepository",
    "rank",
    "score",
]
