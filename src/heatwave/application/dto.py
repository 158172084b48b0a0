"""Data passed across the application boundary: external records and use-case results."""

from dataclasses import dataclass, field
from enum import Enum

from heatwave.domain import Contact, Wave


class CallType(str, Enum):
    INCOMING = "incoming"
    OUTGOING = "outgoing"
    MISSED = "missed"


@dataclass(frozen=True)
class DirectoryEntry:
    """One person as the external contact directory shows them."""

    directory_id: str
    name: str
    has_phone_number: bool = True


@dataclass(frozen=True)
class PhoneRecord:
    """A phone number attached to one raw alias."""

    number: str
    is_primary: bool = False


@dataclass(frozen=True)
class CallRecord:
    """One entry of the external call history. timestamp is Unix seconds."""

    number: str
    timestamp: int
    duration: int
    call_type: CallType


@dataclass(frozen=True)
class DirectoryChoice:
    """A directory entry offered for selection, flagged when already tracked."""

    directory_id: str
    name: str
    tracked: bool


@dataclass(frozen=True)
class RankedContact:
    """A tracked contact with its wave and staleness score (None when unassigned)."""

    contact: Contact
    wave: Wave | None
    score: float | None


@dataclass(frozen=True)
class DialTarget:
    directory_id: str
    number: str
    uri: str


@dataclass(frozen=True)
class NoContactInfo:
    """The contact has no phone number, so there is nothing to dial."""

    directory_id: str


@dataclass
class BatchResult:
    """Per-item outcome of a batch mutation. Items succeed or fail independently."""

    succeeded: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed
