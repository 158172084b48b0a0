"""Application ports (interfaces). Implemented by infrastructure adapters."""

from collections.abc import Callable, Iterable
from typing import Protocol

from heatwave.application.dto import CallRecord, DirectoryEntry, PhoneRecord
from heatwave.domain import Contact, ContactFields, Wave, WaveFields


class WaveContactRepository(Protocol):
    """Persists waves and tracked contacts. Mirrors the waves and contacts tables."""

    def add_contact(self, contact: Contact) -> Contact:
        """Store a contact and return it with its assigned id. Existing directory_id is returned as-is."""
        ...

    def get_contact(self, directory_id: str) -> Contact | None:
        ...

    def list_contacts(self) -> list[Contact]:
        """Return all tracked contacts, in no particular order."""
        ...

    def update_contact(self, directory_id: str, fields: ContactFields) -> Contact | None:
        """Write only the set wave_id and last_contact of fields. Returns the stored contact, None if not stored."""
        ...

    def remove_contact(self, directory_id: str) -> bool:
        """Delete the contact. False if it was not stored."""
        ...

    def add_wave(self, wave: Wave) -> Wave:
        """Store a complete wave and return it with its assigned id."""
        ...

    def get_wave(self, wave_id: str) -> Wave | None:
        ...

    def get_wave_by_name(self, name: str) -> Wave | None:
        ...

    def list_waves(self) -> list[Wave]:
        ...

    def update_wave(self, wave_id: str, fields: WaveFields) -> Wave | None:
        """Write only the set name and wavelength of fields. Returns the stored wave, None if not stored."""
        ...

    def remove_wave(self, wave_id: str) -> bool:
        """Delete the wave and clear every contact's assignment to it in one transaction.

        Raises TransactionFailure (with nothing changed) if either step fails.
        """
        ...

    def count_wave_members(self, wave_id: str) -> int:
        ...


class ContactDirectory(Protocol):
    """The external contact directory (read-only)."""

    def get(self, directory_id: str) -> DirectoryEntry | None:
        ...

    def search(self, query: str | None = None) -> list[DirectoryEntry]:
        """Entries whose display name starts with query (all when None), ordered by name."""
        ...


class RawContactDirectory(Protocol):
    """Maps a directory id to the raw records merged into it."""

    def raw_ids(self, directory_id: str) -> set[str]:
        ...


class PhoneNumberStore(Protocol):
    def numbers(self, raw_id: str) -> list[PhoneRecord]:
        ...


class CallLog(Protocol):
    """Append-only external communication history."""

    def query(self, predicate: Callable[[CallRecord], bool]) -> Iterable[CallRecord]:
        """Return entries matching predicate, newest first."""
        ...
