"""In-memory stand-ins for the external contact directory, phone store and call log.

Used by tests and by the snapshot loader. Setting available=False makes
every read raise ExternalSourceUnavailable, as an unreachable provider would.
"""

from collections.abc import Callable, Iterable

from heatwave.application.dto import CallRecord, DirectoryEntry, PhoneRecord
from heatwave.domain import ExternalSourceUnavailable


class _Source:
    source_name = "external source"

    def __init__(self) -> None:
        self.available = True

    def _check(self) -> None:
        if not self.available:
            raise ExternalSourceUnavailable(self.source_name)


class InMemoryContactDirectory(_Source):
    """Directory entries plus the raw records merged into each, and their phone numbers.

    Implements ContactDirectory, RawContactDirectory and PhoneNumberStore.
    """

    source_name = "contact directory"

    def __init__(self) -> None:
        super().__init__()
        self._names: dict[str, str] = {}
        self._raw_ids: dict[str, set[str]] = {}
        self._phones: dict[str, list[PhoneRecord]] = {}

    def add_entry(self, directory_id: str, name: str) -> None:
        self._names[str(directory_id)] = name
        self._raw_ids.setdefault(str(directory_id), set())

    def add_raw(
        self,
        directory_id: str,
        raw_id: str,
        numbers: Iterable[str | PhoneRecord] = (),
    ) -> None:
        """Attach a raw record (with its phone numbers, possibly none) to a directory entry."""
        self._raw_ids.setdefault(str(directory_id), set()).add(str(raw_id))
        records = self._phones.setdefault(str(raw_id), [])
        for number in numbers:
            records.append(number if isinstance(number, PhoneRecord) else PhoneRecord(number=number))

    def remove_entry(self, directory_id: str) -> None:
        self._names.pop(str(directory_id), None)
        for raw_id in self._raw_ids.pop(str(directory_id), set()):
            self._phones.pop(raw_id, None)

    def get(self, directory_id: str) -> DirectoryEntry | None:
        self._check()
        name = self._names.get(str(directory_id))
        if name is None:
            return None
        return DirectoryEntry(
            directory_id=str(directory_id),
            name=name,
            has_phone_number=self._has_phone(str(directory_id)),
        )

    def search(self, query: str | None = None) -> list[DirectoryEntry]:
        self._check()
        prefix = (query or "").strip().lower()
        entries = [
            DirectoryEntry(directory_id=did, name=name, has_phone_number=self._has_phone(did))
            for did, name in self._names.items()
            if name.lower().startswith(prefix)
        ]
        return sorted(entries, key=lambda e: e.name)

    def raw_ids(self, directory_id: str) -> set[str]:
        self._check()
        return set(self._raw_ids.get(str(directory_id), set()))

    def numbers(self, raw_id: str) -> list[PhoneRecord]:
        self._check()
        return list(self._phones.get(str(raw_id), []))

    def _has_phone(self, directory_id: str) -> bool:
        return any(self._phones.get(raw_id) for raw_id in self._raw_ids.get(directory_id, set()))


class InMemoryCallLog(_Source):
    """Append-only call history."""

    source_name = "call history"

    def __init__(self, calls: Iterable[CallRecord] = ()) -> None:
        super().__init__()
        self._calls: list[CallRecord] = list(calls)

    def append(self, call: CallRecord) -> None:
        self._calls.append(call)

    def query(self, predicate: Callable[[CallRecord], bool]) -> list[CallRecord]:
        self._check()
        matches = [call for call in self._calls if predicate(call)]
        return sorted(matches, key=lambda c: c.timestamp, reverse=True)

    def __len__(self) -> int:
        return len(self._calls)
