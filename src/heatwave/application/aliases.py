"""Resolve a directory id to its raw aliases and their phone numbers.

A directory entry can be backed by several raw records (merged duplicates).
The fan-out directory_id -> raw ids -> phone numbers is read fresh on every
call because the directory can re-merge records at any time.
"""

from heatwave.application.dto import PhoneRecord
from heatwave.application.ports import PhoneNumberStore, RawContactDirectory


class AliasResolver:
    def __init__(self, raw_directory: RawContactDirectory, phones: PhoneNumberStore) -> None:
        self._raw_directory = raw_directory
        self._phones = phones

    def resolve_aliases(self, directory_id: str) -> set[str]:
        """Return every raw alias id for directory_id (empty when unknown)."""
        directory_id = (directory_id or "").strip()
        if not directory_id:
            return set()
        return set(self._raw_directory.raw_ids(directory_id))

    def phone_records(self, raw_id: str) -> list[PhoneRecord]:
        return list(self._phones.numbers(raw_id))

    def phone_numbers(self, raw_id: str) -> list[str]:
        """Raw phone-number strings attached to one alias. Name-only aliases give []."""
        return [record.number for record in self.phone_records(raw_id)]

    def all_phone_records(self, directory_id: str) -> list[PhoneRecord]:
        """Phone records across every alias, ordered by alias id for a stable result."""
        records = []
        for raw_id in sorted(self.resolve_aliases(directory_id)):
            records.extend(self.phone_records(raw_id))
        return records

    def all_phone_numbers(self, directory_id: str) -> set[str]:
        return {record.number for record in self.all_phone_records(directory_id)}
