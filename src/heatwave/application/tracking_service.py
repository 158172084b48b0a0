"""Tracked contacts, waves and last-contact refresh. The only path that mutates the store."""

import logging
from collections.abc import Callable, Iterable

from heatwave.application.aliases import AliasResolver
from heatwave.application.call_history import CallHistoryScanner
from heatwave.application.dto import (
    BatchResult,
    DialTarget,
    DirectoryChoice,
    NoContactInfo,
    RankedContact,
)
from heatwave.application.freshness import now_timestamp, rank
from heatwave.application.freshness import score as staleness_score
from heatwave.application.ports import ContactDirectory, WaveContactRepository
from heatwave.domain import (
    UNSET,
    Contact,
    ContactFields,
    DuplicateWaveName,
    HeatwaveError,
    Wave,
    WaveFields,
    normalize_number,
    validate_wavelength,
)

logger = logging.getLogger(__name__)


def _plain_tel_uri(number: str) -> str:
    return f"tel:{normalize_number(number)}"


class HeatwaveService:
    """Contact/wave store operations plus the freshness engine wired to the external sources."""

    def __init__(
        self,
        repository: WaveContactRepository,
        directory: ContactDirectory,
        aliases: AliasResolver,
        scanner: CallHistoryScanner,
        *,
        format_dial_uri: Callable[[str], str] | None = None,
        clock: Callable[[], int] = now_timestamp,
    ) -> None:
        self._repo = repository
        self._directory = directory
        self._aliases = aliases
        self._scanner = scanner
        self._format_dial_uri = format_dial_uri or _plain_tel_uri
        self._clock = clock

    # --- contacts ---

    def create_contact(self, directory_id: str) -> Contact:
        """Start tracking a directory entry. Returns the stored contact unchanged if already tracked."""
        existing = self._repo.get_contact(directory_id)
        if existing is not None:
            return existing
        contact = self._repo.add_contact(Contact(directory_id=directory_id))
        logger.info("Tracking contact %s", contact.directory_id)
        return contact

    def delete_contact(self, directory_id: str) -> bool:
        """Stop tracking a contact. Returns False (not an error) when it was not tracked."""
        removed = self._repo.remove_contact(directory_id)
        if removed:
            logger.info("Stopped tracking contact %s", directory_id)
        return removed

    def fetch_contact(self, directory_id: str) -> Contact | None:
        contact = self._repo.get_contact(directory_id)
        if contact is None:
            return None
        return self._with_name(contact)

    def is_tracked(self, directory_id: str) -> bool:
        return self._repo.get_contact(directory_id) is not None

    def tracked_directory_ids(self) -> set[str]:
        return {c.directory_id for c in self._repo.list_contacts()}

    def list_tracked(self) -> list[Contact]:
        """All tracked contacts with cached last_contact and a freshly resolved name. Unordered."""
        return [self._with_name(c) for c in self._repo.list_contacts()]

    def modify_contact(self, contact: Contact, fields: ContactFields, persist: bool = True) -> Contact:
        """Merge the set fields into contact and, when persist, write only those fields to the store.

        The store keeps whatever it holds for fields left UNSET, so a stale
        contact never overwrites a newer assignment or timestamp.
        """
        if fields.id is not UNSET or fields.directory_id is not UNSET:
            raise ValueError("A contact's id and directory_id cannot be modified.")
        if fields.wave_id and self._repo.get_wave(fields.wave_id) is None:
            raise ValueError(f"Unknown wave id {fields.wave_id!r}.")
        updated = contact.modify(fields)
        if not persist:
            return updated
        stored = self._repo.update_contact(contact.directory_id, fields)
        if stored is None:
            raise ValueError(f"Contact {contact.directory_id!r} is not tracked.")
        return stored.modify(ContactFields(name=updated.name))

    def assign_wave(self, directory_id: str, wave_id: str | None) -> Contact | None:
        """Put a tracked contact in a wave (None clears it). Returns None if not tracked."""
        contact = self._repo.get_contact(directory_id)
        if contact is None:
            return None
        return self._with_name(self.modify_contact(contact, ContactFields(wave_id=wave_id)))

    def add_contacts(self, directory_ids: Iterable[str]) -> BatchResult:
        result = BatchResult()
        for directory_id in directory_ids:
            try:
                self.create_contact(directory_id)
            except (HeatwaveError, ValueError) as exc:
                logger.warning("Could not track %s: %s", directory_id, exc)
                result.failed[str(directory_id)] = str(exc)
            else:
                result.succeeded.append(str(directory_id))
        return result

    def remove_contacts(self, directory_ids: Iterable[str]) -> BatchResult:
        result = BatchResult()
        for directory_id in directory_ids:
            try:
                self.delete_contact(directory_id)
            except HeatwaveError as exc:
                logger.warning("Could not stop tracking %s: %s", directory_id, exc)
                result.failed[str(directory_id)] = str(exc)
            else:
                result.succeeded.append(str(directory_id))
        return result

    def update_selection(self, selected: Iterable[str], deselected: Iterable[str]) -> BatchResult:
        """Apply a directory selection: track every selected id, untrack every deselected one."""
        added = self.add_contacts(selected)
        removed = self.remove_contacts(deselected)
        return BatchResult(
            succeeded=added.succeeded + removed.succeeded,
            failed={**added.failed, **removed.failed},
        )

    # --- waves ---

    def create_or_get_wave(self, name: str, wavelength: int) -> Wave:
        """Return the wave called name, creating it if needed.

        When the name exists the given wavelength is ignored and the stored
        wave is returned as-is; use modify_wave to change a wavelength.
        """
        validate_wavelength(wavelength)
        name = (name or "").strip()
        if not name:
            raise ValueError("Wave name is required.")
        existing = self._repo.get_wave_by_name(name)
        if existing is not None:
            if existing.wavelength != wavelength:
                logger.debug(
                    "Wave %r exists with wavelength %s; ignoring %s",
                    name,
                    existing.wavelength,
                    wavelength,
                )
            return existing
        wave = self._repo.add_wave(Wave(name=name, wavelength=wavelength))
        logger.info("Created %s", wave)
        return wave

    def fetch_wave(self, wave_id: str) -> Wave | None:
        return self._repo.get_wave(wave_id)

    def fetch_wave_by_name(self, name: str) -> Wave | None:
        return self._repo.get_wave_by_name((name or "").strip())

    def list_waves(self) -> list[Wave]:
        return self._repo.list_waves()

    def wave_member_count(self, wave: Wave) -> int:
        if wave.id is None:
            return 0
        return self._repo.count_wave_members(wave.id)

    def modify_wave(self, wave: Wave, fields: WaveFields, persist: bool = True) -> Wave:
        """Merge the set fields into wave and, when persist, write only those fields to the store."""
        if fields.id is not UNSET:
            raise ValueError("A wave's id cannot be modified.")
        updated = wave.modify(fields)
        if updated.name is not None and updated.name != wave.name:
            clash = self._repo.get_wave_by_name(updated.name)
            if clash is not None and clash.id != updated.id:
                raise DuplicateWaveName(updated.name)
        if not persist:
            return updated
        if wave.id is None or not updated.is_complete:
            raise ValueError("Only a persisted, complete wave can be written.")
        stored = self._repo.update_wave(wave.id, fields)
        if stored is None:
            raise ValueError(f"Wave {wave.id!r} is not stored.")
        return stored

    def delete_wave(self, wave: Wave) -> bool:
        """Delete the wave and unassign its members atomically.

        Returns False when the wave was already gone. Raises TransactionFailure
        (nothing changed) when the cascade cannot complete.
        """
        if wave.id is None:
            raise ValueError("Cannot delete a wave that was never stored.")
        removed = self._repo.remove_wave(wave.id)
        if removed:
            logger.info("Deleted %s", wave)
        return removed

    # --- freshness ---

    def most_recent_contact(
        self,
        phone_numbers: Iterable[str],
        min_duration_seconds: int | None = None,
        exclude_missed: bool = True,
    ) -> int | None:
        return self._scanner.most_recent_contact(phone_numbers, min_duration_seconds, exclude_missed)

    def score(self, last_contact: int | None, wavelength: int, now: int | None = None) -> float:
        return staleness_score(last_contact, wavelength, self._clock() if now is None else now)

    def refresh_last_contact(self, contact: Contact) -> int | None:
        """Scan the call history for the contact, cache the result in the store and return it.

        Only last_contact is written. Blocks on the external sources;
        ExternalSourceUnavailable propagates and nothing is written.
        """
        numbers = self._aliases.all_phone_numbers(contact.directory_id)
        last_contact = self._scanner.most_recent_contact(numbers)
        stored = self._repo.update_contact(contact.directory_id, ContactFields(last_contact=last_contact))
        if stored is None:
            logger.debug("Contact %s is not tracked; last contact not cached", contact.directory_id)
        else:
            logger.debug("Refreshed %s: last contact %s", contact.directory_id, last_contact)
        return last_contact

    def ranked(self, now: int | None = None, *, refresh: bool = False) -> list[RankedContact]:
        """Tracked contacts, most overdue first. refresh re-scans the call history for each."""
        contacts = self.list_tracked()
        if refresh:
            contacts = [
                c.modify(ContactFields(last_contact=self.refresh_last_contact(c)))
                for c in contacts
            ]
        waves_by_id = {w.id: w for w in self._repo.list_waves()}
        return rank(contacts, waves_by_id, self._clock() if now is None else now)

    # --- directory ---

    def search_directory(self, query: str | None = None) -> list[DirectoryChoice]:
        """Directory entries with a phone number, by display name, flagged when tracked."""
        query = (query or "").strip() or None
        tracked = self.tracked_directory_ids()
        entries = [e for e in self._directory.search(query) if e.has_phone_number]
        entries.sort(key=lambda e: e.name)
        return [
            DirectoryChoice(directory_id=e.directory_id, name=e.name, tracked=e.directory_id in tracked)
            for e in entries
        ]

    def dial_target(self, directory_id: str) -> DialTarget | NoContactInfo:
        """The number to call for a contact: the first primary number, else the first one."""
        records = self._aliases.all_phone_records(directory_id)
        if not records:
            return NoContactInfo(directory_id=directory_id)
        chosen = next((r for r in records if r.is_primary), records[0])
        return DialTarget(
            directory_id=directory_id,
            number=chosen.number,
            uri=self._format_dial_uri(chosen.number),
        )

    def _with_name(self, contact: Contact) -> Contact:
        entry = self._directory.get(contact.directory_id)
        name = entry.name if entry is not None else None
        if name == contact.name:
            return contact
        return contact.modify(ContactFields(name=name))
