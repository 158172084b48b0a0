"""In-memory implementation of WaveContactRepository (no DB)."""

import copy
import uuid

from heatwave.domain import Contact, ContactFields, TransactionFailure, Wave, WaveFields


class InMemoryWaveContactRepository:
    """Stores waves and contacts in memory. Contacts keep insertion order.
    Display names are never stored; contacts come back with name=None.
    """

    def __init__(self) -> None:
        self._waves: dict[str, Wave] = {}
        self._contacts: dict[str, Contact] = {}  # directory_id -> contact

    # --- contacts ---

    def add_contact(self, contact: Contact) -> Contact:
        existing = self._contacts.get(contact.directory_id)
        if existing is not None:
            return existing
        stored = contact.modify(ContactFields(id=str(uuid.uuid4()), name=None))
        self._contacts[stored.directory_id] = stored
        return stored

    def get_contact(self, directory_id: str) -> Contact | None:
        return self._contacts.get(str(directory_id).strip())

    def list_contacts(self) -> list[Contact]:
        return list(self._contacts.values())

    def update_contact(self, directory_id: str, fields: ContactFields) -> Contact | None:
        directory_id = str(directory_id).strip()
        stored = self._contacts.get(directory_id)
        if stored is None:
            return None
        updated = stored.modify(ContactFields(wave_id=fields.wave_id, last_contact=fields.last_contact))
        self._contacts[directory_id] = updated
        return updated

    def remove_contact(self, directory_id: str) -> bool:
        return self._contacts.pop(str(directory_id).strip(), None) is not None

    # --- waves ---

    def add_wave(self, wave: Wave) -> Wave:
        if not wave.is_complete:
            raise ValueError("A wave needs a name and a wavelength to be stored.")
        existing = self.get_wave_by_name(wave.name)
        if existing is not None:
            return existing
        stored = wave.modify(WaveFields(id=str(uuid.uuid4())))
        self._waves[stored.id] = stored
        return stored

    def get_wave(self, wave_id: str) -> Wave | None:
        return self._waves.get(wave_id)

    def get_wave_by_name(self, name: str) -> Wave | None:
        for wave in self._waves.values():
            if wave.name == name:
                return wave
        return None

    def list_waves(self) -> list[Wave]:
        return list(self._waves.values())

    def update_wave(self, wave_id: str, fields: WaveFields) -> Wave | None:
        stored = self._waves.get(wave_id)
        if stored is None:
            return None
        updated = stored.modify(WaveFields(name=fields.name, wavelength=fields.wavelength))
        self._waves[wave_id] = updated
        return updated

    def remove_wave(self, wave_id: str) -> bool:
        """Delete the wave and clear assignments; on any error restore both and raise TransactionFailure."""
        if wave_id not in self._waves:
            return False
        waves_before = copy.copy(self._waves)
        contacts_before = copy.copy(self._contacts)
        try:
            del self._waves[wave_id]
            self._clear_wave_assignments(wave_id)
        except Exception as exc:
            self._waves = waves_before
            self._contacts = contacts_before
            raise TransactionFailure(f"Could not delete wave {wave_id}; nothing was changed.") from exc
        return True

    def _clear_wave_assignments(self, wave_id: str) -> None:
        for directory_id, contact in list(self._contacts.items()):
            if contact.wave_id == wave_id:
                self._contacts[directory_id] = contact.modify(ContactFields(wave_id=None))

    def count_wave_members(self, wave_id: str) -> int:
        return sum(1 for c in self._contacts.values() if c.wave_id == wave_id)
