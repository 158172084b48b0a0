"""Domain entities: Wave, Contact and their partial-update payloads."""

from dataclasses import dataclass, fields, replace
from typing import Any

from heatwave.domain.errors import InvalidInterval

# The UI asks for wavelengths in days.
SECONDS_PER_UNIT = 86400


class _Unset:
    """Marker for a field that a partial update leaves unchanged."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


def _set_values(payload) -> dict[str, Any]:
    return {
        f.name: getattr(payload, f.name)
        for f in fields(payload)
        if getattr(payload, f.name) is not UNSET
    }


def validate_wavelength(wavelength: object) -> int:
    """Return the wavelength if it is a positive int, else raise InvalidInterval."""
    if isinstance(wavelength, bool) or not isinstance(wavelength, int) or wavelength <= 0:
        raise InvalidInterval(wavelength)
    return wavelength


@dataclass(frozen=True)
class WaveFields:
    """Partial update for a Wave. Only fields not left as UNSET are merged."""

    id: str | None = UNSET
    name: str | None = UNSET
    wavelength: int | None = UNSET

    def is_empty(self) -> bool:
        return not _set_values(self)


@dataclass(frozen=True)
class Wave:
    """
    A named target re-contact interval.
    id is None until the wave is persisted; a wave without a name is a
    transient skeleton and cannot be stored.
    """

    id: str | None = None
    name: str | None = None
    wavelength: int | None = None

    def __post_init__(self):
        if self.name is not None:
            name = self.name.strip()
            if not name:
                raise ValueError("Wave name must be non-empty.")
            object.__setattr__(self, "name", name)
        if self.wavelength is not None:
            validate_wavelength(self.wavelength)

    @classmethod
    def skeleton(cls) -> "Wave":
        return cls()

    @classmethod
    def from_days(cls, name: str, days: int) -> "Wave":
        return cls(name=name, wavelength=days * SECONDS_PER_UNIT)

    @property
    def is_complete(self) -> bool:
        return self.name is not None and self.wavelength is not None

    @property
    def days(self) -> float | None:
        if self.wavelength is None:
            return None
        return self.wavelength / SECONDS_PER_UNIT

    def modify(self, update: WaveFields) -> "Wave":
        """Return a copy with the set fields of update merged in."""
        return replace(self, **_set_values(update))

    def __str__(self) -> str:
        return f"Wave '{self.name}', wavelength: {self.wavelength}"


@dataclass(frozen=True)
class ContactFields:
    """Partial update for a Contact. wave_id=None clears the assignment; UNSET keeps it."""

    id: str | None = UNSET
    directory_id: str = UNSET
    wave_id: str | None = UNSET
    last_contact: int | None = UNSET
    name: str | None = UNSET

    def is_empty(self) -> bool:
        return not _set_values(self)


@dataclass(frozen=True)
class Contact:
    """
    A person from the external directory that the user keeps in touch with.
    name is display data from the directory and is never persisted.
    last_contact is a cached Unix timestamp in seconds, None for never.
    """

    directory_id: str
    id: str | None = None
    wave_id: str | None = None
    last_contact: int | None = None
    name: str | None = None

    def __post_init__(self):
        directory_id = str(self.directory_id or "").strip()
        if not directory_id:
            raise ValueError("Contact directory_id must be non-empty.")
        object.__setattr__(self, "directory_id", directory_id)

    def modify(self, update: ContactFields) -> "Contact":
        """Return a copy with the set fields of update merged in."""
        return replace(self, **_set_values(update))
