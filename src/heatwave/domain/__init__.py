"""Domain layer: entities, partial updates and errors. No dependencies on outer layers."""

from heatwave.domain.entities import (
    SECONDS_PER_UNIT,
    UNSET,
    Contact,
    ContactFields,
    Wave,
    WaveFields,
    validate_wavelength,
)
from heatwave.domain.errors import (
    DuplicateWaveName,
    ExternalSourceUnavailable,
    HeatwaveError,
    InvalidInterval,
    TransactionFailure,
)
from heatwave.domain.identity import normalize_number, normalize_numbers

__all__ = [
    "SECONDS_PER_UNIT",
    "UNSET",
    "Contact",
    "ContactFields",
    "DuplicateWaveName",
    "ExternalSourceUnavailable",
    "HeatwaveError",
    "InvalidInterval",
    "TransactionFailure",
    "Wave",
    "WaveFields",
    "normalize_number",
    "normalize_numbers",
    "validate_wavelength",
]
