"""Unit tests for Wave/Contact validation and the partial-update payloads."""

import pytest

from heatwave.domain import (
    SECONDS_PER_UNIT,
    UNSET,
    Contact,
    ContactFields,
    InvalidInterval,
    Wave,
    WaveFields,
)


def test_wave_skeleton_is_incomplete() -> None:
    wave = Wave.skeleton()
    assert wave.id is None
    assert wave.name is None
    assert not wave.is_complete


def test_wave_from_days_converts_to_seconds() -> None:
    wave = Wave.from_days("Close friends", 7)
    assert wave.wavelength == 7 * SECONDS_PER_UNIT
    assert wave.days == 7


@pytest.mark.parametrize("wavelength", [0, -1, 1.5, "86400", True])
def test_wave_rejects_invalid_wavelength(wavelength) -> None:
    with pytest.raises(InvalidInterval):
        Wave(name="Family", wavelength=wavelength)


def test_wave_rejects_blank_name() -> None:
    with pytest.raises(ValueError, match="name"):
        Wave(name="   ", wavelength=86400)


def test_wave_modify_merges_only_set_fields() -> None:
    wave = Wave(id="w1", name="Family", wavelength=604800)
    renamed = wave.modify(WaveFields(name="Relatives"))
    assert renamed == Wave(id="w1", name="Relatives", wavelength=604800)
    assert wave.name == "Family"
    assert wave.modify(WaveFields()) == wave


def test_wave_modify_validates_wavelength() -> None:
    wave = Wave(id="w1", name="Family", wavelength=604800)
    with pytest.raises(InvalidInterval):
        wave.modify(WaveFields(wavelength=-1))


def test_contact_fields_none_clears_but_unset_keeps() -> None:
    contact = Contact(directory_id="1", id="c1", wave_id="w1", last_contact=100)
    assert contact.modify(ContactFields(last_contact=200)).wave_id == "w1"
    cleared = contact.modify(ContactFields(wave_id=None))
    assert cleared.wave_id is None
    assert cleared.last_contact == 100


def test_fields_is_empty() -> None:
    assert WaveFields().is_empty()
    assert not WaveFields(name="x").is_empty()
    assert not ContactFields(wave_id=None).is_empty()


def test_unset_is_distinct_from_none() -> None:
    assert UNSET is not None
    assert repr(UNSET) == "UNSET"
    assert ContactFields().wave_id is UNSET


def test_contact_requires_directory_id() -> None:
    with pytest.raises(ValueError, match="directory_id"):
        Contact(directory_id="  ")
    assert Contact(directory_id=" 42 ").directory_id == "42"
