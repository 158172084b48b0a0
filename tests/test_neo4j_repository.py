"""Integration tests for Neo4jWaveContactRepository. Require Docker
(testcontainers)."""

import pytest

from heatwave.domain import Contact, ContactFields, TransactionFailure, Wave, WaveFields
from heatwave.infrastructure import Neo4jWaveContactRepository, ensure_constraints
from heatwave.infrastructure.persistence import neo4j_repository


@pytest.fixture(scope="session")
def neo4j_driver():
    from testcontainers.neo4j import Neo4jContainer

    with Neo4jContainer() as neo4j:
        driver = neo4j.get_driver()
        try:
            yield driver
        finally:
            driver.close()


@pytest.fixture
def clean_neo4j(neo4j_driver):
    """Clear the graph before each test so tests are independent."""
    with neo4j_driver.session() as session:
        session.run("MATCH (n) DETACH DELETE n")
    ensure_constraints(neo4j_driver)
    yield neo4j_driver


def _assign(repo, directory_id, wave_id):
    contact = repo.get_contact(directory_id)
    repo.update_contact(directory_id, ContactFields(wave_id=wave_id))


def test_add_contact_is_idempotent(clean_neo4j):
    repo = Neo4jWaveContactRepository(clean_neo4j)
    first = repo.add_contact(Contact(directory_id="42"))
    second = repo.add_contact(Contact(directory_id="42"))
    assert first.id is not None
    assert second.id == first.id
    assert len(repo.list_contacts()) == 1


def test_update_and_get_contact(clean_neo4j):
    repo = Neo4jWaveContactRepository(clean_neo4j)
    repo.add_contact(Contact(directory_id="42"))
    stored = repo.update_contact("42", ContactFields(last_contact=1700000000))
    assert stored.last_contact == 1700000000
    assert repo.update_contact("43", ContactFields(last_contact=1)) is None

    found = repo.get_contact("42")
    assert found.last_contact == 1700000000
    assert found.wave_id is None
    assert repo.get_contact("43") is None


def test_remove_contact(clean_neo4j):
    repo = Neo4jWaveContactRepository(clean_neo4j)
    repo.add_contact(Contact(directory_id="42"))
    assert repo.remove_contact("42") is True
    assert repo.remove_contact("42") is False


def test_add_wave_is_idempotent_by_name(clean_neo4j):
    repo = Neo4jWaveContactRepository(clean_neo4j)
    a = repo.add_wave(Wave(name="Family", wavelength=604800))
    b = repo.add_wave(Wave(name="Family", wavelength=86400))
    assert a.id == b.id
    assert b.wavelength == 604800
    assert repo.get_wave_by_name("Family") == a
    assert repo.list_waves() == [a]


def test_update_wave(clean_neo4j):
    repo = Neo4jWaveContactRepository(clean_neo4j)
    wave = repo.add_wave(Wave(name="Family", wavelength=604800))
    assert repo.update_wave(wave.id, WaveFields(name="Kin")).name == "Kin"
    stored = repo.get_wave(wave.id)
    assert stored.name == "Kin"
    assert stored.wavelength == 604800
    assert repo.update_wave("nope", WaveFields(name="X")) is None


def test_update_contact_writes_only_set_fields(clean_neo4j):
    repo = Neo4jWaveContactRepository(clean_neo4j)
    wave = repo.add_wave(Wave(name="Family", wavelength=604800))
    repo.add_contact(Contact(directory_id="42"))
    _assign(repo, "42", wave.id)
    stored = repo.update_contact("42", ContactFields(last_contact=1700000000))
    assert stored.wave_id == wave.id
    cleared = repo.update_contact("42", ContactFields(wave_id=None))
    assert cleared.wave_id is None
    assert cleared.last_contact == 1700000000
    assert repo.update_contact("42", ContactFields()) == cleared


def test_remove_wave_clears_assignments(clean_neo4j):
    repo = Neo4jWaveContactRepository(clean_neo4j)
    wave = repo.add_wave(Wave(name="Family", wavelength=604800))
    for directory_id in ("1", "2"):
        repo.add_contact(Contact(directory_id=directory_id))
        _assign(repo, directory_id, wave.id)
    assert repo.count_wave_members(wave.id) == 2

    assert repo.remove_wave(wave.id) is True
    assert repo.get_wave(wave.id) is None
    assert [c.wave_id for c in repo.list_contacts()] == [None, None]
    assert repo.remove_wave(wave.id) is False


def test_remove_wave_failure_rolls_back(clean_neo4j, monkeypatch):
    repo = Neo4jWaveContactRepository(clean_neo4j)
    wave = repo.add_wave(Wave(name="Family", wavelength=604800))
    repo.add_contact(Contact(directory_id="1"))
    _assign(repo, "1", wave.id)

    # Second statement of the transaction fails after the wave is deleted.
    monkeypatch.setattr(neo4j_repository, "_CLEAR_ASSIGNMENTS_QUERY", "MATCH (c:TrackedContact SET")
    with pytest.raises(TransactionFailure):
        repo.remove_wave(wave.id)

    assert repo.get_wave(wave.id) == wave
    assert repo.get_contact("1").wave_id == wave.id
