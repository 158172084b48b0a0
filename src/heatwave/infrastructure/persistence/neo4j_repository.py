"""Neo4j implementation of WaveContactRepository.
Graph: (:Wave {id, name, wavelength}) and (:TrackedContact {id, external_id, wave_id, last_contact}).
wave_id is a plain property (nullable foreign key), mirroring the waves/contacts tables.
"""

import logging
import uuid

from neo4j.exceptions import DriverError, Neo4jError

from heatwave.domain import UNSET, Contact, ContactFields, TransactionFailure, Wave, WaveFields

logger = logging.getLogger(__name__)

_CONSTRAINT_QUERIES = (
    """
    CREATE CONSTRAINT wave_name_unique IF NOT EXISTS
    FOR (w:Wave) REQUIRE w.name IS UNIQUE
    """,
    """
    CREATE CONSTRAINT tracked_contact_external_id_unique IF NOT EXISTS
    FOR (c:TrackedContact) REQUIRE c.external_id IS UNIQUE
    """,
)

_DELETE_WAVE_QUERY = """
MATCH (w:Wave {id: $wave_id})
DETACH DELETE w
RETURN count(w) AS deleted
"""

_CLEAR_ASSIGNMENTS_QUERY = """
MATCH (c:TrackedContact {wave_id: $wave_id})
SET c.wave_id = null
RETURN count(c) AS cleared
"""


def ensure_constraints(driver) -> None:
    """Create uniqueness constraints on Wave.name and TrackedContact.external_id if missing."""
    with driver.session() as session:
        for query in _CONSTRAINT_QUERIES:
            session.run(query)


def _remove_wave_tx(tx, wave_id: str) -> bool:
    deleted = tx.run(_DELETE_WAVE_QUERY, wave_id=wave_id).single()["deleted"]
    if not deleted:
        return False
    cleared = tx.run(_CLEAR_ASSIGNMENTS_QUERY, wave_id=wave_id).single()["cleared"]
    logger.debug("Wave %s deleted, %d contacts unassigned", wave_id, cleared)
    return True


class Neo4jWaveContactRepository:
    """Stores waves and tracked contacts in Neo4j."""

    def __init__(self, driver: object) -> None:
        self._driver = driver

    # --- contacts ---

    def add_contact(self, contact: Contact) -> Contact:
        with self._driver.session() as session:
            result = session.run(
                """
                MERGE (c:TrackedContact {external_id: $external_id})
                ON CREATE SET c.id = $id,
                              c.wave_id = $wave_id,
                              c.last_contact = $last_contact
                RETURN c
                """,
                external_id=contact.directory_id,
                id=str(uuid.uuid4()),
                wave_id=contact.wave_id,
                last_contact=contact.last_contact,
            )
            record = result.single()
        return _record_to_contact(record)

    def get_contact(self, directory_id: str) -> Contact | None:
        with self._driver.session() as session:
            result = session.run(
                "MATCH (c:TrackedContact {external_id: $external_id}) RETURN c",
                external_id=str(directory_id).strip(),
            )
            record = result.single()
        if not record:
            return None
        return _record_to_contact(record)

    def list_contacts(self) -> list[Contact]:
        with self._driver.session() as session:
            result = session.run("MATCH (c:TrackedContact) RETURN c")
            return [_record_to_contact(rec) for rec in result]

    def update_contact(self, directory_id: str, fields: ContactFields) -> Contact | None:
        assignments = _writable(fields, ("wave_id", "last_contact"))
        with self._driver.session() as session:
            record = session.run(
                "MATCH (c:TrackedContact {external_id: $external_id}) "
                + _set_clause("c", assignments)
                + " RETURN c",
                external_id=str(directory_id).strip(),
                **assignments,
            ).single()
        if not record:
            return None
        return _record_to_contact(record)

    def remove_contact(self, directory_id: str) -> bool:
        with self._driver.session() as session:
            result = session.run(
                """
                MATCH (c:TrackedContact {external_id: $external_id})
                DETACH DELETE c
                RETURN count(c) AS deleted
                """,
                external_id=str(directory_id).strip(),
            )
            return result.single()["deleted"] > 0

    # --- waves ---

    def add_wave(self, wave: Wave) -> Wave:
        if not wave.is_complete:
            raise ValueError("A wave needs a name and a wavelength to be stored.")
        with self._driver.session() as session:
            result = session.run(
                """
                MERGE (w:Wave {name: $name})
                ON CREATE SET w.id = $id, w.wavelength = $wavelength
                RETURN w
                """,
                name=wave.name,
                id=str(uuid.uuid4()),
                wavelength=wave.wavelength,
            )
            record = result.single()
        return _record_to_wave(record)

    def get_wave(self, wave_id: str) -> Wave | None:
        with self._driver.session() as session:
            record = session.run("MATCH (w:Wave {id: $id}) RETURN w", id=wave_id).single()
        if not record:
            return None
        return _record_to_wave(record)

    def get_wave_by_name(self, name: str) -> Wave | None:
        with self._driver.session() as session:
            record = session.run("MATCH (w:Wave {name: $name}) RETURN w", name=name).single()
        if not record:
            return None
        return _record_to_wave(record)

    def list_waves(self) -> list[Wave]:
        with self._driver.session() as session:
            result = session.run("MATCH (w:Wave) RETURN w ORDER BY w.name")
            return [_record_to_wave(rec) for rec in result]

    def update_wave(self, wave_id: str, fields: WaveFields) -> Wave | None:
        assignments = _writable(fields, ("name", "wavelength"))
        with self._driver.session() as session:
            record = session.run(
                "MATCH (w:Wave {id: $wave_id}) " + _set_clause("w", assignments) + " RETURN w",
                wave_id=wave_id,
                **assignments,
            ).single()
        if not record:
            return None
        return _record_to_wave(record)

    def remove_wave(self, wave_id: str) -> bool:
        """Delete the wave and clear its assignments in one write transaction."""
        try:
            with self._driver.session() as session:
                return session.execute_write(_remove_wave_tx, wave_id)
        except (Neo4jError, DriverError) as exc:
            raise TransactionFailure(f"Could not delete wave {wave_id}; nothing was changed.") from exc

    def count_wave_members(self, wave_id: str) -> int:
        with self._driver.session() as session:
            result = session.run(
                "MATCH (c:TrackedContact {wave_id: $wave_id}) RETURN count(c) AS members",
                wave_id=wave_id,
            )
            return result.single()["members"]


def _record_to_contact(record) -> Contact:
    c = record["c"]
    last_contact = c.get("last_contact")
    return Contact(
        id=c["id"],
        directory_id=c["external_id"],
        wave_id=c.get("wave_id") or None,
        last_contact=int(last_contact) if last_contact is not None else None,
    )


def _record_to_wave(record) -> Wave:
    w = record["w"]
    return Wave(id=w["id"], name=w["name"], wavelength=int(w["wavelength"]))


def _writable(fields, names: tuple[str, ...]) -> dict:
    return {name: getattr(fields, name) for name in names if getattr(fields, name) is not UNSET}


def _set_clause(var: str, assignments: dict) -> str:
    if not assignments:
        return ""
    return "SET " + ", ".join(f"{var}.{name} = ${name}" for name in assignments)
