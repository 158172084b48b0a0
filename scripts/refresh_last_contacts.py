#!/usr/bin/env python3
"""Refresh the cached last-contact timestamp of every tracked contact.

Scans the call history configured by HEATWAVE_DIRECTORY_PATH for each contact
stored in Neo4j and writes the result back. Run from repo root with .env
(NEO4J_URI, NEO4J_USER, NEO4J_PASSWORD, HEATWAVE_DIRECTORY_PATH). Idempotent.
"""
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT / "src"))

from dotenv import load_dotenv  # noqa: E402
from neo4j import GraphDatabase  # noqa: E402

from heatwave.config import load_settings  # noqa: E402
from heatwave.domain import ExternalSourceUnavailable  # noqa: E402
from heatwave.infrastructure import (  # noqa: E402
    Neo4jWaveContactRepository,
    build_service,
    load_external_sources,
)

load_dotenv(REPO_ROOT / ".env")

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger("refresh_last_contacts")


def main() -> int:
    settings = load_settings()
    if settings.directory_path is None:
        print("HEATWAVE_DIRECTORY_PATH is not set; nothing to scan.", file=sys.stderr)
        return 1
    driver = GraphDatabase.driver(settings.neo4j_uri, auth=(settings.neo4j_user, settings.neo4j_password))
    try:
        try:
            directory, call_log = load_external_sources(settings)
        except ExternalSourceUnavailable as exc:
            print(f"Cannot read call history: {exc}", file=sys.stderr)
            return 1
        service = build_service(Neo4jWaveContactRepository(driver), directory, call_log, settings)
        contacts = service.list_tracked()
        never = 0
        for contact in contacts:
            last_contact = service.refresh_last_contact(contact)
            if last_contact is None:
                never += 1
            logger.info("%s (%s): %s", contact.name or "?", contact.directory_id, last_contact)
        print(f"Refreshed {len(contacts)} contacts ({never} never contacted).")
    finally:
        driver.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
