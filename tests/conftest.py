"""Shared in-memory fixtures: a small directory, call log and service."""

import pytest

from heatwave.application import (
    AliasResolver,
    CallHistoryScanner,
    CallRecord,
    CallType,
    HeatwaveService,
    PhoneRecord,
)
from heatwave.infrastructure import (
    InMemoryCallLog,
    InMemoryContactDirectory,
    InMemoryWaveContactRepository,
)


@pytest.fixture
def directory() -> InMemoryContactDirectory:
    d = InMemoryContactDirectory()
    # Alice is two merged raw records, one of them name-only.
    d.add_entry("1", "Alice")
    d.add_raw("1", "10", ["(555) 123-4567"])
    d.add_raw("1", "11")
    # Bob has a work and a primary mobile number on separate records.
    d.add_entry("2", "Bob")
    d.add_raw("2", "20", ["555-000-1111"])
    d.add_raw("2", "21", [PhoneRecord(number="+1 (555) 999-2222", is_primary=True)])
    # Carol has no phone number at all.
    d.add_entry("3", "Carol")
    d.add_raw("3", "30")
    return d


@pytest.fixture
def call_log() -> InMemoryCallLog:
    return InMemoryCallLog(
        [
            CallRecord(number="5551234567", timestamp=1_000, duration=300, call_type=CallType.OUTGOING),
            CallRecord(number="555 123 4567", timestamp=5_000, duration=30, call_type=CallType.OUTGOING),
            CallRecord(number="5551234567", timestamp=6_000, duration=400, call_type=CallType.MISSED),
            CallRecord(number="15559992222", timestamp=3_000, duration=600, call_type=CallType.INCOMING),
        ]
    )


@pytest.fixture
def repo() -> InMemoryWaveContactRepository:
    return InMemoryWaveContactRepository()


@pytest.fixture
def service(repo, directory, call_log) -> HeatwaveService:
    return HeatwaveService(
        repo,
        directory,
        AliasResolver(directory, directory),
        CallHistoryScanner(call_log),
        clock=lambda: 10_000,
    )
