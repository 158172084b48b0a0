"""Tests for loading the directory/call-history snapshot from YAML."""

import pytest

from heatwave.application import CallHistoryScanner, CallType
from heatwave.domain import ExternalSourceUnavailable
from heatwave.infrastructure import load_snapshot, parse_snapshot

SNAPSHOT = """
contacts:
  - id: 1
    name: Alice
    raw:
      - id: 10
        phones:
          - number: "(555) 123-4567"
            primary: true
      - id: 11
  - id: 2
    name: Bob
    raw:
      - id: 20
        phones: ["555-000-1111"]
calls:
  - number: "5551234567"
    timestamp: 1700000000
    duration: 300
    type: outgoing
  - number: "5550001111"
    timestamp: 1700000500
    duration: 10
    type: Incoming
"""


def test_load_snapshot(tmp_path) -> None:
    path = tmp_path / "snapshot.yaml"
    path.write_text(SNAPSHOT, encoding="utf-8")
    directory, call_log = load_snapshot(path)

    assert directory.get("1").name == "Alice"
    assert directory.raw_ids("1") == {"10", "11"}
    assert directory.numbers("10")[0].is_primary is True
    assert directory.numbers("20")[0].number == "555-000-1111"
    assert [e.name for e in directory.search()] == ["Alice", "Bob"]

    assert len(call_log) == 2
    newest = call_log.query(lambda c: True)[0]
    assert newest.call_type == CallType.INCOMING
    assert CallHistoryScanner(call_log).most_recent_contact({"(555) 123-4567"}) == 1700000000


def test_missing_file_is_unavailable(tmp_path) -> None:
    with pytest.raises(ExternalSourceUnavailable):
        load_snapshot(tmp_path / "missing.yaml")


def test_empty_snapshot() -> None:
    directory, call_log = parse_snapshot({})
    assert directory.search() == []
    assert len(call_log) == 0


@pytest.mark.parametrize(
    "data, message",
    [
        ({"contacts": [{"name": "No id"}]}, "id"),
        ({"contacts": [{"id": 1, "raw": [{"phones": []}]}]}, "raw record"),
        ({"calls": [{"number": "1", "timestamp": 1, "duration": 1}]}, "type"),
        ({"calls": [{"number": "1", "timestamp": 1, "duration": 1, "type": "voicemail"}]}, "voicemail"),
        ([], "dict"),
    ],
)
def test_invalid_snapshot(data, message) -> None:
    with pytest.raises(ValueError, match=message):
        parse_snapshot(data)
