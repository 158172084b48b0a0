"""Load a directory and call-history snapshot from YAML into the in-memory external sources.

Format:

    contacts:
      - id: "1"
        name: Alice
        raw:
          - id: "10"
            phones:
              - number: "(555) 123-4567"
                primary: true
    calls:
      - number: "5551234567"
        timestamp: 1700000000
        duration: 300
        type: outgoing
"""

from pathlib import Path

import yaml

from heatwave.application.dto import CallRecord, CallType, PhoneRecord
from heatwave.domain import ExternalSourceUnavailable
from heatwave.infrastructure.external import InMemoryCallLog, InMemoryContactDirectory


def _phone(item) -> PhoneRecord:
    if isinstance(item, dict):
        if "number" not in item:
            raise ValueError("Phone entries must have 'number'")
        return PhoneRecord(number=str(item["number"]), is_primary=bool(item.get("primary", False)))
    return PhoneRecord(number=str(item))


def _call(item: dict) -> CallRecord:
    for key in ("number", "timestamp", "duration", "type"):
        if key not in item:
            raise ValueError(f"Call entries must have '{key}'")
    try:
        call_type = CallType(str(item["type"]).lower())
    except ValueError:
        raise ValueError(f"Unknown call type {item['type']!r}") from None
    return CallRecord(
        number=str(item["number"]),
        timestamp=int(item["timestamp"]),
        duration=int(item["duration"]),
        call_type=call_type,
    )


def parse_snapshot(data: dict) -> tuple[InMemoryContactDirectory, InMemoryCallLog]:
    """Build the in-memory directory and call log from a loaded snapshot dict."""
    if not isinstance(data, dict):
        raise ValueError("Snapshot YAML must be a dict")
    directory = InMemoryContactDirectory()
    for entry in data.get("contacts") or []:
        if not isinstance(entry, dict) or "id" not in entry:
            raise ValueError("Every contact must have 'id'")
        directory_id = str(entry["id"])
        directory.add_entry(directory_id, str(entry.get("name") or ""))
        for raw in entry.get("raw") or []:
            if not isinstance(raw, dict) or "id" not in raw:
                raise ValueError(f"Contact '{directory_id}' has a raw record without 'id'")
            directory.add_raw(directory_id, str(raw["id"]), [_phone(p) for p in raw.get("phones") or []])
    call_log = InMemoryCallLog(_call(item) for item in data.get("calls") or [])
    return directory, call_log


def load_snapshot(path: Path) -> tuple[InMemoryContactDirectory, InMemoryCallLog]:
    """Read and parse a snapshot file. An unreadable file means the sources are unavailable."""
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ExternalSourceUnavailable("directory snapshot", str(exc)) from exc
    return parse_snapshot(yaml.safe_load(raw) or {})
