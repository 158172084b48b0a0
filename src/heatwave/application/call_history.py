"""Find the most recent qualifying call with any of a contact's phone numbers."""

import logging
from collections.abc import Iterable

from heatwave.application.dto import CallRecord, CallType
from heatwave.application.ports import CallLog
from heatwave.domain import normalize_number, normalize_numbers

logger = logging.getLogger(__name__)

# Calls shorter than this (seconds) do not count as keeping in touch.
DEFAULT_MIN_DURATION = 120


class CallHistoryScanner:
    """Stateless, read-only scan of the call log."""

    def __init__(self, call_log: CallLog, *, default_min_duration: int = DEFAULT_MIN_DURATION) -> None:
        self._call_log = call_log
        self._default_min_duration = default_min_duration

    def most_recent_contact(
        self,
        phone_numbers: Iterable[str],
        min_duration_seconds: int | None = None,
        exclude_missed: bool = True,
    ) -> int | None:
        """Return the timestamp of the newest qualifying call, or None for never.

        A call qualifies when it lasted at least min_duration_seconds, is not
        missed (when exclude_missed) and its normalized number is one of the
        normalized candidates. No candidates means no scan at all.
        """
        candidates = normalize_numbers(phone_numbers)
        if not candidates:
            return None
        if min_duration_seconds is None:
            min_duration_seconds = self._default_min_duration

        def qualifies(call: CallRecord) -> bool:
            if call.duration < min_duration_seconds:
                return False
            if exclude_missed and call.call_type == CallType.MISSED:
                return False
            return normalize_number(call.number) in candidates

        latest = None
        for call in self._call_log.query(qualifies):
            if latest is None or call.timestamp > latest:
                latest = call.timestamp
        logger.debug("Scanned call log for %d numbers: latest=%s", len(candidates), latest)
        return latest
