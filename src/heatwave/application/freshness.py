"""
Staleness score: elapsed time since last contact divided by the wave's wavelength.
Below 1.0 the contact is within its interval; 1.0 and above it is overdue.
"""

import math
import time
from collections.abc import Iterable, Mapping

from heatwave.application.dto import RankedContact
from heatwave.domain import Contact, Wave, validate_wavelength

# Score of a contact that was never reached: above every finite score.
NEVER = math.inf


def now_timestamp() -> int:
    return int(time.time())


def score(last_contact: int | None, wavelength: int, now: int) -> float:
    """Return (now - last_contact) / wavelength, or NEVER when last_contact is None.

    Raises InvalidInterval for a wavelength that is not a positive int.
    """
    validate_wavelength(wavelength)
    if last_contact is None:
        return NEVER
    return (now - last_contact) / wavelength


def rank(
    contacts: Iterable[Contact],
    waves_by_id: Mapping[str, Wave],
    now: int,
) -> list[RankedContact]:
    """Order contacts most overdue first.

    Contacts without a wave (or pointing at an unknown one) have no score and
    come after every scored contact. Order among equal scores is unspecified.
    """
    scored: list[RankedContact] = []
    unscored: list[RankedContact] = []
    for contact in contacts:
        wave = waves_by_id.get(contact.wave_id) if contact.wave_id else None
        if wave is None or wave.wavelength is None:
            unscored.append(RankedContact(contact=contact, wave=None, score=None))
            continue
        scored.append(
            RankedContact(
                contact=contact,
                wave=wave,
                score=score(contact.last_contact, wave.wavelength, now),
            )
        )
    scored.sort(key=lambda r: r.score, reverse=True)
    return scored + unscored
