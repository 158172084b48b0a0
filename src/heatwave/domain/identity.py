"""Phone-number identity: two numbers are the same person iff their normalized forms are equal."""

_FORMATTING_CHARS = str.maketrans("", "", "-+() ")


def normalize_number(raw: str) -> str:
    """Strip '-', '+', '(', ')' and spaces from a raw phone number.

    No locale-aware parsing: "+1 555 123 4567" normalizes to "15551234567"
    and does not match "555 123 4567". That is a known limitation.
    """
    return (raw or "").translate(_FORMATTING_CHARS)


def normalize_numbers(raws) -> set[str]:
    """Normalize every number, dropping ones that normalize to nothing."""
    return {n for n in (normalize_number(r) for r in raws) if n}
