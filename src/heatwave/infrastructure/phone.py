"""Phone number formatting for dialing. Matching uses heatwave.domain.normalize_number instead."""

import phonenumbers

from heatwave.domain import normalize_number


def dial_uri(raw: str, default_region: str | None = None) -> str:
    """Return an RFC 3966 tel: URI for the number.

    Use default_region when the input has no leading + (e.g. "202 555 1234"
    with default_region "US"). Numbers phonenumbers cannot parse or validate
    fall back to "tel:" plus the normalized digits.
    """
    raw = str(raw or "").strip()
    try:
        parsed = phonenumbers.parse(raw, default_region)
    except phonenumbers.NumberParseException:
        return f"tel:{normalize_number(raw)}"
    if not phonenumbers.is_valid_number(parsed):
        return f"tel:{normalize_number(raw)}"
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.RFC3966)
