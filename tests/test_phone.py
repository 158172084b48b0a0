"""Tests for phone number identity (normalization) and tel: URI formatting."""

from heatwave.domain import normalize_number, normalize_numbers
from heatwave.infrastructure.phone import dial_uri


def test_normalize_strips_formatting_characters():
    assert normalize_number("(555) 123-4567") == "5551234567"
    assert normalize_number("+1 (555) 123-4567") == "15551234567"
    assert normalize_number("555-123-4567") == normalize_number("5551234567")


def test_normalize_same_number_any_formatting_is_equal():
    variants = ["(555) 123-4567", "555 123 4567", "555-123-4567", "(555)1234567", "5551234567"]
    assert {normalize_number(v) for v in variants} == {"5551234567"}


def test_international_prefix_is_not_reconciled():
    # Known limitation: no country-code handling.
    assert normalize_number("+1 555 123 4567") != normalize_number("555 123 4567")


def test_normalize_keeps_other_characters():
    assert normalize_number("555.123.4567") == "555.123.4567"
    assert normalize_number("") == ""
    assert normalize_number(None) == ""


def test_normalize_numbers_drops_empty():
    assert normalize_numbers(["(555) 123-4567", "  ", "-", "5551234567"]) == {"5551234567"}


def test_dial_uri_with_country_code():
    assert dial_uri("+1 202 555 1234") == "tel:+1-202-555-1234"


def test_dial_uri_uses_default_region():
    assert dial_uri("(202) 555-1234", default_region="US") == "tel:+1-202-555-1234"


def test_dial_uri_falls_back_to_normalized_digits():
    assert dial_uri("123", default_region="US") == "tel:123"
    assert dial_uri("(555) 12", default_region=None) == "tel:55512"
