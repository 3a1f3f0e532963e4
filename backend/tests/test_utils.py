"""Unit tests for `app.utils`.

Checks `sanitize` (HTML tag removal, control character stripping, whitespace
normalization), `strip_control_chars` and `normalize_timestamp`. These are
small, deterministic unit tests that do not require DB or network access.
"""

from datetime import datetime, timedelta, timezone

import pytest

from app.utils import new_id, normalize_timestamp, sanitize, strip_control_chars


# Removes HTML tags
def test_sanitize_removes_html_tags():
    assert sanitize("<b>Hello</b>") == "Hello"


# Removes control chars and normalizes whitespace (tabs/newlines -> single spaces)
def test_sanitize_removes_control_chars_and_normalizes_whitespace():
    s = "a\x01b\t\tc\n\n  d"
    assert sanitize(s) == "ab c d"


# Collapses multiple spaces and trims ends
def test_sanitize_trims_and_collapses_spaces():
    assert sanitize("  foo   bar  ") == "foo bar"


# Empty string remains empty
def test_sanitize_empty_string():
    assert sanitize("") == ""


# Free text keeps brackets, newlines and repeated spaces
def test_strip_control_chars_keeps_layout():
    s = "RAM < 8GB\x00, SSD > 256GB\r\nPort:\x1b  2x HDMI\t\x7f"
    assert strip_control_chars(s) == "RAM < 8GB, SSD > 256GB\r\nPort:  2x HDMI\t"


def test_normalize_timestamp_converts_offsets_to_utc():
    ts = normalize_timestamp("2024-05-01T10:00:00+07:00")
    assert ts == datetime(2024, 5, 1, 3, 0, tzinfo=timezone.utc)
    assert ts.utcoffset() == timedelta(0)


def test_normalize_timestamp_accepts_z_suffix_and_naive_values():
    assert normalize_timestamp("2024-01-15T08:00:00Z") == datetime(2024, 1, 15, 8, 0, tzinfo=timezone.utc)
    naive = datetime(2024, 1, 15, 8, 0)
    assert normalize_timestamp(naive).tzinfo == timezone.utc


def test_normalize_timestamp_defaults_to_now():
    before = datetime.now(timezone.utc)
    assert normalize_timestamp(None) >= before


def test_normalize_timestamp_rejects_garbage():
    with pytest.raises(ValueError):
        normalize_timestamp("not a date")


def test_new_id_is_unique():
    assert len({new_id() for _ in range(100)}) == 100
