"""Tests for restohub.core.timestamps."""

import re
from datetime import UTC, datetime, timedelta, timezone

import pytest

from restohub.core.timestamps import normalize_iso8601, parse_iso8601, to_iso8601, utc_now_iso

CANONICAL = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


class TestTimestamps:
    def test_utc_now_iso_shape(self):
        assert CANONICAL.match(utc_now_iso())

    def test_to_iso8601_milliseconds(self):
        dt = datetime(2025, 1, 2, 3, 4, 5, 678901, tzinfo=UTC)
        assert to_iso8601(dt) == "2025-01-02T03:04:05.678Z"

    def test_to_iso8601_converts_offsets(self):
        dt = datetime(2025, 1, 1, 2, 0, tzinfo=timezone(timedelta(hours=2)))
        assert to_iso8601(dt) == "2025-01-01T00:00:00.000Z"

    def test_naive_taken_as_utc(self):
        assert to_iso8601(datetime(2025, 1, 1)) == "2025-01-01T00:00:00.000Z"

    def test_parse_accepts_z(self):
        assert parse_iso8601("2025-01-01T00:00:00Z") == datetime(2025, 1, 1, tzinfo=UTC)

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("2025-01-01T00:00:00Z", "2025-01-01T00:00:00.000Z"),
            ("2025-01-01T02:00:00+01:00", "2025-01-01T01:00:00.000Z"),
            ("2025-01-01T00:00:00.5Z", "2025-01-01T00:00:00.500Z"),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_iso8601(raw) == expected

    @pytest.mark.parametrize("raw", ["", "yesterday", "2025-13-01T00:00:00Z"])
    def test_invalid(self, raw):
        with pytest.raises(ValueError):
            parse_iso8601(raw)

    @pytest.mark.parametrize("raw", ["2025-01-01", "2025-01-01T00:00:00", "2025-01-01 00:00:00Z"])
    def test_date_only_naive_and_space_separated_rejected(self, raw):
        with pytest.raises(ValueError):
            parse_iso8601(raw)

    @pytest.mark.parametrize("raw", ["0001-01-01T00:00:00+01:00", "9999-12-31T23:00:00-05:00"])
    def test_out_of_range_after_utc_conversion(self, raw):
        with pytest.raises(ValueError, match="out of range"):
            normalize_iso8601(raw)
