"""
Tests for booking field canonicalization
"""

import pytest
from datetime import date, datetime, time, timezone

from booking_reconciler.services.canonicalizer import (
    INVALID_TIME,
    canonicalize_minute_rounding,
    canonicalize_time,
    format_travel_date,
    passenger_count,
    split_instant,
)
from booking_reconciler.types import LiveBooking


class TestCanonicalizeTime:
    """Test 24-hour AM/PM labelling"""

    @pytest.mark.parametrize("hhmm,expected", [
        ("09:30", "09:30 AM"),
        ("10:15", "10:15 AM"),
        ("14:45", "14:45 PM"),
        ("00:05", "00:05 AM"),
        ("11:59", "11:59 AM"),
        ("12:00", "12:00 PM"),
        ("23:55", "23:55 PM"),
    ])
    def test_labels(self, hhmm, expected):
        assert canonicalize_time(hhmm) == expected

    def test_split_instant(self):
        assert split_instant("2024-05-01T09:30:00") == ("2024-05-01", "09:30")


class TestMinuteRounding:
    """Test coarse minute rounding in the comparison timezone"""

    @pytest.mark.parametrize("utc_instant,expected", [
        (datetime(2024, 5, 1, 3, 42), "09:13 AM"),   # minute 12 -> 13
        (datetime(2024, 5, 1, 3, 40), "09:10 AM"),   # minute 10 kept
        (datetime(2024, 5, 1, 3, 45), "09:15 AM"),   # minute 15 kept
        (datetime(2024, 5, 1, 3, 33), "09:04 AM"),   # minute 03 -> 04
        (datetime(2024, 5, 1, 4, 29), "10:00 AM"),   # minute 59 carries into the hour
        (datetime(2024, 5, 1, 6, 29), "12:00 PM"),   # carry across noon
    ])
    def test_rounding_in_kolkata(self, utc_instant, expected):
        assert canonicalize_minute_rounding(utc_instant, "Asia/Kolkata") == expected

    def test_aware_instant_is_converted(self):
        instant = datetime(2024, 5, 1, 14, 12, tzinfo=timezone.utc)
        assert canonicalize_minute_rounding(instant, "UTC") == "14:13 PM"

    def test_carry_across_midnight(self):
        instant = datetime(2024, 5, 1, 23, 59, tzinfo=timezone.utc)
        assert canonicalize_minute_rounding(instant, "UTC") == "00:00 AM"

    def test_iso_string_instant(self):
        assert canonicalize_minute_rounding("2024-05-01T04:00:00Z", "Asia/Kolkata") == "09:30 AM"

    def test_time_only_value(self):
        assert canonicalize_minute_rounding(time(8, 27), "UTC") == "08:28 AM"

    @pytest.mark.parametrize("value", [None, "", "not a time", "10:30", 42])
    def test_unparseable_values_never_match(self, value):
        assert canonicalize_minute_rounding(value, "Asia/Kolkata") == INVALID_TIME


class TestTravelDateAndPassengers:
    """Test travel date formatting and passenger counting"""

    @pytest.mark.parametrize("value,expected", [
        (datetime(2024, 5, 1, 0, 0), "2024-05-01"),
        (date(2024, 12, 31), "2024-12-31"),
        ("2024-05-01", "2024-05-01"),
        ("2024-05-01T18:30:00Z", "2024-05-01"),
    ])
    def test_format_travel_date(self, value, expected):
        assert format_travel_date(value) == expected

    def test_passenger_count(self):
        booking = LiveBooking(passengers={"A": {}, "B": {}, "C": {}}, journey_count=1)
        assert passenger_count(booking) == 3

    def test_passenger_count_empty(self):
        assert passenger_count(LiveBooking()) == 0
