"""
Reconciliation of expected records against live bookings
"""

import json
from dataclasses import dataclass
from typing import Any

from ..config import config
from ..types import ExpectedRecord, LiveBooking, ReconciliationStatus
from .canonicalizer import (
    canonicalize_minute_rounding,
    canonicalize_time,
    format_travel_date,
    passenger_count,
    split_instant,
)


def serialize_value(value: Any) -> str:
    """JSON-serialize a cell value; integral floats count as integers"""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return json.dumps(value, default=str)


def display_value(value: Any) -> str:
    """String form of a cell or API value; integral floats print as integers"""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return "" if value is None else str(value)


@dataclass(frozen=True)
class CanonicalLive:
    """Live booking fields in canonical comparable form"""
    flight_number: str
    passenger_count: int
    departure_date: str
    departure_time: str
    arrival_time: str

    @classmethod
    def from_booking(cls, booking: LiveBooking) -> "CanonicalLive":
        dep_date, dep_hhmm = split_instant(booking.departure)
        _, arr_hhmm = split_instant(booking.arrival)
        return cls(
            flight_number=booking.flight_number,
            passenger_count=passenger_count(booking),
            departure_date=dep_date,
            departure_time=canonicalize_time(dep_hhmm),
            arrival_time=canonicalize_time(arr_hhmm),
        )


@dataclass(frozen=True)
class CanonicalExpected:
    """Expected record fields in canonical comparable form"""
    flight: str
    pur: str
    travel_date: str
    departure_time: str
    arrival_time: str

    @classmethod
    def from_record(cls, record: ExpectedRecord, zone: str) -> "CanonicalExpected":
        return cls(
            flight=display_value(record.flight),
            pur=serialize_value(record.pur),
            travel_date=format_travel_date(record.travel_date),
            departure_time=canonicalize_minute_rounding(record.dep, zone),
            arrival_time=canonicalize_minute_rounding(record.arr, zone),
        )


class Reconciler:
    """Classifies expected records and renders result lines"""

    def __init__(self, timezone: str = None):
        self.timezone = timezone or config.reconciliation.timezone

    def classify(self, expected: ExpectedRecord, live: LiveBooking) -> ReconciliationStatus:
        """GOOD only when all five canonical fields match exactly"""
        if live.is_cancelled:
            return ReconciliationStatus.CANCELLED

        return self._compare(
            CanonicalExpected.from_record(expected, self.timezone),
            CanonicalLive.from_booking(live),
        )

    @staticmethod
    def _compare(expected: CanonicalExpected, live: CanonicalLive) -> ReconciliationStatus:
        matches = (
            expected.flight == live.flight_number
            and expected.pur == serialize_value(live.passenger_count)
            and expected.travel_date == live.departure_date
            and expected.departure_time == live.departure_time
            and expected.arrival_time == live.arrival_time
        )
        return ReconciliationStatus.GOOD if matches else ReconciliationStatus.BAD

    def reconciliation_line(self, expected: ExpectedRecord, live: LiveBooking) -> str:
        """Pipe-delimited expected-vs-live line for spreadsheet input"""
        pnr = expected.pnr
        if live.is_cancelled:
            return f"{pnr} is Cancelled"

        old = CanonicalExpected.from_record(expected, self.timezone)
        new = CanonicalLive.from_booking(live)
        status = self._compare(old, new)

        fields = [
            pnr,
            f"{live.origin} {live.destination}",
            old.flight,
            new.flight_number,
            old.pur,
            str(new.passenger_count),
            old.travel_date,
            new.departure_date,
            old.departure_time,
            new.departure_time,
            old.arrival_time,
            new.arrival_time,
            status.value,
        ]
        return "|".join(fields)

    @staticmethod
    def retrieval_line(pnr: str, live: LiveBooking) -> str:
        """Pipe-delimited booking summary for bare reference input"""
        locator = live.record_locator or pnr
        if live.is_cancelled:
            return f"{locator}| is cancelled"

        new = CanonicalLive.from_booking(live)
        fields = [
            locator,
            live.origin,
            live.destination,
            new.flight_number,
            new.departure_date,
            new.departure_time,
            new.arrival_time,
            f"PAX {new.passenger_count}",
            display_value(live.total_charged),
            display_value(live.source_organization),
            display_value(live.email_address),
        ]
        return "|".join(fields)
