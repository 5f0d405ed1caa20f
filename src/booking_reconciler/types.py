"""
Core data types for the booking reconciliation service
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ReconciliationStatus(str, Enum):
    """Classification of an expected record against live booking data"""
    GOOD = "GOOD"
    BAD = "BAD"
    CANCELLED = "Cancelled"


class InputMode(str, Enum):
    """How the batch input was supplied"""
    REFERENCE_LIST = "reference_list"
    SPREADSHEET = "spreadsheet"


# Input Models
class ExpectedRecord(BaseModel):
    """One expected booking record, from a spreadsheet row or a bare PNR"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    pnr: Optional[str] = Field(None, alias="PNR", description="Booking reference")
    flight: Optional[Any] = Field(None, alias="Flight", description="Expected flight number")
    pur: Optional[Any] = Field(None, alias="Pur", description="Expected passenger count")
    dep: Optional[Any] = Field(None, alias="Dep", description="Expected departure instant")
    arr: Optional[Any] = Field(None, alias="Arr", description="Expected arrival instant")
    travel_date: Optional[Any] = Field(None, alias="TravelDate", description="Expected travel date")
    row_number: int = Field(0, description="Position of the record in its batch, 1-based")

    @property
    def label(self) -> str:
        """Identifier used in messages when the PNR may be absent"""
        return self.pnr or f"row {self.row_number}"


# Booking Models
class LiveBooking(BaseModel):
    """Normalized subset of a reservation API booking"""
    record_locator: Optional[str] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    departure: Optional[str] = None
    arrival: Optional[str] = None
    flight_number: Optional[str] = None
    passengers: Dict[str, Any] = Field(default_factory=dict)
    source_organization: Optional[str] = None
    email_address: Optional[str] = None
    total_charged: Optional[Any] = None
    journey_count: int = 0
    identity: Optional[str] = Field(None, description="Contact identity the lookup succeeded with")

    @property
    def is_cancelled(self) -> bool:
        """A booking without journeys has been cancelled"""
        return self.journey_count == 0

    @classmethod
    def from_booking_data(cls, data: Dict[str, Any]) -> "LiveBooking":
        """Build from the `data`/`bookingData` object of a lookup response"""
        journeys = data.get("journeys") or []
        contact = (data.get("contacts") or {}).get("P") or {}

        booking = {
            "record_locator": data.get("recordLocator"),
            "source_organization": contact.get("sourceOrganization"),
            "email_address": contact.get("emailAddress"),
            "journey_count": len(journeys),
        }

        if journeys:
            journey = journeys[0]
            designator = journey["designator"]
            booking.update(
                origin=designator["origin"],
                destination=designator["destination"],
                departure=designator["departure"],
                arrival=designator["arrival"],
                flight_number=str(journey["segments"][0]["identifier"]["identifier"]),
                passengers=data.get("passengers") or {},
                total_charged=(data.get("breakdown") or {}).get("totalCharged"),
            )

        return cls(**booking)


# Outcome Models
class RecordOutcome(BaseModel):
    """Result XOR error produced for one input record"""
    pnr: Optional[str] = None
    row_number: int = 0
    line: Optional[str] = None
    error: Optional[str] = None
    status: Optional[ReconciliationStatus] = None

    @model_validator(mode="after")
    def check_exactly_one(self) -> "RecordOutcome":
        if (self.line is None) == (self.error is None):
            raise ValueError("Record outcome must carry exactly one of line or error")
        return self

    @property
    def is_error(self) -> bool:
        return self.error is not None


class BatchOutcome(BaseModel):
    """Aggregated reconciliation output for a batch"""
    results: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results) + len(self.errors)


# Custom Exceptions
class ReconciliationError(Exception):
    """Base exception for booking reconciliation"""
    pass


class AuthExhausted(ReconciliationError):
    """No bearer token could be obtained within the attempt ceiling"""
    def __init__(self, attempts: int, reason: str = "Maximum number of attempts reached"):
        self.attempts = attempts
        super().__init__(f"{reason} ({attempts} attempts)")


class BookingNotFound(ReconciliationError):
    """Every lookup identity returned 404 for the PNR"""
    status_code = 404

    def __init__(self, pnr: str):
        self.pnr = pnr
        super().__init__(f"PNR Not Found: {pnr}")


class UpstreamError(ReconciliationError):
    """Unrecovered reservation API failure; status_code is None without an HTTP response"""
    def __init__(self, message: str, pnr: Optional[str] = None, status_code: Optional[int] = None):
        self.pnr = pnr
        self.status_code = status_code
        super().__init__(message)


class RecordValidationError(ReconciliationError):
    """Input record is missing or has an invalid required field"""
    def __init__(self, message: str, field: str = "PNR"):
        self.field = field
        super().__init__(message)


class BatchInputError(ReconciliationError):
    """Batch cannot be processed at all (no input, unreadable upload)"""
    pass
