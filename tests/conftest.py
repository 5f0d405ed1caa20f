"""
Shared fixtures for booking reconciliation tests
"""

import copy
from datetime import datetime

import pytest


BOOKING_DATA = {
    "recordLocator": "ABC123",
    "journeys": [
        {
            "designator": {
                "origin": "DEL",
                "destination": "BOM",
                "departure": "2024-05-01T09:30:00",
                "arrival": "2024-05-01T11:45:00",
            },
            "segments": [{"identifier": {"identifier": "8123"}}],
        }
    ],
    "passengers": {
        "MCFBRFQ-": {"name": {"first": "Asha", "last": "Rao"}},
        "MCFBRFQ-2": {"name": {"first": "Ravi", "last": "Rao"}},
    },
    "contacts": {"P": {"sourceOrganization": "AGT001", "emailAddress": "airlines@example.com"}},
    "breakdown": {"totalCharged": 10450},
}


@pytest.fixture
def booking_data():
    """Factory for lookup response booking objects"""
    def make(record_locator: str = "ABC123", cancelled: bool = False, **overrides):
        data = copy.deepcopy(BOOKING_DATA)
        data["recordLocator"] = record_locator
        if cancelled:
            data["journeys"] = []
        data.update(overrides)
        return data
    return make


@pytest.fixture
def spreadsheet_row():
    """Factory for spreadsheet rows matching BOOKING_DATA in Asia/Kolkata"""
    def make(pnr: str = "ABC123", **overrides):
        row = {
            "PNR": pnr,
            "Flight": 8123,
            "Pur": 2,
            "Dep": datetime(2024, 5, 1, 4, 0),   # 09:30 IST
            "Arr": datetime(2024, 5, 1, 6, 15),  # 11:45 IST
            "TravelDate": datetime(2024, 5, 1),
        }
        row.update(overrides)
        return row
    return make
