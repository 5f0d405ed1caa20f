"""
Tests for spreadsheet parsing
"""

import io
from datetime import datetime

import pandas as pd
import pytest

from booking_reconciler.services.spreadsheet_reader import read_expected_rows
from booking_reconciler.types import BatchInputError


def workbook_bytes(frame: pd.DataFrame, sheet_name: str = "Sheet1") -> bytes:
    buffer = io.BytesIO()
    frame.to_excel(buffer, sheet_name=sheet_name, index=False)
    return buffer.getvalue()


class TestReadExpectedRows:
    """Test workbook to row conversion"""

    @pytest.fixture
    def frame(self):
        return pd.DataFrame([
            {
                "PNR": "ABC123", "Flight": 8123, "Pur": 2,
                "Dep": datetime(2024, 5, 1, 4, 0), "Arr": datetime(2024, 5, 1, 6, 15),
                "TravelDate": datetime(2024, 5, 1),
            },
            {
                "PNR": None, "Flight": 8124, "Pur": None,
                "Dep": datetime(2024, 5, 2, 4, 0), "Arr": datetime(2024, 5, 2, 6, 15),
                "TravelDate": datetime(2024, 5, 2),
            },
        ])

    def test_rows_keyed_by_header(self, frame):
        rows = read_expected_rows(workbook_bytes(frame), sheet_name="Sheet1", max_rows=100)

        assert len(rows) == 2
        assert rows[0]["PNR"] == "ABC123"
        assert rows[0]["Flight"] == 8123
        assert rows[0]["Pur"] == 2
        assert isinstance(rows[0]["Dep"], datetime)
        assert rows[0]["Dep"] == datetime(2024, 5, 1, 4, 0)

    def test_blank_cells_become_none(self, frame):
        rows = read_expected_rows(workbook_bytes(frame), sheet_name="Sheet1", max_rows=100)

        assert rows[1]["PNR"] is None
        assert rows[1]["Pur"] is None

    def test_max_rows(self, frame):
        rows = read_expected_rows(workbook_bytes(frame), sheet_name="Sheet1", max_rows=1)
        assert [row["PNR"] for row in rows] == ["ABC123"]

    def test_zero_max_rows_reads_nothing(self, frame):
        assert read_expected_rows(workbook_bytes(frame), sheet_name="Sheet1", max_rows=0) == []

    def test_missing_sheet(self, frame):
        with pytest.raises(BatchInputError):
            read_expected_rows(workbook_bytes(frame, "Bookings"), sheet_name="Sheet1", max_rows=100)

    def test_not_a_workbook(self):
        with pytest.raises(BatchInputError):
            read_expected_rows(b"PNR,Flight\nABC123,8123\n", sheet_name="Sheet1", max_rows=100)
