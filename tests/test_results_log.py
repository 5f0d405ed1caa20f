"""
Tests for the append-only results log
"""

import asyncio

import pytest

from booking_reconciler.services.results_log import ResultsLog


class TestResultsLog:
    """Test results log appends"""

    @pytest.mark.asyncio
    async def test_appends_lines(self, tmp_path):
        path = tmp_path / "downloads" / "data.txt"
        results_log = ResultsLog(path, enabled=True)

        assert await results_log.append("first line")
        assert await results_log.append("second line")

        assert path.read_text(encoding="utf-8") == "first line\nsecond line\n"

    @pytest.mark.asyncio
    async def test_concurrent_appends_stay_whole(self, tmp_path):
        path = tmp_path / "data.txt"
        results_log = ResultsLog(path, enabled=True)

        lines = [f"PNR{index:03d} DEL BOM GOOD" for index in range(50)]
        await asyncio.gather(*(results_log.append(line) for line in lines))

        assert sorted(path.read_text(encoding="utf-8").splitlines()) == sorted(lines)

    @pytest.mark.asyncio
    async def test_disabled_log_writes_nothing(self, tmp_path):
        path = tmp_path / "data.txt"
        results_log = ResultsLog(path, enabled=False)

        assert not await results_log.append("ignored")
        assert not path.exists()

    @pytest.mark.asyncio
    async def test_write_failure_is_reported(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        results_log = ResultsLog(blocker / "data.txt", enabled=True)

        assert not await results_log.append("line")

    def test_flatten(self):
        assert ResultsLog.flatten("ABC123|DEL|BOM") == "ABC123 DEL BOM"
