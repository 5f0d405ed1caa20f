"""
Append-only log of processed booking lines.

Writes from concurrent record tasks are serialized by a lock; the file write
itself runs in a worker thread so the event loop keeps serving other tasks.
"""

import asyncio
from pathlib import Path
from typing import Union

import structlog

from ..config import config


logger = structlog.get_logger(__name__)


class ResultsLog:
    """Appends one line per processed record to a text file"""

    def __init__(self, path: Union[str, Path] = None, enabled: bool = None):
        self.path = Path(path or config.results_log.path)
        self.enabled = config.results_log.enabled if enabled is None else enabled
        self._lock = asyncio.Lock()

    @staticmethod
    def flatten(line: str) -> str:
        """Pipe separators become spaces in the log"""
        return line.replace("|", " ")

    async def append(self, line: str) -> bool:
        """
        Append a line to the log.

        Returns:
            True when the line was written
        """
        if not self.enabled:
            return False

        try:
            async with self._lock:
                await asyncio.to_thread(self._write, f"{line}\n")
        except OSError as e:
            logger.warning("Failed to append to results log", path=str(self.path), error=str(e))
            return False
        return True

    def _write(self, text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(text)
