"""
Reservation API interface definitions
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class ReservationAPIInterface(ABC):
    """Interface for the reservation API operations the reconciler needs"""

    @abstractmethod
    async def fetch_token(self) -> str:
        """Request a bearer token; returns an empty string when none was issued"""
        pass

    @abstractmethod
    async def lookup_booking(self, pnr: str, token: str, identity: str) -> Optional[Dict[str, Any]]:
        """Look up a booking by PNR and contact identity; returns the booking object or None"""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release underlying connections"""
        pass
