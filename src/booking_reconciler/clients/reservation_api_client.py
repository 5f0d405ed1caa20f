"""
Reservation API client for airline booking retrieval
"""

from typing import Any, Dict, Optional

import httpx
import structlog

from ..config import config
from ..interfaces.reservation_api import ReservationAPIInterface


logger = structlog.get_logger(__name__)


class ReservationAPIError(Exception):
    """Custom exception for reservation API errors; status_code is None when no response arrived"""

    def __init__(self, message: str, status_code: Optional[int] = None, error_code: str = "API_ERROR"):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(self.message)


class ReservationAPIClient(ReservationAPIInterface):
    """HTTP client for the airline reservation API"""

    def __init__(
        self,
        token_url: str = None,
        lookup_url: str = None,
        timeout: float = None,
        transport: httpx.AsyncBaseTransport = None,
    ):
        self.token_url = token_url or config.reservation_api.token_url
        self.lookup_url = lookup_url or config.reservation_api.lookup_url
        self.timeout = timeout or config.reservation_api.timeout

        self.client = httpx.AsyncClient(
            timeout=self.timeout,
            transport=transport,
            headers={
                "Content-Type": "application/json",
                "User-Agent": "BookingReconciler/1.0",
            },
        )

    async def fetch_token(self) -> str:
        """Request a bearer token from the auth endpoint"""
        try:
            response = await self.client.post(self.token_url)
            response.raise_for_status()
            data = response.json()
        except httpx.RequestError as e:
            raise ReservationAPIError(f"Connection error: {str(e)}", None, "CONNECTION_ERROR")
        except httpx.HTTPStatusError as e:
            raise ReservationAPIError(
                f"HTTP error: {e.response.status_code}", e.response.status_code, "HTTP_ERROR"
            )
        except ValueError as e:
            raise ReservationAPIError(f"Invalid token response: {str(e)}", None, "INVALID_RESPONSE")

        payload = data.get("data") if isinstance(data, dict) else None
        token = payload.get("token") if isinstance(payload, dict) else None
        if not isinstance(token, str):
            raise ReservationAPIError("Token missing from auth response", None, "INVALID_RESPONSE")
        return token

    async def lookup_booking(self, pnr: str, token: str, identity: str) -> Optional[Dict[str, Any]]:
        """Look up one booking with a single contact identity"""
        try:
            response = await self.client.post(
                self.lookup_url,
                params={"recordLocator": pnr, "emailAddress": identity},
                headers={"Authorization": token},
            )

            if response.status_code == 404:
                raise ReservationAPIError(f"PNR Not Found: {pnr}", 404, "PNR_NOT_FOUND")

            response.raise_for_status()
            body = response.json()

        except httpx.RequestError as e:
            raise ReservationAPIError(f"Connection error: {str(e)}", None, "CONNECTION_ERROR")
        except httpx.HTTPStatusError as e:
            raise ReservationAPIError(
                f"HTTP error: {e.response.status_code}", e.response.status_code, "HTTP_ERROR"
            )
        except ValueError as e:
            raise ReservationAPIError(f"Invalid booking response: {str(e)}", None, "INVALID_RESPONSE")

        if not isinstance(body, dict):
            return None

        booking = body.get("data") or body.get("bookingData")
        return booking if isinstance(booking, dict) else None

    async def close(self):
        """Close the HTTP client"""
        await self.client.aclose()
