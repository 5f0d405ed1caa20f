"""
Booking retrieval with ordered contact-identity fallback
"""

from typing import Sequence

import structlog

from ..clients.reservation_api_client import ReservationAPIError
from ..interfaces.reservation_api import ReservationAPIInterface
from ..types import BookingNotFound, LiveBooking, UpstreamError


logger = structlog.get_logger(__name__)


class IdentityFallbackRetriever:
    """
    Queries the lookup endpoint once per identity, in order, until one
    returns usable booking data.

    A 404 moves on to the next identity. Any other failure stops the
    search immediately. A well-formed booking without journeys is a
    cancelled booking and also ends the search.
    """

    def __init__(self, client: ReservationAPIInterface):
        self.client = client

    async def retrieve(self, pnr: str, token: str, identities: Sequence[str]) -> LiveBooking:
        malformed = 0

        for identity in identities:
            try:
                data = await self.client.lookup_booking(pnr, token, identity)
            except ReservationAPIError as e:
                if e.status_code == 404:
                    logger.debug("Booking not found for identity", pnr=pnr, identity=identity)
                    continue
                logger.warning(
                    "Booking lookup failed",
                    pnr=pnr,
                    identity=identity,
                    status_code=e.status_code,
                    error=e.message,
                )
                raise UpstreamError(e.message, pnr=pnr, status_code=e.status_code) from e

            if not data or not (data.get("journeys") is not None or data.get("recordLocator")):
                malformed += 1
                logger.warning("Invalid booking response", pnr=pnr, identity=identity)
                continue

            try:
                booking = LiveBooking.from_booking_data(data).model_copy(update={"identity": identity})
            except (KeyError, IndexError, TypeError) as e:
                raise UpstreamError(f"Malformed booking data: {e!r}", pnr=pnr) from e

            logger.debug(
                "Booking retrieved",
                pnr=pnr,
                identity=identity,
                cancelled=booking.is_cancelled,
            )
            return booking

        if malformed:
            raise UpstreamError("All email attempts failed or invalid response", pnr=pnr)

        raise BookingNotFound(pnr)
