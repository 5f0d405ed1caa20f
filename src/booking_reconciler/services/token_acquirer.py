"""
Bearer token acquisition with a bounded retry ceiling.

An empty token is retried only while attempts remain under the ceiling.
A transport or HTTP failure is always retried without that check; the attempt
counter still advances, and a separate transport ceiling bounds the loop.
"""

import asyncio

import structlog

from ..clients.reservation_api_client import ReservationAPIError
from ..config import config
from ..interfaces.reservation_api import ReservationAPIInterface
from ..types import AuthExhausted


logger = structlog.get_logger(__name__)


class TokenAcquirer:
    """Obtains one bearer credential per batch"""

    def __init__(
        self,
        client: ReservationAPIInterface,
        transport_attempts: int = None,
        retry_delay_ms: int = None,
    ):
        self.client = client
        self.transport_attempts = (
            config.reservation_api.token_transport_attempts if transport_attempts is None else transport_attempts
        )
        self.retry_delay_ms = (
            config.reservation_api.retry_delay if retry_delay_ms is None else retry_delay_ms
        )

    async def acquire(self, max_attempts: int = None) -> str:
        """
        Request a token until a non-empty one is issued.

        Args:
            max_attempts: Ceiling on consecutive empty-token responses

        Returns:
            The bearer token

        Raises:
            AuthExhausted: when the ceiling is reached
        """
        if max_attempts is None:
            max_attempts = config.reservation_api.token_max_attempts
        attempt = 1
        transport_failures = 0

        while True:
            try:
                token = await self.client.fetch_token()
            except ReservationAPIError as e:
                transport_failures += 1
                logger.warning(
                    "Trying to fetch authorization key",
                    attempt=attempt,
                    error=e.message,
                    status_code=e.status_code,
                )
                if transport_failures >= self.transport_attempts:
                    raise AuthExhausted(transport_failures, "Authorization endpoint unreachable") from e
                attempt += 1
                await self._pause()
                continue

            if token:
                logger.debug("Authorization key acquired", attempt=attempt)
                return token

            if attempt < max_attempts:
                logger.warning("Empty authorization key received", attempt=attempt)
                attempt += 1
                await self._pause()
                continue

            logger.error("Authorization key attempts exhausted", attempts=attempt)
            raise AuthExhausted(attempt)

    async def _pause(self) -> None:
        await asyncio.sleep(self.retry_delay_ms / 1000)
