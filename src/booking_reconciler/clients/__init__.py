"""
API clients for external services
"""

from .reservation_api_client import ReservationAPIClient, ReservationAPIError

__all__ = [
    "ReservationAPIClient",
    "ReservationAPIError",
]
