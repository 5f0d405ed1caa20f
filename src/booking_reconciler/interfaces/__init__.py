"""
Interface definitions for booking reconciliation components
"""

from .reservation_api import ReservationAPIInterface

__all__ = [
    "ReservationAPIInterface",
]
