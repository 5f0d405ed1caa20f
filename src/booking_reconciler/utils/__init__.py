"""
Utility modules for booking reconciliation service
"""

from .logger import setup_logging
from .validators import validate_pnr, validate_email, normalize_pnr

__all__ = [
    "setup_logging",
    "validate_pnr",
    "validate_email",
    "normalize_pnr",
]
