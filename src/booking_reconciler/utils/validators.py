"""
Validation utilities
"""

import re
from typing import Any, Optional


def normalize_pnr(pnr: Any) -> Optional[str]:
    """
    Normalize a raw PNR cell or list element.
    Returns None when no usable value is present.
    """
    if pnr is None:
        return None

    pnr = str(pnr).strip()
    return pnr or None


def validate_pnr(pnr: str) -> bool:
    """
    Validate PNR format
    PNR should be 5-8 alphanumeric characters
    """
    if not pnr:
        return False

    pattern = r'^[A-Za-z0-9]{5,8}$'
    return bool(re.match(pattern, pnr.strip()))


def validate_email(email: str) -> bool:
    """
    Validate email format
    """
    if not email:
        return False

    # Basic email validation pattern
    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return bool(re.match(pattern, email.strip()))
