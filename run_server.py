#!/usr/bin/env python3
"""
Entry point for the booking reconciliation API server
"""

import sys
from pathlib import Path

# Add src to Python path
src_path = Path(__file__).parent / "src"
sys.path.insert(0, str(src_path))

from booking_reconciler.main import main

if __name__ == "__main__":
    main()
