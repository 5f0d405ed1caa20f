"""
Booking Reconciliation Service

Reconciles expected flight-booking records, from an uploaded spreadsheet or a
submitted list of booking references, against live booking data retrieved
from an airline reservation API.
"""

__version__ = "1.0.0"
__author__ = "Booking Operations Team"
