"""
Services module initialization
"""

from .token_acquirer import TokenAcquirer
from .identity_retriever import IdentityFallbackRetriever
from .canonicalizer import (
    canonicalize_time,
    canonicalize_minute_rounding,
    format_travel_date,
    passenger_count,
)
from .reconciler import Reconciler
from .results_log import ResultsLog
from .spreadsheet_reader import read_expected_rows
from .batch_orchestrator import BatchOrchestrator, adapt_reference, adapt_spreadsheet_row

__all__ = [
    'TokenAcquirer',
    'IdentityFallbackRetriever',
    'canonicalize_time',
    'canonicalize_minute_rounding',
    'format_travel_date',
    'passenger_count',
    'Reconciler',
    'ResultsLog',
    'read_expected_rows',
    'BatchOrchestrator',
    'adapt_reference',
    'adapt_spreadsheet_row',
]
