"""
Retail sales reporting: load validated sales records and run the standard
retail reports over an immutable snapshot.
"""

from .errors import EmptyInputError, InvalidParameterError, InvalidRecordError, ReportError
from .models import SalesRecord
from .reports.engine import ReportEngine

__all__ = [
    "EmptyInputError",
    "InvalidParameterError",
    "InvalidRecordError",
    "ReportEngine",
    "ReportError",
    "SalesRecord",
]
