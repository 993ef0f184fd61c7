"""
Shared utilities for the reporting package.

Keep helpers here small and dependency-free so they can be used by the
loader, the engine and the CLI alike.
"""

from .time_buckets import SHIFTS, month_bounds, parse_date, shift_for_hour

__all__ = ["SHIFTS", "month_bounds", "parse_date", "shift_for_hour"]
