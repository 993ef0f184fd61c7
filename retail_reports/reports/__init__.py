"""The report engine, its result rows and their tabular rendering."""

from .engine import ReportEngine
from .results import CategoryTotals, CustomerTotal, GenderCategoryCount, MonthlyAverage

__all__ = [
    "ReportEngine",
    "CategoryTotals",
    "CustomerTotal",
    "GenderCategoryCount",
    "MonthlyAverage",
]
