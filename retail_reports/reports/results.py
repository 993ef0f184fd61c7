"""Typed rows returned by ReportEngine operations."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class CategoryTotals:
    total_sales: Decimal
    order_count: int


@dataclass(frozen=True)
class GenderCategoryCount:
    category: str
    gender: str
    count: int


@dataclass(frozen=True)
class MonthlyAverage:
    year: int
    month: int
    average_sale: Decimal


@dataclass(frozen=True)
class CustomerTotal:
    customer_id: int
    total_sales: Decimal
