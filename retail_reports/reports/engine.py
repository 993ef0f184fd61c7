"""
Report engine over an immutable snapshot of sales records.

Every report is a read-only filter -> aggregate -> order pass over a pandas
DataFrame mirrored from the snapshot. Money columns hold Decimal objects, so
sums and means of ``total_sale`` are computed per group in Python rather than
with pandas' float aggregations.
"""

from dataclasses import asdict, fields
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from numbers import Integral, Real

import pandas as pd

from retail_reports.errors import EmptyInputError, InvalidParameterError
from retail_reports.logger import setup_logger
from retail_reports.models import SalesRecord
from retail_reports.reports.results import (
    CategoryTotals,
    CustomerTotal,
    GenderCategoryCount,
    MonthlyAverage,
)
from retail_reports.utils.time_buckets import SHIFTS, month_bounds, parse_date, shift_for_hour

logger = setup_logger("reports.engine")

RECORD_COLUMNS = [f.name for f in fields(SalesRecord)]
DEFAULT_TOP_CUSTOMERS = 5

_ZERO = Decimal("0")
_CENTS = Decimal("0.01")


def _decimal_sum(values) -> Decimal:
    return sum(values, _ZERO)


def _check_category(category) -> str:
    if not isinstance(category, str) or not category:
        raise InvalidParameterError(f"category must be a non-empty string, got {category!r}")
    return category


def _check_int(value, name: str, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidParameterError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidParameterError(f"{name} must be >= {minimum}, got {value}")
    return int(value)


def _check_amount(value, name: str) -> Decimal:
    if isinstance(value, bool):
        raise InvalidParameterError(f"{name} must be numeric, got {value!r}")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (Real, str)):
        try:
            amount = Decimal(str(value))
        except InvalidOperation as e:
            raise InvalidParameterError(f"{name} must be numeric, got {value!r}") from e
    else:
        raise InvalidParameterError(f"{name} must be numeric, got {value!r}")

    if not amount.is_finite() or amount < 0:
        raise InvalidParameterError(f"{name} must be a finite non-negative amount, got {value!r}")
    return amount


class ReportEngine:
    """
    Runs the retail sales reports over a read-only snapshot of records.

    The snapshot is taken once at construction and never changes, so a single
    engine can be shared between threads. To report on fresh data, build a new
    engine.
    """

    def __init__(self, records):
        if records is None:
            raise InvalidParameterError("records must not be None")

        snapshot = tuple(records)
        for record in snapshot:
            if not isinstance(record, SalesRecord):
                raise InvalidParameterError(
                    f"ReportEngine expects SalesRecord items, got {type(record).__name__}"
                )

        self._records = snapshot
        self._frame = self._build_frame(snapshot)
        logger.info(f"Report engine ready: {len(snapshot)} records in snapshot")

    @staticmethod
    def _build_frame(records: tuple) -> pd.DataFrame:
        frame = pd.DataFrame([asdict(r) for r in records], columns=RECORD_COLUMNS)

        # Derived dimensions used by the monthly and shift reports
        frame["year"] = [r.sale_date.year for r in records]
        frame["month"] = [r.sale_date.month for r in records]
        frame["shift"] = [shift_for_hour(r.sale_time.hour) for r in records]
        return frame

    @property
    def records(self) -> tuple:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def _select(self, mask: pd.Series) -> list[SalesRecord]:
        # Row labels are positions in the snapshot, so order is insertion order
        return [self._records[i] for i in self._frame.index[mask.to_numpy(dtype=bool)]]

    def _finish(self, report: str, result, require_non_empty: bool):
        logger.debug(f"Report {report}: {len(result)} rows")
        if require_non_empty and not result:
            raise EmptyInputError(f"Report {report} produced no rows")
        return result

    # --------------------------------------------------
    # Record filters
    # --------------------------------------------------

    def sales_on_date(self, sale_date, *, require_non_empty: bool = False) -> list[SalesRecord]:
        """All transactions made on ``sale_date``, in snapshot order."""
        day = parse_date(sale_date, "sale_date")
        result = self._select(self._frame["sale_date"] == day)
        return self._finish("sales_on_date", result, require_non_empty)

    def high_quantity_in_range(
        self,
        category: str,
        min_quantity: int,
        start_date,
        end_date,
        *,
        require_non_empty: bool = False,
    ) -> list[SalesRecord]:
        """
        Transactions of ``category`` with at least ``min_quantity`` units sold
        between ``start_date`` and ``end_date`` (both inclusive).
        """
        category = _check_category(category)
        min_quantity = _check_int(min_quantity, "min_quantity", 0)
        start = parse_date(start_date, "start_date")
        end = parse_date(end_date, "end_date")
        if start > end:
            raise InvalidParameterError(f"start_date {start} is after end_date {end}")

        frame = self._frame
        mask = (
            (frame["category"] == category)
            & (frame["quantity"] >= min_quantity)
            & (frame["sale_date"] >= start)
            & (frame["sale_date"] <= end)
        )
        result = self._select(mask)
        return self._finish("high_quantity_in_range", result, require_non_empty)

    def high_quantity_in_month(
        self,
        category: str,
        min_quantity: int,
        month: str,
        *,
        require_non_empty: bool = False,
    ) -> list[SalesRecord]:
        """Same as high_quantity_in_range over a whole "YYYY-MM" month."""
        start, end = month_bounds(month)
        return self.high_quantity_in_range(
            category, min_quantity, start, end, require_non_empty=require_non_empty
        )

    def high_value_transactions(self, threshold, *, require_non_empty: bool = False) -> list[SalesRecord]:
        """Transactions whose total sale is strictly greater than ``threshold``."""
        amount = _check_amount(threshold, "threshold")
        result = self._select(self._frame["total_sale"] > amount)
        return self._finish("high_value_transactions", result, require_non_empty)

    # --------------------------------------------------
    # Aggregations
    # --------------------------------------------------

    def totals_by_category(self, *, require_non_empty: bool = False) -> dict[str, CategoryTotals]:
        result = {}
        if not self._frame.empty:
            for category, group in self._frame.groupby("category", sort=False):
                result[category] = CategoryTotals(
                    total_sales=_decimal_sum(group["total_sale"]),
                    order_count=len(group),
                )
        return self._finish("totals_by_category", result, require_non_empty)

    def average_age(self, category: str, *, require_non_empty: bool = False) -> Decimal | None:
        """
        Mean customer age for ``category`` rounded half-up to two places, or
        None when the category has no transactions.
        """
        category = _check_category(category)
        ages = self._frame.loc[self._frame["category"] == category, "age"]

        if ages.empty:
            logger.debug(f"Report average_age: no records for category {category!r}")
            if require_non_empty:
                raise EmptyInputError(f"Report average_age found no records for {category!r}")
            return None

        mean = Decimal(int(ages.sum())) / Decimal(len(ages))
        return mean.quantize(_CENTS, rounding=ROUND_HALF_UP)

    def transactions_by_gender_and_category(
        self, *, require_non_empty: bool = False
    ) -> list[GenderCategoryCount]:
        """Transaction counts per (category, gender), ordered by category."""
        result = []
        if not self._frame.empty:
            counts = (
                self._frame.groupby(["category", "gender"], sort=False)
                .size()
                .reset_index(name="transactions")
                .sort_values("category", kind="stable")
            )
            result = [
                GenderCategoryCount(category=row.category, gender=row.gender, count=int(row.transactions))
                for row in counts.itertuples(index=False)
            ]
        return self._finish("transactions_by_gender_and_category", result, require_non_empty)

    def best_month_per_year(self, *, require_non_empty: bool = False) -> list[MonthlyAverage]:
        """
        Month(s) with the highest average sale in each year.

        Months are ranked inside their year by mean ``total_sale``; every month
        ranked first is returned, so exact ties yield several rows for a year.
        """
        averages = []
        if not self._frame.empty:
            for (year, month), group in self._frame.groupby(["year", "month"], sort=True):
                averages.append(
                    MonthlyAverage(
                        year=int(year),
                        month=int(month),
                        average_sale=_decimal_sum(group["total_sale"]) / len(group),
                    )
                )

        best_by_year = {}
        for average in averages:
            current = best_by_year.get(average.year)
            if current is None or average.average_sale > current:
                best_by_year[average.year] = average.average_sale

        result = [a for a in averages if a.average_sale == best_by_year[a.year]]
        return self._finish("best_month_per_year", result, require_non_empty)

    def top_customers(self, n: int = DEFAULT_TOP_CUSTOMERS, *, require_non_empty: bool = False) -> list[CustomerTotal]:
        """
        The ``n`` customers with the highest total sales.

        Equal totals are ordered by ascending customer id so the cutoff is
        deterministic.
        """
        n = _check_int(n, "n", 1)
        totals = []
        if not self._frame.empty:
            for customer_id, group in self._frame.groupby("customer_id", sort=False):
                totals.append(
                    CustomerTotal(customer_id=int(customer_id), total_sales=_decimal_sum(group["total_sale"]))
                )

        totals.sort(key=lambda t: (-t.total_sales, t.customer_id))
        return self._finish("top_customers", totals[:n], require_non_empty)

    def unique_customers_by_category(self, *, require_non_empty: bool = False) -> dict[str, int]:
        result = {}
        if not self._frame.empty:
            distinct = self._frame.groupby("category", sort=False)["customer_id"].nunique()
            result = {category: int(count) for category, count in distinct.items()}
        return self._finish("unique_customers_by_category", result, require_non_empty)

    def orders_by_shift(self, *, require_non_empty: bool = False) -> dict[str, int]:
        """
        Order counts per shift. Morning is before noon, Afternoon is 12:00 to
        17:59 and Evening is everything later. All three shifts are always
        present.
        """
        if require_non_empty and not self._records:
            raise EmptyInputError("Report orders_by_shift has no records to classify")

        counts = self._frame["shift"].value_counts().reindex(list(SHIFTS), fill_value=0)
        result = {shift: int(counts[shift]) for shift in SHIFTS}
        logger.debug(f"Report orders_by_shift: {result}")
        return result
