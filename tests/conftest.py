"""
Pytest configuration and fixtures for report tests.

This file is automatically discovered by pytest and provides
shared fixtures and configuration for all test modules.
"""

import pytest
import sys
from datetime import date, time
from decimal import Decimal
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from retail_reports.models import SalesRecord
from retail_reports.reports.engine import ReportEngine


def make_record(
    transaction_id,
    sale_date="2022-11-05",
    sale_time="10:00:00",
    customer_id=1,
    gender="Male",
    age=30,
    category="Clothing",
    quantity=1,
    price_per_unit="100",
    total_sale=None,
):
    """Build a SalesRecord; total_sale defaults to quantity x price_per_unit."""
    price = Decimal(price_per_unit)
    total = Decimal(total_sale) if total_sale is not None else price * quantity
    return SalesRecord(
        transaction_id=transaction_id,
        sale_date=date.fromisoformat(sale_date),
        sale_time=time.fromisoformat(sale_time),
        customer_id=customer_id,
        gender=gender,
        age=age,
        category=category,
        quantity=quantity,
        price_per_unit=price,
        cogs=(total * Decimal("0.4")).quantize(Decimal("0.01")),
        total_sale=total,
    )


@pytest.fixture
def record_factory():
    """Expose make_record to tests that build their own snapshots."""
    return make_record


@pytest.fixture
def sample_records():
    """
    Eight transactions over Oct 2022 - Feb 2023.

    Category totals: Clothing 720 (4 orders), Beauty 1050 (2), Electronics 2500 (2).
    Shifts: Morning 3, Afternoon 3, Evening 2.
    """
    return [
        make_record(1, "2022-11-05", "09:15:00", 1, "Male", 30, "Clothing", 4, "50"),
        make_record(2, "2022-11-05", "14:30:00", 2, "Female", 25, "Beauty", 2, "25"),
        make_record(3, "2022-11-20", "19:45:00", 3, "Female", 41, "Clothing", 1, "300"),
        make_record(4, "2022-11-30", "11:00:00", 1, "Male", 30, "Electronics", 3, "500"),
        make_record(5, "2022-12-01", "17:59:00", 4, "Male", 52, "Clothing", 4, "30"),
        make_record(6, "2023-01-10", "12:00:00", 2, "Female", 25, "Beauty", 2, "500"),
        make_record(7, "2023-02-14", "20:00:00", 5, "Female", 19, "Electronics", 1, "1000"),
        make_record(8, "2022-10-31", "08:00:00", 3, "Female", 41, "Clothing", 4, "25"),
    ]


@pytest.fixture
def engine(sample_records):
    return ReportEngine(sample_records)


@pytest.fixture
def empty_engine():
    return ReportEngine([])


SALES_CSV_HEADER = (
    "transactions_id,sale_date,sale_time,customer_id,gender,age,"
    "category,quantiy,price_per_unit,cogs,total_sale"
)


@pytest.fixture
def sales_csv(tmp_path):
    """A small CSV in the published dataset's column spelling."""
    path = tmp_path / "retail_sales.csv"
    path.write_text(
        "\n".join(
            [
                SALES_CSV_HEADER,
                "180,2022-11-05,10:47:00,117,Male,41,Clothing,3,300,129,900",
                "522,2022-11-05,19:10:00,52,Female,46,Beauty,4,30,8.1,120",
                "1559,2022-01-22,14:28:00,30,Male,35,Electronics,1,500,205,500",
            ]
        )
        + "\n"
    )
    return path
