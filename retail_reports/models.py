from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal


@dataclass(frozen=True)
class SalesRecord:
    """
    One retail transaction.

    Records are produced by the loader (already validated) and only ever read
    by the reporting engine.
    """

    transaction_id: int
    sale_date: date
    sale_time: time
    customer_id: int
    gender: str
    age: int
    category: str
    quantity: int
    price_per_unit: Decimal
    cogs: Decimal
    total_sale: Decimal
