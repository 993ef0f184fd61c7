from decimal import Decimal

import pandera.pandas as pa
from pandera.pandas import Check, Column, DataFrameSchema


GENDERS = ["Male", "Female"]

AMOUNT_COLUMNS = ["price_per_unit", "cogs", "total_sale"]

NON_NEGATIVE_AMOUNT = Check(
    lambda value: isinstance(value, Decimal) and value >= 0,
    element_wise=True,
    error="non-negative decimal amount",
)

# Columns every record must carry; rows missing any of them are incomplete
REQUIRED_COLUMNS = [
    "transaction_id",
    "sale_date",
    "sale_time",
    "customer_id",
    "gender",
    "age",
    "category",
    "quantity",
    "price_per_unit",
    "cogs",
    "total_sale",
]


sales_schema = DataFrameSchema(
    {
        # Identifiers
        "transaction_id": Column(int, nullable=False, unique=True),
        "customer_id": Column(int, nullable=False),

        # When (parsed to datetime.date / datetime.time before validation)
        "sale_date": Column(pa.Date, nullable=False),
        "sale_time": Column(nullable=False),

        # Who
        "gender": Column(str, Check.isin(GENDERS), nullable=False),
        "age": Column(int, Check.gt(0), nullable=False),

        # What
        "category": Column(str, Check.str_length(min_value=1), nullable=False),
        "quantity": Column(int, Check.ge(0), nullable=False),

        # Money (Decimal objects parsed from the source text)
        "price_per_unit": Column("object", NON_NEGATIVE_AMOUNT, nullable=False),
        "cogs": Column("object", NON_NEGATIVE_AMOUNT, nullable=False),
        "total_sale": Column("object", NON_NEGATIVE_AMOUNT, nullable=False),
    },
    strict=False  # Extra source columns are ignored when records are built
)
