from pathlib import Path

import pandas as pd

from retail_reports.logger import setup_logger
from retail_reports.models import SalesRecord
from retail_reports.validations.input_schemas import REQUIRED_COLUMNS
from retail_reports.validations.validate_inputs import validate_sales

logger = setup_logger("etl.extract")

# Spellings used by the published retail sales dataset
COLUMN_ALIASES = {
    "transactions_id": "transaction_id",
    "quantiy": "quantity",
}


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Lowercase column names, replace spaces with underscores and map known
    source spellings onto the record field names.
    """
    df = df.copy()
    df.columns = df.columns.str.strip().str.lower().str.replace(" ", "_")
    return df.rename(columns=COLUMN_ALIASES)


def parse_sale_timestamps(df: pd.DataFrame) -> pd.DataFrame:
    """
    Turn sale_date into datetime.date and sale_time into datetime.time.
    Unparseable values become NaT and are caught by validation.
    """
    df = df.copy()
    if "sale_date" in df.columns:
        df["sale_date"] = pd.to_datetime(
            df["sale_date"].astype(str), errors="coerce", format="mixed"
        ).dt.date
    if "sale_time" in df.columns:
        df["sale_time"] = pd.to_datetime(
            df["sale_time"].astype(str), errors="coerce", format="mixed"
        ).dt.time
    return df


def to_sales_records(df: pd.DataFrame) -> list[SalesRecord]:
    """Convert a validated sales frame into SalesRecord objects, row order kept."""
    return [
        SalesRecord(
            transaction_id=int(row.transaction_id),
            sale_date=row.sale_date,
            sale_time=row.sale_time,
            customer_id=int(row.customer_id),
            gender=str(row.gender),
            age=int(row.age),
            category=str(row.category),
            quantity=int(row.quantity),
            price_per_unit=row.price_per_unit,
            cogs=row.cogs,
            total_sale=row.total_sale,
        )
        for row in df[REQUIRED_COLUMNS].itertuples(index=False)
    ]


def prepare_sales_records(df: pd.DataFrame, drop_invalid: bool = False) -> list[SalesRecord]:
    """Normalize, parse, validate and convert a raw sales frame."""
    df = parse_sale_timestamps(normalize_columns(df))
    clean_df, dropped = validate_sales(df, drop_invalid=drop_invalid)
    if dropped > 0:
        logger.warning(f"{dropped} sales rows excluded from the report snapshot")

    records = to_sales_records(clean_df)
    logger.info(f"Prepared {len(records)} sales records")
    return records


def load_sales_records(path, drop_invalid: bool = False) -> list[SalesRecord]:
    """
    Read the retail sales CSV at ``path`` and return validated records.
    """
    path = Path(path)
    logger.info(f"Reading sales from {path}")
    # Read every cell as text so money values keep all their digits
    raw_df = pd.read_csv(path, dtype=str)
    logger.info(f"Successfully read {len(raw_df)} rows from {path.name}")
    return prepare_sales_records(raw_df, drop_invalid=drop_invalid)
