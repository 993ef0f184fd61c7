from decimal import Decimal, InvalidOperation

import pandas as pd
from pandera.errors import SchemaError, SchemaErrors

from .input_schemas import AMOUNT_COLUMNS, REQUIRED_COLUMNS, sales_schema
from retail_reports.errors import InvalidRecordError
from retail_reports.logger import setup_logger

logger = setup_logger("validation.input")

INTEGER_COLUMNS = ["transaction_id", "customer_id", "age", "quantity"]


def parse_amount(value) -> Decimal | None:
    """
    Parse a money cell into a Decimal, keeping every digit of the source text.
    Missing or unparseable values become None.
    """
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, bool) or pd.isna(value):
        return None
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


def _coerce_integer_column(series: pd.Series) -> pd.Series:
    # Non-numeric and fractional cells become NaN so they fail (or drop) per row
    numbers = pd.to_numeric(series.astype(object), errors="coerce")
    numbers = numbers.where(numbers % 1 == 0)
    return numbers.astype("int64") if numbers.notna().all() else numbers


def coerce_sales_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Cast integer columns to int64 and money columns to Decimal, cell by cell."""
    df = df.copy()
    for column in INTEGER_COLUMNS:
        df[column] = _coerce_integer_column(df[column])
    for column in AMOUNT_COLUMNS:
        df[column] = df[column].map(parse_amount).astype(object)
    return df


def validate_sales(df: pd.DataFrame, drop_invalid: bool = False) -> tuple[pd.DataFrame, int]:
    """
    Validate parsed sales rows against the sales schema.

    By default any failure raises InvalidRecordError with a per-column summary.
    With ``drop_invalid`` incomplete rows and rows failing a check are removed
    instead, and the number removed is returned alongside the clean frame.
    """
    logger.info(f"Starting sales validation on {len(df)} rows")

    missing = [column for column in REQUIRED_COLUMNS if column not in df.columns]
    if missing:
        raise InvalidRecordError(f"Sales data is missing required columns: {missing}")

    df = coerce_sales_columns(df)

    dropped = 0
    if drop_invalid:
        complete_df = df.dropna(subset=REQUIRED_COLUMNS)
        dropped = len(df) - len(complete_df)
        if dropped > 0:
            logger.warning(f"Dropped {dropped} rows with missing or malformed required fields")
        df = complete_df.astype({column: "int64" for column in INTEGER_COLUMNS})

    try:
        validated_df = sales_schema.validate(df, lazy=True)
        logger.info("Sales validation passed")
        return validated_df, dropped

    except SchemaErrors as err:
        failed = err.failure_cases
        summary = failed.groupby(["column", "check"]).size()

        if not drop_invalid:
            logger.error(f"Sales validation failed with {len(failed)} issues")
            logger.error(f"Failure summary:\n{summary}")
            raise InvalidRecordError(
                f"Sales validation failed with {len(failed)} issues:\n{summary}",
                failure_cases=failed,
            ) from err

        logger.warning(f"Sales validation failed: {len(failed)} invalid values")
        logger.warning(f"Errors summary:\n{summary}")

        # Drop invalid rows by filtering out failed indices
        failed_indices = failed["index"].dropna().unique()
        clean_df = df.drop(index=failed_indices)
        dropped += len(df) - len(clean_df)

        if clean_df.empty:
            raise InvalidRecordError(
                "All sales rows failed validation", failure_cases=failed
            ) from err

        try:
            clean_df = sales_schema.validate(clean_df)  # re-validate clean data
        except SchemaError as e:
            raise InvalidRecordError(
                f"Sales data still invalid after dropping {dropped} rows: {e}",
                failure_cases=failed,
            ) from e

        logger.info(f"Cleaned sales: {len(clean_df)} rows remaining ({dropped} dropped)")
        return clean_df, dropped
