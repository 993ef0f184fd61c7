"""
Unit tests for sales validation.

Tests check that the schema accepts well-formed rows, fails fast on bad rows
by default, and drops bad rows only when asked to.
"""

import pytest
import pandas as pd
from datetime import date, time
from decimal import Decimal

from retail_reports.errors import InvalidParameterError, InvalidRecordError
from retail_reports.validations.input_schemas import REQUIRED_COLUMNS, sales_schema
from retail_reports.validations.validate_inputs import validate_sales


def sales_frame(**overrides):
    """Three valid parsed rows; keyword arguments replace whole columns."""
    data = {
        "transaction_id": [1, 2, 3],
        "sale_date": [date(2022, 11, 5), date(2022, 11, 6), date(2022, 12, 1)],
        "sale_time": [time(9, 15), time(14, 30), time(19, 45)],
        "customer_id": [10, 11, 12],
        "gender": ["Male", "Female", "Female"],
        "age": [30, 25, 41],
        "category": ["Clothing", "Beauty", "Electronics"],
        "quantity": [4, 2, 1],
        "price_per_unit": [50.0, 25.0, 300.0],
        "cogs": [20.0, 10.0, 120.0],
        "total_sale": [200.0, 50.0, 300.0],
    }
    data.update(overrides)
    return pd.DataFrame(data)


class TestFailFastValidation:
    """Test default validation, which raises on any invalid row."""

    def test_valid_sales_pass_validation(self):
        """Test that valid sales pass without dropping rows."""
        cleaned_df, dropped = validate_sales(sales_frame())
        assert len(cleaned_df) == 3
        assert dropped == 0

    def test_amounts_become_decimals(self):
        """Test that money columns are parsed to Decimal from ints, floats and text."""
        cleaned_df, _ = validate_sales(
            sales_frame(price_per_unit=[50, 25.5, "300.10"], total_sale=["200", 51.0, "300.10"])
        )
        assert list(cleaned_df["price_per_unit"]) == [Decimal("50"), Decimal("25.5"), Decimal("300.10")]
        assert all(isinstance(v, Decimal) for v in cleaned_df["total_sale"])

    def test_amount_text_keeps_every_digit(self):
        """Test that long amounts are not rounded through float."""
        cleaned_df, _ = validate_sales(sales_frame(total_sale=["12345678901234567.89", "50", "300"]))
        assert cleaned_df.iloc[0]["total_sale"] == Decimal("12345678901234567.89")

    def test_non_numeric_age_raises(self):
        """Test that a malformed integer cell fails the run by default."""
        with pytest.raises(InvalidRecordError):
            validate_sales(sales_frame(age=[30, "abc", 41]))

    def test_negative_amount_raises(self):
        with pytest.raises(InvalidRecordError):
            validate_sales(sales_frame(cogs=[20.0, "-1", 120.0]))

    def test_negative_quantity_raises(self):
        """Test that a negative quantity fails the run."""
        with pytest.raises(InvalidRecordError) as exc_info:
            validate_sales(sales_frame(quantity=[4, -2, 1]))
        assert exc_info.value.failure_cases is not None
        assert "quantity" in set(exc_info.value.failure_cases["column"])

    def test_non_positive_age_raises(self):
        with pytest.raises(InvalidRecordError):
            validate_sales(sales_frame(age=[30, 0, 41]))

    def test_unknown_gender_raises(self):
        with pytest.raises(InvalidRecordError):
            validate_sales(sales_frame(gender=["Male", "Unknown", "Female"]))

    def test_duplicate_transaction_id_raises(self):
        with pytest.raises(InvalidRecordError):
            validate_sales(sales_frame(transaction_id=[1, 1, 3]))

    def test_missing_value_raises(self):
        """Test that incomplete rows are not silently dropped."""
        with pytest.raises(InvalidRecordError):
            validate_sales(sales_frame(age=[30, None, 41]))

    def test_missing_column_raises(self):
        with pytest.raises(InvalidRecordError):
            validate_sales(sales_frame().drop(columns=["cogs"]))

    def test_record_error_is_a_parameter_error(self):
        """Test the error hierarchy callers can rely on."""
        with pytest.raises(InvalidParameterError):
            validate_sales(sales_frame(quantity=[4, -2, 1]))


class TestDropInvalidValidation:
    """Test validation with drop_invalid=True."""

    def test_negative_quantity_dropped(self):
        """Test that rows with negative quantity are dropped."""
        cleaned_df, dropped = validate_sales(sales_frame(quantity=[4, -2, 1]), drop_invalid=True)
        assert len(cleaned_df) == 2
        assert dropped == 1
        assert list(cleaned_df["transaction_id"]) == [1, 3]

    def test_incomplete_rows_dropped(self):
        """Test that rows with missing fields are dropped and counted."""
        cleaned_df, dropped = validate_sales(sales_frame(age=[30, None, 41]), drop_invalid=True)
        assert len(cleaned_df) == 2
        assert dropped == 1
        assert cleaned_df["age"].dtype == "int64"

    def test_non_numeric_age_dropped(self):
        """Test that a text value in an integer column drops only its row."""
        cleaned_df, dropped = validate_sales(sales_frame(age=[30, "abc", 41]), drop_invalid=True)
        assert dropped == 1
        assert list(cleaned_df["transaction_id"]) == [1, 3]
        assert cleaned_df["age"].dtype == "int64"

    def test_fractional_quantity_dropped(self):
        """Test that a non-whole quantity drops only its row."""
        cleaned_df, dropped = validate_sales(sales_frame(quantity=[4, 2.5, 1]), drop_invalid=True)
        assert dropped == 1
        assert list(cleaned_df["quantity"]) == [4, 1]

    def test_malformed_amount_dropped(self):
        cleaned_df, dropped = validate_sales(sales_frame(price_per_unit=[50.0, "n/a", 300.0]), drop_invalid=True)
        assert dropped == 1
        assert list(cleaned_df["transaction_id"]) == [1, 3]

    def test_negative_amount_dropped(self):
        cleaned_df, dropped = validate_sales(sales_frame(total_sale=[200.0, -50.0, 300.0]), drop_invalid=True)
        assert dropped == 1
        assert list(cleaned_df["transaction_id"]) == [1, 3]

    def test_all_rows_invalid_raises(self):
        """Test that nothing surviving validation is an error."""
        with pytest.raises(InvalidRecordError):
            validate_sales(sales_frame(quantity=[-1, -2, -3]), drop_invalid=True)


class TestSchemaCompliance:
    """Test that the schema is properly defined."""

    def test_sales_schema_covers_required_columns(self):
        for column in REQUIRED_COLUMNS:
            assert column in sales_schema.columns

    def test_transaction_id_is_unique(self):
        assert sales_schema.columns["transaction_id"].unique


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
