"""
Command line entry point: load the sales CSV and print all ten reports.
"""

import argparse

import pandas as pd

from retail_reports.config import load_config
from retail_reports.errors import ReportError
from retail_reports.etl.extract import load_sales_records
from retail_reports.logger import setup_logger
from retail_reports.reports.engine import DEFAULT_TOP_CUSTOMERS, ReportEngine
from retail_reports.reports.render import to_frame

PACKAGE_LOGGERS = ["reports.engine", "etl.extract", "validation.input"]


def build_reports(engine: ReportEngine, settings: dict) -> list[tuple[str, pd.DataFrame]]:
    """Run every report with the configured parameters and return titled frames."""
    sale_date = settings.get("sale_date", "2022-11-05")
    category = settings.get("category", "Clothing")
    min_quantity = settings.get("min_quantity", 4)
    month = settings.get("month", "2022-11")
    age_category = settings.get("average_age_category", "Beauty")
    threshold = settings.get("high_value_threshold", 1000)
    top_n = settings.get("top_customers", DEFAULT_TOP_CUSTOMERS)

    return [
        (f"Sales on {sale_date}", to_frame(engine.sales_on_date(sale_date))),
        (
            f"{category} orders with quantity >= {min_quantity} in {month}",
            to_frame(engine.high_quantity_in_month(category, min_quantity, month)),
        ),
        ("Total sales by category", to_frame(engine.totals_by_category(), key_name="category")),
        (
            f"Average customer age for {age_category}",
            to_frame(engine.average_age(age_category), value_name="average_age"),
        ),
        (f"Transactions above {threshold}", to_frame(engine.high_value_transactions(threshold))),
        ("Transactions by gender and category", to_frame(engine.transactions_by_gender_and_category())),
        ("Best selling month per year", to_frame(engine.best_month_per_year())),
        (f"Top {top_n} customers", to_frame(engine.top_customers(top_n))),
        (
            "Unique customers by category",
            to_frame(engine.unique_customers_by_category(), key_name="category", value_name="unique_customers"),
        ),
        ("Orders by shift", to_frame(engine.orders_by_shift(), key_name="shift", value_name="orders")),
    ]


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="retail-reports",
        description="Run the retail sales reports over a sales CSV.",
    )
    parser.add_argument("--config", help="Path to a config.yaml (defaults to the packaged one)")
    parser.add_argument("--data", help="Sales CSV to load (overrides data.sales_csv)")
    parser.add_argument(
        "--drop-invalid",
        action="store_true",
        help="Drop invalid rows instead of failing",
    )
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    config = load_config(args.config)

    level = args.log_level or config["logging"].get("level", "INFO")
    logger = setup_logger("reports.run", level)
    for name in PACKAGE_LOGGERS:
        setup_logger(name, level)

    data_path = args.data or config["data"].get("sales_csv")
    drop_invalid = args.drop_invalid or bool(config["data"].get("drop_invalid", False))
    if not data_path:
        logger.error("No sales CSV configured (set data.sales_csv or pass --data)")
        return 1

    try:
        records = load_sales_records(data_path, drop_invalid=drop_invalid)
        engine = ReportEngine(records)
        reports = build_reports(engine, config["reports"])
    except (FileNotFoundError, ReportError) as e:
        logger.error(f"✗ Reporting failed: {e}")
        return 1

    for title, frame in reports:
        print(f"\n== {title} ==")
        print(frame.to_string(index=False) if not frame.empty else "(no rows)")

    logger.info(f"✓ {len(reports)} reports generated from {len(engine)} records")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
