"""
Tabular rendering of report results.

Glue for terminals and notebooks: every report result becomes a pandas
DataFrame, which is what gets printed.
"""

from dataclasses import asdict, is_dataclass

import pandas as pd


def to_frame(result, key_name: str = "key", value_name: str = "value") -> pd.DataFrame:
    """
    Convert a report result into a DataFrame.

    - lists of records or result rows become one row per item
    - mappings become one row per key, with dataclass values expanded
    - scalars (and None) become a single-cell frame
    """
    if isinstance(result, list):
        return pd.DataFrame([asdict(item) if is_dataclass(item) else item for item in result])

    if isinstance(result, dict):
        rows = []
        for key, value in result.items():
            if is_dataclass(value):
                rows.append({key_name: key, **asdict(value)})
            else:
                rows.append({key_name: key, value_name: value})
        return pd.DataFrame(rows)

    return pd.DataFrame({value_name: [result]})
