"""
Configuration loading.

Defaults live in the config.yaml shipped next to this module; a different file
can be passed on the command line. A relative ``data.sales_csv`` is resolved
against the directory of the config file it came from.
"""

from pathlib import Path
from typing import Any, Optional

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"


def load_config(path: Optional[str | Path] = None) -> dict[str, Any]:
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    with open(config_path) as f:
        config = yaml.safe_load(f)

    if not isinstance(config, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    config.setdefault("data", {})
    config.setdefault("logging", {})
    config.setdefault("reports", {})

    sales_csv = config["data"].get("sales_csv")
    if sales_csv and not Path(sales_csv).is_absolute():
        config["data"]["sales_csv"] = str(config_path.parent / sales_csv)
    return config
