from __future__ import annotations

from typing import Literal, Optional

from retailpos.config import get_config

from .backends.csv_backend import CsvDataAccess
from .backends.http_backend import HttpDataAccess
from .interface import DataAccess


def get_data_access(kind: Optional[Literal["csv", "http"]] = None) -> DataAccess:
    config = get_config()
    kind = kind or config.data_access
    if kind == "csv":
        # Reads from configured CSV folder
        return CsvDataAccess(data_dir=config.data_dir)
    if kind == "http":
        return HttpDataAccess(base_url=config.api_base_url, timeout=config.api_timeout)
    raise ValueError(f"Unknown data access kind: {kind}")
