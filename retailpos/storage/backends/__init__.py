from .csv_backend import CsvDataAccess
from .http_backend import HttpDataAccess

__all__ = ["CsvDataAccess", "HttpDataAccess"]
