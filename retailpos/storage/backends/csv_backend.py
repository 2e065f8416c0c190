from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import pandas as pd

from retailpos.config import get_config
from retailpos.errors import DataAccessError, SubmissionError
from retailpos.logging import get_logger
from retailpos.models import (
    Customer,
    Order,
    OrderRequest,
    Product,
    QRPaymentAccount,
    StoreSettings,
)

from ..interface import DataAccess

ORDER_COLUMNS = [
    "id", "order_number", "client_order_id", "customer_id", "customer_name",
    "customer_phone", "customer_address", "subtotal", "discount_percent",
    "discount_amount", "total_amount", "payment_method", "payment_status", "notes",
    "received_amount", "change_amount", "created_at",
]
ORDER_ITEM_COLUMNS = [
    "order_id", "product_id", "product_name", "quantity", "unit_price",
    "discount_percent", "total",
]

# identifiers that look numeric but must keep leading zeros
_TEXT_COLUMNS = {
    "products": {"sku": str, "barcode": str},
    "customers": {"phone": str},
    "store_settings": {"setting_key": str, "setting_value": str},
    "qr_accounts": {"provider_id": str, "account_number": str},
    "orders": {"order_number": str, "client_order_id": str, "customer_phone": str, "notes": str},
}


@dataclass
class _Tables:
    products: pd.DataFrame
    customers: pd.DataFrame
    store_settings: pd.DataFrame
    qr_accounts: pd.DataFrame
    orders: pd.DataFrame
    order_items: pd.DataFrame


def _native(value: Any) -> Any:
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if value is None or (not isinstance(value, (list, tuple)) and pd.isna(value)):
        return None
    if hasattr(value, "item"):
        return value.item()
    return value


def _records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Rows as plain-Python dicts with NaN mapped to None."""
    return [{k: _native(v) for k, v in row.items()} for row in df.to_dict("records")]


def _without_none(row: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in row.items() if v is not None}


def _fingerprint(order: Union[Order, OrderRequest]) -> Tuple:
    """What a retry must repeat exactly: customer, payment, totals and every line."""
    lines = tuple(
        (i.product_id, i.quantity, i.unit_price, i.discount_percent, i.total) for i in order.items
    )
    return (
        order.customer_id, order.payment_method, order.payment_status,
        order.subtotal, order.discount_amount, order.total_amount, lines,
    )


class CsvDataAccess(DataAccess):
    """
    CSV-backed implementation.
    - Loads catalog and settings CSVs from `data_dir` once at construction.
    - Orders are appended to orders.csv / order_items.csv and numbered DH00001, DH00002, ...
    - Re-submitting the same cart under its client order number returns the stored order;
      a different cart that happens to reuse the number is stored as a new order.
    """

    def __init__(self, data_dir: str | Path = None) -> None:
        if data_dir is None:
            data_dir = get_config().data_dir

        self.data_dir = Path(data_dir)

        # Relative paths are resolved against the repository root
        if not self.data_dir.is_absolute():
            current = Path.cwd()
            repo_root = None
            for parent in [current] + list(current.parents):
                if (parent / "pyproject.toml").exists():
                    repo_root = parent
                    break
            self.data_dir = (repo_root or current) / self.data_dir

        self.logger = get_logger(__name__)
        self._write_lock = threading.Lock()
        self._tables = self._load_tables(self.data_dir)

    # ---------- loading helpers ----------

    @staticmethod
    def _read(data_dir: Path, table: str, columns: Optional[List[str]] = None,
              parse_dates: Optional[List[str]] = None) -> pd.DataFrame:
        path = data_dir / f"{table}.csv"
        if not path.exists():
            return pd.DataFrame(columns=columns or [])
        return pd.read_csv(path, dtype=_TEXT_COLUMNS.get(table), parse_dates=parse_dates)

    @staticmethod
    def _load_tables(data_dir: Path) -> _Tables:
        if not data_dir.exists():
            raise FileNotFoundError(
                f"Data directory not found: {data_dir}\n"
                f"Please either:\n"
                f"  1. Generate sample data: python -m retailpos.seed_data\n"
                f"  2. Set DATA_DIR environment variable to point to your data directory\n"
                f"  3. Create a .env file with DATA_DIR=/path/to/your/data"
            )

        required_files = ["products.csv", "customers.csv"]
        missing_files = [f for f in required_files if not (data_dir / f).exists()]
        if missing_files:
            raise FileNotFoundError(
                f"Required CSV files missing in {data_dir}:\n"
                f"  Missing: {', '.join(missing_files)}\n"
                f"  Expected files: {', '.join(required_files)}\n\n"
                f"Please either:\n"
                f"  1. Generate sample data: python -m retailpos.seed_data\n"
                f"  2. Set DATA_DIR environment variable to point to a directory with the required files"
            )

        try:
            products = CsvDataAccess._read(data_dir, "products")
            customers = CsvDataAccess._read(data_dir, "customers")
            store_settings = CsvDataAccess._read(data_dir, "store_settings", ["setting_key", "setting_value"])
            qr_accounts = CsvDataAccess._read(data_dir, "qr_accounts")
            orders = CsvDataAccess._read(data_dir, "orders", ORDER_COLUMNS, parse_dates=["created_at"])
            order_items = CsvDataAccess._read(data_dir, "order_items", ORDER_ITEM_COLUMNS)
        except (OSError, ValueError) as e:
            raise DataAccessError(
                f"Error reading CSV files from {data_dir}: {e}\n"
                f"Please check that the CSV files are valid and readable."
            ) from e

        return _Tables(
            products=products,
            customers=customers,
            store_settings=store_settings,
            qr_accounts=qr_accounts,
            orders=orders,
            order_items=order_items,
        )

    @staticmethod
    def _contains(df: pd.DataFrame, columns: List[str], search: str) -> pd.Series:
        s = search.strip().lower()
        mask = pd.Series(False, index=df.index)
        for col in columns:
            if col in df.columns:
                mask |= df[col].astype(str).str.lower().str.contains(s, regex=False, na=False)
        return mask

    # ---------- catalog ----------

    def get_product(self, product_id: int) -> Optional[Product]:
        df = self._tables.products
        rows = _records(df[df["id"] == product_id])
        return Product(**_without_none(rows[0])) if rows else None

    def get_product_by_barcode(self, barcode: str) -> Optional[Product]:
        code = (barcode or "").strip()
        if not code:
            return None
        df = self._tables.products
        mask = pd.Series(False, index=df.index)
        for col in ("barcode", "sku"):
            if col in df.columns:
                mask |= df[col] == code
        rows = _records(df[mask])
        return Product(**_without_none(rows[0])) if rows else None

    def find_products(self, search: str = "", limit: int = 50) -> List[Product]:
        df = self._tables.products
        if search and search.strip():
            df = df[self._contains(df, ["name", "sku", "barcode"], search)]
        return [Product(**_without_none(r)) for r in _records(df.head(int(limit)))]

    def get_customer(self, customer_id: int) -> Optional[Customer]:
        df = self._tables.customers
        rows = _records(df[df["id"] == customer_id])
        return Customer(**_without_none(rows[0])) if rows else None

    def find_customers(self, search: str = "", limit: int = 20) -> List[Customer]:
        df = self._tables.customers
        if search and search.strip():
            df = df[self._contains(df, ["name", "phone"], search)]
        return [Customer(**_without_none(r)) for r in _records(df.head(int(limit)))]

    # ---------- settings ----------

    def get_store_settings(self) -> StoreSettings:
        return StoreSettings.from_pairs(_records(self._tables.store_settings))

    def get_qr_accounts(self) -> List[QRPaymentAccount]:
        df = self._tables.qr_accounts
        if "status" in df.columns:
            df = df[df["status"].fillna("active") == "active"]
        accounts = [QRPaymentAccount(**_without_none(r)) for r in _records(df)]
        if not accounts:
            configured = QRPaymentAccount.from_config()
            if configured is not None:
                accounts.append(configured)
        return accounts

    # ---------- orders ----------

    def _order_from_row(self, row: Dict[str, Any]) -> Order:
        items = self._tables.order_items
        lines = _records(items[items["order_id"] == row["id"]])
        return Order(
            **_without_none(row),
            items=tuple(_without_none(line) for line in lines),
        )

    def get_order(self, order_id: Union[int, str]) -> Optional[Order]:
        df = self._tables.orders
        if isinstance(order_id, str) and not order_id.isdigit():
            mask = (df["order_number"] == order_id) | (df["client_order_id"] == order_id)
        else:
            mask = df["id"] == int(order_id)
        # client ids wrap around, so the newest match wins
        rows = _records(df[mask].sort_values("id", ascending=False))
        return self._order_from_row(rows[0]) if rows else None

    def list_orders(self, limit: int = 50) -> List[Order]:
        df = self._tables.orders.sort_values("id", ascending=False).head(int(limit))
        return [self._order_from_row(r) for r in _records(df)]

    def create_order(self, request: OrderRequest) -> Order:
        with self._write_lock:
            orders = self._tables.orders
            candidates = orders[orders["client_order_id"] == request.order_number]
            for existing in _records(candidates.sort_values("id", ascending=False)):
                stored = self._order_from_row(existing)
                if _fingerprint(stored) == _fingerprint(request):
                    self.logger.warning(
                        f"Order {request.order_number} already stored as {stored.order_number}; "
                        f"returning the stored order"
                    )
                    return stored
            if not candidates.empty:
                self.logger.info(
                    f"Client id {request.order_number} reused by a different cart; storing a new order"
                )

            next_id = int(orders["id"].max()) + 1 if not orders.empty else 1
            order_number = f"{get_config().server_order_prefix}{next_id:05d}"
            payload = request.model_dump(exclude={"items"})
            row = {
                **payload,
                "id": next_id,
                "order_number": order_number,
                "client_order_id": request.order_number,
                "customer_address": "",
                "created_at": datetime.now(),
            }
            item_rows = [{"order_id": next_id, **item.model_dump()} for item in request.items]

            new_orders = pd.concat(
                [orders, pd.DataFrame([row], columns=ORDER_COLUMNS)], ignore_index=True
            ) if not orders.empty else pd.DataFrame([row], columns=ORDER_COLUMNS)
            items = self._tables.order_items
            new_items = pd.concat(
                [items, pd.DataFrame(item_rows, columns=ORDER_ITEM_COLUMNS)], ignore_index=True
            ) if not items.empty else pd.DataFrame(item_rows, columns=ORDER_ITEM_COLUMNS)

            try:
                new_orders.to_csv(self.data_dir / "orders.csv", index=False)
                new_items.to_csv(self.data_dir / "order_items.csv", index=False)
            except OSError as e:
                self.logger.error(f"Writing order {request.order_number} to {self.data_dir} failed: {e}")
                raise SubmissionError(f"Không thể lưu đơn hàng: {e}") from e

            self._tables.orders = new_orders
            self._tables.order_items = new_items
            self.logger.info(f"Stored order {order_number} for client id {request.order_number}")
            return self._order_from_row(row)
