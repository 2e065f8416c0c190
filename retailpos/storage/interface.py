from __future__ import annotations

from typing import List, Optional, Protocol, Union

from retailpos.models import (
    Customer,
    Order,
    OrderRequest,
    Product,
    QRPaymentAccount,
    StoreSettings,
)


# ---- Data access protocols ----

class CatalogAccess(Protocol):
    """Read-only product and customer lookups."""

    def get_product(self, product_id: int) -> Optional[Product]:
        """Get one product by id, None if unknown."""
        ...

    def get_product_by_barcode(self, barcode: str) -> Optional[Product]:
        """Get one product by exact barcode or SKU, None if unknown."""
        ...

    def find_products(self, search: str = "", limit: int = 50) -> List[Product]:
        """Products whose name, SKU or barcode contains `search` (case-insensitive)."""
        ...

    def get_customer(self, customer_id: int) -> Optional[Customer]:
        """Get one customer by id, None if unknown."""
        ...

    def find_customers(self, search: str = "", limit: int = 20) -> List[Customer]:
        """Customers whose name or phone contains `search`."""
        ...


class SettingsAccess(Protocol):
    """Store settings consumed by the receipt renderer."""

    def get_store_settings(self) -> StoreSettings:
        ...

    def get_qr_accounts(self) -> List[QRPaymentAccount]:
        ...


class OrderStorage(Protocol):
    """
    Persists submitted orders.

    Implementations must treat a repeated `create_order` for the same
    `request.order_number` as a retry and must not create a second order.
    Failures are raised as SubmissionError.
    """

    def create_order(self, request: OrderRequest) -> Order:
        ...

    def get_order(self, order_id: Union[int, str]) -> Optional[Order]:
        ...

    def list_orders(self, limit: int = 50) -> List[Order]:
        """Most recent orders first."""
        ...


class DataAccess(CatalogAccess, SettingsAccess, OrderStorage, Protocol):
    """Everything the POS screen needs from its backend."""
