from __future__ import annotations

from typing import Any, Dict, List, Optional, Type, Union

import requests

from retailpos.config import get_config
from retailpos.errors import DataAccessError, PosError, SubmissionError
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

_MISSING = object()


def _as_list(data: Any, key: str) -> List[Dict[str, Any]]:
    """List payloads come either bare or wrapped as {key: [...], ...}."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get(key), list):
        return data[key]
    return []


def _order_from_payload(data: Dict[str, Any]) -> Order:
    # stored orders carry no client id of their own; the order number stands in
    client_id = data.get("client_order_id") or data.get("order_number") or str(data.get("id", ""))
    fields = {k: v for k, v in data.items() if v is not None}
    return Order.model_validate({**fields, "client_order_id": client_id})


class HttpDataAccess(DataAccess):
    """
    REST-backed implementation.
    - Every endpoint answers with a {success, data, error} envelope.
    - Order creation failures raise SubmissionError; lookup failures raise DataAccessError.
    - Settings lookups never fail: they fall back to the configured defaults.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None) -> None:
        config = get_config()
        self.base_url = (base_url or config.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else config.api_timeout
        self.logger = get_logger(__name__)

    # ---------- transport helpers ----------

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _unwrap(self, label: str, response, error_cls: Type[PosError], allow_missing: bool = False) -> Any:
        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {"success": True, "data": payload}

        if allow_missing and response.status_code == 404:
            return _MISSING
        if response.status_code >= 400 or payload.get("success") is False:
            message = payload.get("error") or payload.get("message")
            self.logger.error(f"{label} failed ({response.status_code}): {message}")
            if error_cls is SubmissionError:
                raise SubmissionError(message, status_code=response.status_code)
            raise error_cls(message or f"Yêu cầu thất bại ({response.status_code})")
        return payload.get("data")

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None, allow_missing: bool = False) -> Any:
        url = self._url(path)
        try:
            response = requests.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            self.logger.error(f"GET {url} failed: {e}")
            raise DataAccessError(f"Không thể kết nối máy chủ: {e}") from e
        return self._unwrap(f"GET {url}", response, DataAccessError, allow_missing=allow_missing)

    # ---------- catalog ----------

    def get_product(self, product_id: int) -> Optional[Product]:
        data = self._get(f"products/{product_id}", allow_missing=True)
        if data is _MISSING or not data:
            return None
        return Product.model_validate({k: v for k, v in data.items() if v is not None})

    def get_product_by_barcode(self, barcode: str) -> Optional[Product]:
        code = (barcode or "").strip()
        if not code:
            return None
        for product in self.find_products(search=code, limit=50):
            if code in (product.barcode, product.sku):
                return product
        return None

    def find_products(self, search: str = "", limit: int = 50) -> List[Product]:
        data = self._get("products", params={"search": search, "limit": limit})
        rows = _as_list(data, "products")
        return [Product.model_validate({k: v for k, v in r.items() if v is not None}) for r in rows][:limit]

    def get_customer(self, customer_id: int) -> Optional[Customer]:
        data = self._get(f"customers/{customer_id}", allow_missing=True)
        if data is _MISSING or not data:
            return None
        return Customer.model_validate({k: v for k, v in data.items() if v is not None})

    def find_customers(self, search: str = "", limit: int = 20) -> List[Customer]:
        data = self._get("customers", params={"search": search, "limit": limit})
        rows = _as_list(data, "customers")
        return [Customer.model_validate({k: v for k, v in r.items() if v is not None}) for r in rows][:limit]

    # ---------- settings ----------

    def get_store_settings(self) -> StoreSettings:
        try:
            data = self._get("store-settings")
        except DataAccessError as e:
            self.logger.warning(f"Store settings unavailable, using configured defaults: {e}")
            return StoreSettings.defaults()
        if isinstance(data, dict):
            pairs = [{"setting_key": k, "setting_value": v} for k, v in data.items()]
        else:
            pairs = _as_list(data, "settings")
        return StoreSettings.from_pairs(pairs)

    def get_qr_accounts(self) -> List[QRPaymentAccount]:
        try:
            rows = _as_list(self._get("qr-payments/accounts"), "accounts")
        except DataAccessError as e:
            self.logger.warning(f"QR payment accounts unavailable, using configured account: {e}")
            rows = []
        accounts = [
            QRPaymentAccount.model_validate({k: str(v) for k, v in r.items() if v is not None})
            for r in rows
            if r.get("status", "active") == "active"
        ]
        if not accounts:
            configured = QRPaymentAccount.from_config()
            if configured is not None:
                accounts.append(configured)
        return accounts

    # ---------- orders ----------

    def create_order(self, request: OrderRequest) -> Order:
        url = self._url("sales/orders")
        try:
            response = requests.post(url, json=request.model_dump(mode="json"), timeout=self.timeout)
        except requests.RequestException as e:
            self.logger.error(f"POST {url} failed for order {request.order_number}: {e}")
            raise SubmissionError() from e
        data = self._unwrap(f"POST {url}", response, SubmissionError)
        return Order.from_response(data if isinstance(data, dict) else {}, request)

    def get_order(self, order_id: Union[int, str]) -> Optional[Order]:
        data = self._get(f"sales/orders/{order_id}", allow_missing=True)
        if data is _MISSING or not data:
            return None
        return _order_from_payload(data)

    def list_orders(self, limit: int = 50) -> List[Order]:
        data = self._get("sales/orders", params={"limit": limit})
        return [_order_from_payload(row) for row in _as_list(data, "orders")][:limit]
