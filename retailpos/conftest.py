import itertools

import pytest

from retailpos.config import set_config_for_test
from retailpos.models import Product

CONFIG_ENV_VARS = [
    "APP_ENV", "LOG_LEVEL", "DATA_ACCESS", "DATA_DIR", "API_BASE_URL", "API_TIMEOUT",
    "THOUSANDS_SEPARATOR", "ORDER_ID_PREFIX", "SERVER_ORDER_PREFIX", "DEFAULT_PAPER_SIZE",
    "STORE_NAME", "STORE_ADDRESS", "STORE_PHONE", "WALK_IN_CUSTOMER_NAME",
    "QR_BANK_BIN", "QR_ACCOUNT_NUMBER", "QR_ACCOUNT_NAME",
]


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    for var in CONFIG_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    set_config_for_test()
    yield
    set_config_for_test()


@pytest.fixture
def order_ids():
    """Deterministic order id factory: HD000001, HD000002, ..."""
    counter = itertools.count(1)
    return lambda: f"HD{next(counter):06d}"


@pytest.fixture
def coke():
    return Product(id=1, sku="SP001", name="Nước ngọt Coca Cola 330ml", sale_price=12_000, barcode="8934588012345")


@pytest.fixture
def bread():
    return Product(id=2, sku="SP002", name="Bánh mì sandwich", sale_price=25_000)
