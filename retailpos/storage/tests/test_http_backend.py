from unittest.mock import Mock, patch

import pytest
import requests

from retailpos.config import set_config_for_test
from retailpos.errors import DataAccessError, SubmissionError
from retailpos.models import OrderItem, OrderRequest
from retailpos.storage.backends.http_backend import HttpDataAccess
from retailpos.storage.util import get_data_access

BASE_URL = "http://pos.test/api"


def response(status_code=200, payload=None, json_error=False):
    mock_response = Mock()
    mock_response.status_code = status_code
    if json_error:
        mock_response.json.side_effect = ValueError("no json")
    else:
        mock_response.json.return_value = payload
    return mock_response


@pytest.fixture
def da():
    return HttpDataAccess(base_url=BASE_URL + "/", timeout=3)


@pytest.fixture
def request_payload():
    return OrderRequest(
        order_number="HD482913",
        customer_name="Khách Lẻ",
        items=(OrderItem(product_id=1, product_name="Coca Cola", quantity=2, unit_price=12_000, total=24_000),),
        subtotal=24_000,
        discount_amount=0,
        total_amount=24_000,
        payment_method="cash",
        payment_status="paid",
        received_amount=50_000,
        change_amount=26_000,
    )


@patch("retailpos.storage.backends.http_backend.requests.post")
def test_create_order_success(mock_post, da, request_payload):
    """The server's id and number are merged over the submitted order."""
    mock_post.return_value = response(201, {"success": True, "data": {"id": 21, "order_number": "DH000021"}})

    order = da.create_order(request_payload)

    assert order.id == 21
    assert order.order_number == "DH000021"
    assert order.client_order_id == "HD482913"
    assert order.total_amount == 24_000
    assert order.items[0].product_name == "Coca Cola"
    args, kwargs = mock_post.call_args
    assert args[0] == "http://pos.test/api/sales/orders"
    assert kwargs["json"]["order_number"] == "HD482913"
    assert kwargs["json"]["items"][0]["total"] == 24_000
    assert kwargs["timeout"] == 3


@patch("retailpos.storage.backends.http_backend.requests.post")
def test_create_order_server_error_message(mock_post, da, request_payload):
    """A server-provided reason is surfaced verbatim."""
    mock_post.return_value = response(400, {"success": False, "error": "Sản phẩm hết hàng"})

    with pytest.raises(SubmissionError) as exc:
        da.create_order(request_payload)
    assert exc.value.message == "Sản phẩm hết hàng"
    assert exc.value.status_code == 400


@patch("retailpos.storage.backends.http_backend.requests.post")
def test_create_order_unsuccessful_envelope(mock_post, da, request_payload):
    """success: false is a failure even with a 2xx status."""
    mock_post.return_value = response(200, {"success": False})

    with pytest.raises(SubmissionError) as exc:
        da.create_order(request_payload)
    assert exc.value.message == SubmissionError.GENERIC_MESSAGE


@patch("retailpos.storage.backends.http_backend.requests.post")
def test_create_order_non_json_error(mock_post, da, request_payload):
    mock_post.return_value = response(502, json_error=True)

    with pytest.raises(SubmissionError) as exc:
        da.create_order(request_payload)
    assert exc.value.message == SubmissionError.GENERIC_MESSAGE
    assert exc.value.status_code == 502


@patch("retailpos.storage.backends.http_backend.requests.post")
def test_create_order_network_error_is_chained(mock_post, da, request_payload):
    error = requests.ConnectionError("refused")
    mock_post.side_effect = error

    with pytest.raises(SubmissionError) as exc:
        da.create_order(request_payload)
    assert exc.value.__cause__ is error


@patch("retailpos.storage.backends.http_backend.requests.get")
def test_find_products(mock_get, da):
    mock_get.return_value = response(200, {"success": True, "data": {"products": [
        {"id": 1, "sku": "SP001", "name": "Coca Cola", "sale_price": 12000, "barcode": None, "stock_quantity": 10},
        {"id": 2, "sku": "SP002", "name": "Bánh mì", "sale_price": "25000.00"},
    ]}})

    products = da.find_products("co", limit=10)

    assert [p.id for p in products] == [1, 2]
    assert products[1].sale_price == 25_000
    mock_get.assert_called_once_with(
        "http://pos.test/api/products", params={"search": "co", "limit": 10}, timeout=3
    )


@patch("retailpos.storage.backends.http_backend.requests.get")
def test_get_product_by_barcode_matches_exactly(mock_get, da):
    mock_get.return_value = response(200, {"success": True, "data": [
        {"id": 1, "sku": "SP001", "name": "A", "sale_price": 1000, "barcode": "8931"},
        {"id": 2, "sku": "SP002", "name": "B", "sale_price": 1000, "barcode": "893"},
    ]})
    assert da.get_product_by_barcode("893").id == 2


@patch("retailpos.storage.backends.http_backend.requests.get")
def test_missing_product_is_none(mock_get, da):
    mock_get.return_value = response(404, {"success": False, "error": "Không tìm thấy"})
    assert da.get_product(99) is None


@patch("retailpos.storage.backends.http_backend.requests.get")
def test_lookup_failure_raises_data_access_error(mock_get, da):
    mock_get.return_value = response(500, {"success": False, "error": "Lỗi máy chủ"})
    with pytest.raises(DataAccessError) as exc:
        da.find_customers("lan")
    assert "Lỗi máy chủ" in str(exc.value)

    mock_get.side_effect = requests.Timeout("slow")
    with pytest.raises(DataAccessError):
        da.get_customer(1)


@patch("retailpos.storage.backends.http_backend.requests.get")
def test_get_customer(mock_get, da):
    mock_get.return_value = response(200, {"success": True, "data": {
        "id": 4, "name": "Lan", "phone": "0901234567", "address": None, "email": None,
    }})
    customer = da.get_customer(4)
    assert customer.name == "Lan"
    assert customer.address == ""


@patch("retailpos.storage.backends.http_backend.requests.get")
def test_store_settings_from_pairs(mock_get, da):
    mock_get.return_value = response(200, {"success": True, "data": [
        {"setting_key": "store_name", "setting_value": "Tạp hóa Lan"},
        {"setting_key": "store_address", "setting_value": ""},
    ]})
    settings = da.get_store_settings()
    assert settings.store_name == "Tạp hóa Lan"
    assert settings.store_address == "123 Đường ABC, Quận XYZ, TP. Hồ Chí Minh"


@patch("retailpos.storage.backends.http_backend.requests.get")
def test_store_settings_fall_back_to_defaults(mock_get, da):
    mock_get.side_effect = requests.ConnectionError("down")
    settings = da.get_store_settings()
    assert settings.store_name == "CỬA HÀNG TIỆN LỢI"


@patch("retailpos.storage.backends.http_backend.requests.get")
def test_qr_accounts_skip_inactive(mock_get, da):
    mock_get.return_value = response(200, {"success": True, "data": [
        {"id": 1, "provider_id": "970436", "account_number": "0011", "account_owner": "LAN", "status": "active"},
        {"id": 2, "provider_id": "970422", "account_number": "0022", "account_owner": "LAN", "status": "inactive"},
    ]})
    assert [a.account_number for a in da.get_qr_accounts()] == ["0011"]


@patch("retailpos.storage.backends.http_backend.requests.get")
def test_get_and_list_orders(mock_get, da):
    row = {
        "id": 21, "order_number": "DH000021", "customer_name": "Anh Hòa",
        "total_amount": 610000, "created_at": "2024-03-05T09:07:03",
        "items": [{"product_id": 1, "product_name": "Váy", "quantity": 5, "unit_price": 10000, "total_price": 50000}],
    }
    mock_get.return_value = response(200, {"success": True, "data": row})
    order = da.get_order(21)
    assert order.client_order_id == "DH000021"
    assert order.items[0].total == 50_000
    assert order.created_at.year == 2024

    mock_get.return_value = response(200, {"success": True, "data": {"orders": [row, {**row, "id": 20, "order_number": "DH000020"}]}})
    assert [o.display_number for o in da.list_orders(limit=5)] == ["DH000021", "DH000020"]


def test_get_data_access_factory():
    set_config_for_test(data_access="http", api_base_url=BASE_URL, api_timeout=4)
    da = get_data_access()
    assert isinstance(da, HttpDataAccess)
    assert da.base_url == BASE_URL
    assert da.timeout == 4
    with pytest.raises(ValueError):
        get_data_access("sql")
