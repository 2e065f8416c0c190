from pathlib import Path

import pandas as pd
import pytest
import streamlit as st
from streamlit.testing.v1 import AppTest

from retailpos.config import set_config_for_test
from retailpos.orders import CheckoutState
from retailpos.seed_data import write_csv

APP_PATH = Path(__file__).resolve().parents[1] / "app.py"


@pytest.fixture
def pos_app(tmp_path):
    write_csv(str(tmp_path / "products.csv"), [
        {"id": 1, "sku": "SP001", "barcode": "8934588012345", "name": "Nước ngọt Coca Cola 330ml", "sale_price": 12000, "unit": "Lon"},
        {"id": 2, "sku": "SP002", "barcode": "", "name": "Bánh mì sandwich", "sale_price": 25000, "unit": "Gói"},
    ], ["id", "sku", "barcode", "name", "sale_price", "unit"])
    write_csv(str(tmp_path / "customers.csv"), [], ["id", "name", "phone", "address", "email"])
    set_config_for_test(data_dir=str(tmp_path))
    st.cache_resource.clear()
    return AppTest.from_file(str(APP_PATH), default_timeout=30)


def test_checkout_clears_cart_and_keeps_receipt(pos_app):
    """A saved order resets the cart for the next customer; its receipt stays on screen."""
    at = pos_app.run()
    at.button(key="add-1").click().run()
    controller = at.session_state["controller"]
    assert [line.product_id for line in controller.engine.lines] == [1]

    at.button(key="checkout-quick").click().run()
    assert not at.exception

    controller = at.session_state["controller"]
    assert controller.engine.is_empty
    assert not controller.engine.locked
    assert controller.state is CheckoutState.EMPTY
    assert at.session_state["last_order"].order_number == "DH00001"
    assert "DH00001" in at.success[0].value


def test_next_sale_after_checkout_is_saved(pos_app, tmp_path):
    at = pos_app.run()
    at.button(key="add-1").click().run()
    at.button(key="checkout-quick").click().run()

    at.button(key="add-2").click().run()
    at.button(key="checkout-normal").click().run()
    assert not at.exception
    assert not at.error

    last_order = at.session_state["last_order"]
    assert last_order.order_number == "DH00002"
    assert [i.product_id for i in last_order.items] == [2]
    assert len(pd.read_csv(tmp_path / "orders.csv")) == 2


def test_new_order_button_clears_receipt(pos_app):
    at = pos_app.run()
    at.button(key="add-1").click().run()
    at.button(key="checkout-quick").click().run()
    assert "last_order" in at.session_state

    at.button(key="new-order").click().run()
    assert "last_order" not in at.session_state
    assert not at.success
