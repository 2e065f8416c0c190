import pandas as pd
import streamlit as st
import streamlit.components.v1 as components

from retailpos.cart import CartEngine
from retailpos.config import get_config
from retailpos.errors import PosError, SubmissionError
from retailpos.models import PAYMENT_METHODS
from retailpos.money import format_currency, suggest_cash_amounts
from retailpos.orders import OrderLifecycleController
from retailpos.receipts import DEFAULT_TEMPLATES, PAPER_PROFILES, PAYMENT_METHOD_LABELS, ReceiptRenderer, get_paper_profile
from retailpos.storage import get_data_access

st.set_page_config(page_title="Bán hàng", layout="wide")

# -----------------------------------------------------------------------------
# Backend selection: csv or http, from configuration
# -----------------------------------------------------------------------------
config = get_config()


@st.cache_resource
def _data_access():
    return get_data_access(config.data_access)


da = _data_access()

# One cart and one checkout controller per browser session
if "controller" not in st.session_state:
    st.session_state.controller = OrderLifecycleController(CartEngine(), da)
controller: OrderLifecycleController = st.session_state.controller
engine = controller.engine

# -----------------------------------------------------------------------------
# Sidebar: product and customer lookup
# -----------------------------------------------------------------------------
st.sidebar.header("Sản phẩm")

barcode = st.sidebar.text_input("Quét mã vạch / SKU")
if barcode:
    product = da.get_product_by_barcode(barcode)
    if product is None:
        st.sidebar.warning(f"Không tìm thấy sản phẩm {barcode}")
    elif st.sidebar.button(f"Thêm {product.name}", key="add-barcode"):
        engine.add_item(product)
        st.rerun()

search = st.sidebar.text_input("Tìm sản phẩm")
for product in da.find_products(search=search, limit=20):
    if st.sidebar.button(f"{product.name} · {format_currency(product.sale_price)}", key=f"add-{product.id}"):
        engine.add_item(product)
        st.rerun()

st.sidebar.header("Khách hàng")
customers = da.find_customers(search=st.sidebar.text_input("Tìm khách hàng"), limit=20)
customer_options = [None] + customers
customer = st.sidebar.selectbox(
    "Khách hàng",
    customer_options,
    format_func=lambda c: config.walk_in_customer_name if c is None else f"{c.name} ({c.phone})",
)

# -----------------------------------------------------------------------------
# Cart
# -----------------------------------------------------------------------------
st.markdown(f"### Đơn hàng {engine.order_id}")
st.caption(f"Trạng thái: {controller.state.value}")

cart = engine.snapshot()
if cart.is_empty:
    st.info("Giỏ hàng trống")
for line in cart.items:
    c1, c2, c3, c4, c5 = st.columns([4, 2, 2, 2, 1])
    c1.write(line.product_name)
    qty = c2.number_input("SL", min_value=0, value=line.quantity, step=1, key=f"qty-{line.product_id}")
    price = c3.number_input("Đơn giá", min_value=0, value=line.unit_price, step=1000, key=f"price-{line.product_id}")
    c4.write(format_currency(line.line_total))
    if c5.button("✕", key=f"remove-{line.product_id}"):
        engine.remove_item(line.product_id)
        st.rerun()
    if qty != line.quantity:
        engine.set_quantity(line.product_id, qty)
        st.rerun()
    if price != line.unit_price:
        engine.set_item_price(line.product_id, price, line.discount_percent)
        st.rerun()

# -----------------------------------------------------------------------------
# Payment
# -----------------------------------------------------------------------------
left, right = st.columns(2)
with left:
    discount = st.number_input("Chiết khấu (%)", min_value=0.0, max_value=100.0,
                               value=cart.order_discount_percent, step=1.0)
    if discount != cart.order_discount_percent:
        engine.set_order_discount_percent(discount)
        st.rerun()

    method = st.radio("Thanh toán", PAYMENT_METHODS, horizontal=True,
                      index=PAYMENT_METHODS.index(cart.payment_method),
                      format_func=lambda m: PAYMENT_METHOD_LABELS[m])
    if method != cart.payment_method:
        engine.set_payment_method(method)
        st.rerun()

    received = st.number_input("Khách đưa", min_value=0, value=cart.received_amount, step=1000)
    if received != cart.received_amount:
        engine.set_received_amount(received)
        st.rerun()
    if method == "cash" and cart.total > 0:
        cols = st.columns(len(suggest_cash_amounts(cart.total)))
        for col, amount in zip(cols, suggest_cash_amounts(cart.total)):
            if col.button(format_currency(amount), key=f"cash-{amount}"):
                engine.set_received_amount(amount)
                st.rerun()

with right:
    c1, c2 = st.columns(2)
    c1.metric("Tổng tiền hàng", format_currency(cart.subtotal))
    c2.metric("Chiết khấu", format_currency(cart.order_discount_amount))
    c1.metric("Khách cần trả", format_currency(cart.total))
    c2.metric("Tiền thừa", format_currency(cart.change))

# -----------------------------------------------------------------------------
# Checkout: a saved order clears the cart for the next customer
# -----------------------------------------------------------------------------
notes = st.text_input("Ghi chú", key="notes")
b1, b2, b3, b4 = st.columns(4)
intent = None
if b1.button("Thanh toán nhanh", type="primary", key="checkout-quick"):
    intent = "quick"
if b2.button("Thanh toán", key="checkout-normal"):
    intent = "normal"
if b3.button("Giao hàng", key="checkout-delivery"):
    intent = "delivery"
if b4.button("Đơn mới", key="new-order"):
    controller.reset()
    st.session_state.pop("last_order", None)
    st.rerun()

if intent is not None:
    try:
        order = controller.submit(customer=customer, intent=intent, notes=notes or None)
    except SubmissionError as e:
        st.error(e.message)
    except PosError as e:
        st.error(str(e))
    else:
        st.session_state.last_order = order
        controller.reset()
        st.rerun()

# -----------------------------------------------------------------------------
# Receipt preview for the last saved order
# -----------------------------------------------------------------------------
last_order = st.session_state.get("last_order")
if last_order is not None:
    st.success(f"Đã tạo đơn hàng {last_order.display_number}")
    st.markdown("### Hóa đơn")
    t1, t2 = st.columns(2)
    template_key = t1.selectbox("Mẫu in", list(DEFAULT_TEMPLATES), index=2,
                                format_func=lambda k: DEFAULT_TEMPLATES[k].name)
    paper_id = t2.selectbox("Khổ giấy", list(PAPER_PROFILES),
                            index=list(PAPER_PROFILES).index(config.default_paper_size))
    accounts = da.get_qr_accounts()
    renderer = ReceiptRenderer(da.get_store_settings(), accounts[0] if accounts else None)
    document = renderer.render(last_order, DEFAULT_TEMPLATES[template_key], get_paper_profile(paper_id))
    components.html(document.html, height=700, scrolling=True)

# -----------------------------------------------------------------------------
# Recent orders
# -----------------------------------------------------------------------------
with st.expander("Đơn hàng gần đây"):
    recent = da.list_orders(limit=20)
    if recent:
        st.dataframe(
            pd.DataFrame([
                {
                    "Mã đơn": o.display_number,
                    "Khách hàng": o.customer_name,
                    "Tổng cộng": o.total_amount,
                    "Thanh toán": PAYMENT_METHOD_LABELS.get(o.payment_method, o.payment_method),
                    "Trạng thái": o.payment_status,
                    "Thời gian": o.created_at,
                }
                for o in recent
            ]),
            use_container_width=True,
        )
    else:
        st.write("Chưa có đơn hàng")
