"""
Builds the flat token -> string mapping a receipt template is rendered against.

Legacy single-item tokens (Ten_Hang_Hoa, So_Luong, Don_Gia_Chiet_Khau, Thanh_Tien)
only ever carry the first order line; itemized templates print the full table
instead.
"""

from __future__ import annotations

from datetime import datetime
from html import escape
from typing import Dict, Optional

from retailpos.models import Order, QRPaymentAccount, StoreSettings
from retailpos.money import format_currency

from .vietqr import build_vietqr_url
from .words import amount_in_words

PlaceholderContext = Dict[str, str]

FINAL_TITLE = "HÓA ĐƠN ĐẶT HÀNG"

PAYMENT_METHOD_LABELS = {
    "cash": "Tiền mặt",
    "card": "Thẻ",
    "transfer": "Chuyển khoản",
    "e_wallet": "Ví điện tử",
}


def _text(value: Optional[str]) -> str:
    return escape(value or "", quote=False)


def discount_percent_label(order: Order) -> str:
    if order.discount_amount <= 0 or order.subtotal <= 0:
        return "0%"
    return f"{order.discount_amount / order.subtotal * 100:.1f}%"


def transfer_qr_url(order: Order, account: Optional[QRPaymentAccount]) -> str:
    """VietQR image URL for transfer orders, blank otherwise."""
    if order.payment_method != "transfer" or account is None:
        return ""
    return build_vietqr_url(
        bank_bin=account.provider_id,
        account_number=account.account_number,
        account_name=account.account_owner,
        amount=order.total_amount,
        description=f"Thanh toan hoa don {order.display_number}",
    )


def build_placeholder_context(
    order: Order,
    store: StoreSettings,
    qr_account: Optional[QRPaymentAccount] = None,
    printed_at: Optional[datetime] = None,
) -> PlaceholderContext:
    ts = printed_at or order.created_at
    first = order.items[0] if order.items else None

    qr_url = transfer_qr_url(order, qr_account)
    if qr_url:
        qr_markup = f'<img src="{escape(qr_url)}" alt="QR Code thanh toán" class="qr-code" />'
    else:
        qr_markup = store.qr_code

    return {
        # store
        "Logo_Cua_Hang": store.store_logo,
        "Ten_Cua_Hang": _text(store.store_name),
        "Dia_Chi_Chi_Nhanh": _text(store.store_address),
        "Phuong_Xa_Chi_Nhanh": "",
        "Khu_Vuc_Chi_Nhanh_QH_TP": "",
        "Dien_Thoai_Chi_Nhanh": _text(store.store_phone),
        # order header; a blank title selects the provisional wording
        "Ma_Don_Hang": _text(order.display_number),
        "Tieu_De_In": FINAL_TITLE if order.payment_status == "paid" else "",
        "Ngay": f"{ts.day:02d}",
        "Thang": f"{ts.month:02d}",
        "Nam": str(ts.year),
        "Gio": f"{ts.hour:02d}",
        "Phut": f"{ts.minute:02d}",
        "Giay": f"{ts.second:02d}",
        # customer
        "Khach_Hang": _text(order.customer_name),
        "So_Dien_Thoai": _text(order.customer_phone),
        "Dia_Chi_Khach_Hang": _text(order.customer_address),
        "Phuong_Xa_Khach_Hang": "",
        "Khu_Vuc_Khach_Hang_QH_TP": "",
        # first line only
        "Ten_Hang_Hoa": _text(first.product_name) if first else "",
        "So_Luong": str(first.quantity) if first else "",
        "Don_Gia_Chiet_Khau": format_currency(first.unit_price) if first else "",
        "Thanh_Tien": format_currency(first.total) if first else "",
        # totals
        "Tong_Tien_Hang": format_currency(order.subtotal),
        "Chiet_Khau_Hoa_Don": format_currency(order.discount_amount),
        "Chiet_Khau_Hoa_Don_Phan_Tram": discount_percent_label(order),
        "Tong_Cong": format_currency(order.total_amount),
        "Tong_Cong_Bang_Chu": amount_in_words(order.total_amount),
        "Ma_QR": qr_markup,
        # payment
        "Phuong_Thuc_Thanh_Toan": PAYMENT_METHOD_LABELS.get(order.payment_method, ""),
        "Tien_Khach_Dua": format_currency(order.received_amount),
        "Tien_Thua": format_currency(order.change_amount),
        "Ghi_Chu": _text(order.notes),
    }
