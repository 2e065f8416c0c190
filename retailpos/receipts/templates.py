"""Receipt templates shipped with the POS, plus sample data for previewing them."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from retailpos.models import Order, OrderItem


class ReceiptTemplate(BaseModel):
    """Template markup with (Token) placeholders.

    Itemized templates get the full item table between `content` and `footer`;
    the others rely on the single-item tokens.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Template display name")
    content: str = Field(description="Markup with placeholder tokens")
    footer: str = Field(default="", description="Markup printed after the item table")
    itemized: bool = Field(default=False, description="Render the full item table")


SALES_INVOICE_TEMPLATE = ReceiptTemplate(
    name="Mẫu in hóa đơn",
    content="""<div style="text-align: center;">
<div>(Logo_Cua_Hang)</div>
<div><strong>(Ten_Cua_Hang)</strong></div>
<div>Địa chỉ: (Dia_Chi_Chi_Nhanh) - (Phuong_Xa_Chi_Nhanh) - (Khu_Vuc_Chi_Nhanh_QH_TP)</div>
<div><strong>Điện thoại: (Dien_Thoai_Chi_Nhanh)</strong></div>
</div>

<div style="text-align: center; margin: 20px 0;">
<h2><strong>HÓA ĐƠN BÁN HÀNG</strong></h2>
<div>Số HD: (Ma_Don_Hang)</div>
<div>Ngày (Ngay) tháng (Thang) năm (Nam)</div>
</div>

<div style="margin: 20px 0;">
<div>Khách hàng: (Khach_Hang)</div>
<div>SĐT: (So_Dien_Thoai)</div>
<div>Địa chỉ: (Dia_Chi_Khach_Hang) - (Phuong_Xa_Khach_Hang) - (Khu_Vuc_Khach_Hang_QH_TP)</div>
</div>

<table style="width: 100%; border-collapse: collapse; margin: 20px 0;">
<tr>
<th style="border: 1px solid black; padding: 8px; text-align: left;">Đơn giá</th>
<th style="border: 1px solid black; padding: 8px; text-align: center;">SL</th>
<th style="border: 1px solid black; padding: 8px; text-align: right;">Thành tiền</th>
</tr>
<tr>
<td style="border: 1px solid black; padding: 8px;">(Ten_Hang_Hoa)</td>
<td style="border: 1px solid black; padding: 8px; text-align: center;">(So_Luong)</td>
<td style="border: 1px solid black; padding: 8px; text-align: right;">(Thanh_Tien)</td>
</tr>
<tr>
<td colspan="3" style="border: 1px solid black; padding: 8px; text-align: right;">
<div>Tổng tiền hàng: (Tong_Tien_Hang)</div>
<div>Chiết khấu (Chiet_Khau_Hoa_Don_Phan_Tram): (Chiet_Khau_Hoa_Don)</div>
<div><strong>Tổng thanh toán: (Tong_Cong)</strong></div>
</td>
</tr>
</table>

<div style="text-align: center; margin: 20px 0;">
<div>(Tong_Cong_Bang_Chu)</div>
<div style="margin: 10px 0;">(Ma_QR)</div>
<div><em>Cảm ơn và hẹn gặp lại!</em></div>
</div>""",
)

ORDER_TEMPLATE = ReceiptTemplate(
    name="Mẫu in đặt hàng",
    content="""<div style="text-align: center;">
<div>(Logo_Cua_Hang)</div>
<div>(Ten_Cua_Hang)</div>
<div>Địa chỉ: (Dia_Chi_Chi_Nhanh) - (Phuong_Xa_Chi_Nhanh) - (Khu_Vuc_Chi_Nhanh_QH_TP)</div>
<div><strong>Điện thoại: (Dien_Thoai_Chi_Nhanh)</strong></div>
</div>

<div style="text-align: center; margin: 20px 0;">
<h2>(Tieu_De_In HÓA ĐƠN ĐẶT HÀNG|HÓA ĐƠN ĐẶT HÀNG TẠM TÍNH)</h2>
<div>Mã đơn hàng: (Ma_Don_Hang)</div>
<div>Ngày (Ngay) tháng (Thang) năm (Nam)</div>
</div>

<div style="margin: 20px 0;">
<div>Khách hàng: (Khach_Hang)</div>
<div>SĐT: (So_Dien_Thoai)</div>
<div>Địa chỉ: (Dia_Chi_Khach_Hang) - (Phuong_Xa_Khach_Hang) - (Khu_Vuc_Khach_Hang_QH_TP)</div>
</div>

<table style="width: 100%; border-collapse: collapse; margin: 20px 0;">
<tr>
<th style="border: 1px solid black; padding: 8px; text-align: left;">Đơn giá</th>
<th style="border: 1px solid black; padding: 8px; text-align: center;">SL</th>
<th style="border: 1px solid black; padding: 8px; text-align: right;">T.Tiền</th>
</tr>
<tr>
<td style="border: 1px solid black; padding: 8px;">(Ten_Hang_Hoa)</td>
<td style="border: 1px solid black; padding: 8px; text-align: center;"></td>
<td style="border: 1px solid black; padding: 8px; text-align: right;"></td>
</tr>
<tr>
<td style="border: 1px solid black; padding: 8px;">(Don_Gia_Chiet_Khau)</td>
<td style="border: 1px solid black; padding: 8px; text-align: center;">(So_Luong)</td>
<td style="border: 1px solid black; padding: 8px; text-align: right;">(Thanh_Tien)</td>
</tr>
<tr>
<td colspan="3" style="border: 1px solid black; padding: 8px; text-align: right;">
<div>Tổng tiền hàng: (Tong_Tien_Hang)</div>
<div>Chiết khấu (Chiet_Khau_Hoa_Don_Phan_Tram): (Chiet_Khau_Hoa_Don)</div>
<div><strong>Tổng thanh toán: (Tong_Cong)</strong></div>
</td>
</tr>
</table>

<div style="text-align: center; margin: 20px 0;">
<div>(Tong_Cong_Bang_Chu)</div>
<div style="margin: 10px 0;">(Ma_QR)</div>
<div>Cảm ơn và hẹn gặp lại!</div>
</div>""",
)

THERMAL_TEMPLATE = ReceiptTemplate(
    name="Mẫu in nhiệt",
    itemized=True,
    content="""<div style="text-align: center;">
<div class="bold">(Ten_Cua_Hang)</div>
<div>(Dia_Chi_Chi_Nhanh)</div>
<div>Điện thoại: (Dien_Thoai_Chi_Nhanh)</div>
</div>

<div style="text-align: center;">
<div class="bold">(Tieu_De_In HÓA ĐƠN ĐẶT HÀNG|HÓA ĐƠN ĐẶT HÀNG TẠM TÍNH)</div>
<div>Mã đơn hàng: (Ma_Don_Hang)</div>
<div>Ngày (Ngay)/(Thang)/(Nam) (Gio):(Phut)</div>
</div>

<div class="customer-info">
<div>Khách hàng: (Khach_Hang)</div>
<div>SĐT: (So_Dien_Thoai)</div>
<div>Địa chỉ: (Dia_Chi_Khach_Hang)</div>
</div>""",
    footer="""<div style="text-align: right;">
<div>Tổng tiền hàng: (Tong_Tien_Hang)</div>
<div>Chiết khấu: (Chiet_Khau_Hoa_Don)</div>
<div class="bold">Tổng thanh toán: (Tong_Cong)</div>
<div>(Phuong_Thuc_Thanh_Toan)</div>
</div>

<div style="text-align: center;">
<div>(Tong_Cong_Bang_Chu)</div>
<div>(Ma_QR)</div>
<div>Cảm ơn và hẹn gặp lại!</div>
</div>""",
)

DEFAULT_TEMPLATES = {
    "invoice": SALES_INVOICE_TEMPLATE,
    "order": ORDER_TEMPLATE,
    "thermal": THERMAL_TEMPLATE,
}


def sample_order(created_at: Optional[datetime] = None) -> Order:
    """A four-line order for previewing templates without a real sale."""
    items = (
        OrderItem(product_name="Váy nữ Alcado (chỉ đo)", quantity=5, unit_price=10_000, total=50_000),
        OrderItem(product_name="Quần short nữ Blue Exchange", quantity=1, unit_price=6_000, total=6_000),
        OrderItem(product_name="Quần jeans nữ Pop", quantity=1, unit_price=20_000, total=20_000),
        OrderItem(product_name="Quần jeans nữ Blue Exchange", quantity=6, unit_price=90_000, total=540_000),
    )
    return Order(
        id="sample",
        order_number="DH000021",
        client_order_id="DH000021",
        customer_name="Anh Hòa Q.1",
        customer_phone="0123456789",
        customer_address="Hà Tĩnh",
        items=items,
        subtotal=616_000,
        discount_amount=6_000,
        total_amount=610_000,
        payment_method="cash",
        payment_status="paid",
        created_at=created_at or datetime.now(),
    )
