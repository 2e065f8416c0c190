"""
Renders an order into a printable HTML page for a given paper profile.

Printing sits outside the checkout transaction: a template or data problem produces
a blank-bodied document and a log entry, never an exception.
"""

from __future__ import annotations

from datetime import datetime
from html import escape
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

from retailpos.logging import get_logger
from retailpos.models import Order, OrderItem, PaperProfile, QRPaymentAccount, StoreSettings
from retailpos.money import format_currency

from .context import build_placeholder_context
from .template import TemplateEngine
from .templates import ReceiptTemplate

# authoring markers -> classes understood by the thermal stylesheet
THERMAL_MARKUP_REWRITES = (
    ('class="bold"', 'style="font-weight: bold;"'),
    ('style="text-align: center;"', 'class="text-center"'),
    ('style="text-align: right;"', 'class="text-right"'),
    ('style="text-align: left;"', 'class="text-left"'),
)


class Document(BaseModel):
    """A rendered receipt ready to hand to a browser print dialog."""
    model_config = ConfigDict(frozen=True)

    title: str = Field(description="Document title")
    paper: PaperProfile = Field(description="Paper profile used for layout")
    body: str = Field(default="", description="Rendered receipt markup")
    html: str = Field(description="Complete HTML page")


def normalize_markup_for_print(markup: str) -> str:
    for marker, replacement in THERMAL_MARKUP_REWRITES:
        markup = markup.replace(marker, replacement)
    return markup


def render_items_table(items: Iterable[OrderItem], paper: PaperProfile) -> str:
    """Full item table; thermal paper drops the unit price column."""
    rows = []
    if paper.thermal:
        header = (
            '<tr><th style="width: 50%;">Tên hàng</th>'
            '<th style="width: 15%; text-align: center;">SL</th>'
            '<th style="width: 35%; text-align: right;">T.Tiền</th></tr>'
        )
        for item in items:
            rows.append(
                f"<tr><td>{escape(item.product_name, quote=False)}</td>"
                f'<td style="text-align: center;">{item.quantity}</td>'
                f'<td style="text-align: right;">{format_currency(item.total)}</td></tr>'
            )
    else:
        header = (
            "<tr><th>STT</th><th>Tên sản phẩm</th>"
            '<th class="text-center">SL</th>'
            '<th class="text-right">Đơn giá</th>'
            '<th class="text-right">Thành tiền</th></tr>'
        )
        for index, item in enumerate(items, start=1):
            rows.append(
                f"<tr><td>{index}</td><td>{escape(item.product_name, quote=False)}</td>"
                f'<td class="text-center">{item.quantity}</td>'
                f'<td class="text-right">{format_currency(item.unit_price)} đ</td>'
                f'<td class="text-right">{format_currency(item.total)} đ</td></tr>'
            )
    return (
        '<table class="items-table">\n'
        f"<thead>{header}</thead>\n"
        "<tbody>\n" + "\n".join(rows) + "\n</tbody>\n</table>"
    )


def page_css(paper: PaperProfile) -> str:
    if paper.thermal:
        return f"""
@media print {{
  @page {{ size: {paper.page_size}; margin: {paper.margin}; }}
  body {{ margin: 0; padding: 2mm; font-family: {paper.font_family}; font-size: {paper.font_size}; line-height: 1.2; color: #000; -webkit-print-color-adjust: exact; }}
}}
body {{ width: {paper.body_width}; margin: 0 auto; padding: 2mm; font-family: {paper.font_family}; font-size: {paper.font_size}; line-height: 1.2; color: #000; background: white; }}
.title {{ text-align: center; margin: 8px 0; font-weight: bold; font-size: {paper.title_font_size}; }}
.customer-info {{ margin-bottom: 8px; border-bottom: 1px dashed #000; padding-bottom: 4px; }}
table {{ width: 100%; margin-bottom: 8px; border-collapse: collapse; }}
th, td {{ padding: 2px; text-align: left; border-bottom: 1px dotted #000; }}
th {{ font-weight: bold; border-bottom: 1px solid #000; }}
.text-center {{ text-align: center; }}
.text-right {{ text-align: right; }}
.text-left {{ text-align: left; }}
.footer {{ text-align: center; margin-top: 8px; border-top: 1px dashed #000; padding-top: 4px; }}
.bold {{ font-weight: bold; }}
.qr-code {{ width: 120px; height: 120px; }}
div {{ margin: 2px 0; }}
"""
    return f"""
@media print {{
  @page {{ size: {paper.page_size}; margin: {paper.margin}; }}
}}
body {{ font-family: {paper.font_family}; font-size: {paper.font_size}; line-height: 1.4; color: #000; margin: 0; padding: 20px; }}
.title {{ font-size: {paper.title_font_size}; font-weight: bold; margin-bottom: 10px; }}
.items-table {{ width: 100%; border-collapse: collapse; margin-bottom: 30px; }}
.items-table th, .items-table td {{ border: 1px solid #000; padding: 8px; text-align: left; }}
.items-table th {{ background-color: #f5f5f5; font-weight: bold; }}
.text-center {{ text-align: center; }}
.text-right {{ text-align: right; }}
.qr-code {{ width: 120px; height: 120px; }}
"""


def wrap_page(title: str, body: str, paper: PaperProfile) -> str:
    return (
        "<!DOCTYPE html>\n<html>\n<head>\n<meta charset=\"UTF-8\">\n"
        f"<title>{escape(title)}</title>\n<style>{page_css(paper)}</style>\n"
        f"</head>\n<body>\n{body}\n</body>\n</html>"
    )


class ReceiptRenderer:
    """Turns persisted orders into printable documents for one store."""

    def __init__(
        self,
        store: StoreSettings,
        qr_account: Optional[QRPaymentAccount] = None,
        engine: Optional[TemplateEngine] = None,
    ) -> None:
        self.store = store
        self.qr_account = qr_account
        self.engine = engine or TemplateEngine()
        self.logger = get_logger(__name__)

    def render_body(self, order: Order, template: ReceiptTemplate, paper: PaperProfile,
                    printed_at: Optional[datetime] = None) -> str:
        context = build_placeholder_context(order, self.store, self.qr_account, printed_at)
        parts = [self.engine.render(template.content, context)]
        if template.itemized:
            parts.append(render_items_table(order.items, paper))
            parts.append(self.engine.render(template.footer, context))
        elif template.footer:
            parts.append(self.engine.render(template.footer, context))
        body = "\n".join(p for p in parts if p)
        if paper.thermal:
            body = normalize_markup_for_print(body)
        return body

    def render(self, order: Order, template: ReceiptTemplate, paper_profile: PaperProfile,
               printed_at: Optional[datetime] = None) -> Document:
        title = f"Hóa đơn {order.display_number} - {paper_profile.id}"
        try:
            body = self.render_body(order, template, paper_profile, printed_at)
        except Exception:
            self.logger.exception(f"Rendering {template.name!r} for order {order.display_number} failed")
            body = ""
        return Document(title=title, paper=paper_profile, body=body,
                        html=wrap_page(title, body, paper_profile))
