from .context import build_placeholder_context, PAYMENT_METHOD_LABELS, PlaceholderContext
from .paper import A4, THERMAL_80MM, THERMAL_57MM, PAPER_PROFILES, get_paper_profile
from .renderer import Document, ReceiptRenderer, normalize_markup_for_print
from .template import TemplateEngine, render_template
from .templates import (
    ReceiptTemplate,
    SALES_INVOICE_TEMPLATE,
    ORDER_TEMPLATE,
    THERMAL_TEMPLATE,
    DEFAULT_TEMPLATES,
    sample_order,
)
from .vietqr import build_vietqr_url, bank_name
from .words import amount_in_words

__all__ = [
    # Rendering
    "ReceiptRenderer",
    "Document",
    "normalize_markup_for_print",
    "build_placeholder_context",
    "PlaceholderContext",
    "PAYMENT_METHOD_LABELS",
    # Templates
    "TemplateEngine",
    "render_template",
    "ReceiptTemplate",
    "SALES_INVOICE_TEMPLATE",
    "ORDER_TEMPLATE",
    "THERMAL_TEMPLATE",
    "DEFAULT_TEMPLATES",
    "sample_order",
    # Paper
    "A4",
    "THERMAL_80MM",
    "THERMAL_57MM",
    "PAPER_PROFILES",
    "get_paper_profile",
    # Helpers
    "build_vietqr_url",
    "bank_name",
    "amount_in_words",
]
