"""
Cart engine for one checkout transaction.

Holds the mutable cart state behind a small command API and hands out immutable
`Cart` snapshots. Every numeric field typed by the operator is coerced on the way
in, so aggregates can never see NaN or negative values.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, List, Optional

from retailpos.config import get_config
from retailpos.errors import InvalidPriceError, LineNotFoundError
from retailpos.logging import get_logger
from retailpos.models import PAYMENT_METHODS, Cart, CartLineItem, PaymentMethod, Product
from retailpos.money import clamp_percent, coerce_amount, ensure_quantity, round_half_up, to_decimal


def generate_order_id(prefix: Optional[str] = None) -> str:
    """Prefix plus the last six digits of the epoch-millisecond clock, e.g. HD482913."""
    if prefix is None:
        prefix = get_config().order_id_prefix
    return f"{prefix}{str(int(time.time() * 1000))[-6:]}"


class CartEngine:
    """Line items and payment parameters of a single checkout.

    The order identifier is regenerable while the cart is untouched by items and
    frozen from the first `add_item` until `reset()`.
    """

    def __init__(self, order_id_factory: Callable[[], str] = None) -> None:
        self._new_order_id = order_id_factory or generate_order_id
        self.logger = get_logger(__name__)
        self._lines: Dict[int, CartLineItem] = {}
        self._order_discount_percent = 0.0
        self._received_amount = 0
        self._payment_method: PaymentMethod = "cash"
        self._locked = False
        self._dirty = False
        self._order_id = self._new_order_id()

    # ---------- state ----------

    @property
    def order_id(self) -> str:
        return self._order_id

    @property
    def locked(self) -> bool:
        return self._locked

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def is_dirty(self) -> bool:
        """An order-level field was edited since the last reset."""
        return self._dirty

    @property
    def lines(self) -> List[CartLineItem]:
        return list(self._lines.values())

    def get_line(self, line_ref: int) -> CartLineItem:
        try:
            return self._lines[line_ref]
        except KeyError:
            raise LineNotFoundError(f"No cart line for product {line_ref}") from None

    # ---------- line items ----------

    def add_item(self, product: Product, quantity: int = 1) -> CartLineItem:
        """Add a product, merging into its existing line when there is one."""
        quantity = ensure_quantity(quantity)
        existing = self._lines.get(product.id)
        if existing is not None:
            line = self._replace(existing, quantity=existing.quantity + quantity)
        else:
            line = CartLineItem(product=product, quantity=quantity, unit_price=product.sale_price)
        self._lines[product.id] = line
        if not self._locked:
            self._locked = True
            self.logger.debug(f"Order {self._order_id} locked by first item")
        self.logger.debug(f"Added {quantity} x {product.name}; line total {line.line_total}")
        return line

    def set_quantity(self, line_ref: int, quantity: Any) -> Optional[CartLineItem]:
        """Set a line's quantity; zero or below removes the line."""
        line = self.get_line(line_ref)
        value = to_decimal(quantity)
        if value is not None and value <= 0:
            self.remove_item(line_ref)
            return None
        line = self._replace(line, quantity=ensure_quantity(quantity))
        self._lines[line_ref] = line
        return line

    def set_item_price(self, line_ref: int, unit_price: Any, discount_percent: Any = 0) -> CartLineItem:
        """Manual price override for one line."""
        line = self.get_line(line_ref)
        price = to_decimal(unit_price)
        if price is not None and price < 0:
            raise InvalidPriceError(f"Unit price must not be negative, got {unit_price!r}")
        line = self._replace(
            line,
            unit_price=round_half_up(unit_price),
            discount_percent=clamp_percent(discount_percent),
        )
        self._lines[line_ref] = line
        self.logger.debug(
            f"Price override on {line.product_name}: {line.unit_price} at {line.discount_percent}%"
        )
        return line

    def remove_item(self, line_ref: int) -> None:
        """Remove a line. The cart stays locked even when it becomes empty."""
        self.get_line(line_ref)
        del self._lines[line_ref]

    @staticmethod
    def _replace(line: CartLineItem, **changes) -> CartLineItem:
        fields = {
            "product": line.product,
            "quantity": line.quantity,
            "unit_price": line.unit_price,
            "discount_percent": line.discount_percent,
        }
        fields.update(changes)
        return CartLineItem(**fields)

    # ---------- order-level fields ----------

    def set_order_discount_percent(self, percent: Any) -> float:
        self._order_discount_percent = clamp_percent(percent)
        self._dirty = True
        return self._order_discount_percent

    def set_received_amount(self, amount: Any) -> int:
        self._received_amount = coerce_amount(amount)
        self._dirty = True
        return self._received_amount

    def set_payment_method(self, method: str) -> PaymentMethod:
        """Choose how the customer pays. A bank transfer is always for the exact total."""
        if method not in PAYMENT_METHODS:
            raise ValueError(f"Unknown payment method: {method!r}")
        self._payment_method = method
        self._dirty = True
        if method == "transfer":
            self._received_amount = self.snapshot().total
        return self._payment_method

    # ---------- identifier ----------

    def regenerate_order_id(self) -> str:
        """Issue a new order id; a locked cart keeps its id."""
        if not self._locked:
            self._order_id = self._new_order_id()
        return self._order_id

    def reset(self) -> str:
        """Start a new transaction: empty cart, unlocked, fresh order id."""
        self._lines.clear()
        self._order_discount_percent = 0.0
        self._received_amount = 0
        self._payment_method = "cash"
        self._locked = False
        self._dirty = False
        self._order_id = self._new_order_id()
        self.logger.debug(f"Cart reset; new order id {self._order_id}")
        return self._order_id

    # ---------- snapshot ----------

    def snapshot(self) -> Cart:
        return Cart(
            items=tuple(self._lines.values()),
            order_discount_percent=self._order_discount_percent,
            received_amount=self._received_amount,
            payment_method=self._payment_method,
            order_id=self._order_id,
            locked=self._locked,
        )
