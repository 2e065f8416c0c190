"""
Checkout lifecycle for one cart.

    EMPTY -> BUILDING -> LOCKED -> SUBMITTING -> COMPLETED | FAILED

BUILDING means order-level fields were edited before any item was added. The first
item locks the order id. A failed submission leaves the cart and its id untouched so
the operator can retry; only reset() releases the id.
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import Optional

from retailpos.cart import CartEngine
from retailpos.config import get_config
from retailpos.errors import (
    EmptyCartError,
    OrderAlreadySubmittedError,
    SubmissionError,
    SubmissionInProgressError,
)
from retailpos.logging import get_logger
from retailpos.models import Cart, Customer, Order, OrderItem, OrderRequest, PaymentIntent
from retailpos.money import ensure_percent, ensure_quantity
from retailpos.storage.interface import OrderStorage

DELIVERY_NOTE = "Giao hàng"


class CheckoutState(str, Enum):
    EMPTY = "empty"
    BUILDING = "building"
    LOCKED = "locked"
    SUBMITTING = "submitting"
    COMPLETED = "completed"
    FAILED = "failed"


def build_order_request(
    cart: Cart,
    customer: Optional[Customer] = None,
    intent: PaymentIntent = "normal",
    notes: Optional[str] = None,
) -> OrderRequest:
    """Freeze a cart snapshot into the payload sent to order storage.

    Raises:
        EmptyCartError: the cart has no lines.
        InvalidQuantityError, InvalidDiscountError: a line slipped past the cart's coercion.
    """
    if cart.is_empty:
        raise EmptyCartError()

    items = []
    for line in cart.items:
        items.append(OrderItem(
            product_id=line.product_id,
            product_name=line.product_name,
            quantity=ensure_quantity(line.quantity),
            unit_price=line.unit_price,
            discount_percent=ensure_percent(line.discount_percent),
            total=line.line_total,
        ))

    if notes is None:
        notes = DELIVERY_NOTE if intent == "delivery" else ""
    customer_name = (customer.name if customer else "") or get_config().walk_in_customer_name

    return OrderRequest(
        order_number=cart.order_id,
        customer_id=customer.id if customer else None,
        customer_name=customer_name,
        customer_phone=customer.phone if customer else "",
        items=tuple(items),
        subtotal=cart.subtotal,
        discount_percent=ensure_percent(cart.order_discount_percent),
        discount_amount=cart.order_discount_amount,
        total_amount=cart.total,
        payment_method=cart.payment_method,
        payment_status="unpaid" if intent == "delivery" else "paid",
        notes=notes,
        received_amount=cart.received_amount,
        change_amount=cart.change,
    )


class OrderLifecycleController:
    """Sequences one CartEngine through checkout against an OrderStorage."""

    def __init__(self, engine: CartEngine, storage: OrderStorage) -> None:
        self.engine = engine
        self.storage = storage
        self.logger = get_logger(__name__)
        self._in_flight = threading.Lock()
        self._outcome: Optional[CheckoutState] = None
        self._last_order: Optional[Order] = None
        self._last_error: Optional[SubmissionError] = None

    @property
    def state(self) -> CheckoutState:
        if self._in_flight.locked():
            return CheckoutState.SUBMITTING
        if self._outcome is not None:
            return self._outcome
        if self.engine.locked:
            return CheckoutState.LOCKED
        if self.engine.is_dirty:
            return CheckoutState.BUILDING
        return CheckoutState.EMPTY

    @property
    def last_order(self) -> Optional[Order]:
        return self._last_order

    @property
    def last_error(self) -> Optional[SubmissionError]:
        return self._last_error

    def submit(
        self,
        customer: Optional[Customer] = None,
        intent: PaymentIntent = "normal",
        notes: Optional[str] = None,
    ) -> Order:
        """Persist the current cart as an order.

        Raises:
            EmptyCartError: nothing to submit; storage is not called.
            SubmissionInProgressError: another submit has not returned yet.
            OrderAlreadySubmittedError: this cart was already persisted; reset first.
            SubmissionError: storage failed; the cart is kept for a retry.
        """
        if not self._in_flight.acquire(blocking=False):
            raise SubmissionInProgressError()
        try:
            if self._outcome is CheckoutState.COMPLETED:
                raise OrderAlreadySubmittedError(self._last_order.display_number)

            request = build_order_request(self.engine.snapshot(), customer, intent, notes)
            self.logger.info(
                f"Submitting order {request.order_number}: {len(request.items)} lines, "
                f"total {request.total_amount}, {request.payment_method}/{request.payment_status}"
            )
            try:
                order = self.storage.create_order(request)
            except SubmissionError as e:
                self._fail(request, e)
                raise
            except Exception as e:
                error = SubmissionError(str(e) or None)
                self._fail(request, error)
                raise error from e

            self._outcome = CheckoutState.COMPLETED
            self._last_order = order
            self._last_error = None
            self.logger.info(f"Order {order.display_number} created (client id {request.order_number})")
            return order
        finally:
            self._in_flight.release()

    def _fail(self, request: OrderRequest, error: SubmissionError) -> None:
        self._outcome = CheckoutState.FAILED
        self._last_error = error
        self.logger.error(f"Order {request.order_number} submission failed: {error.message}")

    def reset(self) -> str:
        """Clear the cart for the next customer and forget the last outcome."""
        self._outcome = None
        self._last_error = None
        return self.engine.reset()
