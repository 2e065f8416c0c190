from __future__ import annotations

from typing import Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field

from retailpos.money import apply_percent, discounted_total

from .products import Product

PaymentMethod = Literal["cash", "card", "transfer", "e_wallet"]
PAYMENT_METHODS: Tuple[str, ...] = ("cash", "card", "transfer", "e_wallet")


class CartLineItem(BaseModel):
    """One product row in the cart. `line_total` is always derived, never stored."""
    model_config = ConfigDict(frozen=True)

    product: Product = Field(description="Catalog product this line sells")
    quantity: int = Field(ge=1, description="Units sold")
    unit_price: int = Field(ge=0, description="Unit price in VND before the line discount")
    discount_percent: float = Field(default=0.0, ge=0, le=100, description="Line discount percentage")

    @property
    def product_id(self) -> int:
        return self.product.id

    @property
    def product_name(self) -> str:
        return self.product.name

    @computed_field
    @property
    def line_total(self) -> int:
        return discounted_total(self.quantity, self.unit_price, self.discount_percent)


class Cart(BaseModel):
    """Immutable snapshot of a checkout in progress, with derived aggregates."""
    model_config = ConfigDict(frozen=True)

    items: Tuple[CartLineItem, ...] = Field(default=(), description="Lines in insertion order")
    order_discount_percent: float = Field(default=0.0, ge=0, le=100, description="Order-level discount percentage")
    received_amount: int = Field(default=0, ge=0, description="Cash handed over by the customer")
    payment_method: PaymentMethod = Field(default="cash", description="Payment method")
    order_id: str = Field(description="Client-generated order identifier")
    locked: bool = Field(default=False, description="Order identifier is frozen")

    @computed_field
    @property
    def subtotal(self) -> int:
        return sum(item.line_total for item in self.items)

    @computed_field
    @property
    def order_discount_amount(self) -> int:
        return apply_percent(self.subtotal, self.order_discount_percent)

    @computed_field
    @property
    def total(self) -> int:
        return max(0, self.subtotal - self.order_discount_amount)

    @computed_field
    @property
    def change(self) -> int:
        return max(0, self.received_amount - self.total)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items
