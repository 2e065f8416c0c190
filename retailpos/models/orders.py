from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from retailpos.money import coerce_amount, clamp_percent

from .cart import PaymentMethod

PaymentStatus = Literal["paid", "unpaid"]
PaymentIntent = Literal["quick", "normal", "delivery"]

_AMOUNT_FIELDS = ("subtotal", "discount_amount", "total_amount", "received_amount", "change_amount")


class OrderItem(BaseModel):
    """Line of a submitted order; name and price are captured at time of sale."""
    model_config = ConfigDict(frozen=True)

    product_id: Optional[int] = Field(default=None, description="Product identifier")
    product_name: str = Field(description="Product name at time of sale")
    quantity: int = Field(ge=1, description="Units sold")
    unit_price: int = Field(ge=0, description="Unit price at time of sale")
    discount_percent: float = Field(default=0.0, ge=0, le=100, description="Line discount percentage")
    total: int = Field(ge=0, description="Line total after discount")

    @model_validator(mode="before")
    @classmethod
    def _legacy_total_key(cls, data):
        # order services report the line total as total_price
        if isinstance(data, dict) and "total" not in data and "total_price" in data:
            data = {**data, "total": data["total_price"]}
        return data

    @field_validator("unit_price", "total", mode="before")
    @classmethod
    def _whole_vnd(cls, v):
        return coerce_amount(v)

    @field_validator("discount_percent", mode="before")
    @classmethod
    def _percent(cls, v):
        return clamp_percent(v)


class OrderRequest(BaseModel):
    """Payload posted to the order-storage service."""
    model_config = ConfigDict(frozen=True)

    order_number: str = Field(description="Client-generated, locked order identifier")
    customer_id: Optional[int] = Field(default=None, description="Customer identifier, None for walk-in")
    customer_name: str = Field(description="Customer name printed on the receipt")
    customer_phone: str = Field(default="", description="Customer phone")
    items: Tuple[OrderItem, ...] = Field(description="Order lines")
    subtotal: int = Field(ge=0, description="Sum of line totals")
    discount_percent: float = Field(default=0.0, ge=0, le=100, description="Order discount percentage")
    discount_amount: int = Field(ge=0, description="Order discount amount")
    total_amount: int = Field(ge=0, description="Amount due")
    payment_method: PaymentMethod = Field(description="Payment method")
    payment_status: PaymentStatus = Field(description="paid, or unpaid for deferred/delivery payment")
    notes: str = Field(default="", description="Free-text order notes")
    received_amount: int = Field(default=0, ge=0, description="Amount handed over")
    change_amount: int = Field(default=0, ge=0, description="Change returned")


class Order(BaseModel):
    """Persisted order as confirmed by order storage."""
    model_config = ConfigDict(frozen=True)

    id: Union[int, str] = Field(description="Storage identifier")
    order_number: Optional[str] = Field(default=None, description="Server-assigned order number")
    client_order_id: str = Field(description="Client-generated order identifier")
    customer_id: Optional[int] = Field(default=None, description="Customer identifier")
    customer_name: str = Field(default="", description="Customer name")
    customer_phone: str = Field(default="", description="Customer phone")
    customer_address: str = Field(default="", description="Customer address")
    items: Tuple[OrderItem, ...] = Field(default=(), description="Order lines")
    subtotal: int = Field(default=0, ge=0, description="Sum of line totals")
    discount_percent: float = Field(default=0.0, ge=0, le=100, description="Order discount percentage")
    discount_amount: int = Field(default=0, ge=0, description="Order discount amount")
    total_amount: int = Field(default=0, ge=0, description="Amount due")
    payment_method: PaymentMethod = Field(default="cash", description="Payment method")
    payment_status: PaymentStatus = Field(default="paid", description="Payment status")
    notes: str = Field(default="", description="Order notes")
    received_amount: int = Field(default=0, ge=0, description="Amount handed over")
    change_amount: int = Field(default=0, ge=0, description="Change returned")
    created_at: datetime = Field(default_factory=datetime.now, description="Creation timestamp")

    @field_validator(*_AMOUNT_FIELDS, mode="before")
    @classmethod
    def _whole_vnd(cls, v):
        return coerce_amount(v)

    @field_validator("discount_percent", mode="before")
    @classmethod
    def _percent(cls, v):
        return clamp_percent(v)

    @property
    def display_number(self) -> str:
        """Server-confirmed order number when present, else the client id."""
        return self.order_number or self.client_order_id

    @classmethod
    def from_response(cls, data: Mapping[str, Any], request: OrderRequest) -> "Order":
        """Merge a storage response over the submitted request.

        Storage services may echo only part of the order; anything missing or
        empty in `data` is taken from what was submitted.
        """
        merged = request.model_dump()
        merged["client_order_id"] = request.order_number
        merged["order_number"] = None
        for key, value in data.items():
            if value in (None, "") or key == "client_order_id":
                continue
            if key == "items" and not value:
                continue
            merged[key] = value
        if "id" not in merged:
            merged["id"] = merged["order_number"] or request.order_number
        return cls.model_validate(merged)
