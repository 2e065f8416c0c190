from __future__ import annotations

from typing import Optional


class PosError(Exception):
    """Base class for all point-of-sale errors."""


class InvalidQuantityError(PosError, ValueError):
    """A quantity that is fractional, non-numeric or below one reached the boundary."""


class InvalidDiscountError(PosError, ValueError):
    """A discount percentage outside [0, 100] (or NaN) reached the boundary."""


class InvalidPriceError(PosError, ValueError):
    """A negative unit price was supplied for a line item."""


class LineNotFoundError(PosError, KeyError):
    """No cart line exists for the given product reference."""


class EmptyCartError(PosError):
    """Checkout was attempted on a cart without line items."""

    def __init__(self, message: str = "Giỏ hàng trống") -> None:
        super().__init__(message)


class SubmissionError(PosError):
    """The order-storage collaborator rejected or failed to persist an order.

    `message` is the server-provided reason when one was available, otherwise a
    generic operator-facing message.
    """

    GENERIC_MESSAGE = "Không thể xử lý thanh toán"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None) -> None:
        self.message = message or self.GENERIC_MESSAGE
        self.status_code = status_code
        super().__init__(self.message)


class SubmissionInProgressError(SubmissionError):
    """A submit was attempted while another one is still in flight."""

    def __init__(self) -> None:
        super().__init__("Đơn hàng đang được xử lý")


class OrderAlreadySubmittedError(SubmissionError):
    """The cart's order was already persisted; reset before submitting again."""

    def __init__(self, order_number: str) -> None:
        super().__init__(f"Đơn hàng {order_number} đã được tạo")
        self.order_number = order_number


class TemplateRenderError(PosError):
    """A receipt template contains an unterminated placeholder token."""


class DataAccessError(PosError):
    """A catalog, customer or settings lookup failed."""
