from .products import Product
from .customers import Customer
from .cart import CartLineItem, Cart, PaymentMethod, PAYMENT_METHODS
from .orders import (
    OrderItem,
    OrderRequest,
    Order,
    PaymentStatus,
    PaymentIntent,
)
from .settings import StoreSettings, QRPaymentAccount
from .paper import PaperProfile, PaperSize

__all__ = [
    # Catalog models
    "Product",
    "Customer",
    # Cart models
    "CartLineItem",
    "Cart",
    "PaymentMethod",
    "PAYMENT_METHODS",
    # Order models
    "OrderItem",
    "OrderRequest",
    "Order",
    "PaymentStatus",
    "PaymentIntent",
    # Settings models
    "StoreSettings",
    "QRPaymentAccount",
    # Print models
    "PaperProfile",
    "PaperSize",
]
