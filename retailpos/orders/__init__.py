from .lifecycle import CheckoutState, OrderLifecycleController, build_order_request, DELIVERY_NOTE

__all__ = ["CheckoutState", "OrderLifecycleController", "build_order_request", "DELIVERY_NOTE"]
