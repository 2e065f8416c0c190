from .engine import CartEngine, generate_order_id

__all__ = ["CartEngine", "generate_order_id"]
