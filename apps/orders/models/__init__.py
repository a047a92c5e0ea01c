"""
Order models module.
"""
from .order import Order, generate_short_id
from .order_item import OrderItem
from .return_request import ReturnRequest

__all__ = [
    'Order',
    'OrderItem',
    'ReturnRequest',
    'generate_short_id',
]
