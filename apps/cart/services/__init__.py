"""
Cart services module.
"""
from .cart_service import CartService, CartLine, BoundCart

__all__ = [
    'CartService',
    'CartLine',
    'BoundCart',
]
