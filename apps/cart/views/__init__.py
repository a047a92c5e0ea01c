"""
Cart views module.
"""
from .cart_views import CartView, CartItemsView, CartItemDetailView

__all__ = [
    'CartView',
    'CartItemsView',
    'CartItemDetailView',
]
