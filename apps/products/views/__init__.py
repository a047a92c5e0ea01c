"""
Product views module.
"""
from .product_views import ProductListView, ProductDetailView

__all__ = [
    'ProductListView',
    'ProductDetailView',
]
