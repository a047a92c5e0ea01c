"""
Product models module.
"""
from .product import Product
from .category import Category

__all__ = [
    'Product',
    'Category',
]
