"""
Product serializers module.
"""
from .product_serializers import (
    CategorySerializer, ProductListSerializer, ProductDetailSerializer
)

__all__ = [
    'CategorySerializer',
    'ProductListSerializer',
    'ProductDetailSerializer',
]
