"""
Discount views module.
"""
from .promo_views import ValidatePromoView
from .admin_discount_views import AdminDiscountListView, AdminDiscountDetailView

__all__ = [
    'ValidatePromoView',
    'AdminDiscountListView',
    'AdminDiscountDetailView',
]
