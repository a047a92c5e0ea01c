"""
Order views module.
"""
from .checkout_views import CheckoutView, CheckoutPreviewView, MyOrdersView, TrackOrderView
from .admin_order_views import AdminOrderListView, AdminOrderStatusView
from .return_views import ReturnRequestView, AdminReturnListView, AdminReturnStatusView

__all__ = [
    'CheckoutView',
    'CheckoutPreviewView',
    'MyOrdersView',
    'TrackOrderView',
    'AdminOrderListView',
    'AdminOrderStatusView',
    'ReturnRequestView',
    'AdminReturnListView',
    'AdminReturnStatusView',
]
