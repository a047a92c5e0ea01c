from django.urls import path

from .health_views import BasicHealthCheckView
from .views import PricingSettingsView
from apps.orders.views import (
    AdminOrderListView, AdminOrderStatusView, AdminReturnListView, AdminReturnStatusView
)

app_name = 'common'

urlpatterns = [
    path('health/', BasicHealthCheckView.as_view(), name='health_check'),

    # Admin order management endpoints
    path('admin/orders', AdminOrderListView.as_view(), name='admin-order-list'),
    path('admin/orders/<uuid:order_id>/status', AdminOrderStatusView.as_view(), name='admin-order-status'),

    # Admin return management endpoints
    path('admin/returns', AdminReturnListView.as_view(), name='admin-return-list'),
    path('admin/returns/<int:return_id>/status', AdminReturnStatusView.as_view(), name='admin-return-status'),

    # Admin store settings
    path('admin/settings/pricing', PricingSettingsView.as_view(), name='admin-pricing-settings'),
]
