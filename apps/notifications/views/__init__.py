"""
Notification views module.
"""
from .push_views import PushNotificationView, DeviceTokenView
from .inbox_views import (
    NotificationListView, NotificationDetailView, NotificationBulkReadView,
    NotificationBulkDeleteView, NotificationStatsView,
)

__all__ = [
    'PushNotificationView',
    'DeviceTokenView',
    'NotificationListView',
    'NotificationDetailView',
    'NotificationBulkReadView',
    'NotificationBulkDeleteView',
    'NotificationStatsView',
]
