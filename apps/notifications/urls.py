from django.urls import path
from . import views

urlpatterns = [
    path('push', views.PushNotificationView.as_view(), name='notification-push'),
    path('device-token', views.DeviceTokenView.as_view(), name='device-token'),
    path('', views.NotificationListView.as_view(), name='notification-list'),
    path('<int:pk>', views.NotificationDetailView.as_view(), name='notification-detail'),
    path('read', views.NotificationBulkReadView.as_view(), name='notification-bulk-read'),
    path('delete', views.NotificationBulkDeleteView.as_view(), name='notification-bulk-delete'),
    path('stats', views.NotificationStatsView.as_view(), name='notification-stats'),
]
