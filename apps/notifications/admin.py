from django.contrib import admin

from .models import DeviceToken, Notification


@admin.register(DeviceToken)
class DeviceTokenAdmin(admin.ModelAdmin):
    list_display = ['owner', 'short_token', 'registered_at', 'updated_at']
    search_fields = ['owner__username', 'owner__email', 'token']
    readonly_fields = ['registered_at', 'updated_at']
    raw_id_fields = ['owner']

    def short_token(self, obj):
        return f"{obj.token[:24]}..."
    short_token.short_description = 'Token'


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ['title', 'notification_type', 'priority', 'user', 'is_read', 'created_at']
    list_filter = ['notification_type', 'priority', 'is_read', 'created_at']
    search_fields = ['title', 'message']
    readonly_fields = ['read_at', 'created_at']
    raw_id_fields = ['user']
