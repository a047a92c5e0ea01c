from rest_framework import serializers

from .models import Notification
from .services import EVENT_TEST, EVENT_TYPES


class PushRequestSerializer(serializers.Serializer):
    type = serializers.CharField(max_length=50)
    payload = serializers.DictField(required=False, default=dict)

    def validate_type(self, value):
        if value not in EVENT_TYPES:
            raise serializers.ValidationError(f"Unknown notification type: {value}")
        return value

    def validate(self, attrs):
        if attrs['type'] == EVENT_TEST:
            user_id = attrs['payload'].get('user_id')
            if isinstance(user_id, bool):
                user_id = None
            try:
                user_id = int(user_id)
            except (TypeError, ValueError):
                raise serializers.ValidationError(
                    {'payload': ["payload.user_id must be a user id for test notifications"]})
            attrs['payload'] = {**attrs['payload'], 'user_id': user_id}
        return attrs


class DeviceTokenSerializer(serializers.Serializer):
    token = serializers.CharField(max_length=512, trim_whitespace=True)


class NotificationSerializer(serializers.ModelSerializer):
    type = serializers.CharField(source='notification_type', read_only=True)
    is_broadcast = serializers.BooleanField(read_only=True)

    class Meta:
        model = Notification
        fields = ['id', 'type', 'priority', 'title', 'message', 'deep_link', 'data',
                  'is_read', 'read_at', 'is_broadcast', 'created_at']
        read_only_fields = fields


class NotificationReadSerializer(serializers.Serializer):
    is_read = serializers.BooleanField()


class NotificationBulkSerializer(serializers.Serializer):
    """Omitting ids applies the action to every visible notification"""
    ids = serializers.ListField(child=serializers.IntegerField(min_value=1), required=False, allow_empty=False)
    is_read = serializers.BooleanField(default=True)
