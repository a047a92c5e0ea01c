from django.conf import settings
from django.db import models


class DeviceToken(models.Model):
    """FCM registration token of a user's browser or device. One per user; the latest registration wins."""

    owner = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE,
                                 related_name='device_token')
    token = models.CharField(max_length=512)
    registered_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'device_tokens'
        ordering = ['-updated_at']

    def __str__(self):
        return f"{self.owner_id}: {self.token[:16]}..."
