from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Storefront account. Staff accounts double as store administrators."""
    full_name = models.CharField(max_length=150, blank=True, default='')
    phone = models.CharField(max_length=20, null=True, blank=True)
    avatar_url = models.URLField(max_length=500, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'users'
        verbose_name = 'User'
        verbose_name_plural = 'Users'

    def __str__(self):
        return self.username or self.email or f"User {self.id}"

    @property
    def display_name(self):
        return self.full_name or self.get_full_name() or self.username
