from decimal import Decimal

from django.db import models
from django.conf import settings


class Cart(models.Model):
    """Shopping cart owned by a signed-in user or an anonymous session"""
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE,
                                null=True, blank=True, related_name='cart')
    session_key = models.CharField(max_length=40, null=True, blank=True, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'carts'

    def __str__(self):
        owner = self.user_id or self.session_key
        return f"Cart {self.id} ({owner})"

    @property
    def subtotal(self) -> Decimal:
        return sum((item.line_total for item in self.items.all()), Decimal('0.00'))

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items.all())
