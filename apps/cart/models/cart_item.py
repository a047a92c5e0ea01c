from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class CartItem(models.Model):
    """One product line in a cart, priced when it was added"""
    cart = models.ForeignKey('Cart', on_delete=models.CASCADE, related_name='items')
    product_id = models.IntegerField(help_text="Catalog product id")
    name = models.CharField(max_length=200)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.IntegerField(default=1, validators=[MinValueValidator(1)])
    image = models.CharField(max_length=500, blank=True, default='')
    added_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'cart_items'
        ordering = ['added_at', 'id']
        constraints = [
            models.UniqueConstraint(fields=['cart', 'product_id'], name='unique_cart_product'),
        ]

    def __str__(self):
        return f"{self.quantity} x {self.name}"

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity
