from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models


class DiscountCode(models.Model):
    """Promo code granting a percentage or fixed reduction, with optional expiry and usage cap"""

    TYPE_PERCENTAGE = 'percentage'
    TYPE_FIXED = 'fixed'
    DISCOUNT_TYPE_CHOICES = [
        (TYPE_PERCENTAGE, 'Percentage'),
        (TYPE_FIXED, 'Fixed amount'),
    ]

    code = models.CharField(max_length=50, unique=True, help_text="Stored upper-case; matched case-insensitively")
    description = models.CharField(max_length=255, blank=True, default='')
    discount_type = models.CharField(max_length=20, choices=DISCOUNT_TYPE_CHOICES, default=TYPE_PERCENTAGE)
    discount_value = models.DecimalField(max_digits=10, decimal_places=2,
                                         validators=[MinValueValidator(Decimal('0'))])
    max_uses = models.PositiveIntegerField(null=True, blank=True, validators=[MinValueValidator(1)],
                                           help_text="Empty means unlimited")
    used_count = models.PositiveIntegerField(default=0)
    expires_at = models.DateTimeField(null=True, blank=True)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'discounts'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['code']),
            models.Index(fields=['is_active', 'expires_at']),
        ]

    def __str__(self):
        return f"{self.code} ({self.label})"

    @property
    def is_percentage(self):
        return self.discount_type == self.TYPE_PERCENTAGE

    @property
    def label(self):
        if self.is_percentage:
            return f"{self.discount_value}% off"
        return f"{self.discount_value} off"

    def clean(self):
        if self.is_percentage and self.discount_value is not None and self.discount_value > 100:
            raise ValidationError({'discount_value': 'Percentage discounts cannot exceed 100.'})

    def save(self, *args, **kwargs):
        self.code = (self.code or '').strip().upper()
        super().save(*args, **kwargs)
