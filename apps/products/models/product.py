from django.db import models


class Product(models.Model):
    """Catalog product. Cart lines and order items copy name, price and image from here."""

    STATUS_CHOICES = [
        ('active', 'Active'),
        ('draft', 'Draft'),
        ('archived', 'Archived'),
        ('out_of_stock', 'Out of stock'),
    ]

    name = models.CharField(max_length=200)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    old_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True,
                                    help_text="Struck-through price shown next to a sale price")
    image = models.CharField(max_length=500, blank=True, default='')
    category = models.ForeignKey('Category', on_delete=models.SET_NULL, null=True, blank=True,
                                 related_name='products')
    description = models.TextField(blank=True, default='')
    sku = models.CharField(max_length=64, blank=True, default='')
    stock = models.IntegerField(default=0)
    min_stock_level = models.IntegerField(default=5)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='active')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'products'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status']),
            models.Index(fields=['created_at']),
        ]

    def __str__(self):
        return f"{self.name} (id: {self.id})"

    @property
    def is_purchasable(self):
        return self.status == 'active'
