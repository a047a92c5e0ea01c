from django.db import models


class OrderItem(models.Model):
    """Snapshot of a cart line at the moment the order was placed"""

    order = models.ForeignKey('Order', on_delete=models.CASCADE, related_name='items')
    product_id = models.IntegerField()
    name = models.CharField(max_length=200)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField()
    image = models.CharField(max_length=500, blank=True, default='')
    line_total = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        db_table = 'order_items'
        ordering = ['id']

    def __str__(self):
        return f"{self.order_id} - {self.name} x{self.quantity}"
