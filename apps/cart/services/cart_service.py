"""
Cart service: line mutations plus the cart view handed to checkout.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from django.db import transaction
from django.db.models import F

from ..models import Cart, CartItem


@dataclass(frozen=True)
class CartLine:
    """Immutable copy of a cart line, used for order snapshots"""
    product_id: int
    name: str
    unit_price: Decimal
    quantity: int
    image: str = ''

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    def as_dict(self):
        return {
            'id': self.product_id,
            'name': self.name,
            'price': str(self.unit_price),
            'quantity': self.quantity,
            'image': self.image,
        }


class BoundCart:
    """
    A Cart row exposed through the small interface checkout relies on:
    owner_key, lines(), subtotal(), is_empty() and clear().
    """

    def __init__(self, cart: Cart):
        self.cart = cart

    @property
    def owner_key(self) -> str:
        """Stable identity of whoever owns this cart"""
        if self.cart.user_id:
            return f"user:{self.cart.user_id}"
        return f"session:{self.cart.session_key}"

    def lines(self) -> List[CartLine]:
        return [
            CartLine(
                product_id=item.product_id,
                name=item.name,
                unit_price=item.unit_price,
                quantity=item.quantity,
                image=item.image,
            )
            for item in self.cart.items.all()
        ]

    def subtotal(self) -> Decimal:
        return sum((line.line_total for line in self.lines()), Decimal('0.00'))

    def is_empty(self) -> bool:
        return not self.cart.items.exists()

    def clear(self) -> None:
        CartService.clear(self.cart)


class CartService:
    """Service class for cart business logic"""

    @staticmethod
    def get_or_create_cart(request) -> Cart:
        """Return the caller's cart, keyed by user when signed in, else by session"""
        user = getattr(request, 'user', None)
        if user is not None and user.is_authenticated:
            cart, _ = Cart.objects.get_or_create(user=user)
            return cart

        if not request.session.session_key:
            request.session.create()
        cart, _ = Cart.objects.get_or_create(session_key=request.session.session_key)
        return cart

    @staticmethod
    @transaction.atomic
    def add_item(cart: Cart, product, quantity: int = 1) -> CartItem:
        """Add a product; an existing line for the same product grows instead"""
        if quantity < 1:
            raise ValueError("Quantity must be at least 1")

        item, created = CartItem.objects.get_or_create(
            cart=cart,
            product_id=product.id,
            defaults={
                'name': product.name,
                'unit_price': product.price,
                'quantity': quantity,
                'image': product.image,
            }
        )
        if not created:
            CartItem.objects.filter(pk=item.pk).update(quantity=F('quantity') + quantity)
            item.refresh_from_db()
        return item

    @staticmethod
    def update_quantity(cart: Cart, product_id: int, delta: int) -> Optional[CartItem]:
        """Increment or decrement a line. Quantity never drops below 1; removal is explicit."""
        try:
            item = cart.items.get(product_id=product_id)
        except CartItem.DoesNotExist:
            return None

        item.quantity = max(1, item.quantity + delta)
        item.save(update_fields=['quantity'])
        return item

    @staticmethod
    def remove_item(cart: Cart, product_id: int) -> bool:
        deleted, _ = cart.items.filter(product_id=product_id).delete()
        return deleted > 0

    @staticmethod
    def clear(cart: Cart) -> None:
        """Empty the cart. Safe to call repeatedly."""
        cart.items.all().delete()

    @staticmethod
    def summarize(cart: Cart) -> dict:
        items = list(cart.items.all())
        return {
            'items': [
                {
                    'product_id': item.product_id,
                    'name': item.name,
                    'unit_price': str(item.unit_price),
                    'quantity': item.quantity,
                    'image': item.image,
                    'line_total': str(item.line_total),
                }
                for item in items
            ],
            'item_count': sum(item.quantity for item in items),
            'subtotal': str(sum((item.line_total for item in items), Decimal('0.00'))),
        }
