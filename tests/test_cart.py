"""
Cart service and API tests.
"""
from decimal import Decimal

from django.test import TestCase
from hypothesis import given, strategies as st, settings
from hypothesis.extra.django import TestCase as HypothesisTestCase
from rest_framework.test import APIClient

from apps.cart.models import CartItem
from apps.cart.services import BoundCart, CartService
from tests.factories import CartFactory, ProductFactory


class TestCartService(TestCase):

    def setUp(self):
        self.cart = CartFactory()
        self.product = ProductFactory(name='Candle', price=Decimal('40.00'), image='/img/candle.png')

    def test_add_copies_product_details(self):
        item = CartService.add_item(self.cart, self.product, 2)

        self.assertEqual(item.name, 'Candle')
        self.assertEqual(item.unit_price, Decimal('40.00'))
        self.assertEqual(item.image, '/img/candle.png')
        self.assertEqual(item.quantity, 2)

    def test_adding_same_product_increases_quantity(self):
        CartService.add_item(self.cart, self.product, 1)
        item = CartService.add_item(self.cart, self.product, 3)

        self.assertEqual(item.quantity, 4)
        self.assertEqual(self.cart.items.count(), 1)

    def test_add_rejects_non_positive_quantity(self):
        with self.assertRaises(ValueError):
            CartService.add_item(self.cart, self.product, 0)

    def test_decrement_stops_at_one(self):
        CartService.add_item(self.cart, self.product, 2)

        item = CartService.update_quantity(self.cart, self.product.id, -5)

        self.assertEqual(item.quantity, 1)
        self.assertTrue(self.cart.items.exists())

    def test_update_missing_line(self):
        self.assertIsNone(CartService.update_quantity(self.cart, 12345, 1))

    def test_remove_and_clear(self):
        other = ProductFactory()
        CartService.add_item(self.cart, self.product)
        CartService.add_item(self.cart, other)

        self.assertTrue(CartService.remove_item(self.cart, self.product.id))
        self.assertFalse(CartService.remove_item(self.cart, self.product.id))

        CartService.clear(self.cart)
        CartService.clear(self.cart)
        self.assertFalse(self.cart.items.exists())

    def test_bound_cart_lines_and_subtotal(self):
        CartService.add_item(self.cart, self.product, 2)
        CartService.add_item(self.cart, ProductFactory(price=Decimal('9.99')), 1)

        bound = BoundCart(self.cart)

        self.assertEqual(len(bound.lines()), 2)
        self.assertEqual(bound.subtotal(), Decimal('89.99'))
        self.assertEqual(bound.lines()[0].as_dict()['price'], '40.00')
        bound.clear()
        self.assertTrue(bound.is_empty())


class TestCartQuantityProperties(HypothesisTestCase):

    @given(deltas=st.lists(st.integers(min_value=-10, max_value=10).filter(bool), min_size=1, max_size=15))
    @settings(max_examples=50, deadline=None)
    def test_quantity_never_below_one(self, deltas):
        cart = CartFactory()
        product = ProductFactory()
        CartService.add_item(cart, product, 1)

        for delta in deltas:
            item = CartService.update_quantity(cart, product.id, delta)
            self.assertGreaterEqual(item.quantity, 1)

        self.assertEqual(CartItem.objects.filter(cart=cart).count(), 1)


class TestCartAPI(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.product = ProductFactory(price=Decimal('12.50'))

    def test_anonymous_cart_persists_across_requests(self):
        response = self.client.post('/api/cart/items/', {'product_id': self.product.id, 'quantity': 2},
                                    format='json')
        self.assertEqual(response.status_code, 201)

        data = self.client.get('/api/cart/').json()['data']
        self.assertEqual(data['item_count'], 2)
        self.assertEqual(data['subtotal'], '25.00')

    def test_unknown_product(self):
        response = self.client.post('/api/cart/items/', {'product_id': 999999}, format='json')
        self.assertEqual(response.status_code, 404)

    def test_archived_product_cannot_be_added(self):
        product = ProductFactory(status='archived')
        response = self.client.post('/api/cart/items/', {'product_id': product.id}, format='json')
        self.assertEqual(response.status_code, 400)

    def test_increment_decrement_remove(self):
        self.client.post('/api/cart/items/', {'product_id': self.product.id}, format='json')
        url = f'/api/cart/items/{self.product.id}/'

        self.client.patch(url, {'delta': 1}, format='json')
        self.client.patch(url, {'delta': -1}, format='json')
        response = self.client.patch(url, {'delta': -1}, format='json')
        self.assertEqual(response.json()['data']['items'][0]['quantity'], 1)

        self.assertEqual(self.client.patch(url, {'delta': 0}, format='json').status_code, 400)

        self.assertEqual(self.client.delete(url).status_code, 200)
        self.assertEqual(self.client.delete(url).status_code, 404)

    def test_clear(self):
        self.client.post('/api/cart/items/', {'product_id': self.product.id}, format='json')
        response = self.client.delete('/api/cart/')
        self.assertEqual(response.json()['data']['items'], [])
