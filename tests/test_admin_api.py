"""
Admin order management, store settings and catalog endpoint tests.
"""
from decimal import Decimal
from unittest.mock import patch

from django.test import TestCase
from rest_framework.test import APIClient

from apps.common.models import SystemConfiguration
from apps.orders.models import Order
from tests.factories import (
    AdminUserFactory, OrderFactory, OrderItemFactory, ProductFactory, UserFactory
)


class TestAdminOrderAPI(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(AdminUserFactory())

    def test_list_filters_by_status(self):
        OrderItemFactory(order=OrderFactory())
        OrderFactory(status=Order.STATUS_CANCELLED)

        response = self.client.get('/api/admin/orders', {'status': 'pending'})

        self.assertEqual(response.status_code, 200)
        data = response.json()['data']
        self.assertEqual(data['page']['total'], 1)
        self.assertEqual(data['list'][0]['item_count'], 2)

    def test_update_status(self):
        order = OrderFactory()

        response = self.client.post(f'/api/admin/orders/{order.id}/status', {'status': 'processing'},
                                    format='json')

        self.assertEqual(response.status_code, 200)
        order.refresh_from_db()
        self.assertEqual(order.status, Order.STATUS_PROCESSING)

    def test_invalid_status(self):
        order = OrderFactory()
        response = self.client.post(f'/api/admin/orders/{order.id}/status', {'status': 'lost'}, format='json')
        self.assertEqual(response.status_code, 400)

    def test_customers_cannot_list_orders(self):
        self.client.force_authenticate(UserFactory())
        self.assertEqual(self.client.get('/api/admin/orders').status_code, 403)


class TestMyOrdersAPI(TestCase):

    def test_lists_only_own_orders(self):
        user = UserFactory()
        OrderFactory(user=user)
        OrderFactory(user=UserFactory())
        client = APIClient()
        client.force_authenticate(user)

        response = client.get('/api/orders/mine')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()['data']), 1)


class TestPricingSettingsAPI(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.admin = AdminUserFactory()
        self.client.force_authenticate(self.admin)

    def test_defaults(self):
        data = self.client.get('/api/admin/settings/pricing').json()['data']
        self.assertEqual(data['shipping_flat_rate'], '15.00')
        self.assertEqual(data['tax_rate'], '0.08')

    def test_update(self):
        response = self.client.put('/api/admin/settings/pricing', {
            'shipping_flat_rate': '20.00',
            'shipping_free_threshold': '200.00',
            'tax_rate': '0.05',
            'gift_wrap_fee': '3.00',
        }, format='json')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(SystemConfiguration.get_value('shipping.flat_rate'), '20.00')
        self.assertEqual(SystemConfiguration.objects.get(key='tax.rate').updated_by, self.admin)
        self.assertEqual(Decimal(response.json()['data']['shipping_free_threshold']), Decimal('200'))

    def test_rejects_negative_fee(self):
        response = self.client.put('/api/admin/settings/pricing', {
            'shipping_flat_rate': '-1.00',
            'shipping_free_threshold': '200.00',
            'tax_rate': '0.05',
            'gift_wrap_fee': '3.00',
        }, format='json')
        self.assertEqual(response.status_code, 400)


class TestCatalogAPI(TestCase):

    def test_list_hides_inactive_products(self):
        ProductFactory(name='Visible')
        ProductFactory(name='Hidden', status='draft')

        data = APIClient().get('/api/products/').json()['data']

        self.assertEqual([p['name'] for p in data['list']], ['Visible'])

    def test_detail(self):
        product = ProductFactory(price=Decimal('19.99'))
        data = APIClient().get(f'/api/products/{product.id}/').json()['data']
        self.assertEqual(data['price'], '19.99')

    def test_health(self):
        response = APIClient().get('/api/health/')
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body['checks']['database']['status'], 'healthy')
        self.assertEqual(body['checks']['cache']['status'], 'healthy')
        self.assertFalse(body['push']['service_account'])
        self.assertTrue(body['push']['project_id'])

    @patch('apps.common.health_views.cache')
    def test_health_reports_cache_outage(self, cache):
        cache.set.side_effect = ConnectionError('cache down')
        response = APIClient().get('/api/health/')
        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()['checks']['cache']['status'], 'unhealthy')


class TestUserAPI(TestCase):

    def test_register_returns_tokens(self):
        response = APIClient().post('/api/users/register/', {
            'username': 'ayesha',
            'email': 'Ayesha@Example.com',
            'full_name': 'Ayesha Khan',
            'password': 'candle-light-42',
            'confirm_password': 'candle-light-42',
        }, format='json')

        self.assertEqual(response.status_code, 201)
        data = response.json()['data']
        self.assertIn('token', data)
        self.assertEqual(data['user']['email'], 'ayesha@example.com')

    def test_password_mismatch(self):
        response = APIClient().post('/api/users/register/', {
            'username': 'bilal', 'email': 'bilal@example.com',
            'password': 'candle-light-42', 'confirm_password': 'candle-light-43',
        }, format='json')
        self.assertEqual(response.status_code, 400)

    def test_profile_update(self):
        user = UserFactory()
        client = APIClient()
        client.force_authenticate(user)

        response = client.patch('/api/users/me/', {'full_name': 'New Name'}, format='json')

        self.assertEqual(response.status_code, 200)
        user.refresh_from_db()
        self.assertEqual(user.full_name, 'New Name')
