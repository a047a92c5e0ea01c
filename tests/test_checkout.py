"""
Checkout orchestration tests.
"""
from datetime import timedelta
from decimal import Decimal
from unittest.mock import Mock, patch

from django.db import DatabaseError
from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from apps.cart.services import BoundCart, CartService
from apps.common.exceptions import (
    CheckoutValidationError, CredentialExchangeError, OrderPersistenceError
)
from apps.discounts.services import DiscountService, RejectionReason
from apps.notifications.models import Notification
from apps.orders.models import Order
from apps.orders.services import (
    CheckoutService, CheckoutState, OrderService, PricingSettings, ShippingRule
)
from tests.factories import CartFactory, CartItemFactory, DiscountCodeFactory, ProductFactory

PRICING = PricingSettings(
    shipping=ShippingRule(flat_rate=Decimal('15.00'), free_threshold=Decimal('150.00')),
    tax_rate=Decimal('0.08'),
    gift_wrap_fee=Decimal('5.00'),
)

DETAILS = {
    'full_name': 'Ayesha Khan',
    'email': 'ayesha@example.com',
    'address': '12 Canal Road',
    'city': 'Lahore',
    'receiver_name': 'Ayesha Khan',
    'receiver_phone': '03001234567',
    'payment_method': 'cod',
}


class FailingOrderStore:
    """Order store whose writes always fail"""

    error = DatabaseError("connection lost")

    def get_by_idempotency_key(self, key, placed_by):
        return None

    def create_order(self, *args, **kwargs):
        raise self.error


class UnavailableOrderStore(FailingOrderStore):
    """Order store backed by something other than the Django database"""

    error = RuntimeError("storage backend unavailable")


class RecordingExecutor:
    def __init__(self):
        self.submitted = []

    def submit(self, fn, *args):
        self.submitted.append((fn, args))


class CheckoutTestMixin:

    def setUp(self):
        self.cart = CartFactory()
        CartItemFactory(cart=self.cart, product_id=1, name='Candle', unit_price=Decimal('40.00'), quantity=2)
        CartItemFactory(cart=self.cart, product_id=2, name='Soap', unit_price=Decimal('20.00'), quantity=1)
        self.notifier = Mock(return_value=None)

    def make_service(self, **kwargs):
        kwargs.setdefault('notifier', self.notifier)
        kwargs.setdefault('pricing', PRICING)
        return CheckoutService(BoundCart(self.cart), **kwargs)


class TestCheckoutSubmit(CheckoutTestMixin, TestCase):

    def test_successful_checkout_clears_cart(self):
        service = self.make_service()

        result = service.submit(DETAILS)

        self.assertEqual(service.state, CheckoutState.CLEARED)
        self.assertFalse(self.cart.items.exists())
        order = Order.objects.get(pk=result.order.pk)
        self.assertEqual(order.status, Order.STATUS_PENDING)
        self.assertEqual(order.subtotal_amount, Decimal('100.00'))
        self.assertEqual(order.shipping_amount, Decimal('15.00'))
        self.assertEqual(order.tax_amount, Decimal('8.00'))
        self.assertEqual(order.total_amount, Decimal('123.00'))
        self.assertEqual(order.items.count(), 2)
        self.assertTrue(all(outcome.ok for outcome in result.side_effects))

    def test_order_items_are_a_snapshot(self):
        result = self.make_service().submit(DETAILS)

        item = result.order.items.get(product_id=1)
        self.assertEqual(item.name, 'Candle')
        self.assertEqual(item.unit_price, Decimal('40.00'))
        self.assertEqual(item.quantity, 2)
        self.assertEqual(item.line_total, Decimal('80.00'))

    def test_short_id_format(self):
        order = self.make_service().submit(DETAILS).order
        self.assertRegex(order.short_id, r'^LRN-[0-9A-F]{8}$')
        self.assertEqual(order.short_id, f"LRN-{order.id.hex[:8].upper()}")

    def test_new_order_notification(self):
        order = self.make_service().submit(DETAILS).order

        self.notifier.assert_called_once()
        event_type, payload = self.notifier.call_args[0]
        self.assertEqual(event_type, 'new_order')
        self.assertEqual(payload['title'], 'New Order Alert')
        self.assertEqual(payload['message'], f"Order #{order.short_id} - Rs. 123")
        self.assertEqual(payload['url'], '/admin/orders')
        self.assertEqual(payload['data'], {'order_id': str(order.id), 'short_id': order.short_id})

    def test_missing_email_and_address(self):
        service = self.make_service()

        with self.assertRaises(CheckoutValidationError) as ctx:
            service.submit({**DETAILS, 'email': '', 'address': '  '})

        self.assertEqual(set(ctx.exception.errors), {'email', 'address'})
        self.assertEqual(service.state, CheckoutState.FAILED)
        self.assertFalse(Order.objects.exists())
        self.assertEqual(self.cart.items.count(), 2)
        self.notifier.assert_not_called()

    def test_empty_cart_is_rejected(self):
        CartService.clear(self.cart)
        with self.assertRaises(CheckoutValidationError) as ctx:
            self.make_service().submit(DETAILS)
        self.assertIn('cart', ctx.exception.errors)

    def test_persistence_failure_keeps_cart(self):
        service = self.make_service(orders=FailingOrderStore())

        with self.assertRaises(OrderPersistenceError) as ctx:
            service.submit(DETAILS)

        self.assertEqual(ctx.exception.message, 'We could not process your order, please try again')
        self.assertEqual(service.state, CheckoutState.FAILED)
        self.assertEqual(self.cart.items.count(), 2)
        self.notifier.assert_not_called()

    def test_non_database_store_failure_is_a_persistence_error(self):
        service = self.make_service(orders=UnavailableOrderStore())

        with self.assertRaises(OrderPersistenceError) as ctx:
            service.submit(DETAILS)

        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)
        self.assertEqual(service.state, CheckoutState.FAILED)
        self.assertEqual(self.cart.items.count(), 2)
        self.notifier.assert_not_called()

    @patch('apps.orders.services.checkout_service.load_pricing_settings',
           side_effect=DatabaseError("configuration table locked"))
    def test_pricing_lookup_failure_is_a_persistence_error(self, load_pricing):
        service = self.make_service(pricing=None)

        with self.assertRaises(OrderPersistenceError):
            service.submit(DETAILS)

        self.assertEqual(service.state, CheckoutState.FAILED)
        self.assertFalse(Order.objects.exists())
        self.assertEqual(self.cart.items.count(), 2)

    def test_promo_lookup_failure_is_a_persistence_error(self):
        discounts = Mock(wraps=DiscountService)
        discounts.get_by_code.side_effect = DatabaseError("read timeout")
        service = self.make_service(discounts=discounts)

        with self.assertRaises(OrderPersistenceError):
            service.submit(DETAILS, promo_code='SAVE10')

        self.assertEqual(service.state, CheckoutState.FAILED)
        self.assertEqual(self.cart.items.count(), 2)

    def test_applied_promo_counts_one_use(self):
        discount = DiscountCodeFactory(code='SAVE10', discount_value=Decimal('10'))

        result = self.make_service().submit(DETAILS, promo_code='save10')

        self.assertTrue(result.promo.is_applied)
        self.assertEqual(result.order.discount_code, 'SAVE10')
        self.assertEqual(result.order.discount_amount, Decimal('10.00'))
        self.assertEqual(result.order.total_amount, Decimal('113.00'))
        discount.refresh_from_db()
        self.assertEqual(discount.used_count, 1)

    def test_rejected_promo_does_not_block_checkout(self):
        discount = DiscountCodeFactory(code='EXPIRED10', expires_at=timezone.now() - timedelta(days=1))

        result = self.make_service().submit(DETAILS, promo_code='EXPIRED10')

        self.assertFalse(result.promo.is_applied)
        self.assertEqual(result.promo.reason, RejectionReason.EXPIRED)
        self.assertIsNone(result.order.discount_code)
        self.assertEqual(result.order.total_amount, Decimal('123.00'))
        discount.refresh_from_db()
        self.assertEqual(discount.used_count, 0)

    def test_increment_failure_still_returns_order(self):
        DiscountCodeFactory(code='SAVE10')
        discounts = Mock(wraps=DiscountService)
        discounts.increment_usage.side_effect = DatabaseError("deadlock")

        service = self.make_service(discounts=discounts)
        result = service.submit(DETAILS, promo_code='SAVE10')

        self.assertTrue(Order.objects.filter(pk=result.order.pk).exists())
        self.assertFalse(self.cart.items.exists())
        self.assertEqual(service.state, CheckoutState.CLEARED)
        increment = next(o for o in result.side_effects if o.effect == 'increment_usage')
        self.assertFalse(increment.ok)
        self.assertIsInstance(increment.error.cause, DatabaseError)

    def test_notification_failure_is_swallowed(self):
        self.notifier.side_effect = CredentialExchangeError("token endpoint down")

        result = self.make_service().submit(DETAILS)

        notify = next(o for o in result.side_effects if o.effect == 'notify')
        self.assertFalse(notify.ok)
        self.assertFalse(self.cart.items.exists())

    def test_gift_wrap_adds_fee(self):
        result = self.make_service().submit(DETAILS, gift_wrap=True)
        self.assertEqual(result.order.add_on_amount, Decimal('5.00'))
        self.assertEqual(result.order.total_amount, Decimal('128.00'))

    def test_retry_with_same_key_returns_existing_order(self):
        first = self.make_service().submit(DETAILS, idempotency_key='checkout-abc')

        CartItemFactory(cart=self.cart, product_id=3, name='Mug', unit_price=Decimal('12.00'))
        second = self.make_service().submit(DETAILS, idempotency_key='checkout-abc')

        self.assertTrue(second.replayed)
        self.assertEqual(second.order.pk, first.order.pk)
        self.assertEqual(Order.objects.count(), 1)
        self.assertFalse(self.cart.items.exists())
        self.notifier.assert_called_once()

    def test_same_key_from_another_cart_places_its_own_order(self):
        first = self.make_service().submit(DETAILS, idempotency_key='1')

        other_cart = CartFactory()
        CartItemFactory(cart=other_cart, product_id=9, name='Vase', unit_price=Decimal('60.00'))
        other = CheckoutService(BoundCart(other_cart), notifier=self.notifier, pricing=PRICING)
        second = other.submit({**DETAILS, 'email': 'bob@example.com'}, idempotency_key='1')

        self.assertFalse(second.replayed)
        self.assertNotEqual(second.order.pk, first.order.pk)
        self.assertEqual(second.order.email, 'bob@example.com')
        self.assertEqual(second.order.items.get().name, 'Vase')
        self.assertEqual(Order.objects.filter(idempotency_key='1').count(), 2)
        self.assertFalse(other_cart.items.exists())

    def test_new_order_lands_in_admin_inbox(self):
        order = self.make_service().submit(DETAILS).order

        notice = Notification.objects.get()
        self.assertTrue(notice.is_broadcast)
        self.assertEqual(notice.notification_type, Notification.TYPE_ORDER)
        self.assertEqual(notice.title, 'New Order Alert')
        self.assertEqual(notice.message, f"Order #{order.short_id} - Rs. 123")
        self.assertEqual(notice.deep_link, '/admin/orders')
        self.assertEqual(notice.data['short_id'], order.short_id)

    def test_inbox_failure_is_swallowed(self):
        inbox = Mock()
        inbox.create.side_effect = DatabaseError("disk full")

        service = self.make_service(inbox=inbox)
        result = service.submit(DETAILS)

        record = next(o for o in result.side_effects if o.effect == 'record_notification')
        self.assertFalse(record.ok)
        self.notifier.assert_called_once()
        self.assertFalse(self.cart.items.exists())
        self.assertEqual(service.state, CheckoutState.CLEARED)

    def test_background_push_is_sent_after_commit(self):
        executor = RecordingExecutor()
        service = self.make_service(notify_in_background=True, executor=executor)

        with self.captureOnCommitCallbacks() as callbacks:
            result = service.submit(DETAILS)

        # The buyer's result is ready before anything is sent
        self.assertEqual(service.state, CheckoutState.CLEARED)
        self.assertTrue(next(o for o in result.side_effects if o.effect == 'notify').ok)
        self.assertEqual(executor.submitted, [])
        self.notifier.assert_not_called()

        self.assertEqual(len(callbacks), 1)
        callbacks[0]()
        fn, args = executor.submitted[0]
        with patch('apps.orders.services.checkout_service.connections'):
            outcome = fn(*args)

        self.assertTrue(outcome.ok)
        event_type, payload = self.notifier.call_args[0]
        self.assertEqual(event_type, 'new_order')
        self.assertEqual(payload['data']['short_id'], result.order.short_id)

    def test_background_push_failure_is_only_logged(self):
        self.notifier.side_effect = CredentialExchangeError("token endpoint down")
        executor = RecordingExecutor()
        service = self.make_service(notify_in_background=True, executor=executor)

        with self.captureOnCommitCallbacks(execute=True):
            service.submit(DETAILS)

        fn, args = executor.submitted[0]
        with patch('apps.orders.services.checkout_service.connections') as connections:
            outcome = fn(*args)

        self.assertFalse(outcome.ok)
        connections.close_all.assert_called_once()

    def test_preview_does_not_write(self):
        DiscountCodeFactory(code='SAVE10')
        totals, promo = self.make_service().preview('SAVE10', gift_wrap=True)

        self.assertTrue(promo.is_applied)
        self.assertEqual(totals.grand_total, Decimal('118.00'))
        self.assertFalse(Order.objects.exists())


class TestOrderService(TestCase):

    def test_track_requires_matching_email(self):
        cart = CartFactory()
        CartItemFactory(cart=cart)
        order = CheckoutService(BoundCart(cart), notifier=Mock(), pricing=PRICING).submit(DETAILS).order

        self.assertEqual(OrderService.track(order.short_id.lower(), 'AYESHA@example.com'), order)
        self.assertIsNone(OrderService.track(order.short_id, 'someone@example.com'))

    def test_update_status_rejects_unknown(self):
        cart = CartFactory()
        CartItemFactory(cart=cart)
        order = CheckoutService(BoundCart(cart), notifier=Mock(), pricing=PRICING).submit(DETAILS).order

        with self.assertRaises(ValueError):
            OrderService.update_status(order, 'shipped')
        self.assertEqual(OrderService.update_status(order, 'fulfilled').status, 'fulfilled')


class TestCheckoutAPI(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.product = ProductFactory(name='Candle', price=Decimal('40.00'))
        self.client.post('/api/cart/items/', {'product_id': self.product.id, 'quantity': 2}, format='json')

    @patch('apps.orders.services.checkout_service.NotificationDispatcher')
    def test_checkout_places_order(self, dispatcher_cls):
        response = self.client.post('/api/orders/checkout', DETAILS, format='json')

        self.assertEqual(response.status_code, 201)
        data = response.json()['data']
        self.assertRegex(data['short_id'], r'^LRN-')
        self.assertEqual(data['total_amount'], '101.40')
        dispatcher_cls.return_value.dispatch.assert_called_once()

        cart = self.client.get('/api/cart/').json()['data']
        self.assertEqual(cart['items'], [])

    @patch('apps.orders.services.checkout_service.NotificationDispatcher')
    def test_missing_fields_answer_400(self, dispatcher_cls):
        response = self.client.post('/api/orders/checkout', {**DETAILS, 'email': ''}, format='json')

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['msg'], 'Please complete the required fields')
        self.assertIn('email', response.json()['errors'])

    @patch('apps.orders.services.checkout_service.NotificationDispatcher')
    @patch('apps.orders.services.order_service.Order.objects.create', side_effect=DatabaseError("down"))
    def test_persistence_failure_answers_503(self, create, dispatcher_cls):
        response = self.client.post('/api/orders/checkout', DETAILS, format='json')

        self.assertEqual(response.status_code, 503)
        cart = self.client.get('/api/cart/').json()['data']
        self.assertEqual(len(cart['items']), 1)

    @patch('apps.orders.services.checkout_service.NotificationDispatcher')
    def test_retry_key_is_private_to_each_buyer(self, dispatcher_cls):
        first = self.client.post('/api/orders/checkout', DETAILS, format='json',
                                 HTTP_IDEMPOTENCY_KEY='1').json()['data']

        other_client = APIClient()
        vase = ProductFactory(name='Vase', price=Decimal('60.00'))
        other_client.post('/api/cart/items/', {'product_id': vase.id, 'quantity': 1}, format='json')
        response = other_client.post('/api/orders/checkout', {**DETAILS, 'email': 'bob@example.com'},
                                     format='json', HTTP_IDEMPOTENCY_KEY='1')

        self.assertEqual(response.status_code, 201)
        data = response.json()['data']
        self.assertNotEqual(data['short_id'], first['short_id'])
        self.assertEqual(data['email'], 'bob@example.com')
        self.assertEqual([item['name'] for item in data['items']], ['Vase'])

        retry = self.client.post('/api/orders/checkout', DETAILS, format='json', HTTP_IDEMPOTENCY_KEY='1')
        self.assertEqual(retry.status_code, 200)
        self.assertEqual(retry.json()['data']['short_id'], first['short_id'])

    @patch('apps.orders.services.checkout_service.NotificationDispatcher')
    def test_track_order(self, dispatcher_cls):
        short_id = self.client.post('/api/orders/checkout', DETAILS, format='json').json()['data']['short_id']

        response = self.client.get(f'/api/orders/track/{short_id}', {'email': DETAILS['email']})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['data']['items'][0]['name'], 'Candle')

        response = self.client.get(f'/api/orders/track/{short_id}', {'email': 'other@example.com'})
        self.assertEqual(response.status_code, 404)

    def test_preview(self):
        response = self.client.post('/api/orders/preview', {'gift_wrap': True}, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['data']['totals']['grand_total'], '106.40')
