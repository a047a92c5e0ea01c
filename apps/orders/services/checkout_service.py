"""
Checkout orchestration.

A submission moves through validating, persisting, notifying and cleared.
Validation and persistence failures stop the flow and leave the cart alone.
Everything after the order row is written is best-effort and reported in the
result: usage counting, the admin inbox record and push, then emptying the cart.
"""
import enum
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, List, Optional

from django.conf import settings
from django.db import IntegrityError, connections, transaction
from django.utils import timezone

from apps.common.exceptions import CheckoutValidationError, OrderPersistenceError
from apps.discounts.services import DiscountService, PromoCodeValidator, PromoValidation
from apps.notifications.models import Notification
from apps.notifications.services import NotificationDispatcher, NotificationService
from ..models import Order
from .order_service import OrderService
from .pricing import (
    Discount, OrderTotals, PricingSettings, compute_order_totals, load_pricing_settings
)
from .side_effects import SideEffectOutcome, run_best_effort

logger = logging.getLogger('storefront.checkout')

NEW_ORDER_EVENT = 'new_order'
NEW_ORDER_TITLE = 'New Order Alert'
NEW_ORDER_URL = '/admin/orders'

REQUIRED_FIELD_MESSAGES = {
    'email': 'Email is required.',
    'address': 'Shipping address is required.',
}


class CheckoutState(enum.Enum):
    IDLE = 'idle'
    VALIDATING = 'validating'
    PERSISTING = 'persisting'
    NOTIFYING = 'notifying'
    CLEARED = 'cleared'
    FAILED = 'failed'


@dataclass
class CheckoutResult:
    order: Order
    totals: OrderTotals
    promo: Optional[PromoValidation] = None
    side_effects: List[SideEffectOutcome] = field(default_factory=list)
    replayed: bool = False

    def as_dict(self):
        return {
            'order_id': str(self.order.id),
            'short_id': self.order.short_id,
            'totals': self.totals.as_dict(),
            'promo': self.promo.as_dict() if self.promo else None,
            'side_effects': [outcome.as_dict() for outcome in self.side_effects],
            'replayed': self.replayed,
        }


def format_notification_message(order: Order, currency: str = None) -> str:
    currency = currency or settings.STOREFRONT_CURRENCY_LABEL
    rounded = order.total_amount.quantize(Decimal('1'), rounding=ROUND_HALF_UP)
    return f"Order #{order.short_id} - {currency} {rounded}"


_notify_executor = None
_notify_executor_lock = threading.Lock()


def notify_executor() -> ThreadPoolExecutor:
    """Process-wide pool that sends new-order pushes off the request thread"""
    global _notify_executor
    with _notify_executor_lock:
        if _notify_executor is None:
            _notify_executor = ThreadPoolExecutor(
                max_workers=settings.CHECKOUT_NOTIFY_WORKERS,
                thread_name_prefix='checkout-notify',
            )
    return _notify_executor


def send_in_background(notifier: Callable, payload: dict) -> SideEffectOutcome:
    try:
        return run_best_effort('notify', notifier, NEW_ORDER_EVENT, payload)
    finally:
        # Worker threads open their own connections when resolving device tokens
        connections.close_all()


class CheckoutService:
    """
    Places an order from a cart.

    Collaborators are injected so the flow can run against fakes:

    - ``cart``: object with ``owner_key``, ``lines()``, ``subtotal()`` and ``clear()``
    - ``discounts``: object with ``get_by_code(code)`` and ``increment_usage(id)``
    - ``orders``: object with ``create_order(...)``,
      ``get_by_idempotency_key(key, placed_by)`` and ``totals_for(order)``
    - ``notifier``: callable ``(event_type, payload)``
    - ``inbox``: object with ``create(title, message, ...)`` for the in-app record
    - ``pricing``: PricingSettings, loaded from configuration when omitted
    - ``clock``: callable returning the current time

    With ``notify_in_background`` the push is handed to ``executor`` once the
    surrounding transaction commits, and the buyer's response does not wait
    for it.
    """

    def __init__(self, cart, discounts=DiscountService, orders=OrderService,
                 notifier: Optional[Callable] = None, inbox=NotificationService,
                 pricing: Optional[PricingSettings] = None, clock: Callable = timezone.now,
                 notify_in_background: Optional[bool] = None, executor=None):
        self.cart = cart
        self.discounts = discounts
        self.orders = orders
        self.notifier = notifier or NotificationDispatcher().dispatch
        self.inbox = inbox
        self.pricing = pricing
        self.clock = clock
        if notify_in_background is None:
            notify_in_background = settings.CHECKOUT_NOTIFY_IN_BACKGROUND
        self.notify_in_background = notify_in_background
        self.executor = executor
        self.validator = PromoCodeValidator(lookup=discounts.get_by_code)
        self.state = CheckoutState.IDLE

    def _pricing(self) -> PricingSettings:
        if self.pricing is None:
            self.pricing = load_pricing_settings()
        return self.pricing

    def _resolve_promo(self, promo_code: Optional[str], subtotal: Decimal) -> Optional[PromoValidation]:
        if not promo_code or not promo_code.strip():
            return None
        return self.validator.validate(promo_code, subtotal, self.clock())

    def preview(self, promo_code: Optional[str] = None, gift_wrap: bool = False, subtotal=None):
        """Totals the buyer would pay right now, without writing anything"""
        if subtotal is None:
            subtotal = self.cart.subtotal()
        pricing = self._pricing()
        promo = self._resolve_promo(promo_code, subtotal)
        totals = compute_order_totals(
            subtotal,
            Discount.from_code(promo.discount) if promo and promo.is_applied else None,
            pricing.shipping,
            pricing.tax_rate,
            pricing.add_on_fees(gift_wrap),
        )
        return totals, promo

    def _validate(self, details: dict, lines) -> dict:
        errors = {}
        for name, message in REQUIRED_FIELD_MESSAGES.items():
            if not (details.get(name) or '').strip():
                errors[name] = [message]
        if not lines:
            errors['cart'] = ['Your cart is empty.']
        return errors

    def _persistence_failed(self, exc: Exception) -> OrderPersistenceError:
        self.state = CheckoutState.FAILED
        logger.error(f"Order persistence failed: {exc}", exc_info=True)
        return OrderPersistenceError()

    def _find_placed(self, idempotency_key: Optional[str], owner: str) -> Optional[Order]:
        try:
            return self.orders.get_by_idempotency_key(idempotency_key, owner)
        except Exception as exc:
            raise self._persistence_failed(exc) from exc

    def _replay(self, order: Order) -> CheckoutResult:
        # Lookups are scoped to the owner, so this cart placed the order
        logger.info(f"Checkout retry matched existing order {order.short_id}")
        outcomes = [run_best_effort('clear_cart', self.cart.clear)]
        self.state = CheckoutState.CLEARED
        return CheckoutResult(order=order, totals=self.orders.totals_for(order),
                              side_effects=outcomes, replayed=True)

    def build_notification(self, order: Order) -> dict:
        return {
            'title': NEW_ORDER_TITLE,
            'message': format_notification_message(order),
            'url': NEW_ORDER_URL,
            'data': {
                'order_id': str(order.id),
                'short_id': order.short_id,
            },
        }

    def _record(self, payload: dict) -> SideEffectOutcome:
        return run_best_effort(
            'record_notification',
            self.inbox.create,
            payload['title'],
            payload['message'],
            notification_type=Notification.TYPE_ORDER,
            deep_link=payload['url'],
            data=payload['data'],
        )

    def _notify(self, payload: dict) -> SideEffectOutcome:
        if not self.notify_in_background:
            return run_best_effort('notify', self.notifier, NEW_ORDER_EVENT, payload)

        executor = self.executor or notify_executor()
        notifier = self.notifier
        return run_best_effort(
            'notify',
            transaction.on_commit,
            lambda: executor.submit(send_in_background, notifier, payload),
        )

    def submit(self, details: dict, promo_code: Optional[str] = None, gift_wrap: bool = False,
               idempotency_key: Optional[str] = None, user=None) -> CheckoutResult:
        self.state = CheckoutState.VALIDATING
        owner = self.cart.owner_key

        existing = self._find_placed(idempotency_key, owner)
        if existing is not None:
            return self._replay(existing)

        lines = self.cart.lines()
        errors = self._validate(details, lines)
        if errors:
            self.state = CheckoutState.FAILED
            logger.info(f"Checkout rejected: missing {sorted(errors)}")
            raise CheckoutValidationError(errors)

        self.state = CheckoutState.PERSISTING
        try:
            subtotal = sum((line.line_total for line in lines), Decimal('0.00'))
            totals, promo = self.preview(promo_code, gift_wrap, subtotal=subtotal)
            applied = promo.discount if promo and promo.is_applied else None
            if promo and not promo.is_applied:
                logger.info(f"Checkout continuing without promo {promo.code!r}: {promo.reason.value}")

            order = self.orders.create_order(
                details,
                lines,
                totals,
                user=user,
                discount_code=applied.code if applied else None,
                gift_wrap=gift_wrap,
                idempotency_key=idempotency_key,
                placed_by=owner,
            )
        except IntegrityError as exc:
            # A concurrent retry from the same owner won the insert
            existing = self._find_placed(idempotency_key, owner)
            if existing is not None:
                return self._replay(existing)
            raise self._persistence_failed(exc) from exc
        except Exception as exc:
            raise self._persistence_failed(exc) from exc

        logger.info(f"Order {order.short_id} placed, total {order.total_amount}")

        outcomes = []
        if applied is not None:
            outcomes.append(run_best_effort('increment_usage', self.discounts.increment_usage, applied.id))

        self.state = CheckoutState.NOTIFYING
        payload = self.build_notification(order)
        outcomes.append(self._record(payload))
        outcomes.append(self._notify(payload))

        outcomes.append(run_best_effort('clear_cart', self.cart.clear))
        self.state = CheckoutState.CLEARED

        return CheckoutResult(order=order, totals=totals, promo=promo, side_effects=outcomes)
