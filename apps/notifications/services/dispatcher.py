"""
Push notification dispatch.

Resolves the device tokens for an event, obtains an access token once and
sends to every token concurrently. Each token gets its own result; one bad
token never prevents delivery to the others. Invalid tokens are reported,
not deleted.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from django.conf import settings
from django.contrib.auth import get_user_model

from apps.common.exceptions import NotificationError, PushDeliveryError
from ..models import DeviceToken
from .credentials import FCMCredentialService
from .fcm_client import FCMClient

logger = logging.getLogger('storefront.push')

EVENT_NEW_ORDER = 'new_order'
EVENT_TEST = 'test'
EVENT_TYPES = (EVENT_NEW_ORDER, EVENT_TEST)

NO_TARGETS_MESSAGE = 'No targets found'


@dataclass(frozen=True)
class TokenDeliveryResult:
    token: str
    success: bool
    response: Optional[dict] = None
    error: Optional[str] = None

    def as_dict(self):
        if self.success:
            return {'token': self.token, 'success': True, 'response': self.response}
        return {'token': self.token, 'success': False, 'error': self.error}


@dataclass
class DispatchResult:
    success: bool
    results: List[TokenDeliveryResult] = field(default_factory=list)
    message: Optional[str] = None

    @property
    def success_count(self) -> int:
        return sum(1 for result in self.results if result.success)

    def as_dict(self):
        data = {
            'success': self.success,
            'success_count': self.success_count,
            'results': [result.as_dict() for result in self.results],
        }
        if self.message:
            data['message'] = self.message
        return data


def admin_user_ids():
    """Users who receive new-order pushes"""
    if settings.PUSH_ADMIN_USER_IDS:
        return list(settings.PUSH_ADMIN_USER_IDS)
    User = get_user_model()
    return list(User.objects.filter(is_staff=True, is_active=True).values_list('id', flat=True))


class NotificationDispatcher:
    """
    Sends an event to the devices it targets.

    ``credentials`` must provide ``get_access_token()`` and ``service_account``;
    ``client_factory(project_id, access_token)`` builds the sender.
    """

    def __init__(self, credentials: Optional[FCMCredentialService] = None,
                 client_factory: Callable = FCMClient, max_workers: Optional[int] = None):
        self.credentials = credentials or FCMCredentialService()
        self.client_factory = client_factory
        self.max_workers = max_workers or settings.FCM_MAX_WORKERS

    def resolve_targets(self, event_type: str, payload: dict) -> List[str]:
        if event_type == EVENT_NEW_ORDER:
            owner_ids = admin_user_ids()
        elif event_type == EVENT_TEST:
            user_id = payload.get('user_id')
            if not user_id:
                raise NotificationError("payload.user_id is required for test notifications")
            try:
                owner_ids = [int(user_id)]
            except (TypeError, ValueError):
                raise NotificationError(f"payload.user_id must be a user id, got {user_id!r}")
        else:
            raise NotificationError(f"Unknown notification type: {event_type}")

        tokens = DeviceToken.objects.filter(owner_id__in=owner_ids).values_list('token', flat=True)
        # Several admins may share a browser
        return list(dict.fromkeys(token for token in tokens if token))

    def _deliver(self, client, token: str, payload: dict) -> TokenDeliveryResult:
        try:
            response = client.send(token, payload)
        except PushDeliveryError as exc:
            logger.warning(f"Push to {token[:16]}... failed: {exc}")
            return TokenDeliveryResult(token=token, success=False, error=str(exc))
        except Exception as exc:
            logger.error(f"Push to {token[:16]}... raised unexpectedly: {exc}", exc_info=True)
            return TokenDeliveryResult(token=token, success=False, error=str(exc))
        return TokenDeliveryResult(token=token, success=True, response=response)

    def dispatch(self, event_type: str, payload: Optional[dict] = None) -> DispatchResult:
        """Send an event. Raises NotificationError for bad input and CredentialExchangeError when auth fails."""
        payload = payload or {}
        tokens = self.resolve_targets(event_type, payload)
        if not tokens:
            logger.info(f"No device tokens for {event_type} push")
            return DispatchResult(success=True, results=[], message=NO_TARGETS_MESSAGE)

        access_token = self.credentials.get_access_token()
        client = self.client_factory(self.credentials.service_account.project_id, access_token)

        workers = max(1, min(self.max_workers, len(tokens)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(lambda token: self._deliver(client, token, payload), tokens))

        result = DispatchResult(success=True, results=results)
        logger.info(f"{event_type} push delivered to {result.success_count}/{len(tokens)} devices")
        return result
