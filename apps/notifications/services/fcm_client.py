"""
FCM HTTP v1 message sending.
"""
import logging

import requests
from django.conf import settings

from apps.common.exceptions import CredentialExchangeError, PushDeliveryError
from .credentials import ssl_verify

logger = logging.getLogger('storefront.push')

DEFAULT_TITLE = 'Lorean Update'
DEFAULT_BODY = 'New activity on your store.'


def build_message(token: str, payload: dict) -> dict:
    """FCM v1 message body for one device token"""
    payload = payload or {}
    link = payload.get('url') or settings.FCM_DEFAULT_LINK
    data = payload.get('data') or {}
    return {
        'message': {
            'token': token,
            'notification': {
                'title': payload.get('title') or DEFAULT_TITLE,
                'body': payload.get('message') or DEFAULT_BODY,
            },
            'webpush': {
                'notification': {
                    'icon': settings.FCM_ICON_URL,
                    'click_action': link,
                },
                'fcm_options': {
                    'link': link,
                },
            },
            # FCM only accepts string values in data
            'data': {str(key): str(value) for key, value in data.items()},
        }
    }


class FCMClient:
    def __init__(self, project_id: str, access_token: str):
        if not project_id:
            raise CredentialExchangeError("FCM project id is not configured")
        self.url = settings.FCM_SEND_URL.format(project_id=project_id)
        self.access_token = access_token

    def send(self, token: str, payload: dict) -> dict:
        """Send to one token. Raises PushDeliveryError on any failure."""
        try:
            response = requests.post(
                self.url,
                json=build_message(token, payload),
                headers={'Authorization': f'Bearer {self.access_token}'},
                timeout=settings.FCM_TIMEOUT,
                verify=ssl_verify(),
            )
        except requests.RequestException as exc:
            raise PushDeliveryError(token, f"Request failed: {exc}") from exc

        try:
            body = response.json()
        except ValueError:
            body = {'raw': response.text}

        if not response.ok:
            error = body.get('error', {}) if isinstance(body, dict) else {}
            message = error.get('message') if isinstance(error, dict) else error
            raise PushDeliveryError(token, f"FCM returned {response.status_code}: {message or response.text}",
                                    response=body)
        return body
