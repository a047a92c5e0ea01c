"""
Notification services module.
"""
from .credentials import FCMCredentialService, ServiceAccount, load_service_account
from .device_token_service import DeviceTokenService
from .dispatcher import (
    DispatchResult, NotificationDispatcher, TokenDeliveryResult,
    EVENT_NEW_ORDER, EVENT_TEST, EVENT_TYPES,
)
from .fcm_client import FCMClient, build_message
from .notification_service import NotificationService

__all__ = [
    'DeviceTokenService',
    'DispatchResult',
    'EVENT_NEW_ORDER',
    'EVENT_TEST',
    'EVENT_TYPES',
    'FCMClient',
    'FCMCredentialService',
    'NotificationDispatcher',
    'NotificationService',
    'ServiceAccount',
    'TokenDeliveryResult',
    'build_message',
    'load_service_account',
]
