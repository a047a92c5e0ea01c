"""
Domain exceptions and the DRF exception handler for consistent API responses
"""
from rest_framework.views import exception_handler
from rest_framework import status
import logging

logger = logging.getLogger(__name__)


class StorefrontError(Exception):
    """Base class for storefront domain errors"""

    default_message = 'An error occurred'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class CheckoutValidationError(StorefrontError):
    """Required checkout fields are missing; nothing was persisted"""

    default_message = 'Please complete the required fields'

    def __init__(self, errors, message=None):
        self.errors = errors
        super().__init__(message)


class OrderPersistenceError(StorefrontError):
    """The order could not be written. The cart is kept so the buyer can retry."""

    default_message = 'We could not process your order, please try again'


class SideEffectError(StorefrontError):
    """A best-effort step after order placement failed"""

    def __init__(self, effect, cause):
        self.effect = effect
        self.cause = cause
        super().__init__(f"{effect} failed: {cause}")


class NotificationError(StorefrontError):
    """Invalid push dispatch request"""


class CredentialExchangeError(NotificationError):
    """Signing the service-account JWT or exchanging it for an access token failed"""


class PushDeliveryError(NotificationError):
    """A single device token could not be reached"""

    def __init__(self, token, message, response=None):
        self.token = token
        self.response = response
        super().__init__(message)


def custom_exception_handler(exc, context):
    """
    Custom exception handler that returns consistent error responses
    """
    response = exception_handler(exc, context)

    if response is not None:
        logger.error(f"API Exception: {exc}", exc_info=True)

        custom_response_data = {
            'code': response.status_code,
            'msg': 'An error occurred',
            'errors': response.data
        }

        if response.status_code == status.HTTP_400_BAD_REQUEST:
            custom_response_data['msg'] = 'Validation error'
        elif response.status_code == status.HTTP_401_UNAUTHORIZED:
            custom_response_data['msg'] = 'Authentication required'
        elif response.status_code == status.HTTP_403_FORBIDDEN:
            custom_response_data['msg'] = 'Permission denied'
        elif response.status_code == status.HTTP_404_NOT_FOUND:
            custom_response_data['msg'] = 'Resource not found'
        elif response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            custom_response_data['msg'] = 'Method not allowed'
        elif response.status_code >= 500:
            custom_response_data['msg'] = 'Internal server error'
            # Don't expose internal errors to customers
            request = context.get('request')
            if request is None or not getattr(request.user, 'is_staff', False):
                custom_response_data['errors'] = {'detail': 'Internal server error'}

        response.data = custom_response_data

    return response
