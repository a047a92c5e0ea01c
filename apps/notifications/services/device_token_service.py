import logging

from ..models import DeviceToken

logger = logging.getLogger('storefront.push')


class DeviceTokenService:
    """Service class for device token registration"""

    @staticmethod
    def register(user, token: str) -> DeviceToken:
        """Store the user's current token, replacing any earlier one"""
        device_token, created = DeviceToken.objects.update_or_create(
            owner=user, defaults={'token': token.strip()}
        )
        logger.info(f"{'Registered' if created else 'Updated'} device token for user {user.id}")
        return device_token

    @staticmethod
    def unregister(user) -> bool:
        deleted, _ = DeviceToken.objects.filter(owner=user).delete()
        return deleted > 0
