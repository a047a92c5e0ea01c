"""
Push dispatch and device token registration views.
"""
import logging

from rest_framework.views import APIView
from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from apps.common.exceptions import CredentialExchangeError, NotificationError
from apps.common.utils import success_response, error_response
from ..serializers import DeviceTokenSerializer, PushRequestSerializer
from ..services import DeviceTokenService, NotificationDispatcher

logger = logging.getLogger('storefront.push')


class PushNotificationView(APIView):
    """
    POST /api/notifications/push {type, payload}

    Answers {success, results} or, when nobody is registered,
    {success: true, message: "No targets found", results: []}.
    """
    permission_classes = [IsAdminUser]

    def post(self, request):
        serializer = PushRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid push request", serializer.errors)

        try:
            result = NotificationDispatcher().dispatch(
                serializer.validated_data['type'],
                serializer.validated_data['payload'],
            )
        except CredentialExchangeError as exc:
            logger.error(f"Push aborted, credential exchange failed: {exc}")
            return Response({'error': exc.message}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        except NotificationError as exc:
            return error_response(exc.message)

        return Response(result.as_dict())


class DeviceTokenView(APIView):
    """POST registers the caller's device token, DELETE forgets it"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = DeviceTokenSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid device token", serializer.errors)

        device_token = DeviceTokenService.register(request.user, serializer.validated_data['token'])
        return success_response({
            'token': device_token.token,
            'updated_at': device_token.updated_at,
        }, 'Device token registered')

    def delete(self, request):
        removed = DeviceTokenService.unregister(request.user)
        return success_response({'removed': removed}, 'Device token removed')
