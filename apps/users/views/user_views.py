"""
Registration and profile views. Sign-in uses the JWT token endpoints.
"""
from rest_framework.views import APIView
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework import status
from rest_framework_simplejwt.tokens import RefreshToken

from apps.common.utils import success_response, error_response
from ..serializers import UserDetailSerializer, UserRegistrationSerializer, UserUpdateSerializer


class RegisterView(APIView):
    """User registration endpoint"""
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = UserRegistrationSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response('Registration failed', serializer.errors)

        user = serializer.save()
        refresh = RefreshToken.for_user(user)
        return success_response({
            'token': str(refresh.access_token),
            'refresh': str(refresh),
            'user': UserDetailSerializer(user).data,
        }, 'Registration successful', status_code=status.HTTP_201_CREATED)


class UserProfileView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return success_response(UserDetailSerializer(request.user).data)

    def patch(self, request):
        serializer = UserUpdateSerializer(request.user, data=request.data, partial=True)
        if not serializer.is_valid():
            return error_response('Profile update failed', serializer.errors)
        serializer.save()
        return success_response(UserDetailSerializer(request.user).data, 'Profile updated successfully')
