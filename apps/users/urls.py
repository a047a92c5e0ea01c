from django.urls import path
from . import views

urlpatterns = [
    path('register/', views.RegisterView.as_view(), name='user-register'),
    path('me/', views.UserProfileView.as_view(), name='user-profile'),
]
