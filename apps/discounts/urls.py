from django.urls import path
from . import views

urlpatterns = [
    path('validate', views.ValidatePromoView.as_view(), name='discount-validate'),
    path('admin/', views.AdminDiscountListView.as_view(), name='admin-discount-list'),
    path('admin/<int:pk>/', views.AdminDiscountDetailView.as_view(), name='admin-discount-detail'),
]
