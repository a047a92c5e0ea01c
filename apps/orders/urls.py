from django.urls import path
from . import views

urlpatterns = [
    path('checkout', views.CheckoutView.as_view(), name='order-checkout'),
    path('preview', views.CheckoutPreviewView.as_view(), name='order-preview'),
    path('mine', views.MyOrdersView.as_view(), name='order-mine'),
    path('track/<str:short_id>', views.TrackOrderView.as_view(), name='order-track'),
    path('returns', views.ReturnRequestView.as_view(), name='order-returns'),
]
