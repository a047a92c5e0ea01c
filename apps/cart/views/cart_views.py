"""
Cart views: read, add, change quantity, remove and clear.
"""
from rest_framework.views import APIView
from rest_framework.permissions import AllowAny
from rest_framework import status

from apps.common.utils import success_response, error_response
from apps.products.models import Product
from ..serializers import CartAddSerializer, CartQuantitySerializer
from ..services import CartService


class CartView(APIView):
    """GET /api/cart/ returns the cart; DELETE empties it"""
    permission_classes = [AllowAny]

    def get(self, request):
        cart = CartService.get_or_create_cart(request)
        return success_response(CartService.summarize(cart), 'Cart retrieved successfully')

    def delete(self, request):
        cart = CartService.get_or_create_cart(request)
        CartService.clear(cart)
        return success_response(CartService.summarize(cart), 'Cart cleared')


class CartItemsView(APIView):
    """POST /api/cart/items adds a product"""
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = CartAddSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid cart item", serializer.errors)

        try:
            product = Product.objects.get(id=serializer.validated_data['product_id'])
        except Product.DoesNotExist:
            return error_response("Product not found", status_code=status.HTTP_404_NOT_FOUND)

        if not product.is_purchasable:
            return error_response("Product is not available for purchase")

        cart = CartService.get_or_create_cart(request)
        CartService.add_item(cart, product, serializer.validated_data['quantity'])
        return success_response(
            CartService.summarize(cart),
            f"{serializer.validated_data['quantity']} x {product.name} added to your bag.",
            status_code=status.HTTP_201_CREATED
        )


class CartItemDetailView(APIView):
    """PATCH /api/cart/items/<product_id>/ changes quantity by delta; DELETE removes the line"""
    permission_classes = [AllowAny]

    def patch(self, request, product_id):
        serializer = CartQuantitySerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid quantity change", serializer.errors)

        cart = CartService.get_or_create_cart(request)
        item = CartService.update_quantity(cart, product_id, serializer.validated_data['delta'])
        if item is None:
            return error_response("Item not in cart", status_code=status.HTTP_404_NOT_FOUND)
        return success_response(CartService.summarize(cart), 'Cart updated')

    def delete(self, request, product_id):
        cart = CartService.get_or_create_cart(request)
        if not CartService.remove_item(cart, product_id):
            return error_response("Item not in cart", status_code=status.HTTP_404_NOT_FOUND)
        return success_response(CartService.summarize(cart), 'Item removed')
