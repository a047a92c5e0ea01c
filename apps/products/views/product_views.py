"""
Product list and detail views.
"""
from rest_framework.views import APIView
from rest_framework.permissions import AllowAny
from rest_framework import status
from django.db.models import Q

from apps.common.utils import success_response, error_response
from ..models import Product
from ..serializers import ProductListSerializer, ProductDetailSerializer


class ProductListView(APIView):
    """Product list endpoint - GET /api/products/"""
    permission_classes = [AllowAny]

    def get(self, request):
        keyword = request.GET.get('keyword', '')
        category = request.GET.get('category', '')
        try:
            page = max(int(request.GET.get('page', 1)), 1)
            page_size = min(max(int(request.GET.get('pageSize', 20)), 1), 100)
        except ValueError:
            return error_response("page and pageSize must be integers")

        query = Q(status='active')
        if keyword:
            query &= Q(name__icontains=keyword) | Q(description__icontains=keyword)
        if category:
            query &= Q(category__name__iexact=category)

        products = Product.objects.filter(query).select_related('category').order_by('-created_at')

        total = products.count()
        start_index = (page - 1) * page_size
        page_products = products[start_index:start_index + page_size]

        return success_response({
            "list": ProductListSerializer(page_products, many=True).data,
            "page": {
                "pageNum": page,
                "pageSize": page_size,
                "total": total,
                "totalPages": (total + page_size - 1) // page_size
            }
        }, 'Products retrieved successfully')


class ProductDetailView(APIView):
    """Product detail endpoint - GET /api/products/<id>/"""
    permission_classes = [AllowAny]

    def get(self, request, id):
        try:
            product = Product.objects.select_related('category').get(id=id)
        except Product.DoesNotExist:
            return error_response("Product not found", status_code=status.HTTP_404_NOT_FOUND)

        return success_response(ProductDetailSerializer(product).data, 'Product retrieved successfully')
