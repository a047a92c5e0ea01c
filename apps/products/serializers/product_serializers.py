"""
Product serializers for catalog list and detail.
"""
from rest_framework import serializers
from ..models import Product, Category


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ['id', 'name', 'description', 'image']


class ProductListSerializer(serializers.ModelSerializer):
    """Compact product representation for listings"""
    category = serializers.CharField(source='category.name', read_only=True, default=None)

    class Meta:
        model = Product
        fields = ['id', 'name', 'price', 'old_price', 'image', 'category', 'status', 'stock']


class ProductDetailSerializer(serializers.ModelSerializer):
    category = CategorySerializer(read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'price', 'old_price', 'image', 'category', 'description',
            'sku', 'stock', 'status', 'created_at', 'updated_at'
        ]
