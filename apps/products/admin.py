from django.contrib import admin
from .models import Product, Category


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'created_at']
    search_fields = ['name']


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ['name', 'price', 'stock', 'status', 'category', 'created_at']
    list_filter = ['status', 'category']
    search_fields = ['name', 'sku']
    ordering = ['-created_at']
