from django.contrib import admin

from .models import DiscountCode


@admin.register(DiscountCode)
class DiscountCodeAdmin(admin.ModelAdmin):
    list_display = ['code', 'discount_type', 'discount_value', 'used_count', 'max_uses',
                    'expires_at', 'is_active', 'created_at']
    list_filter = ['discount_type', 'is_active', 'expires_at']
    search_fields = ['code', 'description']
    readonly_fields = ['used_count', 'created_at', 'updated_at']
    ordering = ['-created_at']
