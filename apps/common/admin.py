from django.contrib import admin

from .models import SystemConfiguration

admin.site.site_header = 'Storefront Administration'
admin.site.site_title = 'Storefront Admin'
admin.site.index_title = 'Catalog, orders and promotions'


@admin.register(SystemConfiguration)
class SystemConfigurationAdmin(admin.ModelAdmin):
    """Shipping, tax and checkout fee overrides"""

    list_display = ['key', 'value_preview', 'is_active', 'updated_by', 'updated_at']
    list_filter = ['is_active', 'updated_at']
    search_fields = ['key', 'value', 'description']
    ordering = ['key']
    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        ('Configuration', {
            'fields': ('key', 'value', 'description', 'is_active')
        }),
        ('Metadata', {
            'fields': ('updated_by', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def value_preview(self, obj):
        if len(obj.value) > 50:
            return obj.value[:50] + '...'
        return obj.value
    value_preview.short_description = 'Value'

    def save_model(self, request, obj, form, change):
        obj.updated_by = request.user
        super().save_model(request, obj, form, change)
