"""
Django admin configuration for pricing models.
"""

from django.contrib import admin
from django.utils.html import format_html

from .models import BasePrice, DiscountCode, DiscountTier


@admin.register(BasePrice)
class BasePriceAdmin(admin.ModelAdmin):
    list_display = ['name', 'price', 'is_active', 'updated_at']
    list_filter = ['is_active']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(DiscountTier)
class DiscountTierAdmin(admin.ModelAdmin):
    list_display = [
        'category', 'basis', 'min_value', 'max_value', 'discount_percentage', 'is_active'
    ]
    list_filter = ['category', 'basis', 'is_active']
    list_editable = ['is_active']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(DiscountCode)
class DiscountCodeAdmin(admin.ModelAdmin):
    list_display = [
        'code', 'discount_type', 'discount_value', 'valid_from', 'valid_until',
        'status_display'
    ]
    list_filter = ['discount_type', 'is_active']
    search_fields = ['code', 'description']
    readonly_fields = ['created_at', 'updated_at']
    actions = ['deactivate_codes']

    fieldsets = (
        (None, {
            'fields': ('code', 'description', 'is_active')
        }),
        ('Discount', {
            'fields': ('discount_type', 'discount_value', 'max_discount', 'min_order_amount')
        }),
        ('Validity', {
            'fields': ('valid_from', 'valid_until', 'applicable_items')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def status_display(self, obj):
        if not obj.is_active:
            return format_html('<span style="color: gray;">Inactive</span>')
        if obj.is_expired:
            return format_html('<span style="color: red;">Expired</span>')
        return format_html('<span style="color: green;">Active</span>')
    status_display.short_description = 'Status'

    @admin.action(description="Deactivate selected codes")
    def deactivate_codes(self, request, queryset):
        updated = queryset.update(is_active=False)
        self.message_user(request, f"Deactivated {updated} discount codes.")
