"""
Django admin configuration for core models.
"""

from django.contrib import admin
from django.utils.html import format_html

from .models import Horse


@admin.register(Horse)
class HorseAdmin(admin.ModelAdmin):
    list_display = ['name', 'owner', 'status_display', 'budget_item_count', 'created_at']
    list_filter = ['archived', 'created_at']
    search_fields = ['name', 'owner__username', 'owner__email']
    raw_id_fields = ['owner']
    readonly_fields = ['created_at', 'updated_at']

    def status_display(self, obj):
        if obj.is_deleted:
            return format_html('<span style="color: red;">Deleted</span>')
        elif obj.archived:
            return format_html('<span style="color: orange;">Archived</span>')
        return format_html('<span style="color: green;">Active</span>')
    status_display.short_description = 'Status'

    def budget_item_count(self, obj):
        return obj.budget_items.count()
    budget_item_count.short_description = 'Budget items'
