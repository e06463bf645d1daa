"""
Django admin configuration for budget models.
"""

from django.contrib import admin
from django.utils.html import format_html

from .models import BudgetItem, BudgetOverride


class BudgetOverrideInline(admin.TabularInline):
    model = BudgetOverride
    extra = 0
    fields = ['month', 'override_amount', 'skip', 'note']


@admin.register(BudgetItem)
class BudgetItemAdmin(admin.ModelAdmin):
    list_display = [
        'title', 'horse', 'category', 'amount', 'recurrence_display',
        'start_month', 'end_month'
    ]
    list_filter = ['is_recurring', 'category']
    search_fields = ['title', 'category', 'horse__name']
    raw_id_fields = ['horse']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [BudgetOverrideInline]

    def recurrence_display(self, obj):
        if obj.is_recurring:
            return format_html(
                '<span style="color: green;">Every {} mo</span>',
                obj.effective_interval
            )
        return format_html('<span style="color: gray;">Once</span>')
    recurrence_display.short_description = 'Recurrence'


@admin.register(BudgetOverride)
class BudgetOverrideAdmin(admin.ModelAdmin):
    list_display = ['budget_item', 'month', 'override_amount', 'skip']
    list_filter = ['skip']
    search_fields = ['budget_item__title', 'budget_item__horse__name', 'note']
    raw_id_fields = ['budget_item']
    readonly_fields = ['created_at', 'updated_at']
