"""
JSON views for a horse's budget.
"""

from django.http import JsonResponse

from core.api import ApiView

from .forms import BudgetItemForm, BudgetOverrideForm, BudgetOverrideKeyForm, BudgetRangeForm
from .services import BudgetService


def item_payload(item):
    return {
        'id': item.pk,
        'horseId': item.horse_id,
        'title': item.title,
        'category': item.category,
        'amount': item.amount,
        'isRecurring': item.is_recurring,
        'startMonth': item.start_month,
        'endMonth': item.end_month,
        'intervalMonths': item.interval_months,
        'anchorDay': item.anchor_day,
        'emoji': item.emoji,
        'notes': item.notes,
        'createdAt': item.created_at.isoformat(),
        'updatedAt': item.updated_at.isoformat(),
    }


def override_payload(override):
    return {
        'id': override.pk,
        'budgetItemId': override.budget_item_id,
        'month': override.month,
        'overrideAmount': override.override_amount,
        'skip': override.skip,
        'note': override.note,
    }


class BudgetRangeView(ApiView):
    """GET the budget expanded month by month."""

    def get(self, request, horse_id):
        form = self.validate(BudgetRangeForm, request.GET)
        months = BudgetService.get_budget_for_range(
            horse_id,
            request.user,
            form.cleaned_data['from'],
            form.cleaned_data['to'],
        )
        return JsonResponse({'months': [month.as_dict() for month in months]})


class BudgetItemListView(ApiView):

    def get(self, request, horse_id):
        items = BudgetService.list_items(horse_id, request.user)
        return JsonResponse({'items': [item_payload(item) for item in items]})

    def post(self, request, horse_id):
        # Check ownership before validating so other users' horses stay opaque
        BudgetService.get_accessible_horse(horse_id, request.user)
        form = self.validate(BudgetItemForm, self.get_json())
        item = BudgetService.create_item(horse_id, request.user, form.changes())
        return JsonResponse(item_payload(item), status=201)


class BudgetItemDetailView(ApiView):

    def get(self, request, horse_id, item_id):
        item = BudgetService.get_item(horse_id, request.user, item_id)
        return JsonResponse(item_payload(item))

    def patch(self, request, horse_id, item_id):
        BudgetService.get_item(horse_id, request.user, item_id)
        form = self.validate(BudgetItemForm, self.get_json(), partial=True)
        item = BudgetService.update_item(horse_id, request.user, item_id, form.changes())
        return JsonResponse(item_payload(item))

    def delete(self, request, horse_id, item_id):
        BudgetService.delete_item(horse_id, request.user, item_id)
        return JsonResponse({'success': True})


class BudgetOverrideView(ApiView):
    """PUT upserts the override for (budgetItemId, month); DELETE removes it."""

    def put(self, request, horse_id):
        form = self.validate(BudgetOverrideForm, self.get_json())
        override = BudgetService.upsert_override(
            horse_id,
            request.user,
            form.cleaned_data['budgetItemId'],
            form.cleaned_data['month'],
            form.changes(),
        )
        if override is None:
            return JsonResponse({'deleted': True})
        return JsonResponse(override_payload(override))

    def delete(self, request, horse_id):
        form = self.validate(BudgetOverrideKeyForm, self.get_json())
        BudgetService.delete_override(
            horse_id,
            request.user,
            form.cleaned_data['budgetItemId'],
            form.cleaned_data['month'],
        )
        return JsonResponse({'success': True})
