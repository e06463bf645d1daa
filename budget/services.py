"""
Budget services: item and override management and expansion of items into
monthly occurrences.
"""

import logging
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Prefetch, Q

from core.exceptions import AccessDenied
from core.models import Horse

from .models import BudgetItem, BudgetOverride
from .months import add_months, clamp_day, month_range, months_diff

logger = logging.getLogger(__name__)


def round_kroner(amount):
    """Round an amount to whole kroner, halves rounding up."""
    if amount is None:
        return None
    return int(Decimal(str(amount)).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


@dataclass
class BudgetOccurrence:
    """A budget item projected onto one month. Never stored."""

    budget_item_id: int
    title: str
    category: str
    emoji: Optional[str]
    base_amount: int
    amount: int
    is_recurring: bool
    month: str
    has_override: bool
    skipped: bool
    interval_months: Optional[int]
    note: Optional[str]
    day: int

    def as_dict(self):
        return {
            'budgetItemId': self.budget_item_id,
            'title': self.title,
            'category': self.category,
            'emoji': self.emoji,
            'baseAmount': self.base_amount,
            'amount': self.amount,
            'isRecurring': self.is_recurring,
            'month': self.month,
            'hasOverride': self.has_override,
            'skipped': self.skipped,
            'intervalMonths': self.interval_months,
            'note': self.note,
            'day': self.day,
        }


@dataclass
class BudgetMonth:
    month: str
    total: int = 0
    items: List[BudgetOccurrence] = field(default_factory=list)

    def as_dict(self):
        return {
            'month': self.month,
            'total': self.total,
            'items': [occurrence.as_dict() for occurrence in self.items],
        }


def occurrence_months(item, from_month, to_month):
    """Months within [from_month, to_month] in which a budget item occurs.

    A one-off item occurs in its start month only. A recurring item occurs
    every ``interval_months`` months counted from its start month, up to and
    including its end month when it has one.
    """
    if not item.is_recurring:
        if from_month <= item.start_month <= to_month:
            return [item.start_month]
        return []

    interval = item.effective_interval
    last = min(item.end_month or to_month, to_month)

    current = item.start_month
    if current < from_month:
        # First month of the series on or after from_month
        steps = -(-months_diff(current, from_month) // interval)
        current = add_months(current, steps * interval)

    months = []
    while current <= last:
        months.append(current)
        current = add_months(current, interval)
    return months


def build_occurrence(item, month, override=None):
    amount = item.amount
    if override is not None and override.override_amount is not None:
        amount = override.override_amount

    return BudgetOccurrence(
        budget_item_id=item.pk,
        title=item.title,
        category=item.category,
        emoji=item.emoji or None,
        base_amount=item.amount,
        amount=amount,
        is_recurring=item.is_recurring,
        month=month,
        has_override=override is not None and override.is_meaningful,
        skipped=override is not None and override.skip,
        interval_months=item.effective_interval if item.is_recurring else None,
        note=override.note if override is not None else None,
        day=clamp_day(month, item.anchor_day),
    )


def expand_budget(items, overrides, from_month, to_month):
    """Expand budget items into one BudgetMonth per month of the range.

    ``overrides`` maps (budget item id, month) to a BudgetOverride. Skipped
    occurrences are left out of both the month's items and its total.
    """
    months = {ym: BudgetMonth(month=ym) for ym in month_range(from_month, to_month)}

    for item in items:
        for ym in occurrence_months(item, from_month, to_month):
            occurrence = build_occurrence(item, ym, overrides.get((item.pk, ym)))
            if occurrence.skipped:
                continue
            budget_month = months[ym]
            budget_month.items.append(occurrence)
            budget_month.total += occurrence.amount

    return list(months.values())


class BudgetService:
    """Owner-only access to a horse's budget."""

    @staticmethod
    def get_accessible_horse(horse_id, user):
        horse = Horse.objects.accessible_to(user).filter(pk=horse_id).first()
        if horse is None:
            raise AccessDenied()
        return horse

    @classmethod
    def get_item(cls, horse_id, user, item_id):
        """Get a budget item that belongs to the horse, which the user must own."""
        item = BudgetItem.objects.filter(pk=item_id).first()
        if item is None or item.horse_id != horse_id:
            raise AccessDenied()
        cls.get_accessible_horse(horse_id, user)
        return item

    @classmethod
    def list_items(cls, horse_id, user):
        horse = cls.get_accessible_horse(horse_id, user)
        return list(horse.budget_items.all())

    @staticmethod
    def _normalise(item):
        item.amount = round_kroner(item.amount)
        if not item.is_recurring:
            item.interval_months = None
        elif item.interval_months is None:
            item.interval_months = 1
        if item.end_month and item.end_month < item.start_month:
            raise ValidationError("End month cannot be before start month.")

    @classmethod
    @transaction.atomic
    def create_item(cls, horse_id, user, data):
        """Create a budget item from validated model field values."""
        horse = cls.get_accessible_horse(horse_id, user)
        item = BudgetItem(horse=horse, **data)
        cls._normalise(item)
        item.save()
        logger.info("Created budget item %s for horse %s", item.pk, horse.pk)
        return item

    @classmethod
    @transaction.atomic
    def update_item(cls, horse_id, user, item_id, changes):
        """Apply a partial update; only the keys in ``changes`` are touched."""
        item = cls.get_item(horse_id, user, item_id)
        for name, value in changes.items():
            setattr(item, name, value)
        if 'is_recurring' in changes and 'interval_months' not in changes:
            # Switching recurrence resets the interval to its default
            item.interval_months = 1 if item.is_recurring else None
        cls._normalise(item)
        item.save()
        logger.info("Updated budget item %s (%s)", item.pk, ', '.join(sorted(changes)) or 'no fields')
        return item

    @classmethod
    @transaction.atomic
    def delete_item(cls, horse_id, user, item_id):
        item = cls.get_item(horse_id, user, item_id)
        item.overrides.all().delete()
        item.delete()
        logger.info("Deleted budget item %s from horse %s", item_id, horse_id)

    @classmethod
    @transaction.atomic
    def upsert_override(cls, horse_id, user, item_id, month, changes):
        """Create or update the override for (item, month).

        Returns the override, or None when ``changes`` is empty, in which case
        any existing override for the month is removed.
        """
        item = cls.get_item(horse_id, user, item_id)

        if not changes:
            BudgetOverride.objects.filter(budget_item=item, month=month).delete()
            return None

        changes = dict(changes)
        if 'override_amount' in changes:
            changes['override_amount'] = round_kroner(changes['override_amount'])

        override, created = BudgetOverride.objects.update_or_create(
            budget_item=item,
            month=month,
            defaults=changes,
        )
        logger.info(
            "%s budget override for item %s in %s",
            "Created" if created else "Updated", item.pk, month,
        )
        return override

    @classmethod
    @transaction.atomic
    def delete_override(cls, horse_id, user, item_id, month):
        item = cls.get_item(horse_id, user, item_id)
        deleted, _ = BudgetOverride.objects.filter(budget_item=item, month=month).delete()
        return deleted > 0

    @staticmethod
    def validate_range(from_month, to_month):
        if from_month > to_month:
            raise ValidationError("'from' must not be after 'to'.")
        max_months = settings.BUDGET_MAX_RANGE_MONTHS
        if months_diff(from_month, to_month) + 1 > max_months:
            raise ValidationError(f"Range cannot exceed {max_months} months.")

    @classmethod
    def get_budget_for_range(cls, horse_id, user, from_month, to_month):
        """Monthly budget for the horse over the inclusive month range."""
        horse = cls.get_accessible_horse(horse_id, user)
        cls.validate_range(from_month, to_month)

        items = BudgetItem.objects.filter(
            horse=horse,
            start_month__lte=to_month,
        ).filter(
            Q(end_month__isnull=True) | Q(end_month__gte=from_month)
        ).prefetch_related(
            Prefetch(
                'overrides',
                queryset=BudgetOverride.objects.filter(
                    month__gte=from_month,
                    month__lte=to_month,
                ),
            )
        )

        overrides = {}
        for item in items:
            for override in item.overrides.all():
                overrides[(item.pk, override.month)] = override

        return expand_budget(items, overrides, from_month, to_month)
