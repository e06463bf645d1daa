"""
Budget models: planned expenses per horse and their monthly exceptions.
"""

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from core.forms import month_validator


class BudgetItem(models.Model):
    """A one-off or recurring planned expense for a horse.

    Amounts are whole Norwegian kroner.
    """

    horse = models.ForeignKey(
        'core.Horse',
        on_delete=models.CASCADE,
        related_name='budget_items'
    )
    title = models.CharField(max_length=200)
    category = models.CharField(max_length=100)
    amount = models.PositiveIntegerField(help_text="Amount in whole NOK")
    is_recurring = models.BooleanField(default=False)
    start_month = models.CharField(
        max_length=7,
        validators=[month_validator],
        help_text="YYYY-MM"
    )
    end_month = models.CharField(
        max_length=7,
        null=True,
        blank=True,
        validators=[month_validator],
        help_text="YYYY-MM, inclusive. Leave blank if open-ended"
    )
    interval_months = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1), MaxValueValidator(12)],
        help_text="Months between occurrences (recurring items only)"
    )
    anchor_day = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1), MaxValueValidator(31)],
        help_text="Day of month; defaults to the last day"
    )
    emoji = models.CharField(max_length=8, null=True, blank=True)
    notes = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['start_month', 'title']
        indexes = [
            models.Index(fields=['horse', 'start_month'], name='budget_item_horse_start_idx'),
        ]

    def __str__(self):
        kind = f"every {self.interval_months} mo" if self.is_recurring else "once"
        return f"{self.horse.name} - {self.title}: {self.amount} kr ({kind} from {self.start_month})"

    @property
    def effective_interval(self):
        return self.interval_months or 1


class BudgetOverride(models.Model):
    """Exception to a budget item in one month: skip it, change the amount or add a note."""

    budget_item = models.ForeignKey(
        BudgetItem,
        on_delete=models.CASCADE,
        related_name='overrides'
    )
    month = models.CharField(max_length=7, validators=[month_validator])
    override_amount = models.PositiveIntegerField(null=True, blank=True)
    skip = models.BooleanField(default=False)
    note = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['month']
        constraints = [
            models.UniqueConstraint(
                fields=['budget_item', 'month'],
                name='unique_budget_override_per_month',
            ),
        ]

    def __str__(self):
        if self.skip:
            change = "skipped"
        elif self.override_amount is not None:
            change = f"{self.override_amount} kr"
        else:
            change = "note"
        return f"{self.budget_item.title} {self.month}: {change}"

    @property
    def is_meaningful(self):
        """True when the override changes or annotates the occurrence."""
        return self.override_amount is not None or self.skip or bool(self.note)
