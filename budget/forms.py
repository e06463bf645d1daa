"""
Forms validating budget request bodies and query strings.
"""

from django import forms

from core.forms import JsonBooleanField, JsonCharField, MonthField, StrictForm

# Largest amount a PositiveIntegerField column holds
MAX_KRONER = 2147483647


class BudgetRangeForm(StrictForm):
    """Query string of the budget range read: ?from=YYYY-MM&to=YYYY-MM."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # 'from' is a keyword, so these fields cannot be declared as attributes
        self.fields['from'] = MonthField()
        self.fields['to'] = MonthField()


class BudgetItemForm(StrictForm):
    """Budget item fields. Required fields are relaxed for partial updates."""

    field_map = {
        'isRecurring': 'is_recurring',
        'startMonth': 'start_month',
        'endMonth': 'end_month',
        'intervalMonths': 'interval_months',
        'anchorDay': 'anchor_day',
    }

    title = JsonCharField(max_length=200)
    category = JsonCharField(max_length=100)
    amount = forms.DecimalField(min_value=0, max_value=MAX_KRONER)
    isRecurring = JsonBooleanField(required=False)
    startMonth = MonthField()
    endMonth = MonthField(required=False, empty_value=None)
    intervalMonths = forms.IntegerField(required=False, min_value=1, max_value=12)
    anchorDay = forms.IntegerField(required=False, min_value=1, max_value=31)
    emoji = JsonCharField(required=False, max_length=8, empty_value=None)
    notes = JsonCharField(required=False, empty_value=None)

    def __init__(self, *args, partial=False, **kwargs):
        super().__init__(*args, **kwargs)
        self.partial = partial
        if partial:
            for name in ('title', 'category', 'amount', 'startMonth'):
                self.fields[name].required = False

    def clean(self):
        cleaned_data = super().clean()
        if self.partial:
            # A supplied field may not be blanked out on update
            for name in ('title', 'category', 'amount', 'startMonth'):
                if self.is_supplied(name) and cleaned_data.get(name) in (None, ''):
                    self.add_error(name, "This field cannot be empty.")
        return cleaned_data


class BudgetOverrideForm(StrictForm):
    """Body of the override upsert: the key plus the fields to set."""

    field_map = {
        'overrideAmount': 'override_amount',
    }

    budgetItemId = forms.IntegerField(min_value=1)
    month = MonthField()
    overrideAmount = forms.DecimalField(required=False, min_value=0, max_value=MAX_KRONER)
    skip = JsonBooleanField(required=False)
    note = JsonCharField(required=False, empty_value=None)

    def changes(self):
        """Override fields supplied in the request, without the key fields."""
        changes = super().changes()
        changes.pop('budgetItemId', None)
        changes.pop('month', None)
        return changes


class BudgetOverrideKeyForm(StrictForm):
    """Body of the override delete."""

    budgetItemId = forms.IntegerField(min_value=1)
    month = MonthField()
