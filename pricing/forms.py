"""
Forms validating pricing request bodies and query strings.
"""

from decimal import Decimal

from django import forms

from core.forms import JsonBooleanField, JsonCharField, StrictForm

from .models import DiscountCode


class DiscountTierForm(StrictForm):
    """Discount tier body; the bound keys depend on the tier scheme."""

    id = forms.IntegerField(required=False, min_value=1)
    discountPercentage = forms.DecimalField(required=False, max_digits=5, decimal_places=2)
    isActive = JsonBooleanField(required=False)

    def __init__(self, *args, scheme, partial=False, **kwargs):
        super().__init__(*args, **kwargs)
        self.scheme = scheme
        self.fields[scheme.min_key] = forms.IntegerField(required=not partial, min_value=0)
        self.fields[scheme.max_key] = forms.IntegerField(required=False, min_value=0)
        self.fields['discountPercentage'].required = not partial
        if partial:
            self.fields['id'].required = True
        self.field_map = {
            scheme.min_key: 'min_value',
            scheme.max_key: 'max_value',
            'discountPercentage': 'discount_percentage',
            'isActive': 'is_active',
        }

    def changes(self):
        changes = super().changes()
        changes.pop('id', None)
        return changes


class BasePriceForm(StrictForm):
    price = forms.DecimalField(min_value=0, max_digits=10, decimal_places=2)
    description = JsonCharField(required=False, empty_value=None)


class BoxCalculationForm(StrictForm):
    boxes = forms.IntegerField(min_value=1, max_value=1000)
    months = forms.IntegerField(min_value=1, max_value=120)


class BoostCalculationForm(StrictForm):
    days = forms.IntegerField(min_value=1, max_value=365)
    boxes = forms.IntegerField(required=False, min_value=1, max_value=1000)


class ServiceCalculationForm(StrictForm):
    months = forms.IntegerField(min_value=1, max_value=120)


class DiscountCodeValidateForm(StrictForm):
    code = JsonCharField(max_length=50)
    amount = forms.DecimalField(min_value=0, max_digits=12, decimal_places=2)
    itemType = forms.ChoiceField(choices=DiscountCode.ItemType.choices)


class DiscountCodeForm(StrictForm):
    """Admin body for creating or updating a discount code."""

    field_map = {
        'discountType': 'discount_type',
        'discountValue': 'discount_value',
        'maxDiscount': 'max_discount',
        'minOrderAmount': 'min_order_amount',
        'applicableItems': 'applicable_items',
        'validFrom': 'valid_from',
        'validUntil': 'valid_until',
        'isActive': 'is_active',
    }

    code = JsonCharField(max_length=50)
    description = JsonCharField(required=False)
    discountType = forms.ChoiceField(choices=DiscountCode.DiscountType.choices)
    discountValue = forms.DecimalField(min_value=Decimal('0.01'), max_digits=10, decimal_places=2)
    maxDiscount = forms.DecimalField(required=False, min_value=0, max_digits=10, decimal_places=2)
    minOrderAmount = forms.DecimalField(required=False, min_value=0, max_digits=10, decimal_places=2)
    applicableItems = forms.MultipleChoiceField(
        required=False,
        choices=DiscountCode.ItemType.choices,
    )
    validFrom = forms.DateTimeField(required=False)
    validUntil = forms.DateTimeField(required=False)
    isActive = JsonBooleanField(required=False)

    def __init__(self, *args, partial=False, **kwargs):
        super().__init__(*args, **kwargs)
        self.partial = partial
        if partial:
            for name in ('code', 'discountType', 'discountValue'):
                self.fields[name].required = False

    def clean_applicableItems(self):
        return list(self.cleaned_data.get('applicableItems') or [])

    def clean(self):
        cleaned_data = super().clean()
        if self.partial:
            for name in ('code', 'discountType', 'discountValue'):
                if self.is_supplied(name) and cleaned_data.get(name) in (None, ''):
                    self.add_error(name, "This field cannot be empty.")
        return cleaned_data

    def changes(self):
        changes = super().changes()
        # A missing or null validFrom means "from now"
        if changes.get('valid_from') is None:
            changes.pop('valid_from', None)
        return changes
