"""
Shared form helpers for JSON request bodies.
"""

from django import forms
from django.core.exceptions import ValidationError
from django.core.validators import RegexValidator

month_validator = RegexValidator(
    regex=r'^\d{4}-(0[1-9]|1[0-2])$',
    message="Month must be in YYYY-MM format.",
)


class JsonCharField(forms.CharField):
    """Text field that only accepts JSON strings; numbers and lists are invalid."""

    default_error_messages = {
        'invalid': "Enter a string.",
    }

    def to_python(self, value):
        if value not in self.empty_values and not isinstance(value, str):
            raise ValidationError(self.error_messages['invalid'], code='invalid')
        return super().to_python(value)


class JsonBooleanField(forms.BooleanField):
    """Boolean field that only accepts JSON true, false or null.

    The checkbox widget of BooleanField reads any non-"false" string as True,
    so values are taken from the data as they are.
    """

    widget = forms.TextInput
    default_error_messages = {
        'invalid': "Enter true or false.",
    }

    def to_python(self, value):
        if value is None:
            return False
        if isinstance(value, bool):
            return value
        raise ValidationError(self.error_messages['invalid'], code='invalid')


class MonthField(JsonCharField):
    """A calendar month written as YYYY-MM."""

    default_validators = [month_validator]

    def __init__(self, **kwargs):
        kwargs.setdefault('max_length', 7)
        super().__init__(**kwargs)


class StrictForm(forms.Form):
    """Form for JSON bodies and query strings that rejects undeclared keys.

    Field names follow the JSON keys; ``field_map`` translates them to model
    attribute names for ``changes()``.
    """

    field_map = {}

    def clean(self):
        cleaned_data = super().clean()
        unknown = sorted(set(self.data) - set(self.fields))
        if unknown:
            raise forms.ValidationError(
                "Unknown fields: %(fields)s",
                code='unknown_fields',
                params={'fields': ', '.join(unknown)},
            )
        return cleaned_data

    def is_supplied(self, name):
        return name in self.data

    def changes(self):
        """Cleaned values for the keys present in the request, by model name."""
        return {
            self.field_map.get(name, name): self.cleaned_data[name]
            for name in self.fields
            if self.is_supplied(name) and name in self.cleaned_data
        }
