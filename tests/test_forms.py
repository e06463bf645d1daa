import pytest
from django.core.exceptions import ValidationError

from core.forms import JsonBooleanField, JsonCharField, MonthField, StrictForm


class FlagsForm(StrictForm):
    name = JsonCharField(required=False, empty_value=None)
    active = JsonBooleanField(required=False)


@pytest.mark.parametrize('value, expected', [
    (True, True),
    (False, False),
    (None, False),
])
def test_boolean_accepts_json_booleans(value, expected):
    form = FlagsForm({'active': value})

    assert form.is_valid()
    assert form.cleaned_data['active'] is expected


@pytest.mark.parametrize('value', ['no', 'false', 'true', '0', 0, 1, [], {}])
def test_boolean_rejects_everything_else(value):
    form = FlagsForm({'active': value})

    assert not form.is_valid()
    assert form.errors['active'] == ['Enter true or false.']


def test_missing_boolean_is_false_and_not_a_change():
    form = FlagsForm({'name': 'Blakken'})

    assert form.is_valid()
    assert form.changes() == {'name': 'Blakken'}


@pytest.mark.parametrize('value', [7, 1.5, True, ['a'], {'a': 1}])
def test_char_rejects_non_strings(value):
    form = FlagsForm({'name': value})

    assert not form.is_valid()
    assert form.errors['name'] == ['Enter a string.']


def test_char_keeps_empty_value_for_null():
    form = FlagsForm({'name': None})

    assert form.is_valid()
    assert form.cleaned_data['name'] is None


def test_month_field_rejects_numbers():
    field = MonthField()

    with pytest.raises(ValidationError) as excinfo:
        field.clean(202401)

    assert 'Enter a string.' in excinfo.value.messages
