from datetime import timedelta
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.utils import timezone

from pricing.models import DiscountCode
from pricing.services import DiscountCodeService

from .utils import send_json


def make_code(**kwargs):
    defaults = {
        'code': 'VÅR25',
        'discount_type': DiscountCode.DiscountType.PERCENTAGE,
        'discount_value': Decimal('25'),
    }
    defaults.update(kwargs)
    return DiscountCode.objects.create(**defaults)


@pytest.mark.django_db
class TestValidateCode:

    def test_percentage(self):
        make_code()

        result = DiscountCodeService.validate_code('vår25', 400, 'BOX_ADVERTISING')

        assert result.is_valid is True
        assert result.discount_amount == Decimal('100.00')
        assert result.final_amount == Decimal('300.00')

    def test_percentage_is_capped(self):
        make_code(max_discount=Decimal('50'))

        result = DiscountCodeService.validate_code('VÅR25', 400, 'BOX_ADVERTISING')

        assert result.discount_amount == Decimal('50.00')
        assert result.final_amount == Decimal('350.00')

    def test_fixed_amount_never_below_zero(self):
        make_code(
            code='HUNDRE',
            discount_type=DiscountCode.DiscountType.FIXED_AMOUNT,
            discount_value=Decimal('100'),
        )

        result = DiscountCodeService.validate_code('HUNDRE', 60, 'BOX_BOOST')

        assert result.discount_amount == Decimal('60.00')
        assert result.final_amount == Decimal('0.00')

    def test_unknown_code(self):
        result = DiscountCodeService.validate_code('FINNESIKKE', 400, 'BOX_ADVERTISING')

        assert result.is_valid is False
        assert result.error_message == 'Rabattkoden finnes ikke'
        assert result.final_amount == Decimal('400')

    def test_inactive(self):
        make_code(is_active=False)

        result = DiscountCodeService.validate_code('VÅR25', 400, 'BOX_ADVERTISING')

        assert result.error_message == 'Rabattkoden er ikke aktiv'

    def test_not_yet_valid(self):
        make_code(valid_from=timezone.now() + timedelta(days=1))

        result = DiscountCodeService.validate_code('VÅR25', 400, 'BOX_ADVERTISING')

        assert result.error_message == 'Rabattkoden er ikke gyldig ennå'

    def test_expired(self):
        now = timezone.now()
        make_code(valid_from=now - timedelta(days=10), valid_until=now - timedelta(days=1))

        result = DiscountCodeService.validate_code('VÅR25', 400, 'BOX_ADVERTISING')

        assert result.error_message == 'Rabattkoden er utløpt'

    def test_wrong_item_type(self):
        make_code(applicable_items=['BOX_BOOST'])

        result = DiscountCodeService.validate_code('VÅR25', 400, 'SERVICE_ADVERTISING')

        assert result.is_valid is False
        assert result.error_message == 'Rabattkoden gjelder ikke for denne typen bestilling'

    def test_minimum_order(self):
        make_code(min_order_amount=Decimal('500.00'))

        result = DiscountCodeService.validate_code('VÅR25', 400, 'BOX_ADVERTISING')

        assert result.error_message == 'Minimum bestillingsbeløp er 500 kr'


@pytest.mark.django_db
class TestManageCodes:

    def test_code_is_stored_upper_case(self):
        discount_code = DiscountCodeService.create_code({
            'code': ' sommer ',
            'discount_type': DiscountCode.DiscountType.FIXED_AMOUNT,
            'discount_value': Decimal('50'),
        })

        assert discount_code.code == 'SOMMER'

    def test_duplicate_code_ignores_case(self):
        make_code()

        with pytest.raises(ValidationError):
            DiscountCodeService.create_code({
                'code': 'vår25',
                'discount_type': DiscountCode.DiscountType.PERCENTAGE,
                'discount_value': Decimal('10'),
            })

    def test_percentage_above_hundred(self):
        with pytest.raises(ValidationError):
            DiscountCodeService.create_code({
                'code': 'GRATIS',
                'discount_type': DiscountCode.DiscountType.PERCENTAGE,
                'discount_value': Decimal('101'),
            })

    def test_valid_until_before_valid_from(self):
        discount_code = make_code()

        with pytest.raises(ValidationError):
            DiscountCodeService.update_code(discount_code.pk, {
                'valid_until': discount_code.valid_from - timedelta(days=1),
            })

    def test_deactivate_expired(self):
        now = timezone.now()
        expired = make_code(code='GAMMEL', valid_from=now - timedelta(days=30),
                            valid_until=now - timedelta(days=1))
        current = make_code(code='NY', valid_until=now + timedelta(days=30))
        open_ended = make_code(code='ALLTID')

        assert DiscountCodeService.deactivate_expired(now) == 1

        expired.refresh_from_db()
        current.refresh_from_db()
        open_ended.refresh_from_db()
        assert expired.is_active is False
        assert current.is_active is True
        assert open_ended.is_active is True


@pytest.mark.django_db
class TestDiscountCodeViews:

    def test_validate_requires_login(self, client):
        response = send_json(client, 'post', '/api/discount-codes/validate/', {
            'code': 'VÅR25', 'amount': 400, 'itemType': 'BOX_ADVERTISING',
        })
        assert response.status_code == 401

    def test_validate(self, user_client):
        make_code()

        response = send_json(user_client, 'post', '/api/discount-codes/validate/', {
            'code': 'vår25', 'amount': 400, 'itemType': 'BOX_ADVERTISING',
        })

        assert response.status_code == 200
        data = response.json()
        assert data['isValid'] is True
        assert data['discountAmount'] == 100.0
        assert data['finalAmount'] == 300.0
        assert 'errorMessage' not in data

    def test_invalid_code_still_answers_200(self, user_client):
        response = send_json(user_client, 'post', '/api/discount-codes/validate/', {
            'code': 'FINNESIKKE', 'amount': 400, 'itemType': 'BOX_ADVERTISING',
        })

        assert response.status_code == 200
        assert response.json()['isValid'] is False

    def test_validate_rejects_unknown_item_type(self, user_client):
        response = send_json(user_client, 'post', '/api/discount-codes/validate/', {
            'code': 'VÅR25', 'amount': 400, 'itemType': 'STABLE',
        })
        assert response.status_code == 400

    def test_validate_rejects_non_string_code(self, user_client):
        response = send_json(user_client, 'post', '/api/discount-codes/validate/', {
            'code': ['VÅR25'], 'amount': 400, 'itemType': 'BOX_ADVERTISING',
        })

        assert response.status_code == 400
        assert 'code' in response.json()['details']

    def test_admin_create_and_list(self, staff_client):
        response = send_json(staff_client, 'post', '/api/admin/discount-codes/', {
            'code': 'jul',
            'discountType': 'FIXED_AMOUNT',
            'discountValue': 75,
            'applicableItems': ['BOX_BOOST'],
        })

        assert response.status_code == 201
        assert response.json()['code'] == 'JUL'
        assert response.json()['applicableItems'] == ['BOX_BOOST']

        response = staff_client.get('/api/admin/discount-codes/')
        assert [entry['code'] for entry in response.json()['codes']] == ['JUL']

    def test_admin_patch(self, staff_client):
        discount_code = make_code()

        response = send_json(
            staff_client, 'patch', f'/api/admin/discount-codes/{discount_code.pk}/',
            {'isActive': False},
        )

        assert response.status_code == 200
        discount_code.refresh_from_db()
        assert discount_code.is_active is False
        assert discount_code.discount_value == Decimal('25')

    def test_admin_delete(self, staff_client):
        discount_code = make_code()

        response = staff_client.delete(f'/api/admin/discount-codes/{discount_code.pk}/')

        assert response.json() == {'success': True}
        assert not DiscountCode.objects.exists()

    def test_admin_missing_code(self, staff_client):
        response = staff_client.get('/api/admin/discount-codes/999/')
        assert response.status_code == 404
