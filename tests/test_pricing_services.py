from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from core.exceptions import AccessDenied, NotConfigured
from pricing.models import BasePrice, DiscountTier
from pricing.schemes import BOOST, BOX_PERIOD, BOX_QUANTITY, SERVICE
from pricing.services import PricingService, apply_percentage, select_tier


def tier(scheme, min_value, max_value, percentage, **kwargs):
    return DiscountTier.objects.create(
        category=scheme.category,
        basis=scheme.basis,
        min_value=min_value,
        max_value=max_value,
        discount_percentage=Decimal(str(percentage)),
        **kwargs
    )


class TestApplyPercentage:

    def test_twenty_percent_off_thousand(self):
        assert apply_percentage(1000, 20) == Decimal('800.00')

    def test_rounds_to_ore(self):
        assert apply_percentage('99.99', '7.5') == Decimal('92.49')


@pytest.mark.django_db
class TestSelectTier:

    def test_value_inside_range(self):
        twenty = tier(BOX_QUANTITY, 3, 5, 20)
        assert select_tier(4, [twenty]) == twenty

    def test_max_is_exclusive(self):
        twenty = tier(BOX_QUANTITY, 3, 5, 20)
        assert select_tier(3, [twenty]) == twenty
        assert select_tier(5, [twenty]) is None

    def test_open_ended_tier(self):
        fifteen = tier(BOOST, 14, None, 15)
        assert select_tier(365, [fifteen]) == fifteen

    def test_highest_floor_wins_on_overlap(self):
        broad = tier(BOX_QUANTITY, 2, None, 5)
        narrow = tier(BOX_QUANTITY, 5, 10, 10)
        assert select_tier(6, [broad, narrow]) == narrow

    def test_equal_floors_fall_back_to_oldest(self):
        first = tier(BOX_QUANTITY, 2, 10, 5)
        second = tier(BOX_QUANTITY, 2, 8, 25)
        assert select_tier(4, [second, first]) == first

    def test_inactive_tiers_are_ignored(self):
        inactive = tier(BOX_QUANTITY, 3, 5, 20, is_active=False)
        assert select_tier(4, [inactive]) is None


@pytest.mark.django_db
class TestTiers:

    def test_create(self):
        created = PricingService.create_tier(BOX_QUANTITY, {
            'min_value': 3,
            'max_value': 5,
            'discount_percentage': Decimal('20'),
        })

        assert created.category == DiscountTier.Category.BOX
        assert created.basis == DiscountTier.Basis.QUANTITY

    @pytest.mark.parametrize('percentage', [0, 100, -5, 150])
    def test_percentage_must_be_strictly_between_0_and_100(self, percentage):
        with pytest.raises(ValidationError):
            PricingService.create_tier(BOOST, {
                'min_value': 3,
                'max_value': None,
                'discount_percentage': Decimal(percentage),
            })

    def test_max_must_exceed_min(self):
        with pytest.raises(ValidationError):
            PricingService.create_tier(BOOST, {
                'min_value': 7,
                'max_value': 7,
                'discount_percentage': Decimal('5'),
            })

    def test_quantity_floor_is_one(self):
        with pytest.raises(ValidationError):
            PricingService.create_tier(BOX_QUANTITY, {
                'min_value': 0,
                'max_value': None,
                'discount_percentage': Decimal('5'),
            })

    def test_update_validates_merged_values(self):
        existing = tier(BOOST, 3, 7, 3)

        with pytest.raises(ValidationError):
            PricingService.update_tier(BOOST, existing.pk, {'max_value': 2})

    def test_tier_of_another_scheme_is_not_found(self):
        existing = tier(BOOST, 3, 7, 3)

        with pytest.raises(AccessDenied):
            PricingService.get_tier(SERVICE, existing.pk)

    def test_resolve_uses_only_its_scheme(self):
        tier(BOX_PERIOD, 1, None, 10)
        assert PricingService.resolve_tier(SERVICE, 6) is None


@pytest.mark.django_db
class TestCalculations:

    def test_missing_base_price(self):
        with pytest.raises(NotConfigured):
            PricingService.calculate_service(3)

    def test_quantity_discount_on_box_advertising(self):
        BasePrice.objects.create(name=BasePrice.Name.BOX_MONTHLY, price=Decimal('250.00'))
        tier(BOX_QUANTITY, 3, 5, 20)

        result = PricingService.calculate_box_advertising(boxes=4, months=1)

        assert result['totalPrice'] == 1000.0
        assert result['boxQuantityDiscountPercentage'] == 20.0
        assert result['finalPrice'] == 800.0

    def test_period_discount_applies_before_quantity_discount(self, base_prices):
        tier(BOX_PERIOD, 6, None, 10)
        tier(BOX_QUANTITY, 2, None, 50)

        result = PricingService.calculate_box_advertising(boxes=2, months=6)

        assert result['totalPrice'] == 120.0
        assert result['monthDiscount'] == 12.0
        assert result['boxQuantityDiscount'] == 54.0
        assert result['finalPrice'] == 54.0

    def test_boost(self, base_prices):
        tier(BOOST, 7, 14, 7)

        result = PricingService.calculate_boost(days=7, boxes=2)

        assert result['totalPrice'] == 28.0
        assert result['discountPercentage'] == 7.0
        assert result['discount'] == 1.96
        assert result['finalPrice'] == 26.04

    def test_service_without_tiers(self, base_prices):
        result = PricingService.calculate_service(3)

        assert result['totalPrice'] == 300.0
        assert result['discount'] == 0.0
        assert result['finalPrice'] == 300.0

    def test_inactive_base_price_is_not_configured(self, base_prices):
        BasePrice.objects.filter(name=BasePrice.Name.BOOST_DAILY).update(is_active=False)

        with pytest.raises(NotConfigured):
            PricingService.calculate_boost(days=3)
