"""
Price calculation, discount tier resolution and discount code services.
"""

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from core.exceptions import AccessDenied, NotConfigured

from .models import BasePrice, DiscountCode, DiscountTier, normalise_code
from .schemes import BOOST, BOX_PERIOD, BOX_QUANTITY, SERVICE

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal('0.01')
HUNDRED = Decimal('100')


def quantize(amount):
    """Round to øre, halves rounding up."""
    return Decimal(amount).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def apply_percentage(base_price, percentage):
    """Price after a percentage discount: base * (1 - percentage / 100)."""
    base_price = Decimal(str(base_price))
    percentage = Decimal(str(percentage))
    return quantize(base_price * (1 - percentage / HUNDRED))


def select_tier(value, tiers):
    """Pick the tier for a quantity or duration.

    Of the active tiers whose [min, max) range contains the value, the one
    with the highest minimum wins; equal minimums fall back to the oldest tier.
    Returns None when no tier applies.
    """
    candidates = [tier for tier in tiers if tier.is_active and tier.contains(value)]
    if not candidates:
        return None
    return min(candidates, key=lambda tier: (-tier.min_value, tier.pk))


def validate_tier_bounds(scheme, min_value, max_value, percentage):
    """Write-time checks for a discount tier; raises ValidationError."""
    errors = []
    if min_value is None or min_value < scheme.min_floor:
        errors.append(f"{scheme.min_key} is required and must be at least {scheme.min_floor}")
    if max_value is not None and min_value is not None and max_value <= min_value:
        errors.append(f"{scheme.max_key} must be greater than {scheme.min_key} or null")
    if percentage is None or not (0 < percentage < 100):
        errors.append("discountPercentage must be between 0 and 100")
    if errors:
        raise ValidationError(errors)


class PricingService:
    """Base prices, discount tiers and price calculation."""

    @staticmethod
    def get_base_price(name):
        base = BasePrice.objects.filter(name=name, is_active=True).first()
        if base is None:
            raise NotConfigured(f"Price '{name}' is not configured")
        return base.price

    @staticmethod
    @transaction.atomic
    def set_base_price(name, price, description=None):
        defaults = {'price': price, 'is_active': True}
        if description is not None:
            defaults['description'] = description
        base, created = BasePrice.objects.update_or_create(name=name, defaults=defaults)
        logger.info("%s base price %s = %s", "Created" if created else "Updated", name, price)
        return base

    @staticmethod
    def tiers(scheme, active_only=False):
        queryset = DiscountTier.objects.filter(category=scheme.category, basis=scheme.basis)
        if active_only:
            queryset = queryset.filter(is_active=True)
        return queryset.order_by('min_value', 'pk')

    @classmethod
    def resolve_tier(cls, scheme, value):
        return select_tier(value, cls.tiers(scheme, active_only=True))

    @classmethod
    def get_tier(cls, scheme, tier_id):
        tier = cls.tiers(scheme).filter(pk=tier_id).first()
        if tier is None:
            raise AccessDenied("Discount not found")
        return tier

    @classmethod
    @transaction.atomic
    def create_tier(cls, scheme, data):
        validate_tier_bounds(
            scheme,
            data.get('min_value'),
            data.get('max_value'),
            data.get('discount_percentage'),
        )
        tier = DiscountTier.objects.create(
            category=scheme.category,
            basis=scheme.basis,
            **data
        )
        logger.info("Created %s tier %s", scheme.slug, tier.pk)
        return tier

    @classmethod
    @transaction.atomic
    def update_tier(cls, scheme, tier_id, changes):
        tier = cls.get_tier(scheme, tier_id)
        for name, value in changes.items():
            setattr(tier, name, value)
        validate_tier_bounds(scheme, tier.min_value, tier.max_value, tier.discount_percentage)
        tier.save()
        logger.info("Updated %s tier %s", scheme.slug, tier.pk)
        return tier

    @classmethod
    @transaction.atomic
    def delete_tier(cls, scheme, tier_id):
        tier = cls.get_tier(scheme, tier_id)
        tier.delete()
        logger.info("Deleted %s tier %s", scheme.slug, tier_id)

    @classmethod
    def _discount(cls, scheme, value, amount):
        """(percentage, discount amount, tier) for an amount under a scheme."""
        tier = cls.resolve_tier(scheme, value)
        if tier is None:
            return Decimal('0'), Decimal('0.00'), None
        discounted = apply_percentage(amount, tier.discount_percentage)
        return tier.discount_percentage, quantize(amount - discounted), tier

    @classmethod
    def calculate_box_advertising(cls, boxes, months):
        """Price for advertising a number of boxes for a number of months.

        The period discount is taken first; the quantity discount applies to
        what remains.
        """
        base = cls.get_base_price(BasePrice.Name.BOX_MONTHLY)
        total = quantize(base * boxes * months)

        month_pct, month_discount, _ = cls._discount(BOX_PERIOD, months, total)
        after_months = total - month_discount
        box_pct, box_discount, _ = cls._discount(BOX_QUANTITY, boxes, after_months)

        return {
            'baseMonthlyPrice': float(base),
            'boxes': boxes,
            'months': months,
            'totalPrice': float(total),
            'monthDiscountPercentage': float(month_pct),
            'monthDiscount': float(month_discount),
            'boxQuantityDiscountPercentage': float(box_pct),
            'boxQuantityDiscount': float(box_discount),
            'finalPrice': float(after_months - box_discount),
        }

    @classmethod
    def calculate_boost(cls, days, boxes=1):
        base = cls.get_base_price(BasePrice.Name.BOOST_DAILY)
        total = quantize(base * days * boxes)
        pct, discount, _ = cls._discount(BOOST, days, total)
        return {
            'dailyPrice': float(base),
            'days': days,
            'boxes': boxes,
            'totalPrice': float(total),
            'discountPercentage': float(pct),
            'discount': float(discount),
            'finalPrice': float(total - discount),
        }

    @classmethod
    def calculate_service(cls, months):
        base = cls.get_base_price(BasePrice.Name.SERVICE_MONTHLY)
        total = quantize(base * months)
        pct, discount, _ = cls._discount(SERVICE, months, total)
        return {
            'monthlyPrice': float(base),
            'months': months,
            'totalPrice': float(total),
            'discountPercentage': float(pct),
            'discount': float(discount),
            'finalPrice': float(total - discount),
        }


@dataclass
class DiscountCodeValidation:
    is_valid: bool
    discount_type: str
    discount_value: Decimal
    discount_amount: Decimal
    final_amount: Decimal
    error_message: Optional[str] = None
    max_discount: Optional[Decimal] = None
    discount_code_id: Optional[int] = None

    def as_dict(self):
        data = {
            'isValid': self.is_valid,
            'discountType': self.discount_type,
            'discountValue': float(self.discount_value),
            'discountAmount': float(self.discount_amount),
            'finalAmount': float(self.final_amount),
        }
        if self.error_message:
            data['errorMessage'] = self.error_message
        if self.max_discount is not None:
            data['maxDiscount'] = float(self.max_discount)
        if self.discount_code_id is not None:
            data['discountCodeId'] = self.discount_code_id
        return data


class DiscountCodeService:
    """Checkout discount codes."""

    @staticmethod
    def _rejected(amount, message, code=None):
        return DiscountCodeValidation(
            is_valid=False,
            discount_type=code.discount_type if code else DiscountCode.DiscountType.PERCENTAGE,
            discount_value=code.discount_value if code else Decimal('0'),
            discount_amount=Decimal('0'),
            final_amount=amount,
            error_message=message,
        )

    @classmethod
    def validate_code(cls, code, amount, item_type, now=None):
        """Check a code against an order and compute the discount."""
        now = now or timezone.now()
        amount = Decimal(str(amount))

        discount_code = DiscountCode.objects.filter(code=normalise_code(code)).first()
        if discount_code is None:
            return cls._rejected(amount, "Rabattkoden finnes ikke")
        if not discount_code.is_active:
            return cls._rejected(amount, "Rabattkoden er ikke aktiv", discount_code)
        if discount_code.valid_from > now:
            return cls._rejected(amount, "Rabattkoden er ikke gyldig ennå", discount_code)
        if discount_code.valid_until and discount_code.valid_until < now:
            return cls._rejected(amount, "Rabattkoden er utløpt", discount_code)
        if discount_code.applicable_items and item_type not in discount_code.applicable_items:
            return cls._rejected(
                amount, "Rabattkoden gjelder ikke for denne typen bestilling", discount_code
            )
        if discount_code.min_order_amount and amount < discount_code.min_order_amount:
            return cls._rejected(
                amount,
                f"Minimum bestillingsbeløp er {discount_code.min_order_amount.normalize():f} kr",
                discount_code,
            )

        if discount_code.discount_type == DiscountCode.DiscountType.PERCENTAGE:
            discount = amount * discount_code.discount_value / HUNDRED
            if discount_code.max_discount and discount > discount_code.max_discount:
                discount = discount_code.max_discount
        else:
            discount = min(discount_code.discount_value, amount)

        return DiscountCodeValidation(
            is_valid=True,
            discount_type=discount_code.discount_type,
            discount_value=discount_code.discount_value,
            discount_amount=quantize(discount),
            final_amount=quantize(max(Decimal('0'), amount - discount)),
            max_discount=discount_code.max_discount,
            discount_code_id=discount_code.pk,
        )

    @staticmethod
    def get_code(code_id):
        discount_code = DiscountCode.objects.filter(pk=code_id).first()
        if discount_code is None:
            raise AccessDenied("Discount code not found")
        return discount_code

    @staticmethod
    def _check(discount_code):
        if (discount_code.discount_type == DiscountCode.DiscountType.PERCENTAGE
                and discount_code.discount_value > HUNDRED):
            raise ValidationError("A percentage discount cannot exceed 100.")
        if discount_code.valid_until and discount_code.valid_until <= discount_code.valid_from:
            raise ValidationError("validUntil must be after validFrom.")
        invalid = set(discount_code.applicable_items) - set(DiscountCode.ItemType.values)
        if invalid:
            raise ValidationError(f"Unknown item types: {', '.join(sorted(invalid))}")
        duplicate = DiscountCode.objects.filter(code=normalise_code(discount_code.code))
        if discount_code.pk:
            duplicate = duplicate.exclude(pk=discount_code.pk)
        if duplicate.exists():
            raise ValidationError("A discount code with this code already exists.")

    @classmethod
    @transaction.atomic
    def create_code(cls, data):
        discount_code = DiscountCode(**data)
        cls._check(discount_code)
        discount_code.save()
        logger.info("Created discount code %s", discount_code.code)
        return discount_code

    @classmethod
    @transaction.atomic
    def update_code(cls, code_id, changes):
        discount_code = cls.get_code(code_id)
        for name, value in changes.items():
            setattr(discount_code, name, value)
        cls._check(discount_code)
        discount_code.save()
        logger.info("Updated discount code %s", discount_code.code)
        return discount_code

    @classmethod
    @transaction.atomic
    def delete_code(cls, code_id):
        discount_code = cls.get_code(code_id)
        discount_code.delete()
        logger.info("Deleted discount code %s", discount_code.code)

    @staticmethod
    def deactivate_expired(now=None):
        """Switch off active codes whose validity has ended. Returns the count."""
        now = now or timezone.now()
        return DiscountCode.objects.filter(
            is_active=True,
            valid_until__isnull=False,
            valid_until__lt=now,
        ).update(is_active=False)
