"""
Pricing models: base prices, discount tiers and discount codes.
"""

from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone


class BasePrice(models.Model):
    """Named unit price in NOK."""

    class Name(models.TextChoices):
        BOX_MONTHLY = 'box_monthly', 'Box advertising per box per month'
        BOOST_DAILY = 'boost_daily', 'Boost per box per day'
        SERVICE_MONTHLY = 'service_monthly', 'Service advertising per month'

    name = models.CharField(max_length=50, choices=Name.choices, unique=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    description = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return f"{self.get_name_display()} ({self.price} kr)"


class DiscountTier(models.Model):
    """Percentage discount for a quantity or duration range within a category.

    The range is [min_value, max_value); a null max_value is unbounded.
    """

    class Category(models.TextChoices):
        BOX = 'box', 'Box advertising'
        BOOST = 'boost', 'Boost'
        SERVICE = 'service', 'Service advertising'

    class Basis(models.TextChoices):
        QUANTITY = 'quantity', 'Quantity'
        DURATION = 'duration', 'Duration'

    category = models.CharField(max_length=20, choices=Category.choices)
    basis = models.CharField(max_length=20, choices=Basis.choices)
    min_value = models.PositiveIntegerField()
    max_value = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text="Exclusive upper bound. Leave blank for no limit"
    )
    discount_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=[
            MinValueValidator(Decimal('0.01')),
            MaxValueValidator(Decimal('99.99')),
        ],
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['category', 'basis', 'min_value']
        indexes = [
            models.Index(fields=['category', 'basis', 'is_active'], name='discount_tier_lookup_idx'),
        ]

    def __str__(self):
        upper = self.max_value if self.max_value is not None else '∞'
        return f"{self.get_category_display()} {self.basis} [{self.min_value}, {upper}): {self.discount_percentage}%"

    def contains(self, value):
        if value < self.min_value:
            return False
        return self.max_value is None or value < self.max_value


class DiscountCode(models.Model):
    """Checkout discount code."""

    class DiscountType(models.TextChoices):
        PERCENTAGE = 'PERCENTAGE', 'Percentage'
        FIXED_AMOUNT = 'FIXED_AMOUNT', 'Fixed amount'

    class ItemType(models.TextChoices):
        BOX_ADVERTISING = 'BOX_ADVERTISING', 'Box advertising'
        BOX_BOOST = 'BOX_BOOST', 'Box boost'
        SERVICE_ADVERTISING = 'SERVICE_ADVERTISING', 'Service advertising'

    code = models.CharField(max_length=50, unique=True)
    description = models.TextField(blank=True)
    discount_type = models.CharField(
        max_length=20,
        choices=DiscountType.choices,
        default=DiscountType.PERCENTAGE
    )
    discount_value = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    max_discount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Cap on the discount for percentage codes"
    )
    min_order_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True
    )
    applicable_items = models.JSONField(
        default=list,
        blank=True,
        help_text="Item types the code applies to. Empty means all"
    )
    valid_from = models.DateTimeField(default=timezone.now)
    valid_until = models.DateTimeField(null=True, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        if self.discount_type == self.DiscountType.PERCENTAGE:
            return f"{self.code} ({self.discount_value}%)"
        return f"{self.code} ({self.discount_value} kr)"

    def save(self, *args, **kwargs):
        self.code = normalise_code(self.code)
        super().save(*args, **kwargs)

    @property
    def is_expired(self):
        return self.valid_until is not None and self.valid_until < timezone.now()


def normalise_code(code):
    return (code or '').strip().upper()
