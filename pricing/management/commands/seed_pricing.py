"""
Management command to seed base prices and the default boost discount tiers.

Idempotent: existing base prices and tiers are left untouched.
"""

from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from pricing.models import BasePrice, DiscountTier
from pricing.schemes import BOOST

BASE_PRICES = [
    (BasePrice.Name.BOX_MONTHLY, Decimal('10.00'), 'Box advertising, per box per month'),
    (BasePrice.Name.BOOST_DAILY, Decimal('2.00'), 'Boost, per box per day'),
    (BasePrice.Name.SERVICE_MONTHLY, Decimal('299.00'), 'Service advertising, per month'),
]

# (min days, max days, percentage)
BOOST_TIERS = [
    (3, 7, Decimal('3.00')),
    (7, 14, Decimal('7.00')),
    (14, None, Decimal('15.00')),
]


class Command(BaseCommand):
    help = 'Seed base prices and default boost discount tiers'

    @transaction.atomic
    def handle(self, *args, **options):
        prices_created = 0
        for name, price, description in BASE_PRICES:
            _, created = BasePrice.objects.get_or_create(
                name=name,
                defaults={'price': price, 'description': description},
            )
            prices_created += created

        tiers_created = 0
        for min_value, max_value, percentage in BOOST_TIERS:
            _, created = DiscountTier.objects.get_or_create(
                category=BOOST.category,
                basis=BOOST.basis,
                min_value=min_value,
                defaults={'max_value': max_value, 'discount_percentage': percentage},
            )
            tiers_created += created

        self.stdout.write(self.style.SUCCESS(
            f'Seeded {prices_created} base prices and {tiers_created} boost tiers'
        ))
