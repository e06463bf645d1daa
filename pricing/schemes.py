"""
Discount tier schemes: which category and basis a tier belongs to and the JSON
keys its bounds are exchanged under.
"""

from dataclasses import dataclass

from .models import DiscountTier


@dataclass(frozen=True)
class TierScheme:
    slug: str
    category: str
    basis: str
    min_key: str
    max_key: str

    @property
    def min_floor(self):
        """Smallest allowed lower bound: one unit for quantities, zero for durations."""
        return 1 if self.basis == DiscountTier.Basis.QUANTITY else 0


BOX_QUANTITY = TierScheme(
    slug='box-quantity-discounts',
    category=DiscountTier.Category.BOX,
    basis=DiscountTier.Basis.QUANTITY,
    min_key='minBoxes',
    max_key='maxBoxes',
)
BOX_PERIOD = TierScheme(
    slug='box-period-discounts',
    category=DiscountTier.Category.BOX,
    basis=DiscountTier.Basis.DURATION,
    min_key='minMonths',
    max_key='maxMonths',
)
BOOST = TierScheme(
    slug='boost-discounts',
    category=DiscountTier.Category.BOOST,
    basis=DiscountTier.Basis.DURATION,
    min_key='minDays',
    max_key='maxDays',
)
SERVICE = TierScheme(
    slug='service-discounts',
    category=DiscountTier.Category.SERVICE,
    basis=DiscountTier.Basis.DURATION,
    min_key='minMonths',
    max_key='maxMonths',
)

SCHEMES = {scheme.slug: scheme for scheme in (BOX_QUANTITY, BOX_PERIOD, BOOST, SERVICE)}
