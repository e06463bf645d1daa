"""
JSON views for prices, discount tiers and discount codes.
"""

from django.core.exceptions import BadRequest
from django.http import JsonResponse

from core.api import ApiView, json_error

from .forms import (
    BasePriceForm,
    BoostCalculationForm,
    BoxCalculationForm,
    DiscountCodeForm,
    DiscountCodeValidateForm,
    DiscountTierForm,
    ServiceCalculationForm,
)
from .models import BasePrice, DiscountCode
from .schemes import SCHEMES
from .services import DiscountCodeService, PricingService


def tier_payload(tier, scheme):
    return {
        'id': tier.pk,
        scheme.min_key: tier.min_value,
        scheme.max_key: tier.max_value,
        'discountPercentage': float(tier.discount_percentage),
        'isActive': tier.is_active,
        'createdAt': tier.created_at.isoformat(),
        'updatedAt': tier.updated_at.isoformat(),
    }


def base_price_payload(base):
    return {
        'name': base.name,
        'price': float(base.price),
        'description': base.description,
        'isActive': base.is_active,
    }


def discount_code_payload(discount_code):
    return {
        'id': discount_code.pk,
        'code': discount_code.code,
        'description': discount_code.description,
        'discountType': discount_code.discount_type,
        'discountValue': float(discount_code.discount_value),
        'maxDiscount': float(discount_code.max_discount) if discount_code.max_discount is not None else None,
        'minOrderAmount': (
            float(discount_code.min_order_amount)
            if discount_code.min_order_amount is not None else None
        ),
        'applicableItems': discount_code.applicable_items,
        'validFrom': discount_code.valid_from.isoformat(),
        'validUntil': discount_code.valid_until.isoformat() if discount_code.valid_until else None,
        'isActive': discount_code.is_active,
    }


class SchemeMixin:
    """Resolves the tier scheme named in the URL."""

    def dispatch(self, request, *args, **kwargs):
        if kwargs.get('scheme') not in SCHEMES:
            return json_error('Unknown discount scheme', 404)
        return super().dispatch(request, *args, **kwargs)

    def get_scheme(self):
        return SCHEMES[self.kwargs['scheme']]


# Public

class BasePriceListView(ApiView):
    login_required = False

    def get(self, request):
        prices = BasePrice.objects.filter(is_active=True)
        return JsonResponse({'prices': [base_price_payload(base) for base in prices]})


class DiscountTierListView(SchemeMixin, ApiView):
    """Active tiers of one scheme, lowest bound first."""

    login_required = False

    def get(self, request, scheme):
        scheme = self.get_scheme()
        tiers = PricingService.tiers(scheme, active_only=True)
        return JsonResponse({'discounts': [tier_payload(tier, scheme) for tier in tiers]})


class BoxCalculateView(ApiView):
    login_required = False

    def get(self, request):
        form = self.validate(BoxCalculationForm, request.GET)
        return JsonResponse(PricingService.calculate_box_advertising(
            form.cleaned_data['boxes'],
            form.cleaned_data['months'],
        ))


class BoostCalculateView(ApiView):
    login_required = False

    def get(self, request):
        form = self.validate(BoostCalculationForm, request.GET)
        return JsonResponse(PricingService.calculate_boost(
            form.cleaned_data['days'],
            form.cleaned_data['boxes'] or 1,
        ))


class ServiceCalculateView(ApiView):
    login_required = False

    def get(self, request):
        form = self.validate(ServiceCalculationForm, request.GET)
        return JsonResponse(PricingService.calculate_service(form.cleaned_data['months']))


class DiscountCodeValidateView(ApiView):
    """Check a discount code at checkout. Invalid codes still answer 200."""

    def post(self, request):
        form = self.validate(DiscountCodeValidateForm, self.get_json())
        result = DiscountCodeService.validate_code(
            form.cleaned_data['code'],
            form.cleaned_data['amount'],
            form.cleaned_data['itemType'],
        )
        return JsonResponse(result.as_dict())


# Admin

class AdminDiscountTierView(SchemeMixin, ApiView):
    """Admin CRUD for one tier scheme. PUT takes the id in the body, DELETE in the query."""

    staff_required = True

    def get(self, request, scheme):
        scheme = self.get_scheme()
        tiers = PricingService.tiers(scheme)
        return JsonResponse({'discounts': [tier_payload(tier, scheme) for tier in tiers]})

    def post(self, request, scheme):
        scheme = self.get_scheme()
        form = self.validate(DiscountTierForm, self.get_json(), scheme=scheme)
        tier = PricingService.create_tier(scheme, form.changes())
        return JsonResponse(tier_payload(tier, scheme), status=201)

    def put(self, request, scheme):
        scheme = self.get_scheme()
        form = self.validate(DiscountTierForm, self.get_json(), scheme=scheme, partial=True)
        tier = PricingService.update_tier(scheme, form.cleaned_data['id'], form.changes())
        return JsonResponse(tier_payload(tier, scheme))

    def delete(self, request, scheme):
        scheme = self.get_scheme()
        tier_id = request.GET.get('id')
        if not tier_id or not tier_id.isdigit():
            raise BadRequest('id parameter is required')
        PricingService.delete_tier(scheme, int(tier_id))
        return JsonResponse({'success': True})


class AdminBasePriceView(ApiView):
    staff_required = True

    def dispatch(self, request, *args, **kwargs):
        if kwargs.get('name') not in BasePrice.Name.values:
            return json_error('Unknown price', 404)
        return super().dispatch(request, *args, **kwargs)

    def get(self, request, name):
        base = BasePrice.objects.filter(name=name).first()
        if base is None:
            return json_error(f"Price '{name}' is not configured", 404)
        return JsonResponse(base_price_payload(base))

    def put(self, request, name):
        form = self.validate(BasePriceForm, self.get_json())
        base = PricingService.set_base_price(
            name,
            form.cleaned_data['price'],
            form.cleaned_data['description'],
        )
        return JsonResponse(base_price_payload(base))


class AdminDiscountCodeListView(ApiView):
    staff_required = True

    def get(self, request):
        codes = DiscountCode.objects.all()
        return JsonResponse({'codes': [discount_code_payload(code) for code in codes]})

    def post(self, request):
        form = self.validate(DiscountCodeForm, self.get_json())
        discount_code = DiscountCodeService.create_code(form.changes())
        return JsonResponse(discount_code_payload(discount_code), status=201)


class AdminDiscountCodeDetailView(ApiView):
    staff_required = True

    def get(self, request, code_id):
        return JsonResponse(discount_code_payload(DiscountCodeService.get_code(code_id)))

    def patch(self, request, code_id):
        DiscountCodeService.get_code(code_id)
        form = self.validate(DiscountCodeForm, self.get_json(), partial=True)
        discount_code = DiscountCodeService.update_code(code_id, form.changes())
        return JsonResponse(discount_code_payload(discount_code))

    def delete(self, request, code_id):
        DiscountCodeService.delete_code(code_id)
        return JsonResponse({'success': True})
