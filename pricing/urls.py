"""
URL configuration for pricing app. Mounted under api/.
"""

from django.urls import path

from . import views

urlpatterns = [
    # Public
    path('pricing/base-prices/', views.BasePriceListView.as_view(), name='base_price_list'),
    path('pricing/discounts/<slug:scheme>/', views.DiscountTierListView.as_view(), name='discount_tier_list'),
    path('pricing/box-calculate/', views.BoxCalculateView.as_view(), name='box_calculate'),
    path('pricing/boost-calculate/', views.BoostCalculateView.as_view(), name='boost_calculate'),
    path('pricing/service-calculate/', views.ServiceCalculateView.as_view(), name='service_calculate'),
    path('discount-codes/validate/', views.DiscountCodeValidateView.as_view(), name='discount_code_validate'),

    # Admin
    path(
        'admin/pricing/base-prices/<str:name>/',
        views.AdminBasePriceView.as_view(),
        name='admin_base_price'
    ),
    path('admin/pricing/<slug:scheme>/', views.AdminDiscountTierView.as_view(), name='admin_discount_tiers'),
    path('admin/discount-codes/', views.AdminDiscountCodeListView.as_view(), name='admin_discount_code_list'),
    path(
        'admin/discount-codes/<int:code_id>/',
        views.AdminDiscountCodeDetailView.as_view(),
        name='admin_discount_code_detail'
    ),
]
