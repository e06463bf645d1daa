"""
URL configuration for budget app. Mounted under api/horses/<horse_id>/budget/.
"""

from django.urls import path

from . import views

urlpatterns = [
    path('', views.BudgetRangeView.as_view(), name='budget_range'),
    path('items/', views.BudgetItemListView.as_view(), name='budget_item_list'),
    path('items/<int:item_id>/', views.BudgetItemDetailView.as_view(), name='budget_item_detail'),
    path('overrides/', views.BudgetOverrideView.as_view(), name='budget_override'),
]
