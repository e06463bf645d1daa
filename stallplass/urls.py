"""
URL configuration for stallplass project.
"""

from django.conf import settings
from django.contrib import admin
from django.urls import include, path

from core.views import health_check

urlpatterns = [
    path('_health/', health_check, name='health_check'),
    path('admin/', admin.site.urls),
    path('api/horses/<int:horse_id>/budget/', include('budget.urls')),
    path('api/', include('pricing.urls')),
]

if settings.DEBUG:
    # Debug toolbar
    import debug_toolbar
    urlpatterns = [
        path('__debug__/', include(debug_toolbar.urls)),
    ] + urlpatterns
