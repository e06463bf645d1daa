"""
Views for core app.
"""

import time

from django.db import connection
from django.http import JsonResponse


def health_check(request):
    """Lightweight DB ping. No auth required."""
    start = time.monotonic()
    with connection.cursor() as cursor:
        cursor.execute("SELECT 1")
    db_ms = (time.monotonic() - start) * 1000
    return JsonResponse({
        "status": "ok",
        "db_ping_ms": round(db_ms, 1),
    })
