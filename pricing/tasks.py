"""
Celery tasks for pricing housekeeping.
"""

from celery import shared_task

from .services import DiscountCodeService


@shared_task
def deactivate_expired_discount_codes():
    """
    Switch off discount codes past their valid_until.
    Run daily via Celery Beat.
    """
    count = DiscountCodeService.deactivate_expired()
    return f"Deactivated {count} expired discount codes"
