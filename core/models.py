"""
Core models for stallplass.
"""

from django.conf import settings
from django.db import models


class HorseQuerySet(models.QuerySet):

    def accessible_to(self, user):
        """Horses the user owns that are neither archived nor deleted."""
        return self.filter(owner=user, archived=False, deleted_at__isnull=True)


class Horse(models.Model):
    """A horse registered by its owner."""

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='horses'
    )
    name = models.CharField(max_length=200)
    archived = models.BooleanField(default=False)
    deleted_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Set when the owner deletes the horse; the row is kept"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = HorseQuerySet.as_manager()

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name

    @property
    def is_deleted(self):
        return self.deleted_at is not None
