"""
Soft delete (archiving) support for catalogue models.

Products and packages are never hard-deleted from the POS: order history and
package definitions keep pointing at them. Archiving flips ``is_active`` and
stamps ``archived_at``; the default manager hides archived rows.
"""

from django.db import models
from django.utils import timezone


class SoftDeleteManager(models.Manager):
    """
    Default manager for archivable models: only active rows are returned.

    Use the model's ``all_objects`` manager when archived rows are needed,
    e.g. when listing inactive packages.
    """

    def get_queryset(self):
        return super().get_queryset().filter(is_active=True)


class SoftDeleteMixin(models.Model):
    """
    Abstract base giving a model ``is_active``/``archived_at`` columns,
    ``archive()``/``unarchive()`` and a soft ``delete()``.
    """

    is_active = models.BooleanField(
        default=True,
        db_index=True,
        help_text="Designates whether this record is active. "
                  "Inactive records are considered archived."
    )
    archived_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Timestamp when this record was archived."
    )

    objects = SoftDeleteManager()
    all_objects = models.Manager()

    class Meta:
        abstract = True

    def archive(self):
        self.is_active = False
        self.archived_at = timezone.now()
        self.save(update_fields=['is_active', 'archived_at'])

    def unarchive(self):
        self.is_active = True
        self.archived_at = None
        self.save(update_fields=['is_active', 'archived_at'])

    def delete(self, using=None, keep_parents=False):
        """Soft delete: archives the row instead of removing it."""
        self.archive()
