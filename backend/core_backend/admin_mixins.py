"""
Admin mixins for archiving functionality.

Provides reusable admin components for models using the SoftDeleteMixin.
"""

from django.contrib import admin
from django.contrib import messages


class ArchivingAdminMixin:
    """
    Admin mixin for models using SoftDeleteMixin.

    Replaces the bulk delete action with archive/unarchive actions and shows
    archived rows alongside active ones. Records are archived one at a time
    so that post_save receivers (availability cache invalidation) run.
    """

    actions = ['archive_selected', 'unarchive_selected']

    def get_list_filter(self, request):
        """Add is_active filter if not already present."""
        list_filter = list(super().get_list_filter(request))
        if 'is_active' not in list_filter:
            list_filter.insert(0, 'is_active')
        return list_filter

    def get_actions(self, request):
        actions = super().get_actions(request)
        actions.pop('delete_selected', None)
        return actions

    def get_queryset(self, request):
        """Admins see archived records too."""
        return self.model.all_objects.all()

    def get_readonly_fields(self, request, obj=None):
        readonly_fields = list(super().get_readonly_fields(request, obj))
        if 'archived_at' not in readonly_fields:
            readonly_fields.append('archived_at')
        return readonly_fields

    @admin.action(description='Archive selected items')
    def archive_selected(self, request, queryset):
        active = list(queryset.filter(is_active=True))
        if not active:
            self.message_user(request, "No active records selected.", level=messages.WARNING)
            return

        for obj in active:
            obj.archive()

        self.message_user(
            request,
            f"Successfully archived {len(active)} {queryset.model._meta.verbose_name_plural}.",
            level=messages.SUCCESS
        )

    @admin.action(description='Unarchive selected items')
    def unarchive_selected(self, request, queryset):
        archived = list(queryset.filter(is_active=False))
        if not archived:
            self.message_user(request, "No archived records selected.", level=messages.WARNING)
            return

        for obj in archived:
            obj.unarchive()

        self.message_user(
            request,
            f"Successfully unarchived {len(archived)} {queryset.model._meta.verbose_name_plural}.",
            level=messages.SUCCESS
        )
