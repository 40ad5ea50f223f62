"""Event model for django-event-admin."""

from django.db import models

from django_event_admin.settings import NAME_COLUMN_MAX_LENGTH


class Event(models.Model):
    """A named event administered through the dashboard.

    The ``slug`` is derived from ``name`` whenever an event is created or
    renamed and is used as the URL identifier.  Both columns carry unique
    constraints so a lost race between two writers surfaces as an
    ``IntegrityError`` rather than a duplicate row.
    """

    name = models.CharField(max_length=NAME_COLUMN_MAX_LENGTH)
    slug = models.SlugField(max_length=NAME_COLUMN_MAX_LENGTH, unique=True, allow_unicode=True)
    description = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(fields=["name"], name="event_admin_event_unique_name"),
        ]

    def __str__(self) -> str:
        return self.name
