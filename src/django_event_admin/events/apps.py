"""Django app configuration for the events app."""

from django.apps import AppConfig


class DjangoEventAdminEventsConfig(AppConfig):
    """Configuration for the events app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "django_event_admin.events"
    label = "event_admin_events"
    verbose_name = "Events"
