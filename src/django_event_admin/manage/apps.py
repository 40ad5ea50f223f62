"""Django app configuration for the event administration dashboard app."""

from django.apps import AppConfig


class DjangoEventAdminManageConfig(AppConfig):
    """Configuration for the event administration dashboard app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "django_event_admin.manage"
    label = "event_admin_manage"
    verbose_name = "Event Administration"
