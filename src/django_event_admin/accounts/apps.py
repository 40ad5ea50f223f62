"""Django app configuration for the accounts app."""

from django.apps import AppConfig


class DjangoEventAdminAccountsConfig(AppConfig):
    """Configuration for the accounts app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "django_event_admin.accounts"
    label = "event_admin_accounts"
    verbose_name = "Accounts"
