"""Django admin configuration for the accounts app."""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from django_event_admin.accounts.models import Account


@admin.register(Account)
class AccountAdmin(UserAdmin):
    """User admin extended with the dashboard's ``name`` and ``is_admin`` fields."""

    list_display = ("username", "name", "is_admin", "is_staff", "is_active")
    list_filter = ("is_admin", "is_staff", "is_superuser", "is_active")
    search_fields = ("username", "name", "email")
    fieldsets = (
        *UserAdmin.fieldsets,
        ("Dashboard", {"fields": ("name", "is_admin")}),
    )
    add_fieldsets = (
        *UserAdmin.add_fieldsets,
        ("Dashboard", {"fields": ("name", "is_admin")}),
    )
