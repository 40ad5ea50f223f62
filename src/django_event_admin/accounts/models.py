"""Account model for django-event-admin."""

from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models


class AccountManager(UserManager):
    """User manager that flags superusers as dashboard admins."""

    def create_superuser(self, username, email=None, password=None, **extra_fields):
        extra_fields.setdefault("is_admin", True)
        return super().create_superuser(username, email, password, **extra_fields)


class Account(AbstractUser):
    """A user who can sign in to the event dashboard.

    Extends Django's ``AbstractUser`` so passwords are hashed by the
    configured password hashers.  ``is_admin`` only changes what the
    dashboard displays; it does not gate any route.
    """

    name = models.CharField(max_length=200, blank=True, default="")
    is_admin = models.BooleanField(default=False)

    objects = AccountManager()

    class Meta(AbstractUser.Meta):
        ordering = ["id"]
        swappable = "AUTH_USER_MODEL"

    def __str__(self) -> str:
        return self.name or self.username
