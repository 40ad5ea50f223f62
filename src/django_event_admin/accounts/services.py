"""Account registration service."""

import logging

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from django_event_admin.accounts.models import Account

logger = logging.getLogger(__name__)

REGISTRATION_FAILED_MESSAGE = "User already exists or the passwords do not match."


def register_account(*, name: str, username: str, password: str, password2: str) -> Account:
    """Create a new non-admin account.

    The password is stored through ``create_user`` and therefore hashed with
    the project's configured password hashers.

    Args:
        name: Display name for the account.
        username: Requested username; must not already exist.
        password: The chosen password.
        password2: Confirmation; must equal *password*.

    Returns:
        The created account.

    Raises:
        ValidationError: If the passwords differ or the username is taken.
            The message is deliberately the same for both cases.
    """
    user_model = get_user_model()
    username = user_model.normalize_username(username)

    if password != password2 or user_model.objects.filter(username=username).exists():
        raise ValidationError(REGISTRATION_FAILED_MESSAGE)

    try:
        with transaction.atomic():
            account = user_model.objects.create_user(username=username, password=password, name=name)
    except IntegrityError as exc:
        logger.warning("Username '%s' was registered concurrently", username)
        raise ValidationError(REGISTRATION_FAILED_MESSAGE) from exc

    logger.info("Registered account '%s'", account.username)
    return account
