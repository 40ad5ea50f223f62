"""Typed configuration for django-event-admin.

Reads a single ``DJANGO_EVENT_ADMIN`` dict from Django settings and exposes it
as composed, frozen dataclasses with sensible defaults.

Usage::

    from django_event_admin.settings import get_config

    config = get_config()
    config.validation.name_max_length
    config.features.registration_enabled
    config.site_title
"""

import functools
from collections.abc import Mapping
from dataclasses import dataclass, field

from django.conf import settings
from django.test.signals import setting_changed

# Width of the event ``name`` and ``slug`` columns.
NAME_COLUMN_MAX_LENGTH = 200


@dataclass(frozen=True, slots=True)
class ValidationConfig:
    """Field limits applied by the event form."""

    name_max_length: int = 64
    description_max_length: int = 1000


@dataclass(frozen=True, slots=True)
class FeaturesConfig:
    """Feature toggles for optional parts of the admin UI.

    ``public_account_list_enabled`` serves the account list to anonymous
    visitors. It is off by default so the list sits behind the login gate
    like every other admin page.
    """

    registration_enabled: bool = True
    public_account_list_enabled: bool = False


@dataclass(frozen=True, slots=True)
class EventAdminConfig:
    """Top-level django-event-admin configuration."""

    validation: ValidationConfig = field(default_factory=ValidationConfig)
    features: FeaturesConfig = field(default_factory=FeaturesConfig)
    site_title: str = "Events"
    paginate_by: int = 25


@functools.lru_cache(maxsize=1)
def get_config() -> EventAdminConfig:
    """Build and return the event admin configuration.

    Reads ``settings.DJANGO_EVENT_ADMIN`` (a plain dict) and returns a frozen
    :class:`EventAdminConfig`.  The result is cached; the cache is cleared
    automatically when Django's ``setting_changed`` signal fires (e.g. inside
    ``override_settings``).
    """
    raw = getattr(settings, "DJANGO_EVENT_ADMIN", {})
    if not isinstance(raw, Mapping):
        msg = "DJANGO_EVENT_ADMIN must be a mapping (dict-like object)"
        raise TypeError(msg)
    raw_data = dict(raw)

    validation_data = raw_data.pop("validation", {})
    features_data = raw_data.pop("features", {})
    if not isinstance(validation_data, Mapping):
        msg = "DJANGO_EVENT_ADMIN['validation'] must be a mapping (dict-like object)"
        raise TypeError(msg)
    if not isinstance(features_data, Mapping):
        msg = "DJANGO_EVENT_ADMIN['features'] must be a mapping (dict-like object)"
        raise TypeError(msg)

    config = EventAdminConfig(
        validation=ValidationConfig(**dict(validation_data)),
        features=FeaturesConfig(**dict(features_data)),
        **raw_data,
    )
    _validate_config(config)
    return config


def _validate_config(config: EventAdminConfig) -> None:
    """Validate high-impact configuration values with clear error messages."""
    limits = (
        ("validation']['name_max_length", config.validation.name_max_length),
        ("validation']['description_max_length", config.validation.description_max_length),
        ("paginate_by", config.paginate_by),
    )
    for key, value in limits:
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            msg = f"DJANGO_EVENT_ADMIN['{key}'] must be a positive integer"
            raise ValueError(msg)
    if config.validation.name_max_length > NAME_COLUMN_MAX_LENGTH:
        msg = f"DJANGO_EVENT_ADMIN['validation']['name_max_length'] must not exceed {NAME_COLUMN_MAX_LENGTH}"
        raise ValueError(msg)
    if not isinstance(config.site_title, str) or not config.site_title.strip():
        msg = "DJANGO_EVENT_ADMIN['site_title'] must be a non-empty string"
        raise ValueError(msg)
    for name in ("registration_enabled", "public_account_list_enabled"):
        if not isinstance(getattr(config.features, name), bool):
            msg = f"DJANGO_EVENT_ADMIN['features']['{name}'] must be a boolean"
            raise TypeError(msg)


def _clear_config_cache(*, setting: str, **kwargs: object) -> None:  # noqa: ARG001
    """Clear the cached config when Django settings change during tests."""
    if setting == "DJANGO_EVENT_ADMIN":
        get_config.cache_clear()


setting_changed.connect(_clear_config_cache, dispatch_uid="django_event_admin.settings.clear_config_cache")
