"""Django context processors for django-event-admin."""

from django.http import HttpRequest

from django_event_admin.accounts.principal import Principal, is_admin
from django_event_admin.settings import get_config


def event_admin(request: HttpRequest) -> dict[str, object]:
    """Expose feature toggles, the site title, and the admin flag to templates.

    Add ``"django_event_admin.context_processors.event_admin"`` to the
    ``context_processors`` list in your ``TEMPLATES`` setting.

    Usage in templates::

        {% if event_admin_features.registration_enabled %}
            <a href="{% url 'manage:register' %}">Register</a>
        {% endif %}
    """
    config = get_config()
    principal = Principal.from_user(getattr(request, "user", None))
    return {
        "event_admin_features": config.features,
        "site_title": config.site_title,
        "user_is_admin": is_admin(principal),
    }
