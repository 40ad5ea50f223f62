"""Feature toggle utilities for django-event-admin.

Provides functions to check whether optional parts of the admin UI are
enabled in ``DJANGO_EVENT_ADMIN["features"]``, and a mixin for views that
require specific features.
"""

from django.http import Http404, HttpRequest, HttpResponse

from django_event_admin.settings import get_config


def is_feature_enabled(feature: str) -> bool:
    """Check if a feature is enabled in the settings.

    Args:
        feature: Feature name (e.g., ``"registration"``,
            ``"public_account_list"``).

    Returns:
        ``True`` if the feature is enabled, ``False`` otherwise.

    Raises:
        ValueError: If the feature name is not recognized.
    """
    config = get_config().features
    attr = f"{feature}_enabled"

    if not hasattr(config, attr):
        msg = f"Unknown feature: {feature!r}"
        raise ValueError(msg)

    return bool(getattr(config, attr))


def require_feature(feature: str) -> None:
    """Raise :class:`~django.http.Http404` if a feature is disabled.

    Args:
        feature: Feature name to check.

    Raises:
        Http404: If the feature is disabled.
    """
    if not is_feature_enabled(feature):
        raise Http404(f"Feature {feature!r} is not enabled")


class FeatureRequiredMixin:
    """View mixin that returns 404 when a required feature is disabled.

    Set ``required_feature`` on the view class to the feature name or a
    tuple of feature names (all must be enabled).

    Example::

        class RegisterView(FeatureRequiredMixin, View):
            required_feature = "registration"
    """

    required_feature: str | tuple[str, ...] = ""

    def dispatch(self, request: HttpRequest, *args: object, **kwargs: object) -> HttpResponse:
        """Check the feature toggle(s) before dispatching the view."""
        features = self.required_feature
        if isinstance(features, str):
            features = (features,) if features else ()
        for feature in features:
            require_feature(feature)
        return super().dispatch(request, *args, **kwargs)  # type: ignore[misc]
