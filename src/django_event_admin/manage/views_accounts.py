"""Session and account views for the dashboard: login, logout, sign-up, and the account list."""

import logging
from urllib.parse import urlencode

from django.contrib import messages
from django.contrib.auth import get_user_model
from django.contrib.auth import login as auth_login
from django.contrib.auth import logout as auth_logout
from django.contrib.auth.forms import AuthenticationForm
from django.contrib.auth.mixins import AccessMixin
from django.core.exceptions import ValidationError
from django.http import HttpRequest, HttpResponse
from django.shortcuts import redirect, render
from django.urls import reverse
from django.utils.http import url_has_allowed_host_and_scheme
from django.views import View
from django.views.generic import FormView

from django_event_admin.accounts.forms import RegistrationForm
from django_event_admin.accounts.principal import Principal
from django_event_admin.accounts.services import REGISTRATION_FAILED_MESSAGE, register_account
from django_event_admin.features import FeatureRequiredMixin, is_feature_enabled
from django_event_admin.manage.views import compose_page_context
from django_event_admin.settings import get_config

logger = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "Incorrect username or password."


class LoginView(View):
    """Username/password sign-in backed by ``AUTHENTICATION_BACKENDS``.

    A failed attempt queues a one-shot message and redirects back to the
    form, which shows the message on its next render.
    """

    template_name = "django_event_admin/manage/login.html"

    def get(self, request: HttpRequest, *args: str, **kwargs: str) -> HttpResponse:  # noqa: ARG002
        """Render the login form, or skip it for users already signed in."""
        if request.user.is_authenticated:
            return redirect("manage:event-list")

        message = ", ".join(str(queued) for queued in messages.get_messages(request))
        context = compose_page_context(title="Log in", principal=None)
        context.update(
            {
                "form": AuthenticationForm(request),
                "message": message,
                "next": request.GET.get("next", ""),
            }
        )
        return render(request, self.template_name, context)

    def post(self, request: HttpRequest, *args: str, **kwargs: str) -> HttpResponse:  # noqa: ARG002
        """Authenticate and start a session.

        Returns:
            A redirect to ``next`` (when it is a safe local URL) or the event
            list on success; a redirect back to the login form on failure.
        """
        next_url = request.POST.get("next") or request.GET.get("next", "")
        form = AuthenticationForm(request, data=request.POST)

        if not form.is_valid():
            logger.warning("Failed login attempt for '%s'", request.POST.get("username", ""))
            messages.error(request, LOGIN_FAILED_MESSAGE)
            login_url = reverse("manage:login")
            if next_url:
                login_url = f"{login_url}?{urlencode({'next': next_url})}"
            return redirect(login_url)

        user = form.get_user()
        auth_login(request, user)
        logger.info("User '%s' logged in", user.get_username())

        if next_url and url_has_allowed_host_and_scheme(
            next_url,
            allowed_hosts={request.get_host()},
            require_https=request.is_secure(),
        ):
            return redirect(next_url)
        return redirect("manage:event-list")


class LogoutView(View):
    """End the session and return to the site root."""

    def get(self, request: HttpRequest, *args: str, **kwargs: str) -> HttpResponse:  # noqa: ARG002
        """Flush the session and redirect to ``/``."""
        if request.user.is_authenticated:
            logger.info("User '%s' logged out", request.user.get_username())
        auth_logout(request)
        return redirect("/")


class RegisterView(FeatureRequiredMixin, FormView):
    """Self-service sign-up for a new dashboard account.

    Every rejection (bad input, taken username, mismatched passwords)
    re-renders the form with the same generic message and no per-field
    detail.
    """

    required_feature = "registration"
    template_name = "django_event_admin/manage/register.html"
    form_class = RegistrationForm

    def dispatch(self, request: HttpRequest, *args: str, **kwargs: str) -> HttpResponse:
        """Send signed-in users to the event list instead of the form."""
        if request.user.is_authenticated:
            return redirect("manage:event-list")
        return super().dispatch(request, *args, **kwargs)

    def get_context_data(self, **kwargs: object) -> dict[str, object]:
        """Add the page title and the (possibly empty) failure message."""
        context = super().get_context_data(**kwargs)
        context.update(compose_page_context(title="Register", principal=None))
        context.setdefault("message", "")
        return context

    def form_valid(self, form: RegistrationForm) -> HttpResponse:
        """Create the account and redirect to the event list."""
        try:
            register_account(**form.cleaned_data)
        except ValidationError:
            return self._reject(form)
        messages.success(self.request, "Account created. You can now log in.")
        return redirect("manage:event-list")

    def form_invalid(self, form: RegistrationForm) -> HttpResponse:
        """Re-render with the generic message instead of field errors."""
        return self._reject(form)

    def _reject(self, form: RegistrationForm) -> HttpResponse:
        return self.render_to_response(self.get_context_data(form=form, message=REGISTRATION_FAILED_MESSAGE))


class AccountListView(AccessMixin, View):
    """List every registered account.

    Requires a signed-in user unless the ``public_account_list`` feature is
    enabled.
    """

    template_name = "django_event_admin/manage/account_list.html"

    def dispatch(self, request: HttpRequest, *args: str, **kwargs: str) -> HttpResponse:
        """Apply the login gate unless the list is configured as public."""
        if not request.user.is_authenticated and not is_feature_enabled("public_account_list"):
            return self.handle_no_permission()
        return super().dispatch(request, *args, **kwargs)

    def get(self, request: HttpRequest, *args: str, **kwargs: str) -> HttpResponse:  # noqa: ARG002
        """Render the account list."""
        principal = Principal.from_user(request.user)
        context = compose_page_context(title=f"Users - {get_config().site_title} administration", principal=principal)
        context["accounts"] = get_user_model().objects.all()
        return render(request, self.template_name, context)
