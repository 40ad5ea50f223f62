"""Views for the event administration dashboard.

Every event view requires a signed-in user.  The signed-in user is turned
into a :class:`~django_event_admin.accounts.principal.Principal` once per
request in ``PrincipalRequiredMixin`` and handed explicitly to the event
service and to :func:`compose_page_context`.
"""

import logging

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.db.models import QuerySet
from django.http import Http404, HttpRequest, HttpResponse
from django.shortcuts import redirect, render
from django.views.generic import DetailView, ListView

from django_event_admin.accounts.principal import Principal, is_admin
from django_event_admin.events.models import Event
from django_event_admin.events.services import (
    EventService,
    FieldError,
    NotFound,
    Success,
    ValidationFailure,
)
from django_event_admin.settings import get_config

logger = logging.getLogger(__name__)

ERROR_TEMPLATE = "django_event_admin/error.html"


def compose_page_context(
    *,
    title: str,
    principal: Principal | None,
    data: dict[str, str] | None = None,
    errors: list[FieldError] | None = None,
) -> dict[str, object]:
    """Assemble the values every dashboard page renders.

    Args:
        title: Page title.
        principal: The signed-in principal, or ``None`` for anonymous pages.
        data: Submitted form values to echo back into the form.
        errors: Field errors to show next to the form.

    Returns:
        A dict with ``title``, ``principal``, ``username``, ``is_admin``,
        ``data``, and ``errors``.
    """
    return {
        "title": title,
        "principal": principal,
        "username": principal.username if principal is not None else None,
        "is_admin": is_admin(principal),
        "data": dict(data or {}),
        "errors": list(errors or []),
    }


def render_error_page(request: HttpRequest) -> HttpResponse:
    """Render the generic failure page without any detail."""
    return render(request, ERROR_TEMPLATE, {"title": "Something went wrong"}, status=500)


class PrincipalRequiredMixin(LoginRequiredMixin):
    """Require a signed-in user and expose them as ``self.principal``.

    Anonymous requests are redirected to ``settings.LOGIN_URL`` by
    ``LoginRequiredMixin`` before any view logic runs.
    """

    principal: Principal

    def dispatch(self, request: HttpRequest, *args: str, **kwargs: str) -> HttpResponse:
        """Resolve the principal before dispatching to the handler."""
        if not request.user.is_authenticated:
            return self.handle_no_permission()
        self.principal = Principal.from_user(request.user)
        return super().dispatch(request, *args, **kwargs)

    def get_title(self) -> str:
        """Return the page title."""
        return f"{get_config().site_title} - administration"

    def get_context_data(self, **kwargs: object) -> dict[str, object]:
        """Merge the composed page values into the template context."""
        context: dict[str, object] = super().get_context_data(**kwargs)  # type: ignore[misc]
        context.update(
            compose_page_context(
                title=self.get_title(),
                principal=self.principal,
                data=kwargs.get("data"),  # type: ignore[arg-type]
                errors=kwargs.get("errors"),  # type: ignore[arg-type]
            )
        )
        return context


class EventListView(PrincipalRequiredMixin, ListView):
    """List all events and accept new ones.

    GET renders the list with an empty creation form.  POST validates and
    creates an event, redirecting back to the list on success or
    re-rendering the list with errors and the submitted values.
    """

    template_name = "django_event_admin/manage/event_list.html"
    context_object_name = "events"

    def get_queryset(self) -> QuerySet[Event]:
        """Return every event in creation order."""
        return EventService.list_events()

    def get_paginate_by(self, queryset: QuerySet[Event]) -> int:  # noqa: ARG002
        """Page size comes from ``DJANGO_EVENT_ADMIN["paginate_by"]``."""
        return get_config().paginate_by

    def post(self, request: HttpRequest, *args: str, **kwargs: str) -> HttpResponse:  # noqa: ARG002
        """Handle the event creation form.

        Returns:
            A redirect to the list on success, the list with errors on a
            validation failure, or the generic error page.
        """
        result = EventService.create(request.POST, principal=self.principal)

        if isinstance(result, Success):
            messages.success(request, f'Event "{result.event.name}" created.')
            return redirect("manage:event-list")

        if isinstance(result, ValidationFailure):
            self.object_list = self.get_queryset()
            return self.render_to_response(self.get_context_data(data=result.data, errors=result.errors))

        return render_error_page(request)


class EventDetailView(PrincipalRequiredMixin, DetailView):
    """Show a single event by slug and accept edits to it.

    Unknown slugs raise ``Http404``.  A successful edit may change the slug,
    so the view always redirects to the list rather than back to itself.
    """

    template_name = "django_event_admin/manage/event_detail.html"
    context_object_name = "event"
    model = Event

    def get_title(self) -> str:
        """Prefix the title with the event name."""
        return f"{self.object.name} - {super().get_title()}"

    def get_context_data(self, **kwargs: object) -> dict[str, object]:
        """Pre-fill the edit form from the stored event."""
        kwargs.setdefault("data", {"name": self.object.name, "description": self.object.description})
        return super().get_context_data(**kwargs)

    def post(self, request: HttpRequest, *args: str, **kwargs: str) -> HttpResponse:  # noqa: ARG002
        """Handle the event edit form.

        Returns:
            A redirect to the list on success, the detail page with errors
            on a validation failure, or the generic error page.

        Raises:
            Http404: If no event has the slug from the URL.
        """
        slug = self.kwargs["slug"]
        result = EventService.update(slug, request.POST, principal=self.principal)

        if isinstance(result, NotFound):
            raise Http404(f"No event with slug {result.slug!r}")

        if isinstance(result, Success):
            messages.success(request, f'Event "{result.event.name}" updated.')
            return redirect("manage:event-list")

        if isinstance(result, ValidationFailure):
            self.object = self.get_object()
            return self.render_to_response(self.get_context_data(data=result.data, errors=result.errors))

        return render_error_page(request)
