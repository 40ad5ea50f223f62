"""Event validation and state-transition service.

Every create or update runs the same pipeline inside one request:
structural validation (:class:`~django_event_admin.events.forms.EventForm`),
then the duplicate-name lookup, then the write.  The outcome is returned as
one of the result types below instead of being raised, so views can map
each case to a response without inspecting exceptions.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import QuerySet

from django_event_admin.accounts.principal import Principal
from django_event_admin.events.forms import EventForm
from django_event_admin.events.models import Event
from django_event_admin.events.utils import slugify_name

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "An event with this name already exists."
SIMILAR_NAME_MESSAGE = "An event with a similar name already exists."
PERSISTENCE_FAILURE_MESSAGE = "The event could not be saved."


@dataclass(frozen=True, slots=True)
class FieldError:
    """A validation message attached to a submitted field."""

    field: str
    message: str


@dataclass(frozen=True, slots=True)
class Success:
    """The write went through; ``event`` is the saved record."""

    event: Event


@dataclass(frozen=True, slots=True)
class ValidationFailure:
    """The submission was rejected before anything was written.

    Attributes:
        data: The submitted ``name`` and ``description``, echoed back so the
            form can be re-rendered with the user's input.
        errors: Structural errors first, then duplicate-name conflicts.
    """

    data: dict[str, str]
    errors: list[FieldError] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class NotFound:
    """No event owns the requested slug."""

    slug: str


@dataclass(frozen=True, slots=True)
class PersistenceFailure:
    """The database refused the write for a reason other than a conflict."""

    message: str = PERSISTENCE_FAILURE_MESSAGE


EventResult = Success | ValidationFailure | NotFound | PersistenceFailure


def _actor(principal: Principal | None) -> str:
    return principal.username if principal is not None else "anonymous"


class EventService:
    """Stateless service for reading, creating, and updating events."""

    @staticmethod
    def list_events() -> QuerySet[Event]:
        """Return all events in creation order."""
        return Event.objects.all()

    @staticmethod
    def get(slug: str) -> Event | None:
        """Return the event owning *slug*, or ``None``."""
        return Event.objects.filter(slug=slug).first()

    @staticmethod
    def check_conflicts(name: str, *, instance: Event | None = None) -> list[FieldError]:
        """Look for other events already holding *name* or its slug.

        Names are compared exactly (case-sensitive).  When *instance* is
        given the lookup ignores that event, so saving an event under its
        own current name is not a conflict.

        Args:
            name: The cleaned name from the submission.
            instance: The event being edited, or ``None`` on create.

        Returns:
            At most one error on the ``name`` field.
        """
        existing = Event.objects.filter(name=name).first()
        if existing is not None and (instance is None or existing.pk != instance.pk):
            return [FieldError("name", DUPLICATE_NAME_MESSAGE)]

        try:
            slug = slugify_name(name)
        except ValueError:
            return []
        others = Event.objects.filter(slug=slug)
        if instance is not None:
            others = others.exclude(pk=instance.pk)
        if others.exists():
            return [FieldError("name", SIMILAR_NAME_MESSAGE)]
        return []

    @classmethod
    def validate(cls, data: Mapping[str, str], *, instance: Event | None = None) -> EventForm | ValidationFailure:
        """Run structural and duplicate-name validation on a submission.

        Args:
            data: Submitted form data (``name`` and ``description``).
            instance: The event being edited, or ``None`` on create.

        Returns:
            The bound, valid form, or a :class:`ValidationFailure` carrying
            every error found and the echoed input.
        """
        form = EventForm(data)
        form.is_valid()

        errors = [FieldError(name, str(message)) for name, messages in form.errors.items() for message in messages]

        name = form.cleaned_data.get("name")
        if name is None:
            name = (data.get("name") or "").strip()
        if name:
            errors.extend(cls.check_conflicts(name, instance=instance))

        if errors:
            echoed = {
                "name": name,
                "description": form.cleaned_data.get("description", data.get("description") or ""),
            }
            return ValidationFailure(data=echoed, errors=errors)
        return form

    @classmethod
    def create(cls, data: Mapping[str, str], *, principal: Principal | None) -> EventResult:
        """Validate a submission and insert a new event.

        Args:
            data: Submitted form data.
            principal: The authenticated user performing the write.

        Returns:
            ``Success`` with the new event, ``ValidationFailure`` when the
            input is invalid or the name is taken, or ``PersistenceFailure``.
        """
        outcome = cls.validate(data)
        if isinstance(outcome, ValidationFailure):
            return outcome

        name = outcome.cleaned_data["name"]
        description = outcome.cleaned_data["description"]
        try:
            with transaction.atomic():
                event = Event.objects.create(name=name, slug=outcome.slug, description=description)
        except IntegrityError:
            logger.warning("Unique constraint rejected new event '%s'", name)
            return ValidationFailure(
                data={"name": name, "description": description},
                errors=[FieldError("name", DUPLICATE_NAME_MESSAGE)],
            )
        except DatabaseError:
            logger.exception("Failed to create event '%s'", name)
            return PersistenceFailure()

        logger.info("Event '%s' created by %s", event.slug, _actor(principal))
        return Success(event)

    @classmethod
    def update(cls, slug: str, data: Mapping[str, str], *, principal: Principal | None) -> EventResult:
        """Validate a submission and rewrite the event currently at *slug*.

        The slug is recomputed from the submitted name; the event keeps its
        primary key.

        Args:
            slug: The event's current slug.
            data: Submitted form data.
            principal: The authenticated user performing the write.

        Returns:
            ``NotFound`` when *slug* is unknown, otherwise the same outcomes
            as :meth:`create`.
        """
        event = cls.get(slug)
        if event is None:
            return NotFound(slug)

        outcome = cls.validate(data, instance=event)
        if isinstance(outcome, ValidationFailure):
            return outcome

        event.name = outcome.cleaned_data["name"]
        event.slug = outcome.slug
        event.description = outcome.cleaned_data["description"]
        try:
            with transaction.atomic():
                event.save(update_fields=["name", "slug", "description", "updated_at"])
        except IntegrityError:
            logger.warning("Unique constraint rejected rename of '%s' to '%s'", slug, event.name)
            return ValidationFailure(
                data={"name": event.name, "description": event.description},
                errors=[FieldError("name", DUPLICATE_NAME_MESSAGE)],
            )
        except DatabaseError:
            logger.exception("Failed to update event '%s'", slug)
            return PersistenceFailure()

        logger.info("Event '%s' updated to '%s' by %s", slug, event.slug, _actor(principal))
        return Success(event)
