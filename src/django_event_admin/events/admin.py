"""Django admin configuration for the events app."""

from django import forms
from django.contrib import admin

from django_event_admin.events.models import Event
from django_event_admin.events.services import EventService, ValidationFailure


class EventAdminForm(forms.ModelForm):
    """Admin form that runs the dashboard's event validation.

    The slug is not editable; it is derived from the cleaned name exactly as
    the dashboard derives it, and the same duplicate-name and similar-slug
    checks apply.
    """

    class Meta:
        model = Event
        fields = ("name", "description")

    def clean(self) -> dict[str, object]:
        """Validate through :class:`EventService` and set the derived slug."""
        cleaned_data = super().clean()
        instance = self.instance if self.instance.pk else None
        submission = {"name": self.data.get("name", ""), "description": self.data.get("description", "")}

        outcome = EventService.validate(submission, instance=instance)
        if isinstance(outcome, ValidationFailure):
            for error in outcome.errors:
                if error.message not in self.errors.get(error.field, []):
                    self.add_error(error.field, error.message)
            return cleaned_data

        cleaned_data["name"] = outcome.cleaned_data["name"]
        cleaned_data["description"] = outcome.cleaned_data["description"]
        self.instance.slug = outcome.slug
        return cleaned_data


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    """Admin interface for events.

    ``slug`` is read-only and recomputed from the name on every save.
    """

    form = EventAdminForm
    list_display = ("name", "slug", "updated_at")
    search_fields = ("name", "slug")
    readonly_fields = ("slug", "created_at", "updated_at")
