"""Forms for the events app."""

from django import forms
from django.core.validators import MaxLengthValidator
from django.utils.html import strip_tags

from django_event_admin.events.utils import is_reserved_slug, slugify_name
from django_event_admin.settings import NAME_COLUMN_MAX_LENGTH, get_config


class EventForm(forms.Form):
    """Structural validation for event create and update submissions.

    Length limits come from ``DJANGO_EVENT_ADMIN["validation"]``.  The
    description is sanitized by stripping HTML tags before the length check
    so the stored text is exactly what was validated.  Duplicate-name checks
    need the database and live in :class:`~django_event_admin.events.services.EventService`.
    """

    name = forms.CharField(
        strip=True,
        error_messages={"required": "Name must not be empty."},
    )
    description = forms.CharField(
        required=False,
        strip=True,
        widget=forms.Textarea(attrs={"rows": 4}),
    )

    def __init__(self, *args: object, **kwargs: object) -> None:
        """Apply the configured length limits."""
        super().__init__(*args, **kwargs)
        limits = get_config().validation
        self._add_max_length("name", limits.name_max_length, "Name")
        self._description_max_length = limits.description_max_length

    def _add_max_length(self, field_name: str, limit: int, label: str) -> None:
        field = self.fields[field_name]
        field.max_length = limit
        field.widget.attrs["maxlength"] = str(limit)
        field.validators.append(
            MaxLengthValidator(limit, message=f"{label} may be at most {limit} characters."),
        )

    def clean_name(self) -> str:
        """Reject names that cannot be turned into a usable, storable slug."""
        name: str = self.cleaned_data["name"]
        try:
            slug = slugify_name(name)
        except ValueError:
            raise forms.ValidationError("Name must contain at least one letter or digit.") from None
        if is_reserved_slug(slug):
            raise forms.ValidationError(f'The name "{name}" is reserved, please choose another one.')
        if len(slug) > NAME_COLUMN_MAX_LENGTH:
            raise forms.ValidationError(
                f"Name is too long once converted to a URL (at most {NAME_COLUMN_MAX_LENGTH} characters)."
            )
        return name

    def clean_description(self) -> str:
        """Strip markup from the description and enforce its length limit."""
        description = strip_tags(self.cleaned_data.get("description") or "").strip()
        limit = self._description_max_length
        if len(description) > limit:
            raise forms.ValidationError(f"Description may be at most {limit} characters.")
        return description

    @property
    def slug(self) -> str:
        """Return the slug for the cleaned name; only valid after ``is_valid()``."""
        return slugify_name(self.cleaned_data["name"])
