"""Forms for the accounts app."""

from django import forms
from django.contrib.auth.validators import UnicodeUsernameValidator


class RegistrationForm(forms.Form):
    """Sign-up form for a new dashboard account.

    Only the shape of each field is checked here.  Username availability and
    password confirmation are checked by
    :func:`~django_event_admin.accounts.services.register_account` so every
    rejection produces the same generic message.
    """

    name = forms.CharField(max_length=200, required=False, strip=True)
    username = forms.CharField(max_length=150, strip=True, validators=[UnicodeUsernameValidator()])
    password = forms.CharField(strip=False, widget=forms.PasswordInput(attrs={"autocomplete": "new-password"}))
    password2 = forms.CharField(
        label="Confirm password",
        strip=False,
        widget=forms.PasswordInput(attrs={"autocomplete": "new-password"}),
    )
