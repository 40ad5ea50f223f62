"""Tests for the session and account views."""

import pytest
from django.contrib.auth import get_user_model
from django.test import Client, override_settings

from django_event_admin.accounts.services import REGISTRATION_FAILED_MESSAGE
from django_event_admin.manage.views_accounts import LOGIN_FAILED_MESSAGE


@pytest.fixture
def account():
    return get_user_model().objects.create_user(username="admin", password="password", name="Site Admin")


# ---------------------------------------------------------------------------
# Login / logout
# ---------------------------------------------------------------------------


@pytest.mark.django_db
class TestLogin:
    def test_get_renders_form_without_message(self) -> None:
        response = Client().get("/users/login/")

        assert response.status_code == 200
        assert response.context["message"] == ""
        assert response.context["title"] == "Log in"
        assert response.context["username"] is None

    def test_success_redirects_to_event_list(self, account) -> None:
        c = Client()

        response = c.post("/users/login/", {"username": "admin", "password": "password"})

        assert response.status_code == 302
        assert response.url == "/users/"
        assert c.get("/users/").status_code == 200

    def test_success_honours_local_next(self, account) -> None:
        response = Client().post(
            "/users/login/",
            {"username": "admin", "password": "password", "next": "/users/allusers/"},
        )

        assert response.url == "/users/allusers/"

    def test_external_next_is_ignored(self, account) -> None:
        response = Client().post(
            "/users/login/",
            {"username": "admin", "password": "password", "next": "https://evil.example.com/"},
        )

        assert response.url == "/users/"

    def test_failure_redirects_back_with_one_shot_message(self, account) -> None:
        c = Client()

        response = c.post("/users/login/", {"username": "admin", "password": "wrong"})

        assert response.status_code == 302
        assert response.url == "/users/login/"

        first = c.get("/users/login/")
        assert first.context["message"] == LOGIN_FAILED_MESSAGE
        assert LOGIN_FAILED_MESSAGE.encode() in first.content

        second = c.get("/users/login/")
        assert second.context["message"] == ""

    def test_failure_keeps_next(self, account) -> None:
        response = Client().post(
            "/users/login/",
            {"username": "admin", "password": "wrong", "next": "/users/fall-fest/"},
        )

        assert response.url == "/users/login/?next=%2Fusers%2Ffall-fest%2F"

    def test_unknown_user_gets_same_message(self) -> None:
        response = Client().post("/users/login/", {"username": "ghost", "password": "password"}, follow=True)

        assert response.context["message"] == LOGIN_FAILED_MESSAGE

    def test_signed_in_user_skips_form(self, account) -> None:
        c = Client()
        c.login(username="admin", password="password")

        response = c.get("/users/login/")

        assert response.status_code == 302
        assert response.url == "/users/"


@pytest.mark.django_db
def test_logout_clears_session_and_redirects_to_root(account) -> None:
    c = Client()
    c.login(username="admin", password="password")

    response = c.get("/users/logout/")

    assert response.status_code == 302
    assert response.url == "/"
    assert c.get("/users/").status_code == 302


@pytest.mark.django_db
def test_logout_when_anonymous_still_redirects() -> None:
    response = Client().get("/users/logout/")

    assert response.status_code == 302
    assert response.url == "/"


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


@pytest.mark.django_db
class TestRegister:
    def test_get_renders_form(self) -> None:
        response = Client().get("/users/register/")

        assert response.status_code == 200
        assert response.context["message"] == ""
        assert response.context["title"] == "Register"

    def test_creates_account_and_redirects(self) -> None:
        response = Client().post(
            "/users/register/",
            {"name": "Ada", "username": "ada", "password": "s3cret", "password2": "s3cret"},
        )

        assert response.status_code == 302
        assert response.url == "/users/"
        account = get_user_model().objects.get(username="ada")
        assert account.name == "Ada"
        assert account.is_admin is False
        assert account.check_password("s3cret")

    def test_mismatched_passwords_show_generic_message(self) -> None:
        response = Client().post(
            "/users/register/",
            {"name": "", "username": "ada", "password": "one", "password2": "two"},
        )

        assert response.status_code == 200
        assert response.context["message"] == REGISTRATION_FAILED_MESSAGE
        assert not get_user_model().objects.filter(username="ada").exists()

    def test_taken_username_shows_generic_message(self, account) -> None:
        response = Client().post(
            "/users/register/",
            {"name": "", "username": "admin", "password": "pw", "password2": "pw"},
        )

        assert response.status_code == 200
        assert response.context["message"] == REGISTRATION_FAILED_MESSAGE

    def test_missing_fields_show_generic_message(self) -> None:
        response = Client().post("/users/register/", {"username": "ada"})

        assert response.status_code == 200
        assert response.context["message"] == REGISTRATION_FAILED_MESSAGE

    def test_signed_in_user_is_redirected(self, account) -> None:
        c = Client()
        c.login(username="admin", password="password")

        response = c.get("/users/register/")

        assert response.status_code == 302
        assert response.url == "/users/"

    @override_settings(DJANGO_EVENT_ADMIN={"features": {"registration_enabled": False}})
    def test_disabled_registration_is_404(self) -> None:
        response = Client().get("/users/register/")

        assert response.status_code == 404


# ---------------------------------------------------------------------------
# Account list
# ---------------------------------------------------------------------------


@pytest.mark.django_db
class TestAccountList:
    def test_anonymous_redirected_to_login(self) -> None:
        response = Client().get("/users/allusers/")

        assert response.status_code == 302
        assert response.url == "/users/login/?next=/users/allusers/"

    def test_lists_accounts_for_signed_in_user(self, account) -> None:
        get_user_model().objects.create_user(username="editor", password="pw")
        c = Client()
        c.login(username="admin", password="password")

        response = c.get("/users/allusers/")

        assert response.status_code == 200
        assert [a.username for a in response.context["accounts"]] == ["admin", "editor"]
        assert response.context["title"] == "Users - Events administration"
        assert response.context["username"] == "admin"
        assert b"editor" in response.content

    @override_settings(DJANGO_EVENT_ADMIN={"features": {"public_account_list_enabled": True}})
    def test_public_feature_opens_list_to_anonymous(self, account) -> None:
        response = Client().get("/users/allusers/")

        assert response.status_code == 200
        assert response.context["username"] is None
        assert [a.username for a in response.context["accounts"]] == ["admin"]
