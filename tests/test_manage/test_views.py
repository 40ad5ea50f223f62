"""Tests for the event administration dashboard views."""

from unittest.mock import patch

import pytest
from django.contrib.auth import get_user_model
from django.test import Client, override_settings
from django.urls import reverse

from django_event_admin.accounts.principal import Principal
from django_event_admin.events.models import Event
from django_event_admin.events.services import (
    DUPLICATE_NAME_MESSAGE,
    EventService,
    FieldError,
    PersistenceFailure,
)
from django_event_admin.manage.views import compose_page_context

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def admin_account():
    return get_user_model().objects.create_user(
        username="admin",
        password="password",
        name="Site Admin",
        is_admin=True,
    )


@pytest.fixture
def editor_account():
    return get_user_model().objects.create_user(username="editor", password="password")


@pytest.fixture
def client_logged_in(admin_account):
    c = Client()
    c.login(username="admin", password="password")
    return c


@pytest.fixture
def fall_fest():
    return Event.objects.create(name="Fall Fest", slug="fall-fest", description="Autumn.")


# ---------------------------------------------------------------------------
# compose_page_context
# ---------------------------------------------------------------------------


def test_compose_page_context_for_admin() -> None:
    principal = Principal(id=1, username="admin", name="Site Admin", admin=True)

    context = compose_page_context(
        title="Events - administration",
        principal=principal,
        data={"name": "x"},
        errors=[FieldError("name", "bad")],
    )

    assert context == {
        "title": "Events - administration",
        "principal": principal,
        "username": "admin",
        "is_admin": True,
        "data": {"name": "x"},
        "errors": [FieldError("name", "bad")],
    }


def test_compose_page_context_for_anonymous_defaults() -> None:
    context = compose_page_context(title="Log in", principal=None)

    assert context["username"] is None
    assert context["is_admin"] is False
    assert context["data"] == {}
    assert context["errors"] == []


# ---------------------------------------------------------------------------
# Login gate
# ---------------------------------------------------------------------------


@pytest.mark.django_db
@pytest.mark.parametrize("path", ["/users/", "/users/fall-fest/"])
def test_anonymous_get_redirects_to_login(path: str) -> None:
    response = Client().get(path)

    assert response.status_code == 302
    assert response.url == f"/users/login/?next={path}"


@pytest.mark.django_db
def test_anonymous_post_is_not_processed() -> None:
    with patch.object(EventService, "create") as create:
        response = Client().post("/users/", {"name": "Fall Fest", "description": ""})

    assert response.status_code == 302
    assert response.url.startswith("/users/login/")
    create.assert_not_called()
    assert Event.objects.count() == 0


@pytest.mark.django_db
def test_root_redirects_to_event_list(client_logged_in: Client) -> None:
    response = client_logged_in.get("/")

    assert response.status_code == 302
    assert response.url == reverse("manage:event-list")


# ---------------------------------------------------------------------------
# Event list and creation
# ---------------------------------------------------------------------------


@pytest.mark.django_db
class TestEventList:
    def test_lists_events_with_empty_form(self, client_logged_in: Client, fall_fest: Event) -> None:
        response = client_logged_in.get("/users/")

        assert response.status_code == 200
        assert list(response.context["events"]) == [fall_fest]
        assert response.context["title"] == "Events - administration"
        assert response.context["username"] == "admin"
        assert response.context["is_admin"] is True
        assert response.context["data"] == {}
        assert response.context["errors"] == []
        assert b"Fall Fest" in response.content
        assert b'href="/users/fall-fest/"' in response.content

    def test_non_admin_sees_is_admin_false(self, editor_account) -> None:
        c = Client()
        c.login(username="editor", password="password")

        response = c.get("/users/")

        assert response.status_code == 200
        assert response.context["is_admin"] is False
        assert response.context["user_is_admin"] is False

    @override_settings(DJANGO_EVENT_ADMIN={"site_title": "PyCon", "paginate_by": 1})
    def test_title_and_page_size_from_settings(self, client_logged_in: Client, fall_fest: Event) -> None:
        Event.objects.create(name="Winter Gala", slug="winter-gala")

        response = client_logged_in.get("/users/")

        assert response.context["title"] == "PyCon - administration"
        assert response.context["is_paginated"] is True
        assert list(response.context["events"]) == [fall_fest]

    def test_create_redirects_to_list(self, client_logged_in: Client) -> None:
        response = client_logged_in.post("/users/", {"name": "Fall Fest", "description": "Autumn."})

        assert response.status_code == 302
        assert response.url == "/users/"
        event = Event.objects.get(slug="fall-fest")
        assert event.name == "Fall Fest"
        assert event.description == "Autumn."

    def test_create_shows_flash_message(self, client_logged_in: Client) -> None:
        response = client_logged_in.post("/users/", {"name": "Fall Fest", "description": ""}, follow=True)

        assert response.status_code == 200
        assert [str(m) for m in response.context["messages"]] == ['Event "Fall Fest" created.']

    def test_duplicate_name_rerenders_with_error(self, client_logged_in: Client, fall_fest: Event) -> None:
        response = client_logged_in.post("/users/", {"name": "Fall Fest", "description": "Again."})

        assert response.status_code == 200
        assert response.context["errors"] == [FieldError("name", DUPLICATE_NAME_MESSAGE)]
        assert response.context["data"] == {"name": "Fall Fest", "description": "Again."}
        assert list(response.context["events"]) == [fall_fest]
        assert DUPLICATE_NAME_MESSAGE.encode() in response.content
        assert Event.objects.count() == 1

    def test_empty_name_rerenders_with_error(self, client_logged_in: Client) -> None:
        response = client_logged_in.post("/users/", {"name": "   ", "description": "Text"})

        assert response.status_code == 200
        assert response.context["errors"] == [FieldError("name", "Name must not be empty.")]
        assert response.context["data"]["description"] == "Text"
        assert Event.objects.count() == 0

    def test_reserved_name_is_rejected(self, client_logged_in: Client) -> None:
        response = client_logged_in.post("/users/", {"name": "Login", "description": ""})

        assert response.status_code == 200
        assert response.context["errors"] == [
            FieldError("name", 'The name "Login" is reserved, please choose another one.'),
        ]

    def test_persistence_failure_renders_error_page(self, client_logged_in: Client) -> None:
        with patch.object(EventService, "create", return_value=PersistenceFailure()):
            response = client_logged_in.post("/users/", {"name": "Fall Fest", "description": ""})

        assert response.status_code == 500
        assert "django_event_admin/error.html" in [t.name for t in response.templates]
        assert b"Something went wrong" in response.content


# ---------------------------------------------------------------------------
# Event detail and update
# ---------------------------------------------------------------------------


@pytest.mark.django_db
class TestEventDetail:
    def test_get_prefills_form(self, client_logged_in: Client, fall_fest: Event) -> None:
        response = client_logged_in.get("/users/fall-fest/")

        assert response.status_code == 200
        assert response.context["event"] == fall_fest
        assert response.context["title"] == "Fall Fest - Events - administration"
        assert response.context["data"] == {"name": "Fall Fest", "description": "Autumn."}
        assert response.context["errors"] == []

    def test_unknown_slug_is_404(self, client_logged_in: Client) -> None:
        response = client_logged_in.get("/users/no-such-event/")

        assert response.status_code == 404

    def test_post_to_unknown_slug_is_404(self, client_logged_in: Client) -> None:
        response = client_logged_in.post("/users/no-such-event/", {"name": "Anything", "description": ""})

        assert response.status_code == 404
        assert Event.objects.count() == 0

    def test_update_renames_and_redirects(self, client_logged_in: Client, fall_fest: Event) -> None:
        response = client_logged_in.post("/users/fall-fest/", {"name": "Autumn Fair", "description": "New."})

        assert response.status_code == 302
        assert response.url == "/users/"
        fall_fest.refresh_from_db()
        assert fall_fest.slug == "autumn-fair"
        assert fall_fest.description == "New."
        assert client_logged_in.get("/users/fall-fest/").status_code == 404
        assert client_logged_in.get("/users/autumn-fair/").status_code == 200

    def test_update_keeping_own_name(self, client_logged_in: Client, fall_fest: Event) -> None:
        response = client_logged_in.post("/users/fall-fest/", {"name": "Fall Fest", "description": "Edited."})

        assert response.status_code == 302
        fall_fest.refresh_from_db()
        assert fall_fest.description == "Edited."

    def test_update_to_taken_name_rerenders(self, client_logged_in: Client, fall_fest: Event) -> None:
        Event.objects.create(name="Winter Gala", slug="winter-gala")

        response = client_logged_in.post("/users/winter-gala/", {"name": "Fall Fest", "description": "Cold."})

        assert response.status_code == 200
        assert response.context["errors"] == [FieldError("name", DUPLICATE_NAME_MESSAGE)]
        assert response.context["data"] == {"name": "Fall Fest", "description": "Cold."}
        assert response.context["event"].slug == "winter-gala"
        assert Event.objects.get(slug="winter-gala").name == "Winter Gala"

    def test_update_persistence_failure(self, client_logged_in: Client, fall_fest: Event) -> None:
        with patch.object(EventService, "update", return_value=PersistenceFailure()):
            response = client_logged_in.post("/users/fall-fest/", {"name": "Fall Fest", "description": ""})

        assert response.status_code == 500

    @pytest.mark.parametrize(
        ("name", "slug"),
        [
            ("Þjóðhátíð", "þjóðhátíð"),
            ("Фестиваль Музыки", "фестиваль-музыки"),
            ("音楽祭", "音楽祭"),
        ],
    )
    def test_non_latin_name_round_trips(self, client_logged_in: Client, name: str, slug: str) -> None:
        response = client_logged_in.post("/users/", {"name": name, "description": "Local event."})

        assert response.status_code == 302
        event = Event.objects.get(slug=slug)
        assert event.name == name

        detail_url = reverse("manage:event-detail", kwargs={"slug": slug})
        listing = client_logged_in.get("/users/")
        assert detail_url.encode() in listing.content

        detail = client_logged_in.get(detail_url)
        assert detail.status_code == 200
        assert detail.context["event"] == event

        update = client_logged_in.post(detail_url, {"name": name, "description": "Edited."})
        assert update.status_code == 302
        event.refresh_from_db()
        assert event.description == "Edited."

    def test_reserved_paths_win_over_events(self, client_logged_in: Client) -> None:
        response = client_logged_in.get("/users/allusers/")

        assert response.status_code == 200
        assert "accounts" in response.context
