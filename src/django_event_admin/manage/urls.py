"""URL configuration for the event administration dashboard.

Mount under a prefix in the host project::

    urlpatterns = [
        path("users/", include("django_event_admin.manage.urls")),
    ]

The fixed routes must stay ahead of the ``<str:slug>/`` catch-all;
:data:`~django_event_admin.events.utils.RESERVED_SLUGS` keeps events from
claiming their paths.
"""

from django.urls import path

from django_event_admin.manage.views import EventDetailView, EventListView
from django_event_admin.manage.views_accounts import AccountListView, LoginView, LogoutView, RegisterView

app_name = "manage"

urlpatterns = [
    path("", EventListView.as_view(), name="event-list"),
    path("allusers/", AccountListView.as_view(), name="account-list"),
    path("login/", LoginView.as_view(), name="login"),
    path("register/", RegisterView.as_view(), name="register"),
    path("logout/", LogoutView.as_view(), name="logout"),
    path("<str:slug>/", EventDetailView.as_view(), name="event-detail"),
]
