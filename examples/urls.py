"""URL configuration for the example development server."""

from django.contrib import admin
from django.urls import include, path
from django.views.generic import RedirectView

urlpatterns = [
    path("", RedirectView.as_view(pattern_name="manage:event-list"), name="root"),
    path("admin/", admin.site.urls),
    path("users/", include("django_event_admin.manage.urls")),
]
