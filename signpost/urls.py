"""URL configuration: the admin plus everything in signpost.routes."""

from django.contrib import admin
from django.urls import path

from signpost.routes import router

urlpatterns = [
    path('admin/', admin.site.urls),
    *router.urlpatterns,
]
