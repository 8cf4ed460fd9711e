# playlist_duplicator/urls.py
from django.urls import include, path

urlpatterns = [
    path("", include("duplicator.urls")),
]
