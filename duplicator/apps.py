# duplicator/apps.py
from django.apps import AppConfig

class DuplicatorConfig(AppConfig):
    name = "duplicator"
    verbose_name = "Playlist Duplicator"
