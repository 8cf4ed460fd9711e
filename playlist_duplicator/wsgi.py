# playlist_duplicator/wsgi.py
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "playlist_duplicator.settings")

application = get_wsgi_application()
