# playlist_duplicator/settings.py
import base64
import hashlib
import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

# Load environment variables from .env file
load_dotenv(BASE_DIR / ".env")


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _get_csv_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name)
    source = raw if raw is not None else default
    return [token.strip() for token in source.split(",") if token and token.strip()]


SECRET_KEY = os.getenv("DJANGO_SECRET_KEY") or "dev-only-secret-key-change-me"
DEBUG = _get_bool("DJANGO_DEBUG", False)
ALLOWED_HOSTS = _get_csv_list("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver")

INSTALLED_APPS = [
    "duplicator.apps.DuplicatorConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
]

ROOT_URLCONF = "playlist_duplicator.urls"
WSGI_APPLICATION = "playlist_duplicator.wsgi.application"

# No database: the only state is the session cookie and the in-flight lock.
DATABASES = {}

# Token lives in a signed browser cookie (encrypted with FERNET_KEY before it is stored).
SESSION_ENGINE = "django.contrib.sessions.backends.signed_cookies"
SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_AGE = 60 * 60
SESSION_COOKIE_SECURE = _get_bool("SESSION_COOKIE_SECURE", False)

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "playlist-duplicator",
    }
}

# Spotify
SPOTIFY_CLIENT_ID = os.getenv("SPOTIFY_CLIENT_ID", "")
SPOTIFY_CLIENT_SECRET = os.getenv("SPOTIFY_CLIENT_SECRET", "")
SPOTIFY_REDIRECT_URI = os.getenv("SPOTIFY_REDIRECT_URI") or "http://127.0.0.1:8000/auth/callback"
FRONTEND_APP_URL = os.getenv("FRONTEND_APP_URL") or "/"

# Fernet key for the session token; derived from SECRET_KEY when not given.
FERNET_KEY = os.getenv("FERNET_KEY") or base64.urlsafe_b64encode(
    hashlib.sha256(SECRET_KEY.encode()).digest()
).decode()

# Seconds before an abandoned in-flight lock frees itself
DUPLICATION_LOCK_TIMEOUT = _get_int("DUPLICATION_LOCK_TIMEOUT", 300)

LOG_LEVEL = (os.getenv("LOG_LEVEL") or "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "duplicator": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        # urllib3 logs full request URLs at DEBUG
        "urllib3": {
            "level": "WARNING",
        },
    },
}

USE_TZ = True
