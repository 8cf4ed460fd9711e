import os
import sys
from urllib.parse import parse_qs, urlparse

import pytest

# Ensure project root is on sys.path so 'duplicator' and 'playlist_duplicator' import correctly
_TESTS_DIR = os.path.dirname(__file__)
_ROOT_DIR = os.path.abspath(os.path.join(_TESTS_DIR, os.pardir))
if _ROOT_DIR not in sys.path:
    sys.path.insert(0, _ROOT_DIR)

from tests.support.stubs import FakeSpotify


@pytest.fixture(autouse=True)
def _spotify_settings(settings):
    settings.SPOTIFY_CLIENT_ID = "test-client-id"
    settings.SPOTIFY_CLIENT_SECRET = "test-client-secret"
    settings.SPOTIFY_REDIRECT_URI = "http://testserver/auth/callback"
    settings.FRONTEND_APP_URL = "/"
    yield settings


@pytest.fixture(autouse=True)
def _clear_cache():
    from django.core.cache import cache

    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def spotify(monkeypatch):
    """Fake Spotify API patched over requests.get/requests.post."""
    return FakeSpotify().install(monkeypatch)


@pytest.fixture
def store():
    """A TokenStore over a plain dict, already holding a token."""
    from duplicator.session import TokenStore

    s = TokenStore({})
    s.set("access-123")
    return s


def login(client):
    """Walk the login redirect + callback so the client carries a session cookie."""
    r = client.get("/auth/login")
    state = parse_qs(urlparse(r["Location"]).query)["state"][0]
    return client.get("/auth/callback", {"code": "auth-code", "state": state})


@pytest.fixture
def logged_in(client, spotify):
    r = login(client)
    assert r.status_code == 302
    return client
