# duplicator/services/auth.py
"""
Auth/service layer for Spotify OAuth.
- Builds the authorize URL (always shows the consent dialog).
- Exchanges authorization codes for a bearer token and stores it in the session.
- Provides helpers to generate/validate OAuth `state` for CSRF protection.
"""

from __future__ import annotations

import logging
import secrets
import urllib.parse
from typing import Iterable, Optional

import requests
from django.conf import settings

from ..clients.spotify import AUTHORIZE_URL, TOKEN_URL, sp_post_form
from ..entities import Credential, TOKEN_TTL_SECONDS
from ..errors import AuthenticationFailure
from ..session import TokenStore

logger = logging.getLogger(__name__)

SCOPES = [
    "user-read-private",
    "playlist-modify-public",
    "playlist-modify-private",
]

# ---- callback `state` (CSRF) ------------------------------------------------

_STATE_SESSION_KEY = "oauth_state"

def generate_oauth_state(length: int = 24) -> str:
    """Random token for the `state` query param of the authorize redirect."""
    return secrets.token_urlsafe(length)

def save_oauth_state(session, state: str) -> None:
    """Remember `state` until the callback comes back."""
    session[_STATE_SESSION_KEY] = state

def validate_oauth_state(session, received_state: str | None) -> bool:
    """
    True only when `received_state` equals the saved value.
    The saved value is consumed either way, so a callback URL cannot be replayed.
    """
    expected = session.pop(_STATE_SESSION_KEY, None)
    return bool(expected) and (received_state == expected)

# ---- Authorize URL + token exchange ----------------------------------------

def build_authorization_url(
    client_id: str,
    redirect_uri: str,
    scopes: Iterable[str] = SCOPES,
    state: Optional[str] = None,
) -> str:
    params = {
        "client_id": client_id,
        "response_type": "code",
        "redirect_uri": redirect_uri,
        "scope": " ".join(scopes),
        "show_dialog": "true",
    }
    if state:
        params["state"] = state
    return f"{AUTHORIZE_URL}?{urllib.parse.urlencode(params)}"

def exchange_code_for_token(code: str, store: TokenStore) -> Credential:
    """
    Exchange an auth code for a bearer token and keep it in `store`.
    The token is stored for a fixed hour whatever `expires_in` Spotify sends back.
    Every failure (network, rejected code, bad client secret, malformed body)
    surfaces as AuthenticationFailure.
    """
    payload = {
        "grant_type": "authorization_code",
        "code": code,
        "redirect_uri": settings.SPOTIFY_REDIRECT_URI,
        "client_id": settings.SPOTIFY_CLIENT_ID,
        "client_secret": settings.SPOTIFY_CLIENT_SECRET,
    }
    headers = {"Content-Type": "application/x-www-form-urlencoded"}

    try:
        r = sp_post_form(TOKEN_URL, data=payload, headers=headers)
        r.raise_for_status()
        token_data = r.json()
    except (requests.RequestException, ValueError) as exc:
        logger.warning("Token exchange failed: %s", exc)
        raise AuthenticationFailure() from exc

    access_token = token_data.get("access_token") if isinstance(token_data, dict) else None
    if not access_token:
        logger.warning("Token response did not contain an access_token")
        raise AuthenticationFailure()

    logger.info("Exchanged authorization code for access token")
    return store.set(access_token, TOKEN_TTL_SECONDS)
