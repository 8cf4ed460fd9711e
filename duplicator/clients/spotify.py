# duplicator/clients/spotify.py
'''
Outgoing HTTP to Spotify. Three calls, nothing retried:
 - sp_get: bearer GET against the Web API (relative path or a full `next` URL).
 - sp_post_json: bearer POST with a JSON body (create playlist, add tracks).
 - sp_post_form: form-encoded POST to the accounts service (token exchange), no bearer.
'''

import requests

BASE = "https://api.spotify.com/v1"
AUTHORIZE_URL = "https://accounts.spotify.com/authorize"
TOKEN_URL = "https://accounts.spotify.com/api/token"

def _api_url(path: str) -> str:
    if path.startswith(("http://", "https://")):
        return path
    return BASE + "/" + path.lstrip("/")

def _auth_headers(access_token: str, **extra) -> dict:
    return {"Authorization": f"Bearer {access_token}", **extra}

def sp_get(access_token: str, path: str, *, params=None, timeout=10) -> requests.Response:
    return requests.get(
        _api_url(path),
        headers=_auth_headers(access_token),
        params=params or {},
        timeout=timeout,
    )

def sp_post_json(access_token: str, path: str, *, payload: dict, timeout=10) -> requests.Response:
    return requests.post(
        _api_url(path),
        json=payload,
        headers=_auth_headers(access_token, **{"Content-Type": "application/json"}),
        timeout=timeout,
    )

def sp_post_form(url: str, *, data: dict, headers: dict, timeout=10) -> requests.Response:
    # Token endpoint lives on accounts.spotify.com, so `url` is always absolute here.
    return requests.post(url, data=data, headers=headers, timeout=timeout)
