# duplicator/services/playlists.py
'''
This module wraps the Spotify calls the duplicator needs.
 - parse_playlist_id: Pull the playlist id out of a share link.
 - fetch_playlist: Get basic info about a playlist.
 - fetch_all_tracks: Page through every track of a playlist (100 per page).
 - fetch_current_user: Get the signed-in user's profile.
 - create_playlist: Create a private playlist for a user.
 - add_tracks: Append track URIs to a playlist in batches of 100, in order.
Every call reads the bearer token from the TokenStore it is given.
'''

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Sequence

import requests

from ..clients.spotify import sp_get, sp_post_json
from ..entities import PlaylistRef, Track, User
from ..errors import (
    InvalidUrl,
    PlaylistCreateFailed,
    PlaylistUnavailable,
    TracksAddFailed,
    TracksFetchFailed,
    UserFetchFailed,
)
from ..session import TokenStore

logger = logging.getLogger(__name__)

TIMEOUT = 10
TRACK_TIMEOUT = 15
PAGE_SIZE = 100
BATCH_SIZE = 100
TRACK_FIELDS = "items(track(id,name,artists,album,uri,external_urls)),next"

_PLAYLIST_RE = re.compile(r"playlist/([a-zA-Z0-9]+)")

def parse_playlist_id(url: str) -> str:
    match = _PLAYLIST_RE.search(url or "")
    if not match:
        raise InvalidUrl()
    return match.group(1)

def _json(r: requests.Response) -> Dict[str, Any]:
    r.raise_for_status()
    return r.json()

def fetch_playlist(store: TokenStore, pid: str) -> PlaylistRef:
    token = store.require()
    try:
        data = _json(sp_get(token, f"playlists/{pid}", timeout=TIMEOUT))
        return PlaylistRef.from_api(data)
    except (requests.RequestException, ValueError, KeyError) as exc:
        logger.warning("Playlist %s unavailable: %s", pid, exc)
        raise PlaylistUnavailable() from exc

def fetch_all_tracks(store: TokenStore, pid: str) -> List[Track]:
    """
    All playable tracks of `pid`, in playlist order.
    Removed/local entries (null track or no id) are skipped without stopping the paging.
    A failed page throws away everything fetched so far.
    """
    token = store.require()
    tracks: List[Track] = []
    offset = 0
    try:
        while True:
            data = _json(sp_get(
                token,
                f"playlists/{pid}/tracks",
                params={"offset": offset, "limit": PAGE_SIZE, "fields": TRACK_FIELDS},
                timeout=TRACK_TIMEOUT,
            ))
            for item in data.get("items") or []:
                t = (item or {}).get("track")
                if t and t.get("id"):
                    tracks.append(Track.from_api(t))
            if not data.get("next"):
                break
            offset += PAGE_SIZE
    except (requests.RequestException, ValueError, KeyError) as exc:
        logger.warning("Track fetch for %s failed at offset %s: %s", pid, offset, exc)
        raise TracksFetchFailed() from exc

    logger.info("Fetched %s tracks from playlist %s", len(tracks), pid)
    return tracks

def fetch_current_user(store: TokenStore) -> User:
    token = store.require()
    try:
        return User.from_api(_json(sp_get(token, "me", timeout=TIMEOUT)))
    except (requests.RequestException, ValueError, KeyError) as exc:
        logger.warning("Profile fetch failed: %s", exc)
        raise UserFetchFailed() from exc

def create_playlist(store: TokenStore, owner_id: str, name: str, description: str) -> PlaylistRef:
    token = store.require()
    payload = {"name": name, "description": description, "public": False}
    try:
        data = _json(sp_post_json(token, f"users/{owner_id}/playlists", payload=payload, timeout=TIMEOUT))
        return PlaylistRef.from_api(data)
    except (requests.RequestException, ValueError, KeyError) as exc:
        logger.warning("Creating playlist for %s failed: %s", owner_id, exc)
        raise PlaylistCreateFailed() from exc

def add_tracks(store: TokenStore, pid: str, uris: Sequence[str]) -> None:
    """
    POST `uris` to `pid` in order, one batch at a time.
    Batches already sent stay in the playlist if a later one fails.
    """
    token = store.require()
    for start in range(0, len(uris), BATCH_SIZE):
        batch = list(uris[start:start + BATCH_SIZE])
        try:
            r = sp_post_json(token, f"playlists/{pid}/tracks", payload={"uris": batch}, timeout=TIMEOUT)
            r.raise_for_status()
        except requests.RequestException as exc:
            logger.warning(
                "Adding tracks %s-%s to %s failed: %s", start, start + len(batch), pid, exc
            )
            raise TracksAddFailed() from exc
