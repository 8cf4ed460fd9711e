# duplicator/services/duplication.py
'''
Duplicate a playlist into the signed-in user's library.

Steps run strictly in order and the first failure aborts the rest:
parse id -> source playlist -> all tracks -> current user -> create -> add tracks.
A destination that was already created is left in place on a later failure,
and running the same request twice creates two playlists.
'''

from __future__ import annotations

import logging
from typing import Optional

from ..entities import DuplicationRequest, PlaylistRef
from ..session import TokenStore
from . import playlists as svc

logger = logging.getLogger(__name__)

def _clean(value: Optional[str]) -> str:
    return (value or "").strip()

def resolve_name(override: Optional[str], source: PlaylistRef) -> str:
    return _clean(override) or source.name

def resolve_description(override: Optional[str], source: PlaylistRef) -> str:
    return _clean(override) or f"Duplicated from: {source.name}"

def duplicate_playlist(store: TokenStore, request: DuplicationRequest) -> PlaylistRef:
    pid = svc.parse_playlist_id(_clean(request.source))

    source = svc.fetch_playlist(store, pid)
    tracks = svc.fetch_all_tracks(store, pid)
    user = svc.fetch_current_user(store)

    name = resolve_name(request.name, source)
    description = resolve_description(request.description, source)
    created = svc.create_playlist(store, user.id, name, description)
    logger.info("Created playlist %s (%r) for user %s from %s", created.id, name, user.id, pid)

    if tracks:
        svc.add_tracks(store, created.id, [t.uri for t in tracks])
        logger.info("Copied %s tracks into %s", len(tracks), created.id)

    return created
