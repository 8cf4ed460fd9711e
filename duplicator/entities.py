# duplicator/entities.py
'''
Plain data holders for what we read from (and hand back to) Spotify.
Nothing here is persisted; every object lives for one request at most.
'''

from __future__ import annotations

import time
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

TOKEN_TTL_SECONDS = 3600


@dataclass(frozen=True)
class Credential:
    access_token: str
    issued_at: float
    expires_in: int = TOKEN_TTL_SECONDS

    @property
    def expires_at(self) -> float:
        return self.issued_at + self.expires_in

    def is_expired(self, now: Optional[float] = None) -> bool:
        return (now if now is not None else time.time()) >= self.expires_at


@dataclass(frozen=True)
class PlaylistRef:
    id: str
    name: str
    description: str = ""
    owner_id: Optional[str] = None
    tracks_total: int = 0
    url: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "PlaylistRef":
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            description=data.get("description") or "",
            owner_id=(data.get("owner") or {}).get("id"),
            tracks_total=int((data.get("tracks") or {}).get("total") or 0),
            url=(data.get("external_urls") or {}).get("spotify"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Track:
    id: str
    uri: str
    name: str = ""
    artists: List[str] = field(default_factory=list)
    album: Optional[str] = None

    @classmethod
    def from_api(cls, t: Dict[str, Any]) -> "Track":
        return cls(
            id=t["id"],
            uri=t.get("uri") or f"spotify:track:{t['id']}",
            name=t.get("name") or "",
            artists=[a["name"] for a in t.get("artists") or [] if a.get("name")],
            album=(t.get("album") or {}).get("name"),
        )


@dataclass(frozen=True)
class User:
    id: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    followers: int = 0

    @classmethod
    def from_api(cls, me: Dict[str, Any]) -> "User":
        imgs = me.get("images") or []
        return cls(
            id=me["id"],
            display_name=me.get("display_name") or me.get("id"),
            avatar_url=imgs[0].get("url") if imgs else None,
            followers=int((me.get("followers") or {}).get("total") or 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DuplicationRequest:
    source: str
    name: Optional[str] = None
    description: Optional[str] = None
