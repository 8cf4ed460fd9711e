# duplicator/session.py
'''
Session store for the Spotify bearer token.
 - Wraps the browser session (a signed cookie) or any dict-like mapping in tests.
 - The token is Fernet-encrypted before it is written, since signed cookies are readable by the client.
 - Expiry is enforced only by the stored slot's own deadline; `get` does no other validation.
 - Also tracks the enumerated SessionState for the views.
'''

from __future__ import annotations

import logging
import time
from typing import Any, MutableMapping, Optional

from .entities import Credential, TOKEN_TTL_SECONDS
from .errors import NoCredential
from .state import SessionState, advance
from .utils import encrypt_token, decrypt_token

logger = logging.getLogger(__name__)

_TOKEN_KEY = "pld_access"
_STATE_KEY = "pld_state"


class TokenStore:
    def __init__(self, session: MutableMapping[str, Any], clock=time.time):
        self.session = session
        self._clock = clock

    # ---- token slot ----------------------------------------------------------

    def set(self, token: str, ttl_seconds: int = TOKEN_TTL_SECONDS) -> Credential:
        now = self._clock()
        self.session[_TOKEN_KEY] = {
            "token": encrypt_token(token),
            "issued_at": now,
            "expires_at": now + ttl_seconds,
        }
        return Credential(access_token=token, issued_at=now, expires_in=ttl_seconds)

    def credential(self) -> Optional[Credential]:
        slot = self.session.get(_TOKEN_KEY)
        if not slot:
            return None
        if slot.get("expires_at", 0) <= self._clock():
            # The slot has lapsed, same as an expired cookie.
            self._drop_token()
            return None
        token = decrypt_token(slot.get("token") or "")
        if not token:
            self._drop_token()
            return None
        return Credential(
            access_token=token,
            issued_at=slot["issued_at"],
            expires_in=int(slot["expires_at"] - slot["issued_at"]),
        )

    def get(self) -> Optional[str]:
        cred = self.credential()
        return cred.access_token if cred else None

    def require(self) -> str:
        token = self.get()
        if not token:
            raise NoCredential()
        return token

    def clear(self) -> None:
        self._drop_token()
        self.session[_STATE_KEY] = SessionState.UNAUTHENTICATED.value
        logger.info("Session cleared")

    def _drop_token(self) -> None:
        if _TOKEN_KEY in self.session:
            del self.session[_TOKEN_KEY]

    @property
    def is_authenticated(self) -> bool:
        return self.get() is not None

    # ---- state ---------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        raw = self.session.get(_STATE_KEY)
        try:
            state = SessionState(raw) if raw else SessionState.UNAUTHENTICATED
        except ValueError:
            state = SessionState.UNAUTHENTICATED
        if state is not SessionState.AUTHENTICATING and not self.is_authenticated:
            return SessionState.UNAUTHENTICATED
        return state

    def advance(self, target: SessionState) -> SessionState:
        new_state = advance(self.state, target)
        self.session[_STATE_KEY] = new_state.value
        return new_state

    def resume(self) -> SessionState:
        """
        Drop an abandoned login: a session still holding a good token goes back to READY.
        """
        if self.is_authenticated and self.state is SessionState.AUTHENTICATING:
            return self.advance(SessionState.READY)
        return self.state
