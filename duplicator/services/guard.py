# duplicator/services/guard.py
'''
Per-session "duplication in progress" lock.
 - Backed by the Django cache; `cache.add` only succeeds when the key is absent, so two requests cannot both take it.
 - The lock expires on its own after DUPLICATION_LOCK_TIMEOUT seconds in case a worker dies mid-run.
'''

from __future__ import annotations

import logging
from contextlib import contextmanager

from django.conf import settings
from django.core.cache import cache

from ..errors import DuplicationInProgress

logger = logging.getLogger(__name__)

_LOCK_PREFIX = "duplicator:inflight:"

def _key(owner: str) -> str:
    return f"{_LOCK_PREFIX}{owner}"

def is_locked(owner: str) -> bool:
    return cache.get(_key(owner)) is not None

@contextmanager
def duplication_lock(owner: str):
    key = _key(owner)
    if not cache.add(key, 1, timeout=settings.DUPLICATION_LOCK_TIMEOUT):
        logger.info("Rejected concurrent duplication for %s", owner)
        raise DuplicationInProgress()
    try:
        yield
    finally:
        cache.delete(key)
