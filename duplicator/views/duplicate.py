# duplicator/views/duplicate.py
'''
This module handles the duplicate-playlist endpoints.
- POST /api/duplicate takes JSON (or form) {playlist_url, name, description} and answers JSON.
- POST /duplicate is the HTML form variant used by the root page.
Only one duplication may run per user at a time; a second one gets 409.
'''

import hashlib
import json
import logging

from django.http import HttpResponse, JsonResponse
from django.utils.html import format_html
from django.views.decorators.http import require_POST

from ..entities import DuplicationRequest
from ..errors import AUTH_ERRORS, DuplicatorError, MissingUrl, NoCredential
from ..services.duplication import duplicate_playlist
from ..services.guard import duplication_lock
from ..session import TokenStore
from ..state import SessionState
from .root import page

logger = logging.getLogger(__name__)

def _read_payload(request) -> dict:
    if request.content_type == "application/json":
        try:
            data = json.loads(request.body or b"{}")
        except ValueError:
            data = None
        return data if isinstance(data, dict) else {}
    return request.POST.dict()

def _lock_owner(request, token: str) -> str:
    return request.session.get("spotify_id") or hashlib.sha256(token.encode()).hexdigest()

def _text(value) -> str:
    return value if isinstance(value, str) else ""

def run_duplication(request, data: dict):
    """
    Shared body of both endpoints. Returns the created PlaylistRef or raises DuplicatorError.
    """
    store = TokenStore(request.session)
    token = store.get()
    if not token:
        raise NoCredential()

    source = _text(data.get("playlist_url")).strip()
    if not source:
        raise MissingUrl()

    dup = DuplicationRequest(
        source=source,
        name=_text(data.get("name")),
        description=_text(data.get("description")),
    )
    with duplication_lock(_lock_owner(request, token)):
        # A login left half-way (user backed out of Spotify) must not block the form.
        store.resume()
        store.advance(SessionState.DUPLICATION_IN_FLIGHT)
        try:
            created = duplicate_playlist(store, dup)
        except AUTH_ERRORS:
            store.clear()
            request.session.pop("spotify_id", None)
            raise
        except DuplicatorError:
            store.advance(SessionState.ERROR)
            raise
        store.advance(SessionState.READY)
    return created

def _success_message(created) -> str:
    return f'Successfully created "{created.name}"! Check your Spotify library.'

@require_POST
def duplicate_api(request):
    try:
        created = run_duplication(request, _read_payload(request))
    except DuplicatorError as exc:
        logger.info("Duplication failed: %s", exc.code)
        return JsonResponse({"error": exc.code, "message": exc.message}, status=exc.status)

    return JsonResponse({"playlist": created.to_dict(), "message": _success_message(created)}, status=201)

@require_POST
def duplicate_form(request):
    try:
        created = run_duplication(request, request.POST.dict())
    except DuplicatorError as exc:
        logger.info("Duplication failed: %s", exc.code)
        body = format_html('<p class="error">{}</p><p><a href="/">Back</a></p>', exc.message)
        return HttpResponse(page(body), status=exc.status)

    body = format_html(
        '<p class="success">{}</p><p><a href="{}">Open in Spotify</a> · <a href="/">Duplicate another</a></p>',
        _success_message(created),
        created.url or "#",
    )
    return HttpResponse(page(body), status=201)
