# duplicator/views/session.py
'''
This module handles session-related views for the Spotify app.
 - Provides an endpoint to check the current user's session.
 - Returns the Spotify profile if authenticated, or a 401 error if not.
 - A profile that cannot be loaded logs the user out.
'''

import logging

from django.http import JsonResponse
from django.views.decorators.http import require_GET

from ..errors import DuplicatorError
from ..services.playlists import fetch_current_user
from ..session import TokenStore

logger = logging.getLogger(__name__)

@require_GET
def session_me(request):
    store = TokenStore(request.session)
    if not store.is_authenticated:
        return JsonResponse({"authenticated": False, "state": store.state.value}, status=401)

    try:
        me = fetch_current_user(store)
    except DuplicatorError as exc:
        logger.warning("Dropping session after profile failure: %s", exc)
        store.clear()
        request.session.pop("spotify_id", None)
        return JsonResponse({
            "authenticated": False,
            "state": store.state.value,
            "error": exc.code,
            "message": "Failed to load user profile. Please try logging in again.",
        }, status=401)

    return JsonResponse({
        "authenticated": True,
        "state": store.state.value,
        "user": me.to_dict(),
    })
