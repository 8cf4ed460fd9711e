# duplicator/views/auth.py
'''
This module handles the authentication flow for Spotify integration.
 - Redirects users to Spotify for login (consent dialog always shown).
 - Handles the callback from Spotify after user login.
 - Exchanges the authorization code for an access token kept in the session.
 - Logs the user out by dropping the stored token.
A failed callback is logged and the user simply lands back on the logged-out screen.
'''

import logging

from django.conf import settings
from django.http import HttpResponseBadRequest, HttpResponseRedirect, JsonResponse
from django.utils.html import escape
from django.views.decorators.http import require_GET, require_POST

from ..errors import DuplicatorError, InvalidTransition
from ..services import auth as svc
from ..services.playlists import fetch_current_user
from ..session import TokenStore
from ..state import SessionState

logger = logging.getLogger(__name__)

@require_GET
def login_redirect(request):
    store = TokenStore(request.session)
    state = svc.generate_oauth_state()
    svc.save_oauth_state(request.session, state)
    try:
        store.advance(SessionState.AUTHENTICATING)
    except InvalidTransition as exc:
        return JsonResponse({"error": exc.code, "message": exc.message}, status=exc.status)
    url = svc.build_authorization_url(
        settings.SPOTIFY_CLIENT_ID,
        settings.SPOTIFY_REDIRECT_URI,
        svc.SCOPES,
        state=state,
    )
    return HttpResponseRedirect(url)

@require_GET
def auth_callback(request):
    if "error" in request.GET:
        # e.g. the user cancelled a re-login; an existing token is still good
        TokenStore(request.session).resume()
        return HttpResponseBadRequest(f"Spotify auth error: {escape(request.GET['error'])}")
    if not svc.validate_oauth_state(request.session, request.GET.get("state")):
        return HttpResponseBadRequest("Invalid OAuth state")
    code = request.GET.get("code")
    if not code:
        return HttpResponseBadRequest("No authorization code")

    store = TokenStore(request.session)
    try:
        svc.exchange_code_for_token(code, store)
        me = fetch_current_user(store)
    except DuplicatorError:
        logger.exception("Error during auth callback processing")
        _logout(request)
        return HttpResponseRedirect(settings.FRONTEND_APP_URL)

    request.session["spotify_id"] = me.id
    store.advance(SessionState.READY)
    logger.info("User %s connected", me.id)
    return HttpResponseRedirect(settings.FRONTEND_APP_URL)

def _logout(request):
    TokenStore(request.session).clear()
    request.session.pop("spotify_id", None)

@require_POST
def logout(request):
    _logout(request)
    return JsonResponse({"success": True})

@require_POST
def logout_form(request):
    _logout(request)
    return HttpResponseRedirect("/")
