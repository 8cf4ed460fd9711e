# duplicator/views/root.py
'''
This module provides the root and health check views for the duplicator app.
- The root view serves the logged-out landing page or, once connected, the duplicate form.
- The health view returns a JSON response indicating the service is operational.
'''

from django.http import HttpResponse, JsonResponse
from django.middleware.csrf import get_token
from django.utils.html import format_html

from ..session import TokenStore

_PAGE = """
      <html>
        <head><title>Playlist Duplicator</title></head>
        <body style="font-family: sans-serif; padding: 24px;">
          <h1>Playlist Duplicator</h1>
          {}
        </body>
      </html>
"""

_BUTTON = "display:inline-block;padding:10px 14px;background:#1DB954;color:#fff;text-decoration:none;border-radius:6px;border:0;"

def page(body) -> str:
    return format_html(_PAGE, body)

def _landing():
    return format_html(
        '<p>Copy any public Spotify playlist into your own library.</p>'
        '<a href="/auth/login" style="{}">Connect Spotify</a>',
        _BUTTON,
    )

def _form(request):
    csrf = get_token(request)
    return format_html(
        '<form method="post" action="/duplicate">'
        '<input type="hidden" name="csrfmiddlewaretoken" value="{}">'
        '<p><input name="playlist_url" placeholder="https://open.spotify.com/playlist/..." size="60" required></p>'
        '<p><input name="name" placeholder="New name (optional)" size="60"></p>'
        '<p><textarea name="description" placeholder="Description (optional)" cols="60"></textarea></p>'
        '<button type="submit" style="{}">Duplicate playlist</button>'
        '</form>'
        '<form method="post" action="/logout">'
        '<input type="hidden" name="csrfmiddlewaretoken" value="{}">'
        '<button type="submit">Log out</button>'
        '</form>',
        csrf, _BUTTON, csrf,
    )

def root(request):
    store = TokenStore(request.session)
    body = _form(request) if store.is_authenticated else _landing()
    return HttpResponse(page(body))

def health(_request):
    return JsonResponse({"ok": True})
