# duplicator/urls.py
from django.urls import path
from .views import auth, session, duplicate, root

urlpatterns = [
    # Root + health
    path("", root.root),
    path("health", root.health),

    # Auth
    path("auth/login", auth.login_redirect),
    path("auth/callback", auth.auth_callback),
    path("auth/logout", auth.logout),
    path("logout", auth.logout_form),

    # Session
    path("api/session", session.session_me),

    # Duplication
    path("api/duplicate", duplicate.duplicate_api),
    path("duplicate", duplicate.duplicate_form),
]
