# duplicator/errors.py
'''
Error kinds surfaced to the user.
 - Each kind carries a stable `code`, a user-facing `message` and the HTTP status the views answer with.
 - Provider failures are deliberately coarse: not-found, forbidden and transport errors share one kind.
'''


class DuplicatorError(Exception):
    code = "duplicator_error"
    message = "Something went wrong. Please try again."
    status = 500

    def __init__(self, message: str | None = None):
        if message:
            self.message = message
        super().__init__(self.message)


class InvalidUrl(DuplicatorError):
    code = "invalid_url"
    message = "Invalid Spotify playlist URL"
    status = 400


class MissingUrl(DuplicatorError):
    code = "missing_url"
    message = "Please enter a Spotify playlist URL"
    status = 400


class AuthenticationFailure(DuplicatorError):
    code = "authentication_failed"
    message = "Failed to authenticate with Spotify"
    status = 401


class NoCredential(DuplicatorError):
    code = "no_credential"
    message = "No access token available"
    status = 401


class PlaylistUnavailable(DuplicatorError):
    code = "playlist_unavailable"
    message = "Failed to fetch playlist. Make sure the playlist is public or you have access to it."
    status = 404


class TracksFetchFailed(DuplicatorError):
    code = "tracks_fetch_failed"
    message = "Failed to fetch playlist tracks"
    status = 502


class UserFetchFailed(DuplicatorError):
    code = "user_fetch_failed"
    message = "Failed to fetch user profile"
    status = 502


class PlaylistCreateFailed(DuplicatorError):
    code = "playlist_create_failed"
    message = "Failed to create playlist"
    status = 502


class TracksAddFailed(DuplicatorError):
    code = "tracks_add_failed"
    message = "Failed to add tracks to playlist"
    status = 502


class DuplicationInProgress(DuplicatorError):
    code = "duplication_in_progress"
    message = "A duplication is already running for this session."
    status = 409


class InvalidTransition(DuplicatorError):
    code = "invalid_transition"
    message = "That action is not available right now."
    status = 409

    def __init__(self, current, target):
        self.current = current
        self.target = target
        # Detail stays in the exception text for logs; `message` keeps the user-facing default.
        Exception.__init__(self, f"Cannot move from {current.value} to {target.value}")


# Kinds after which the stored token cannot be trusted; the session is logged out.
AUTH_ERRORS = (AuthenticationFailure, NoCredential)
