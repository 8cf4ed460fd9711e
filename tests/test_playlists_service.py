import math

import pytest
from hypothesis import given, strategies as st

from duplicator.errors import (
    InvalidUrl,
    NoCredential,
    PlaylistCreateFailed,
    PlaylistUnavailable,
    TracksAddFailed,
    TracksFetchFailed,
    UserFetchFailed,
)
from duplicator.services import playlists as svc
from duplicator.session import TokenStore
from tests.support.stubs import make_items

_ALNUM = st.text(alphabet="abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789", min_size=1, max_size=30)


@pytest.mark.unit
@given(pid=_ALNUM, query=st.sampled_from(["", "?si=abc123", "?si=x&pt=y"]))
def test_parse_playlist_id_extracts_alphanumeric_id(pid, query):
    assert svc.parse_playlist_id(f"https://open.spotify.com/playlist/{pid}{query}") == pid


@pytest.mark.unit
@given(text=st.text().filter(lambda s: "playlist/" not in s))
def test_parse_playlist_id_rejects_anything_without_playlist_segment(text):
    with pytest.raises(InvalidUrl):
        svc.parse_playlist_id(text)


@pytest.mark.unit
@pytest.mark.parametrize("url", [
    "",
    "https://open.spotify.com/album/4aawyAB9vmqN3uQ7FjRGTy",
    "https://open.spotify.com/playlist/",
    "https://open.spotify.com/playlist/!!!",
])
def test_parse_playlist_id_invalid_examples(url):
    with pytest.raises(InvalidUrl):
        svc.parse_playlist_id(url)


@pytest.mark.unit
def test_parse_playlist_id_accepts_uri_style_and_locale_paths():
    assert svc.parse_playlist_id("https://open.spotify.com/intl-de/playlist/37i9dQZF1DX") == "37i9dQZF1DX"


@pytest.mark.unit
def test_calls_without_token_raise_no_credential(spotify):
    empty = TokenStore({})
    with pytest.raises(NoCredential):
        svc.fetch_playlist(empty, "p1")
    with pytest.raises(NoCredential):
        svc.fetch_current_user(empty)
    assert spotify.calls == []


@pytest.mark.unit
def test_fetch_playlist_sends_bearer_and_maps_fields(spotify, store):
    spotify.add_playlist("p1", name="Road Trip", items=make_items(3))
    ref = svc.fetch_playlist(store, "p1")

    assert ref.id == "p1"
    assert ref.name == "Road Trip"
    assert ref.owner_id == "owner1"
    assert ref.tracks_total == 3
    assert spotify.calls[0]["headers"]["Authorization"] == "Bearer access-123"


@pytest.mark.unit
def test_fetch_playlist_missing_is_unavailable(spotify, store):
    with pytest.raises(PlaylistUnavailable) as exc:
        svc.fetch_playlist(store, "nope")
    assert "public" in exc.value.message


@pytest.mark.unit
@pytest.mark.parametrize("n", [1, 99, 100, 101, 250, 300])
def test_fetch_all_tracks_pages_by_offset(spotify, store, n):
    spotify.add_playlist("p1", items=make_items(n))
    tracks = svc.fetch_all_tracks(store, "p1")

    pages = math.ceil(n / 100)
    assert spotify.track_page_offsets == [i * 100 for i in range(pages)]
    assert [t.uri for t in tracks] == spotify.uris_in("p1")
    params = spotify.requests_to("GET", r"/tracks$")[0]["params"]
    assert params["limit"] == 100
    assert "next" in params["fields"]


@pytest.mark.unit
def test_fetch_all_tracks_skips_null_tracks_without_breaking_pagination(spotify, store):
    spotify.add_playlist("p1", items=make_items(150, null_at={0, 99, 100, 149}))
    tracks = svc.fetch_all_tracks(store, "p1")

    assert len(tracks) == 146
    assert spotify.track_page_offsets == [0, 100]
    assert tracks[0].id == "t1"
    assert tracks[-1].id == "t148"


@pytest.mark.unit
def test_fetch_all_tracks_page_failure_discards_everything(spotify, store):
    spotify.add_playlist("p1", items=make_items(250))
    spotify.fail_track_pages = {1}
    with pytest.raises(TracksFetchFailed):
        svc.fetch_all_tracks(store, "p1")
    assert spotify.track_page_offsets == [0, 100]


@pytest.mark.unit
def test_fetch_current_user(spotify, store):
    user = svc.fetch_current_user(store)
    assert user.id == "user1"
    assert user.display_name == "Test User"
    assert user.avatar_url == "https://img/u.jpg"
    assert user.followers == 7


@pytest.mark.unit
def test_fetch_current_user_failure(spotify, store):
    spotify.me_status = 401
    with pytest.raises(UserFetchFailed):
        svc.fetch_current_user(store)


@pytest.mark.unit
def test_create_playlist_is_always_private(spotify, store):
    ref = svc.create_playlist(store, "user1", "Copy", "desc")
    call = spotify.requests_to("POST", r"/users/user1/playlists$")[0]
    assert call["json"] == {"name": "Copy", "description": "desc", "public": False}
    assert ref.id == "new1"
    assert ref.name == "Copy"


@pytest.mark.unit
def test_create_playlist_failure(monkeypatch, spotify, store):
    from tests.support.stubs import make_response

    monkeypatch.setattr(svc, "sp_post_json", lambda *a, **k: make_response(403, {"error": {}}))
    with pytest.raises(PlaylistCreateFailed):
        svc.create_playlist(store, "user1", "Copy", "desc")


@pytest.mark.unit
@pytest.mark.parametrize("m", [1, 100, 101, 250])
def test_add_tracks_batches_in_order(spotify, store, m):
    spotify.add_playlist("dest")
    uris = [f"spotify:track:t{i}" for i in range(m)]
    svc.add_tracks(store, "dest", uris)

    assert len(spotify.add_batches) == math.ceil(m / 100)
    assert all(0 < len(b) <= 100 for b in spotify.add_batches)
    assert [u for b in spotify.add_batches for u in b] == uris


@pytest.mark.unit
def test_add_tracks_with_no_uris_sends_nothing(spotify, store):
    svc.add_tracks(store, "dest", [])
    assert spotify.calls == []


@pytest.mark.unit
def test_add_tracks_failure_keeps_earlier_batches(spotify, store):
    spotify.add_playlist("dest")
    spotify.fail_add_batches = {1}
    uris = [f"spotify:track:t{i}" for i in range(250)]
    with pytest.raises(TracksAddFailed):
        svc.add_tracks(store, "dest", uris)

    assert len(spotify.add_batches) == 2
    assert spotify.uris_in("dest") == uris[:100]
