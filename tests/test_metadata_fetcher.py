import base64

from core.metadata_fetcher import MetadataDisplay, MetadataFetcher
from core.models import PlaylistResponse, ServiceError, SongMetadata
from fakes import FakeMetadataService

DEFAULT_COVER = "/assets/default_cover.svg"

SONGS = ("/music/a.mp3", "/music/b.flac", "/music/c.ogg")

REPLIES = {
    "/music/a.mp3": ("Alpha", "Artist A", "Album A", None, "Unknown", 61),
    "/music/b.flac": ("Beta", "Artist B", "Album B", b"\x89PNG\r\n", "image/png", 3661),
    "/music/c.ogg": ("Gamma", "Artist C", "Album C", None, "Unknown", 59),
}


def _response():
    return PlaylistResponse(songs=SONGS, achieved_seconds=3781)


def test_one_request_per_song_in_order(app_state, runner):
    service = FakeMetadataService(REPLIES)
    fetcher = MetadataFetcher(app_state, service, runner)

    fetcher.start(_response())

    assert [call.args for call in runner.calls] == [(p,) for p in SONGS]
    runner.resolve_all()
    assert service.calls == list(SONGS)
    assert sorted(fetcher.results) == [0, 1, 2]


def test_last_resolved_reply_wins_the_shared_display(app_state, runner):
    fetcher = MetadataFetcher(app_state, FakeMetadataService(REPLIES), runner)
    shown = []
    fetcher.metadataReady.connect(lambda i, meta: shown.append(meta.title))

    fetcher.start(_response())
    # resolve out of list order: c, a, b
    runner.calls[2].resolve()
    runner.calls[0].resolve()
    runner.calls[1].resolve()

    assert shown == ["Gamma", "Alpha", "Beta"]
    index, meta = fetcher.displayed
    assert (index, meta.title) == (1, "Beta")

    # the song listed first can still be the one on display
    fetcher.start(_response())
    runner.calls[4].resolve()
    runner.calls[3].resolve()
    assert fetcher.displayed[1].title == "Alpha"


def test_results_are_kept_per_index(app_state, runner):
    fetcher = MetadataFetcher(app_state, FakeMetadataService(REPLIES), runner)
    fetcher.start(_response())
    runner.calls[1].resolve()
    runner.calls[0].resolve()

    assert fetcher.results[0].title == "Alpha"
    assert fetcher.results[1].title == "Beta"
    assert 2 not in fetcher.results


def test_failure_keeps_rendered_results_and_offers_retry(app_state, runner, notifications):
    service = FakeMetadataService(REPLIES, errors={"/music/b.flac": ServiceError("unreadable tag")})
    fetcher = MetadataFetcher(app_state, service, runner)
    failures = []
    fetcher.failed.connect(lambda i, err: failures.append((i, str(err))))

    fetcher.start(_response())
    runner.resolve_all()

    assert failures == [(1, "unreadable tag")]
    assert fetcher.results[0].title == "Alpha"
    assert fetcher.results[2].title == "Gamma"
    note = notifications[-1]
    assert note.notify_type == "error"
    assert note.action_text == "Retry"

    service.errors.clear()
    note.action()
    runner.calls[-1].resolve()
    assert fetcher.results[1].title == "Beta"
    assert fetcher.displayed[0] == 1


def test_reset_discards_outstanding_replies(app_state, runner):
    fetcher = MetadataFetcher(app_state, FakeMetadataService(REPLIES), runner)
    fetcher.start(_response())

    app_state.reset()
    runner.resolve_all()

    assert fetcher.results == {}
    assert fetcher.displayed is None


def test_display_uses_default_cover_when_absent():
    meta = SongMetadata.from_reply(REPLIES["/music/a.mp3"])
    display = MetadataDisplay.from_metadata(meta, DEFAULT_COVER)
    assert display.cover_source == DEFAULT_COVER
    assert display.duration == "1:01"


def test_display_builds_data_uri_from_cover_bytes():
    meta = SongMetadata.from_reply(REPLIES["/music/b.flac"])
    display = MetadataDisplay.from_metadata(meta, DEFAULT_COVER)
    payload = base64.b64encode(b"\x89PNG\r\n").decode("ascii")
    assert display.cover_source == f"data:image/png;base64,{payload}"
    assert display.duration == "1:01:01"
    assert (display.title, display.artist, display.album) == ("Beta", "Artist B", "Album B")
