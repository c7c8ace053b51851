import pytest
from PySide6.QtCore import QCoreApplication, QEvent

from core.duration import Duration, HOURS, MINUTES, SECONDS
from core.models import ServiceError, UiState
from fakes import FakeFolderDialog, FakeMetadataService, FakePlaylistService
from ui.main_window import PAGE_FORM, PAGE_LOADING, PAGE_RESULTS, MainWindow
from ui.widgets.duration_input import DurationInput
from ui.widgets.metadata_panel import pixmap_from_source

SONGS = ["/music/one.mp3", "/music/sub/two.flac", "/music/three.ogg"]

META = {
    "/music/one.mp3": ("One", "A", "X", None, "Unknown", 59),
    "/music/sub/two.flac": ("Two", "B", "Y", None, "Unknown", 61),
    "/music/three.ogg": ("Three", "C", "Z", None, "Unknown", 3661),
}


@pytest.fixture()
def make_window(qapp, app_state, runner, scheduler):
    windows = []

    def _make(playlist=None, folder="/music"):
        playlist = playlist or FakePlaylistService(songs=SONGS, achieved=181)
        window = MainWindow(
            app_state,
            playlist_service=playlist,
            metadata_service=FakeMetadataService(META),
            folder_dialog=FakeFolderDialog(folder),
            runner=runner,
            scheduler=scheduler,
        )
        windows.append(window)
        return window, playlist

    yield _make

    for window in windows:
        window.close()
        window.deleteLater()
    QCoreApplication.sendPostedEvents(None, QEvent.DeferredDelete)


def test_duration_input_steppers_and_text(qapp):
    w = DurationInput()
    seen = []
    w.durationChanged.connect(seen.append)

    w.set_from_text(SECONDS, "59")
    w.set_from_text(MINUTES, "59")
    w.increment(SECONDS)
    assert w.value() == Duration(1, 0, 0)
    assert [w.text(u) for u in (HOURS, MINUTES, SECONDS)] == ["1", "0", "0"]

    w.decrement(SECONDS)
    assert w.value() == Duration(1, 0, 0)

    w.set_from_text(SECONDS, "a1b2")
    assert w.value().seconds == 59
    assert w.text(SECONDS) == "59"
    assert seen[-1] == Duration(1, 0, 59)


def test_duration_input_blank_field_reports_no_duration(qapp):
    w = DurationInput()
    w.set_from_text(MINUTES, "")
    assert w.duration() is None

    w.increment(MINUTES)
    assert w.duration() == Duration(0, 1, 0)


def test_end_to_end_playlist_then_metadata(qapp, app_state, runner, scheduler, make_window):
    window, playlist = make_window()

    window.duration_input.increment(MINUTES)
    window.duration_input.increment(MINUTES)
    window.folder_button.choose()
    assert window.folder_button.text() == "/music"

    window.submit()
    assert window.current_page() == PAGE_LOADING

    scheduler.fire()
    runner.resolve_all()

    assert playlist.calls == [{"time": 120, "path": "/music"}]
    assert window.current_page() == PAGE_RESULTS
    assert window.song_list.labels() == ["1. one.mp3", "2. two.flac", "3. three.ogg"]
    assert window.lbl_achieved.text() == "Playlist: 3m 1s"
    assert window.lbl_requested.text() == "Requested: 2m"
    assert not window.confirm_panel.isHidden()

    runner.calls.clear()
    window.continue_to_metadata()
    assert window.confirm_panel.isHidden()
    assert len(runner.calls) == 3

    runner.calls[0].resolve()
    runner.calls[2].resolve()
    runner.calls[1].resolve()
    assert window.metadata_panel.lbl_title.text() == "Two"
    assert window.metadata_panel.lbl_duration.text() == "1:01"
    assert window.metadata_panel.cover_source == app_state.config.default_cover


def test_submit_without_folder_shows_warning(qapp, app_state, runner, scheduler, make_window):
    window, playlist = make_window()

    window.duration_input.increment(SECONDS)
    window.submit()
    scheduler.fire()

    assert playlist.calls == []
    assert window.current_page() == PAGE_FORM
    assert [t.data.notify_type for t in window.toasts.toasts()] == ["warning"]


def test_cancel_reloads_view_and_ignores_late_reply(qapp, app_state, runner, scheduler, make_window):
    window, _ = make_window()
    window.duration_input.increment(HOURS)
    window.folder_button.choose()
    window.submit()
    scheduler.fire()
    runner.resolve_all()
    assert window.current_page() == PAGE_RESULTS

    window.continue_to_metadata()
    old_panel = window.metadata_panel
    window.cancel()

    assert window.current_page() == PAGE_FORM
    assert app_state.ui == UiState()
    assert window.duration_input.value() == Duration()
    assert window.folder_button.text() == "Choose folder"

    runner.resolve_all()
    assert window.metadata_panel is not old_panel
    assert window.metadata_panel.lbl_title.text() == ""


def test_playlist_failure_returns_to_form_with_retry(qapp, app_state, runner, scheduler, make_window):
    failing = FakePlaylistService(error=ServiceError("no audio files"))
    window, _ = make_window(playlist=failing)
    window.duration_input.increment(MINUTES)
    window.folder_button.choose()

    window.submit()
    scheduler.fire()
    runner.resolve_all()

    assert window.current_page() == PAGE_FORM
    assert window.duration_input.value() == Duration(0, 1, 0)
    toast = window.toasts.toasts()[0]
    assert toast.data.notify_type == "error"
    assert toast.btn_action is not None and toast.btn_action.text() == "Retry"


def test_invalid_cover_data_gives_empty_pixmap(qapp):
    assert pixmap_from_source("data:image/png;base64,@@@").isNull()


def test_new_submit_drops_stale_retry_toast(qapp, app_state, runner, scheduler, make_window):
    flaky = FakePlaylistService(songs=SONGS, achieved=181, error=ServiceError("disk busy"))
    window, _ = make_window(playlist=flaky)
    window.duration_input.increment(MINUTES)
    window.folder_button.choose()

    window.submit()
    scheduler.fire()
    runner.resolve_all()
    assert [t.has_action for t in window.toasts.toasts()] == [True]

    flaky.error = None
    window.submit()
    scheduler.fire()
    runner.resolve_all()

    assert window.current_page() == PAGE_RESULTS
    assert window.toasts.toasts() == []
    assert len(flaky.calls) == 2
