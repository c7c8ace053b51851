from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QLabel, QPushButton, QProgressBar,
    QHBoxLayout, QStackedWidget, QFrame
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QShortcut, QKeySequence
import logging

from core.duration import SPACED, format_duration
from core.metadata_fetcher import MetadataDisplay, MetadataFetcher
from core.playlist_submission import PlaylistSubmission, qt_scheduler
from ui.dialogs.folder_dialog import QtFolderDialog
from ui.widgets.duration_input import DurationInput
from ui.widgets.folder_button import FolderButton
from ui.widgets.metadata_panel import MetadataPanel
from ui.widgets.song_list_widget import SongListWidget
from ui.widgets.toast import ToastManager
from ui.workers.service_call import ThreadTaskRunner

logger = logging.getLogger(__name__)

PAGE_FORM = 0
PAGE_LOADING = 1
PAGE_RESULTS = 2


class MainWindow(QMainWindow):
    def __init__(self, app_state, playlist_service, metadata_service, folder_dialog=None,
                 runner=None, scheduler=qt_scheduler):
        super().__init__()
        self.setWindowTitle("Playlist Preview")
        self.resize(900, 600)
        self.app_state = app_state
        self.folder_dialog = folder_dialog or QtFolderDialog(self)
        self.default_cover = app_state.config.default_cover
        self.toast_timeout_ms = app_state.config.toast_timeout_ms

        self.runner = runner or ThreadTaskRunner(self)

        self.submission = PlaylistSubmission(app_state, playlist_service, self.runner, scheduler, parent=self)
        self.fetcher = MetadataFetcher(app_state, metadata_service, self.runner, parent=self)

        self.submission.loadingStarted.connect(self._on_loading_started)
        self.submission.loadingFinished.connect(self._on_loading_finished)
        self.submission.playlistReady.connect(self._on_playlist_ready)
        self.fetcher.metadataReady.connect(self._on_metadata_ready)

        self.app_state.notification.connect(self._on_notify)
        self.app_state.reset_requested.connect(self.reload_view)

        # --- Shortcuts ---
        QShortcut(QKeySequence("Return"), self, activated=self._on_enter)
        QShortcut(QKeySequence("Enter"), self, activated=self._on_enter)
        QShortcut(QKeySequence("Escape"), self, activated=self._on_escape)

        self.toasts = None
        self.reload_view()
        self.show_queued_notifications()
        self._apply_styles()

    # ------------------ view construction ------------------
    def reload_view(self):
        """Throws away every page and rebuilds them from the current state."""
        if self.toasts is not None:
            self.toasts.clear()

        # setCentralWidget schedules the previous one for deletion
        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)

        layout = QVBoxLayout(self.central_widget)
        self.pages = QStackedWidget()
        self.pages.addWidget(self._build_form_page())
        self.pages.addWidget(self._build_loading_page())
        self.pages.addWidget(self._build_results_page())
        layout.addWidget(self.pages)

        self.toasts = ToastManager(self.central_widget)
        self.pages.setCurrentIndex(PAGE_FORM)

    def _build_form_page(self) -> QWidget:
        page = QWidget()
        col = QVBoxLayout(page)
        col.setSpacing(18)
        col.addStretch(1)

        title = QLabel("How long should the playlist be?")
        title.setObjectName("Heading")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        col.addWidget(title)

        self.duration_input = DurationInput()
        self.duration_input.durationChanged.connect(lambda d: self.app_state.replace_ui(duration=d))
        row = QHBoxLayout()
        row.addStretch(1)
        row.addWidget(self.duration_input)
        row.addStretch(1)
        col.addLayout(row)

        self.folder_button = FolderButton(self.app_state, self.folder_dialog)
        col.addWidget(self.folder_button, 0, Qt.AlignmentFlag.AlignHCenter)

        self.btn_submit = QPushButton("Create playlist")
        self.btn_submit.setObjectName("submit")
        self.btn_submit.clicked.connect(self.submit)
        col.addWidget(self.btn_submit, 0, Qt.AlignmentFlag.AlignHCenter)

        col.addStretch(1)
        return page

    def _build_loading_page(self) -> QWidget:
        page = QWidget()
        col = QVBoxLayout(page)
        col.addStretch(1)

        self.loading_label = QLabel("Building playlist…")
        self.loading_label.setObjectName("LoadingLabel")
        self.loading_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self.loading_bar = QProgressBar()
        self.loading_bar.setObjectName("LoadingBar")
        self.loading_bar.setTextVisible(False)
        self.loading_bar.setRange(0, 0)   # indeterminate

        col.addWidget(self.loading_label)
        col.addWidget(self.loading_bar)
        col.addStretch(1)
        return page

    def _build_results_page(self) -> QWidget:
        page = QWidget()
        col = QVBoxLayout(page)

        summary = QHBoxLayout()
        self.lbl_achieved = QLabel("")
        self.lbl_achieved.setObjectName("Achieved")
        self.lbl_requested = QLabel("")
        self.lbl_requested.setObjectName("Requested")
        summary.addWidget(self.lbl_achieved)
        summary.addStretch(1)
        summary.addWidget(self.lbl_requested)
        col.addLayout(summary)

        self.song_list = SongListWidget()
        col.addWidget(self.song_list, 1)

        # confirmation panel
        self.confirm_panel = QFrame()
        self.confirm_panel.setObjectName("ConfirmPanel")
        confirm = QHBoxLayout(self.confirm_panel)
        confirm.addStretch(1)
        self.btn_cancel = QPushButton("Cancel")
        self.btn_cancel.clicked.connect(self.cancel)
        self.btn_continue = QPushButton("Continue")
        self.btn_continue.setObjectName("continue")
        self.btn_continue.clicked.connect(self.continue_to_metadata)
        confirm.addWidget(self.btn_cancel)
        confirm.addWidget(self.btn_continue)
        col.addWidget(self.confirm_panel)

        self.metadata_panel = MetadataPanel(self.default_cover)
        self.metadata_panel.setVisible(False)
        col.addWidget(self.metadata_panel)

        self.btn_start_over = QPushButton("Start over")
        self.btn_start_over.setVisible(False)
        self.btn_start_over.clicked.connect(self.cancel)
        col.addWidget(self.btn_start_over, 0, Qt.AlignmentFlag.AlignRight)
        return page

    # ------------------ actions ------------------
    def submit(self):
        ui = self.app_state.ui
        self.submission.submit(ui.duration, ui.folder)

    def cancel(self):
        self.submission.cancel()

    def continue_to_metadata(self):
        response = self.submission.response
        if response is None:
            return
        self.confirm_panel.setVisible(False)
        self.metadata_panel.setVisible(True)
        self.btn_start_over.setVisible(True)
        self.fetcher.start(response)

    def current_page(self) -> int:
        return self.pages.currentIndex()

    # ------------------ controller signals ------------------
    def _on_loading_started(self):
        # a new request supersedes whatever older Retry toasts would resend
        self.toasts.clear(actions_only=True)
        self.pages.setCurrentIndex(PAGE_LOADING)

    def _on_loading_finished(self):
        # failure lands back on the untouched form
        self.pages.setCurrentIndex(PAGE_FORM)

    def _on_playlist_ready(self, response, requested_seconds: int):
        self.song_list.set_response(response)
        self.lbl_achieved.setText(f"Playlist: {format_duration(response.achieved_seconds, SPACED)}")
        self.lbl_requested.setText(f"Requested: {format_duration(requested_seconds, SPACED)}")
        self.confirm_panel.setVisible(True)
        self.metadata_panel.setVisible(False)
        self.btn_start_over.setVisible(False)
        self.pages.setCurrentIndex(PAGE_RESULTS)

    def _on_metadata_ready(self, index: int, meta):
        self.song_list.set_metadata(index, meta)
        self.metadata_panel.show_display(MetadataDisplay.from_metadata(meta, self.default_cover))

    # ------------------ notifications ------------------
    def _on_notify(self, n):
        # n is core.state.Notify
        kind = (getattr(n, "notify_type", "info") or "info").lower()
        if kind == "warn":
            kind = "warning"

        msg = getattr(n, "message", "") or ""
        if not msg:
            return

        self.toasts.show_toast(
            msg,
            notify_type=kind,
            timeout_ms=self.toast_timeout_ms,
            action_text=getattr(n, "action_text", None),
            action=getattr(n, "action", None),
        )

    def show_queued_notifications(self):
        for n in self.app_state.queued_notifications:
            self._on_notify(n)
        self.app_state.queued_notifications.clear()

    # ------------------ shortcuts ------------------
    def _on_enter(self):
        page = self.current_page()
        if page == PAGE_FORM:
            self.submit()
        elif page == PAGE_RESULTS and self.confirm_panel.isVisible():
            self.continue_to_metadata()

    def _on_escape(self):
        if self.current_page() == PAGE_RESULTS:
            self.cancel()

    def closeEvent(self, event):
        if isinstance(self.runner, ThreadTaskRunner):
            self.runner.shutdown()
        super().closeEvent(event)

    def _apply_styles(self):
        self.setStyleSheet("""
            QLabel#Heading {
                font-size: 16px;
                color: #e5e7eb;
            }
            QLabel#LoadingLabel, QLabel#Achieved, QLabel#Requested {
                color: #9ca3af;
                font-size: 12px;
            }
            QLabel#SongTitle {
                font-size: 15px;
                color: #e5e7eb;
            }
            QProgressBar#LoadingBar {
                background: #0b1222;
                border: 1px solid #1f2937;
                border-radius: 999px;
                height: 10px;
            }
            QProgressBar#LoadingBar::chunk {
                border-radius: 999px;
                background: qlineargradient(
                    x1:0, y1:0, x2:1, y2:0,
                    stop:0 #38bdf8, stop:1 #22c55e
                );
            }
            QToolButton {
                border: 1px solid transparent;
                background: transparent;
                padding: 6px;
                border-radius: 10px;
            }
            QToolButton:hover {
                background: #0b1222;
                border-color: #1f2937;
            }
            QPushButton#submit, QPushButton#continue {
                padding: 6px 18px;
                border-radius: 10px;
                border: 1px solid #38bdf8;
            }
            """)
