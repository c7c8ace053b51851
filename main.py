import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

ROOT = Path(__file__).resolve().parent
SRC_DIR = ROOT / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from core.config import AppConfig
from core.state import AppState, Notify
from library.metadata import LocalMetadataService
from playlist.service import LocalPlaylistService
from ui.main_window import MainWindow

logger = logging.getLogger("playlist_preview")


def configure_logging(config: AppConfig) -> None:
    level = getattr(logging, config.log_level, None)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def init_app_state(config: AppConfig) -> AppState:
    app_state = AppState(config)

    if not Path(config.default_cover).is_file():
        app_state.queued_notifications.append(
            Notify(message=f"Default cover image missing: {config.default_cover}", notify_type="warn")
        )

    return app_state


def main() -> int:
    config = AppConfig.from_env()
    configure_logging(config)

    qt_app = QApplication(sys.argv)

    app_state = init_app_state(config)
    main_window = MainWindow(
        app_state,
        playlist_service=LocalPlaylistService.from_config(config),
        metadata_service=LocalMetadataService(),
    )
    main_window.show()

    logger.info("Playlist Preview started")
    return qt_app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
