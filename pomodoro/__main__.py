"""Allow running the timer as a module: python -m pomodoro."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .app import PomodoroApp, make_app_icon
from .database.db import init_db
from .persistence import STORAGE_ERRORS
from .settings import load_settings

logger = logging.getLogger(__name__)


def init_storage() -> bool:
    """Create the storage tables; False when storage is unusable."""
    try:
        init_db()
    except STORAGE_ERRORS as exc:
        logger.warning("storage unavailable, timer state will not persist: %s", exc)
        return False
    return True


def main() -> None:
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, str(settings.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_storage()

    app = QApplication(sys.argv)
    app.setApplicationName("Pomodoro Timer")
    app.setOrganizationName("PomodoroTimer")
    app.setWindowIcon(make_app_icon())

    window = PomodoroApp(settings)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
