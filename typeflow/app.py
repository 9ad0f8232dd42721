"""Application entry point and setup for the TypeFlow typing trainer."""

import logging
import sys

from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import QApplication

from typeflow.core.texts import TextRepository
from typeflow.ui.main_window import MainWindow


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Load the practice texts and start the main window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("TypeFlow")
    app.setApplicationDisplayName("TypeFlow")

    texts = TextRepository()
    logging.info("Loaded %d text sets", len(texts.all()))

    window = MainWindow(texts=texts)
    screen = QGuiApplication.primaryScreen()
    if screen is not None:
        geometry = screen.availableGeometry()
        window.resize(min(1200, geometry.width()), min(760, geometry.height()))
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
