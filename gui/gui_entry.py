"""
gui_entry.py - GUI Entry

Launch PySide6 GUI application
"""

import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt, QStandardPaths

from core import SettingsStore
from core.config import SETTINGS_DIR_NAME, SETTINGS_FILE_NAME
from .gui_mainwindow import MainWindow


def settings_path() -> Path:
    """Location of the settings database"""
    data_dir = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.GenericDataLocation)
    return Path(data_dir) / SETTINGS_DIR_NAME / SETTINGS_FILE_NAME


def main():
    """GUI main entry"""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")

    # High DPI support
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication(sys.argv)
    app.setApplicationName("File Rename Plus")
    app.setApplicationVersion("1.0.0")

    # Set style
    app.setStyle("Fusion")

    window = MainWindow(SettingsStore(settings_path()))
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
