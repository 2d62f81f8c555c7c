"""
gui_entry.py - GUI Entry

Launch PySide6 GUI application
"""

import sys

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt

from .gui_mainwindow import MainWindow


def main():
    """GUI main entry"""
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication(sys.argv)
    app.setApplicationName("Batch Rename Tool - Remove Text")
    app.setApplicationVersion("1.0.0")
    app.setStyle("Fusion")

    window = MainWindow()
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
