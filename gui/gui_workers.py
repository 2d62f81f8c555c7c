"""
gui_workers.py - GUI Worker Threads

Runs scanning, planning and renaming off the UI thread
"""

from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import QThread, Signal, QObject

from rules import (
    FileItem, RemovalRule, RenameOptions, RenamePlan,
    execute_rename, plan_remove_rename, scan_with_options,
)


class ScanWorker(QThread):
    """File scanning worker thread"""

    progress = Signal(str)          # Visited path
    finished = Signal(list)         # List[FileItem]
    error = Signal(str)

    def __init__(
        self,
        directory: Path,
        options: RenameOptions,
        keyword: str = "",
        case_sensitive: bool = True,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.directory = directory
        self.options = options
        self.keyword = keyword
        self.case_sensitive = case_sensitive
        self._cancelled = False

    def cancel(self):
        self._cancelled = True

    def run(self):
        try:
            def progress_callback(msg: str):
                if self._cancelled:
                    raise InterruptedError("Scan cancelled")
                self.progress.emit(msg)

            files = scan_with_options(
                self.directory,
                self.options,
                keyword=self.keyword,
                case_sensitive=self.case_sensitive,
                progress_callback=progress_callback,
            )
            self.finished.emit(files)
        except InterruptedError:
            self.finished.emit([])
        except Exception as e:
            self.error.emit(str(e))


class PlanWorker(QThread):
    """Rename plan generation worker thread"""

    finished = Signal(object)           # RenamePlan
    error = Signal(str)

    def __init__(
        self,
        files: List[FileItem],
        rules: List[RemovalRule],
        options: Optional[RenameOptions] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.files = files
        self.rules = list(rules)
        self.options = options or RenameOptions()

    def run(self):
        try:
            plan = plan_remove_rename(self.files, self.rules, self.options)
            self.finished.emit(plan)
        except Exception as e:
            self.error.emit(str(e))


class RenameWorker(QThread):
    """Rename execution worker thread"""

    progress = Signal(int, int, str)    # current, total, message
    finished = Signal(object)           # RenameResult
    error = Signal(str)

    def __init__(
        self,
        plan: RenamePlan,
        dry_run: bool = False,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.plan = plan
        self.dry_run = dry_run

    def run(self):
        try:
            def progress_callback(current: int, total: int, msg: str):
                self.progress.emit(current, total, msg)

            result = execute_rename(
                self.plan,
                dry_run=self.dry_run,
                progress_callback=progress_callback,
            )
            self.finished.emit(result)
        except Exception as e:
            self.error.emit(str(e))
