"""
gui_mainwindow.py - GUI Main Window

A single "Remove Text" panel: search files, edit an ordered list of
removal rules, preview the new names and execute.
"""

from pathlib import Path
from typing import Optional, List

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QLabel, QLineEdit, QPushButton, QCheckBox, QComboBox, QListWidget,
    QTableWidget, QTableWidgetItem, QProgressBar, QFileDialog,
    QMessageBox, QHeaderView, QGroupBox,
)
from PySide6.QtCore import Slot
from PySide6.QtGui import QColor

from rules import (
    FileItem, RemovalRule, RemovePosition, RenameOptions, RenamePlan,
    RenameResult, RuleFileError, load_rules, save_rules,
)
from .gui_workers import ScanWorker, PlanWorker, RenameWorker

RULE_FILE_FILTER = "Rule files (*.json);;All files (*)"

COLOR_CONFLICT = QColor(200, 150, 0)
COLOR_RENAME = QColor(0, 150, 0)
COLOR_UNCHANGED = QColor(150, 150, 150)


class RemoveTab(QWidget):
    """Remove Text panel"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.files: List[FileItem] = []
        self.rules: List[RemovalRule] = []
        self.plan: Optional[RenamePlan] = None
        self.scan_worker: Optional[ScanWorker] = None
        self.plan_worker: Optional[PlanWorker] = None
        self.rename_worker: Optional[RenameWorker] = None

        self._init_ui()

    def _init_ui(self):
        layout = QVBoxLayout(self)
        layout.addWidget(self._build_search_group())
        layout.addWidget(self._build_rules_group())

        self.preview_btn = QPushButton("Preview")
        self.preview_btn.clicked.connect(self._do_preview)
        self.preview_btn.setEnabled(False)
        layout.addWidget(self.preview_btn)

        # Results table
        self.table = QTableWidget()
        self.table.setColumnCount(4)
        self.table.setHorizontalHeaderLabels(["Original Name", "New Name", "Status", "Folder"])
        header = self.table.horizontalHeader()
        header.setSectionResizeMode(0, QHeaderView.ResizeMode.Stretch)
        header.setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)
        header.setSectionResizeMode(2, QHeaderView.ResizeMode.ResizeToContents)
        header.setSectionResizeMode(3, QHeaderView.ResizeMode.Stretch)
        self.table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        layout.addWidget(self.table, 1)

        bottom_layout = QHBoxLayout()
        self.progress_bar = QProgressBar()
        self.progress_bar.setVisible(False)
        bottom_layout.addWidget(self.progress_bar, 1)

        self.execute_btn = QPushButton("Execute Rename")
        self.execute_btn.clicked.connect(self._do_execute)
        self.execute_btn.setEnabled(False)
        self.execute_btn.setStyleSheet("QPushButton { background-color: #4CAF50; color: white; font-weight: bold; padding: 8px 16px; }")
        bottom_layout.addWidget(self.execute_btn)
        layout.addLayout(bottom_layout)

        self.status_label = QLabel("")
        layout.addWidget(self.status_label)

    def _build_search_group(self) -> QGroupBox:
        group = QGroupBox("Files")
        grid = QGridLayout(group)

        grid.addWidget(QLabel("Directory:"), 0, 0)
        self.dir_edit = QLineEdit()
        self.dir_edit.setPlaceholderText("Select directory...")
        grid.addWidget(self.dir_edit, 0, 1)
        self.browse_btn = QPushButton("Browse...")
        self.browse_btn.clicked.connect(self._browse_directory)
        grid.addWidget(self.browse_btn, 0, 2)

        grid.addWidget(QLabel("Name contains:"), 1, 0)
        self.keyword_edit = QLineEdit()
        self.keyword_edit.setPlaceholderText("Leave empty to match all files")
        grid.addWidget(self.keyword_edit, 1, 1, 1, 2)

        options_layout = QHBoxLayout()
        self.keyword_case_check = QCheckBox("Case Sensitive")
        self.recursive_check = QCheckBox("Include Subfolders")
        self.recursive_check.setChecked(True)
        self.hidden_check = QCheckBox("Include Hidden Files")
        options_layout.addWidget(self.keyword_case_check)
        options_layout.addWidget(self.recursive_check)
        options_layout.addWidget(self.hidden_check)
        options_layout.addStretch()
        grid.addLayout(options_layout, 2, 0, 1, 3)

        self.search_btn = QPushButton("Search")
        self.search_btn.clicked.connect(self._do_search)
        grid.addWidget(self.search_btn, 3, 0, 1, 3)
        return group

    def _build_rules_group(self) -> QGroupBox:
        group = QGroupBox("Removal Rules (applied top to bottom)")
        grid = QGridLayout(group)

        grid.addWidget(QLabel("Remove:"), 0, 0)
        self.text_edit = QLineEdit()
        self.text_edit.setPlaceholderText("Text to remove")
        self.text_edit.returnPressed.connect(self._add_rule)
        grid.addWidget(self.text_edit, 0, 1)

        self.position_combo = QComboBox()
        for position in RemovePosition:
            self.position_combo.addItem(position.value.capitalize(), position)
        grid.addWidget(self.position_combo, 0, 2)

        self.add_rule_btn = QPushButton("Add")
        self.add_rule_btn.clicked.connect(self._add_rule)
        grid.addWidget(self.add_rule_btn, 0, 3)

        flags_layout = QHBoxLayout()
        self.rule_case_check = QCheckBox("Case Sensitive")
        self.rule_case_check.setChecked(True)
        self.keep_ext_check = QCheckBox("Keep Extension")
        self.keep_ext_check.setChecked(True)
        flags_layout.addWidget(self.rule_case_check)
        flags_layout.addWidget(self.keep_ext_check)
        flags_layout.addStretch()
        grid.addLayout(flags_layout, 1, 0, 1, 4)

        self.rule_list = QListWidget()
        self.rule_list.setMaximumHeight(120)
        grid.addWidget(self.rule_list, 2, 0, 1, 4)

        buttons = QHBoxLayout()
        for label, slot in (
            ("Delete", self._delete_rule),
            ("Move Up", lambda: self._move_rule(-1)),
            ("Move Down", lambda: self._move_rule(1)),
            ("Load...", self._load_rules),
            ("Save...", self._save_rules),
        ):
            btn = QPushButton(label)
            btn.clicked.connect(slot)
            buttons.addWidget(btn)
        buttons.addStretch()
        grid.addLayout(buttons, 3, 0, 1, 4)
        return group

    # --- rules ---

    def _refresh_rule_list(self, select: int = -1):
        self.rule_list.clear()
        for i, rule in enumerate(self.rules, 1):
            self.rule_list.addItem(f"{i}. {rule.describe()}")
        if 0 <= select < len(self.rules):
            self.rule_list.setCurrentRow(select)
        self._invalidate_plan()

    def _add_rule(self):
        text = self.text_edit.text()
        if not text:
            QMessageBox.warning(self, "Warning", "Please enter the text to remove")
            return
        self.rules.append(RemovalRule(
            target_text=text,
            position=self.position_combo.currentData(),
            case_sensitive=self.rule_case_check.isChecked(),
            ignore_extension=self.keep_ext_check.isChecked(),
        ))
        self.text_edit.clear()
        self._refresh_rule_list(len(self.rules) - 1)

    def _delete_rule(self):
        row = self.rule_list.currentRow()
        if 0 <= row < len(self.rules):
            del self.rules[row]
            self._refresh_rule_list(min(row, len(self.rules) - 1))

    def _move_rule(self, offset: int):
        row = self.rule_list.currentRow()
        target = row + offset
        if 0 <= row < len(self.rules) and 0 <= target < len(self.rules):
            self.rules[row], self.rules[target] = self.rules[target], self.rules[row]
            self._refresh_rule_list(target)

    def _load_rules(self):
        path, _ = QFileDialog.getOpenFileName(self, "Load Rules", "", RULE_FILE_FILTER)
        if not path:
            return
        try:
            self.rules = load_rules(Path(path))
        except RuleFileError as e:
            QMessageBox.critical(self, "Error", str(e))
            return
        self._refresh_rule_list()
        self.status_label.setText(f"Loaded {len(self.rules)} rules")

    def _save_rules(self):
        if not self.rules:
            QMessageBox.warning(self, "Warning", "There are no rules to save")
            return
        path, _ = QFileDialog.getSaveFileName(self, "Save Rules", "rules.json", RULE_FILE_FILTER)
        if not path:
            return
        try:
            save_rules(self.rules, Path(path))
        except OSError as e:
            QMessageBox.critical(self, "Error", f"Failed to save rules: {e}")
            return
        self.status_label.setText(f"Saved {len(self.rules)} rules to {path}")

    def _current_options(self) -> RenameOptions:
        return RenameOptions(
            recursive=self.recursive_check.isChecked(),
            include_hidden=self.hidden_check.isChecked(),
        )

    def _invalidate_plan(self):
        """Rules changed: the previous preview no longer applies"""
        self.plan = None
        self.execute_btn.setEnabled(False)
        self.preview_btn.setEnabled(bool(self.files) and bool(self.rules))

    # --- search ---

    def _browse_directory(self):
        directory = QFileDialog.getExistingDirectory(self, "Select Directory")
        if directory:
            self.dir_edit.setText(directory)

    def _do_search(self):
        directory = self.dir_edit.text().strip()
        if not directory:
            QMessageBox.warning(self, "Warning", "Please select a directory first")
            return

        path = Path(directory)
        if not path.is_dir():
            QMessageBox.warning(self, "Warning", f"Directory does not exist: {directory}")
            return

        self.search_btn.setEnabled(False)
        self.search_btn.setText("Searching...")
        self.preview_btn.setEnabled(False)
        self.execute_btn.setEnabled(False)
        self.progress_bar.setVisible(True)
        self.progress_bar.setRange(0, 0)

        self.scan_worker = ScanWorker(
            path,
            self._current_options(),
            keyword=self.keyword_edit.text(),
            case_sensitive=self.keyword_case_check.isChecked(),
        )
        self.scan_worker.progress.connect(self._on_scan_progress)
        self.scan_worker.finished.connect(self._on_scan_finished)
        self.scan_worker.error.connect(self._on_scan_error)
        self.scan_worker.start()

    @Slot(str)
    def _on_scan_progress(self, msg: str):
        self.status_label.setText(msg[-80:])

    @Slot(list)
    def _on_scan_finished(self, files: List[FileItem]):
        self.files = files
        self.search_btn.setEnabled(True)
        self.search_btn.setText("Search")
        self.progress_bar.setVisible(False)

        self.table.setRowCount(len(files))
        base_dir = Path(self.dir_edit.text()).resolve()
        for i, f in enumerate(files):
            self.table.setItem(i, 0, QTableWidgetItem(f.name))
            self.table.setItem(i, 1, QTableWidgetItem(""))
            self.table.setItem(i, 2, QTableWidgetItem(""))
            try:
                folder = str(f.path.parent.relative_to(base_dir))
            except ValueError:
                folder = str(f.path.parent)
            self.table.setItem(i, 3, QTableWidgetItem(folder))

        self._invalidate_plan()
        if files:
            self.status_label.setText(f"Found {len(files)} files")
        else:
            self.status_label.setText("No matching files found")

    @Slot(str)
    def _on_scan_error(self, error: str):
        self.search_btn.setEnabled(True)
        self.search_btn.setText("Search")
        self.progress_bar.setVisible(False)
        QMessageBox.critical(self, "Error", f"Search failed: {error}")

    # --- preview ---

    def _do_preview(self):
        if not self.rules:
            QMessageBox.warning(self, "Warning", "Please add at least one rule")
            return

        self.preview_btn.setEnabled(False)
        self.preview_btn.setText("Generating...")

        self.plan_worker = PlanWorker(self.files, self.rules, self._current_options())
        self.plan_worker.finished.connect(self._on_plan_finished)
        self.plan_worker.error.connect(self._on_plan_error)
        self.plan_worker.start()

    @Slot(object)
    def _on_plan_finished(self, plan: RenamePlan):
        self.plan = plan
        self.preview_btn.setEnabled(True)
        self.preview_btn.setText("Preview")

        if plan.errors:
            QMessageBox.warning(self, "Warning", "\n".join(plan.errors))
            return

        op_map = {str(op.src): op for op in plan.ops}
        for i, f in enumerate(self.files):
            op = op_map.get(str(f.path))
            if op is None:
                new_name, status, color = f.name, "No Change", COLOR_UNCHANGED
            elif op.note:
                new_name, status, color = op.dst.name, "Conflict Resolved", COLOR_CONFLICT
            else:
                new_name, status, color = op.dst.name, "Will Rename", COLOR_RENAME

            status_item = QTableWidgetItem(status)
            status_item.setForeground(color)
            self.table.setItem(i, 1, QTableWidgetItem(new_name))
            self.table.setItem(i, 2, status_item)

        if plan.valid_ops:
            self.execute_btn.setEnabled(True)
            self.status_label.setText(
                f"Will perform {plan.total_count} rename operations "
                f"(conflict resolutions: {plan.conflict_count}, skipped: {len(plan.warnings)})"
            )
        else:
            self.status_label.setText("No files need renaming")

    @Slot(str)
    def _on_plan_error(self, error: str):
        self.preview_btn.setEnabled(True)
        self.preview_btn.setText("Preview")
        QMessageBox.critical(self, "Error", f"Failed to generate preview: {error}")

    # --- execute ---

    def _do_execute(self):
        if not self.plan or not self.plan.valid_ops:
            return

        reply = QMessageBox.question(
            self, "Confirm",
            f"Are you sure you want to execute {self.plan.total_count} rename operations?\n\nThis action cannot be undone!",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        )
        if reply != QMessageBox.StandardButton.Yes:
            return

        self.execute_btn.setEnabled(False)
        self.execute_btn.setText("Executing...")
        self.preview_btn.setEnabled(False)
        self.search_btn.setEnabled(False)
        self.progress_bar.setVisible(True)
        self.progress_bar.setRange(0, self.plan.total_count * 2)

        self.rename_worker = RenameWorker(self.plan, dry_run=False)
        self.rename_worker.progress.connect(self._on_rename_progress)
        self.rename_worker.finished.connect(self._on_rename_finished)
        self.rename_worker.error.connect(self._on_rename_error)
        self.rename_worker.start()

    @Slot(int, int, str)
    def _on_rename_progress(self, current: int, total: int, msg: str):
        self.progress_bar.setValue(current)
        self.status_label.setText(msg)

    @Slot(object)
    def _on_rename_finished(self, result: RenameResult):
        self.execute_btn.setText("Execute Rename")
        self.search_btn.setEnabled(True)
        self.progress_bar.setVisible(False)

        msg = f"Rename complete!\n\nSuccess: {result.success_count}\nFailed: {result.failed_count}"
        if result.failed_count > 0:
            msg += "\n\nFailure Details:\n"
            for op, error in result.failed[:5]:
                msg += f"  {op.src.name}: {error}\n"
            if len(result.failed) > 5:
                msg += f"  ... and {len(result.failed) - 5} more failures"
        QMessageBox.information(self, "Complete", msg)

        # Names on disk changed, the file list must be searched again
        self.files = []
        self.table.setRowCount(0)
        self._invalidate_plan()
        self.status_label.setText("Complete")

    @Slot(str)
    def _on_rename_error(self, error: str):
        self.execute_btn.setEnabled(True)
        self.execute_btn.setText("Execute Rename")
        self.preview_btn.setEnabled(True)
        self.search_btn.setEnabled(True)
        self.progress_bar.setVisible(False)
        QMessageBox.critical(self, "Error", f"Execution failed: {error}")


class MainWindow(QMainWindow):
    """Main window"""

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Batch Rename Tool - Remove Text")
        self.setMinimumSize(800, 700)

        self.remove_tab = RemoveTab()
        self.setCentralWidget(self.remove_tab)

        self.statusBar().showMessage("Ready")
