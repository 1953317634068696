"""
gui_mainwindow.py - GUI Main Window

File list on the left, live preview on the right, options for the current
mode below. Previews are regenerated after a short typing pause.
"""

from pathlib import Path
from typing import List, Optional

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QLabel, QLineEdit, QPushButton, QCheckBox, QComboBox, QSpinBox,
    QListWidget, QTableWidget, QTableWidgetItem, QProgressBar, QFileDialog,
    QMessageBox, QHeaderView, QGroupBox, QStackedWidget, QApplication,
)
from PySide6.QtCore import Qt, QTimer, Slot
from PySide6.QtGui import QColor, QKeySequence, QPalette, QShortcut

from core import (
    AppMode, FileRecord, FindReplaceParams, IterationParams, RenameParams,
    RenamePreview, RenameSession, RenameToolError, Settings, SettingsStore,
    find_denied, DEBOUNCE_MS, MAX_FILES, MAX_PADDING, MAX_PATTERN_LENGTH,
    MAX_TEMPLATE_LENGTH, PLACEHOLDER,
)
from .gui_workers import ScanWorker, RenameWorker

# Status colors
COLOR_ERROR = QColor(255, 102, 102)
COLOR_SUCCESS = QColor(77, 255, 128)
COLOR_INFO = QColor(77, 204, 255)
COLOR_MUTED = QColor(128, 128, 128)
COLOR_CONFLICT = QColor(255, 77, 77)

WINDOW_WIDTH = 900
WINDOW_HEIGHT = 650


def build_palette(dark: bool) -> QPalette:
    """Fusion palette for the dark or light theme"""
    if not dark:
        return QApplication.style().standardPalette()

    palette = QPalette()
    base = QColor(30, 30, 30)
    window = QColor(45, 45, 45)
    text = QColor(220, 220, 220)
    palette.setColor(QPalette.ColorRole.Window, window)
    palette.setColor(QPalette.ColorRole.WindowText, text)
    palette.setColor(QPalette.ColorRole.Base, base)
    palette.setColor(QPalette.ColorRole.AlternateBase, window)
    palette.setColor(QPalette.ColorRole.Text, text)
    palette.setColor(QPalette.ColorRole.Button, window)
    palette.setColor(QPalette.ColorRole.ButtonText, text)
    palette.setColor(QPalette.ColorRole.ToolTipBase, window)
    palette.setColor(QPalette.ColorRole.ToolTipText, text)
    palette.setColor(QPalette.ColorRole.Highlight, QColor(42, 130, 218))
    palette.setColor(QPalette.ColorRole.HighlightedText, QColor(255, 255, 255))
    palette.setColor(QPalette.ColorRole.PlaceholderText, COLOR_MUTED)
    return palette


class MainWindow(QMainWindow):
    """Main window"""

    def __init__(self, store: SettingsStore):
        super().__init__()
        self.store = store
        self.settings: Settings = store.load()
        self.session = RenameSession(max_files=MAX_FILES)
        self.previews: List[RenamePreview] = []
        self.scan_worker: Optional[ScanWorker] = None
        self.rename_worker: Optional[RenameWorker] = None

        self.setWindowTitle("File Rename Plus")
        self.resize(WINDOW_WIDTH, WINDOW_HEIGHT)

        # Debounced preview regeneration
        self.preview_timer = QTimer(self)
        self.preview_timer.setSingleShot(True)
        self.preview_timer.setInterval(DEBOUNCE_MS)
        self.preview_timer.timeout.connect(self._generate_preview)

        self._init_ui()
        self._init_shortcuts()
        self._apply_theme()
        self._set_status("Click 'Add Folder' or press Ctrl+O")

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _init_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)

        # Header
        header = QHBoxLayout()
        title = QLabel("File Rename Plus")
        font = title.font()
        font.setPointSize(18)
        title.setFont(font)
        header.addWidget(title)
        header.addStretch()

        self.theme_btn = QPushButton()
        self.theme_btn.clicked.connect(self._toggle_theme)
        header.addWidget(self.theme_btn)

        header.addWidget(QLabel("Mode:"))
        self.mode_combo = QComboBox()
        for mode in AppMode:
            self.mode_combo.addItem(mode.label, mode)
        self.mode_combo.setMinimumWidth(200)
        self.mode_combo.currentIndexChanged.connect(self._on_mode_changed)
        header.addWidget(self.mode_combo)
        layout.addLayout(header)

        # File list and preview
        content = QHBoxLayout()
        content.addWidget(self._build_file_group(), 1)
        content.addWidget(self._build_preview_group(), 1)
        layout.addLayout(content, 1)

        # Options for the current mode
        self.options_stack = QStackedWidget()
        self.options_stack.addWidget(self._build_find_replace_options())
        self.options_stack.addWidget(self._build_iteration_options())

        options_row = QHBoxLayout()
        options_row.addWidget(self.options_stack, 1)
        self.execute_btn = QPushButton("Execute (Ctrl+Enter)")
        self.execute_btn.clicked.connect(self._do_execute)
        self.execute_btn.setStyleSheet("QPushButton { background-color: #4CAF50; color: white; font-weight: bold; padding: 8px 16px; }")
        options_row.addWidget(self.execute_btn)
        layout.addLayout(options_row)

        # Progress and status
        self.progress_bar = QProgressBar()
        self.progress_bar.setVisible(False)
        layout.addWidget(self.progress_bar)

        self.status_label = QLabel("")
        layout.addWidget(self.status_label)

    def _build_file_group(self) -> QGroupBox:
        group = QGroupBox("Files")
        layout = QVBoxLayout(group)

        top = QHBoxLayout()
        self.add_btn = QPushButton("Add Folder (Ctrl+O)")
        self.add_btn.clicked.connect(self._add_folder)
        top.addWidget(self.add_btn)
        self.clear_btn = QPushButton("Clear")
        self.clear_btn.clicked.connect(self._clear_files)
        top.addWidget(self.clear_btn)
        top.addStretch()
        layout.addLayout(top)

        self.file_list = QListWidget()
        self.file_list.currentRowChanged.connect(self._on_file_selected)
        layout.addWidget(self.file_list, 1)

        controls = QHBoxLayout()
        self.up_btn = QPushButton("Up")
        self.up_btn.clicked.connect(self._move_up)
        self.down_btn = QPushButton("Down")
        self.down_btn.clicked.connect(self._move_down)
        self.remove_btn = QPushButton("Remove (Del)")
        self.remove_btn.clicked.connect(self._remove_file)
        controls.addWidget(self.up_btn)
        controls.addWidget(self.down_btn)
        controls.addWidget(self.remove_btn)
        controls.addStretch()
        layout.addLayout(controls)
        return group

    def _build_preview_group(self) -> QGroupBox:
        group = QGroupBox("Preview")
        layout = QVBoxLayout(group)

        self.table = QTableWidget()
        self.table.setColumnCount(3)
        self.table.setHorizontalHeaderLabels(["Original Name", "New Name", "Status"])
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeMode.Stretch)
        self.table.horizontalHeader().setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)
        self.table.horizontalHeader().setSectionResizeMode(2, QHeaderView.ResizeMode.ResizeToContents)
        self.table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        layout.addWidget(self.table)
        return group

    def _build_find_replace_options(self) -> QWidget:
        page = QWidget()
        layout = QGridLayout(page)

        layout.addWidget(QLabel("Find:"), 0, 0)
        self.find_edit = QLineEdit()
        self.find_edit.setPlaceholderText("Pattern...")
        self.find_edit.setMaxLength(MAX_PATTERN_LENGTH)
        self.find_edit.textChanged.connect(self._schedule_preview)
        layout.addWidget(self.find_edit, 0, 1)

        layout.addWidget(QLabel("Replace:"), 1, 0)
        self.replace_edit = QLineEdit()
        self.replace_edit.setPlaceholderText("Replacement...")
        self.replace_edit.textChanged.connect(self._schedule_preview)
        layout.addWidget(self.replace_edit, 1, 1)

        self.regex_check = QCheckBox("Regex")
        self.regex_check.setChecked(self.settings.regex_mode)
        self.regex_check.toggled.connect(self._on_option_toggled)
        layout.addWidget(self.regex_check, 0, 2)

        self.case_check = QCheckBox("Case Sensitive")
        self.case_check.setChecked(self.settings.case_sensitive)
        self.case_check.toggled.connect(self._on_option_toggled)
        layout.addWidget(self.case_check, 1, 2)
        return page

    def _build_iteration_options(self) -> QWidget:
        page = QWidget()
        layout = QGridLayout(page)

        layout.addWidget(QLabel(f"Template ({PLACEHOLDER}):"), 0, 0)
        self.template_edit = QLineEdit(self.settings.template)
        self.template_edit.setPlaceholderText(f"photo_{PLACEHOLDER}")
        self.template_edit.setMaxLength(MAX_TEMPLATE_LENGTH)
        self.template_edit.textChanged.connect(self._on_iteration_changed)
        layout.addWidget(self.template_edit, 0, 1)

        layout.addWidget(QLabel("Start:"), 0, 2)
        self.start_spin = QSpinBox()
        self.start_spin.setRange(0, 2**31 - 1)
        self.start_spin.setValue(min(self.settings.start_number, 2**31 - 1))
        self.start_spin.valueChanged.connect(self._on_iteration_changed)
        layout.addWidget(self.start_spin, 0, 3)

        layout.addWidget(QLabel("Padding:"), 0, 4)
        self.padding_spin = QSpinBox()
        self.padding_spin.setRange(0, MAX_PADDING)
        self.padding_spin.setValue(self.settings.padding)
        self.padding_spin.valueChanged.connect(self._on_iteration_changed)
        layout.addWidget(self.padding_spin, 0, 5)
        return page

    def _init_shortcuts(self):
        bindings = [
            (QKeySequence("Ctrl+O"), self, self._add_folder),
            (QKeySequence("Ctrl+Return"), self, self._do_execute),
            (QKeySequence("Ctrl+Enter"), self, self._do_execute),
            (QKeySequence(Qt.Key.Key_Delete), self.file_list, self._remove_file),
        ]
        self.shortcuts = []
        for sequence, widget, slot in bindings:
            shortcut = QShortcut(sequence, widget)
            shortcut.activated.connect(slot)
            self.shortcuts.append(shortcut)

    # ------------------------------------------------------------------
    # State helpers
    # ------------------------------------------------------------------

    def _set_status(self, msg: str, is_error: bool = False):
        color = COLOR_ERROR if is_error else COLOR_MUTED
        self.status_label.setText(msg)
        self.status_label.setStyleSheet(f"color: {color.name()};")

    def _current_mode(self) -> AppMode:
        return self.mode_combo.currentData()

    def _current_params(self) -> RenameParams:
        if self._current_mode() is AppMode.FIND_REPLACE:
            return FindReplaceParams(
                pattern=self.find_edit.text(),
                replacement=self.replace_edit.text(),
                use_regex=self.regex_check.isChecked(),
                case_sensitive=self.case_check.isChecked(),
            )
        return IterationParams(
            template=self.template_edit.text(),
            start_number=self.start_spin.value(),
            padding=self.padding_spin.value(),
        )

    def _save_settings(self):
        self.settings.regex_mode = self.regex_check.isChecked()
        self.settings.case_sensitive = self.case_check.isChecked()
        self.settings.template = self.template_edit.text()
        self.settings.start_number = self.start_spin.value()
        self.settings.padding = self.padding_spin.value()
        self.store.save(self.settings)

    def _apply_theme(self):
        QApplication.instance().setPalette(build_palette(self.settings.dark_mode))
        self.theme_btn.setText("Light Mode" if self.settings.dark_mode else "Dark Mode")

    def _refresh_file_list(self):
        self.file_list.blockSignals(True)
        self.file_list.clear()
        self.file_list.addItems([f.name for f in self.session.files])
        if self.session.selected_index is not None:
            self.file_list.setCurrentRow(self.session.selected_index)
        self.file_list.blockSignals(False)

    def _refresh_preview_table(self):
        self.table.setRowCount(len(self.previews))
        for i, p in enumerate(self.previews):
            self.table.setItem(i, 0, QTableWidgetItem(p.original_name))
            new_item = QTableWidgetItem(p.new_name)
            if p.has_conflict:
                new_item.setForeground(COLOR_CONFLICT)
                status = QTableWidgetItem("CONFLICT")
                status.setForeground(COLOR_CONFLICT)
            elif p.is_noop:
                status = QTableWidgetItem("No Change")
                status.setForeground(COLOR_MUTED)
            else:
                new_item.setForeground(COLOR_SUCCESS)
                status = QTableWidgetItem("Will Rename")
                status.setForeground(COLOR_INFO)
            self.table.setItem(i, 1, new_item)
            self.table.setItem(i, 2, status)

    def _is_busy(self) -> bool:
        """Whether a scan or a rename commit is running"""
        workers = (self.scan_worker, self.rename_worker)
        return any(w is not None and w.isRunning() for w in workers)

    def _set_busy(self, busy: bool):
        widgets = (
            self.add_btn, self.clear_btn, self.execute_btn, self.mode_combo,
            self.up_btn, self.down_btn, self.remove_btn,
        )
        for widget in widgets:
            widget.setEnabled(not busy)
        self.progress_bar.setVisible(busy)

    # ------------------------------------------------------------------
    # Preview
    # ------------------------------------------------------------------

    @Slot()
    def _schedule_preview(self):
        self.preview_timer.start()

    @Slot()
    def _generate_preview(self):
        """Regenerate previews for the current mode and options"""
        self.preview_timer.stop()
        self.previews = []

        if not self.session.files:
            self._refresh_preview_table()
            return

        params = self._current_params()
        if isinstance(params, FindReplaceParams) and not params.pattern:
            self._refresh_preview_table()
            self._set_status("Enter a pattern to find")
            return

        try:
            self.previews = self.session.preview(params)
        except (RenameToolError, ValueError) as e:
            self._refresh_preview_table()
            self._set_status(f"Error: {e}", is_error=True)
            return

        self._refresh_preview_table()
        if isinstance(params, FindReplaceParams):
            if self.previews:
                self._set_status(f"{len(self.previews)} file(s) matched")
            else:
                self._set_status("No matches")
        else:
            self._set_status(f"{len(self.previews)} file(s) ready")

    @Slot(int)
    def _on_mode_changed(self, index: int):
        self.options_stack.setCurrentIndex(index)
        self._generate_preview()

    @Slot(bool)
    def _on_option_toggled(self, _checked: bool):
        self._generate_preview()
        self._save_settings()

    @Slot()
    def _on_iteration_changed(self):
        self._schedule_preview()
        self._save_settings()

    @Slot()
    def _toggle_theme(self):
        self.settings.dark_mode = not self.settings.dark_mode
        self._apply_theme()
        self._save_settings()

    # ------------------------------------------------------------------
    # File list
    # ------------------------------------------------------------------

    @Slot()
    def _add_folder(self):
        """Browse and scan a directory"""
        if self._is_busy():
            return
        directory = QFileDialog.getExistingDirectory(self, "Select Folder")
        if not directory:
            return

        self._set_status("Scanning...")
        self._set_busy(True)
        self.progress_bar.setRange(0, 0)  # Indeterminate progress

        self.scan_worker = ScanWorker(Path(directory))
        self.scan_worker.completed.connect(self._on_scan_finished)
        self.scan_worker.failed.connect(self._on_scan_error)
        self.scan_worker.start()

    @Slot(list)
    def _on_scan_finished(self, files: List[FileRecord]):
        self._set_busy(False)
        truncated = self.session.add_files(files)
        self._refresh_file_list()
        self._set_status(f"Total: {len(self.session)} files")
        self._generate_preview()
        if truncated:
            self._set_status(f"Max {self.session.max_files} files", is_error=True)

    @Slot(str)
    def _on_scan_error(self, error: str):
        self._set_busy(False)
        self._set_status(f"Error: {error}", is_error=True)

    @Slot(int)
    def _on_file_selected(self, row: int):
        self.session.select(row if row >= 0 else None)

    @Slot()
    def _move_up(self):
        if self._is_busy():
            return
        if self.session.move_up():
            self._refresh_file_list()
            self._generate_preview()

    @Slot()
    def _move_down(self):
        if self._is_busy():
            return
        if self.session.move_down():
            self._refresh_file_list()
            self._generate_preview()

    @Slot()
    def _remove_file(self):
        if self._is_busy():
            return
        if self.session.remove_selected() is not None:
            self._refresh_file_list()
            self._generate_preview()

    @Slot()
    def _clear_files(self):
        if self._is_busy():
            return
        self.session.clear()
        self.previews = []
        self._refresh_file_list()
        self._refresh_preview_table()
        self._set_status("All files cleared")

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    @Slot()
    def _do_execute(self):
        """Execute rename"""
        if self._is_busy():
            return
        if self.preview_timer.isActive():
            self._generate_preview()
        if not self.previews:
            self._set_status("No changes to apply", is_error=True)
            return

        conflicts = sum(1 for p in self.previews if p.has_conflict)
        if conflicts:
            reply = QMessageBox.warning(
                self, "Conflicts",
                f"{conflicts} file(s) would get the same name.\n\nContinue anyway?",
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            )
            if reply != QMessageBox.StandardButton.Yes:
                return

        denied = find_denied(self.previews)
        if denied is not None:
            self._set_status(f"Access denied: {denied}", is_error=True)
            return

        reply = QMessageBox.question(
            self, "Confirm",
            f"Are you sure you want to rename {len(self.previews)} file(s)?\n\nThis action cannot be undone!",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        if reply != QMessageBox.StandardButton.Yes:
            return

        self._set_busy(True)
        self.progress_bar.setRange(0, len(self.previews) * 2)
        self.progress_bar.setValue(0)

        self.rename_worker = RenameWorker(self.previews)
        self.rename_worker.progress.connect(self._on_rename_progress)
        self.rename_worker.completed.connect(self._on_rename_finished)
        self.rename_worker.failed.connect(self._on_rename_error)
        self.rename_worker.start()

    @Slot(int, int, str)
    def _on_rename_progress(self, current: int, total: int, msg: str):
        self.progress_bar.setMaximum(total)
        self.progress_bar.setValue(current)
        self.status_label.setText(msg)

    @Slot(int)
    def _on_rename_finished(self, count: int):
        self._set_busy(False)
        self.session.clear()
        self.previews = []
        self._refresh_file_list()
        self._refresh_preview_table()
        self._set_status(f"Renamed {count} file(s)!")

    @Slot(str, list)
    def _on_rename_error(self, error: str, stranded: List[str]):
        self._set_busy(False)
        self._set_status(f"Error: {error}", is_error=True)
        if stranded:
            msg = f"{error}\n\nThese files were left with temporary names:\n"
            msg += "\n".join(f"  {Path(p).name}" for p in stranded[:10])
            if len(stranded) > 10:
                msg += f"\n  ... and {len(stranded) - 10} more"
            msg += "\n\nRun the 'recover' command on this folder to finish them."
            QMessageBox.critical(self, "Error", msg)
