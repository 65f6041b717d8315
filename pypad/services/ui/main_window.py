from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path

from PyQt6.QtCore import QByteArray, QEvent, QObject, QProcess
from PyQt6.QtGui import QAction, QActionGroup, QFont, QKeySequence
from PyQt6.QtPrintSupport import QPrintDialog, QPrinter
from PyQt6.QtWidgets import QLabel, QMainWindow, QMenu, QPlainTextEdit, QStatusBar

from pypad.domain.interfaces import ISettingsService
from pypad.domain.models import Mode
from pypad.services.ui.about import AboutDialog
from pypad.services.ui.adapters.qt_text_editor import QtTextEditorAdapter
from pypad.services.ui.find_replace import FindReplaceDialog
from pypad.services.ui.goto_line import GoToLineDialog
from pypad.services.ui.highlighting import MarkdownHighlighter
from pypad.services.ui.ports.messages import IMessageService
from pypad.services.ui.presenters.main_presenter import MainPresenter
from pypad.utils.constants import APP_NAME, TIMESTAMP_FORMAT, ZOOM_DEFAULT
from pypad.utils.text_tools import count_words_chars, line_col, step_zoom

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """
    Thin PyQt window. Implements IDocumentView for the DocumentSession and
    IMainView for the MainPresenter; every command is delegated to them.
    """

    def __init__(
        self,
        settings: ISettingsService,
        messages: IMessageService,
        *,
        version: str = "0.0.0",
        config_path: Path | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle(APP_NAME)
        self.resize(900, 650)

        self.settings = settings
        self.messages = messages
        self.presenter: MainPresenter | None = None
        self._version = version
        self._config_path = config_path
        self._zoom = ZOOM_DEFAULT
        self._highlighter: MarkdownHighlighter | None = None

        # Widgets
        self.editor = QPlainTextEdit(self)
        # History is owned by the session; the widget keeps none of its own.
        self.editor.setUndoRedoEnabled(False)
        self.editor.setTabStopDistance(4 * self.editor.fontMetrics().horizontalAdvance(" "))
        self.editor.setAcceptDrops(False)
        self.editor.installEventFilter(self)
        self.setCentralWidget(self.editor)
        self._base_point_size = self.editor.font().pointSizeF()

        self.text = QtTextEditorAdapter(self.editor)
        self.goto_dialog = GoToLineDialog(self.text, self)
        self.find_dialog: FindReplaceDialog | None = None

        # Status bar
        self.sudo_label = QLabel("SUDO", self)
        self.sudo_label.setStyleSheet("color: red; font-weight: bold;")
        self.sudo_label.setVisible(False)
        self.mode_label = QLabel(Mode.PLAIN.label, self)
        self.position_label = QLabel("Ln 1, Col 1", self)
        self.counts_label = QLabel("0 words, 0 chars", self)

        sb = QStatusBar(self)
        sb.addPermanentWidget(self.sudo_label)
        sb.addPermanentWidget(self.mode_label)
        sb.addPermanentWidget(self.position_label)
        sb.addPermanentWidget(self.counts_label)
        self.setStatusBar(sb)

        # Signals
        self.editor.textChanged.connect(self._on_text_changed)
        self.editor.cursorPositionChanged.connect(self._update_position)

        # UI
        self._build_actions()
        self._build_menu()

        # Restore UI state
        geo = self.settings.get_geometry()
        if isinstance(geo, (bytes, bytearray)):
            self.restoreGeometry(QByteArray(geo))

        # DnD
        self.setAcceptDrops(True)

    def attach_presenter(self, presenter: MainPresenter) -> None:
        self.presenter = presenter
        self.find_dialog = FindReplaceDialog(presenter.session, self.text, self)
        presenter.session.sync_view()
        self.set_recents(self.settings.get_recent())

    # ---------- UI creation ----------
    def _build_actions(self):
        # File
        self.act_new = QAction(
            "New", self, shortcut=QKeySequence.StandardKey.New, triggered=self._new_file
        )
        self.act_new_window = QAction(
            "New Window", self, shortcut="Ctrl+Shift+N", triggered=self._new_window
        )
        self.act_open = QAction(
            "Open…", self, shortcut=QKeySequence.StandardKey.Open, triggered=self._open_dialog
        )
        self.act_save = QAction(
            "Save", self, shortcut=QKeySequence.StandardKey.Save, triggered=self._save
        )
        self.act_save_as = QAction(
            "Save As…", self, shortcut=QKeySequence.StandardKey.SaveAs, triggered=self._save_as
        )
        self.act_print = QAction(
            "Print…", self, shortcut=QKeySequence.StandardKey.Print, triggered=self._print
        )
        self.exit_action = QAction("&Exit", self, shortcut="Ctrl+Q", triggered=self.close)
        self.exit_action.setStatusTip("Exit application")
        self.recent_menu = QMenu("Open Recent", self)

        # Edit
        self.act_undo = QAction(
            "Undo", self, shortcut=QKeySequence.StandardKey.Undo, triggered=self._undo
        )
        self.act_redo = QAction(
            "Redo", self, shortcut=QKeySequence.StandardKey.Redo, triggered=self._redo
        )
        self.act_cut = QAction(
            "Cut", self, shortcut=QKeySequence.StandardKey.Cut, triggered=self.editor.cut
        )
        self.act_copy = QAction(
            "Copy", self, shortcut=QKeySequence.StandardKey.Copy, triggered=self.editor.copy
        )
        self.act_paste = QAction(
            "Paste", self, shortcut=QKeySequence.StandardKey.Paste, triggered=self.editor.paste
        )
        self.act_delete = QAction("Delete", self, triggered=self._delete_selection)
        self.act_select_all = QAction(
            "Select All",
            self,
            shortcut=QKeySequence.StandardKey.SelectAll,
            triggered=self.editor.selectAll,
        )
        self.act_time_date = QAction("Time/Date", self, shortcut="F5", triggered=self._insert_time_date)

        self.act_find = QAction("Find…", self)
        self.act_find.setShortcut(QKeySequence.StandardKey.Find)
        self.act_find.triggered.connect(self._show_find)

        self.act_find_next = QAction("Find Next", self)
        self.act_find_next.setShortcut("F3")
        self.act_find_next.triggered.connect(self._find_next)

        self.act_find_prev = QAction("Find Previous", self)
        self.act_find_prev.setShortcut("Shift+F3")
        self.act_find_prev.triggered.connect(self._find_previous)

        self.act_replace = QAction("Replace…", self)
        self.act_replace.setShortcut("Ctrl+H")
        self.act_replace.triggered.connect(self._show_replace)

        self.act_goto = QAction("Go To…", self, shortcut="Ctrl+G", triggered=self.goto_dialog.show_goto)

        # View
        self.act_zoom_in = QAction(
            "Zoom In", self, shortcut=QKeySequence.StandardKey.ZoomIn, triggered=lambda: self._zoom_by(1)
        )
        self.act_zoom_out = QAction(
            "Zoom Out", self, shortcut=QKeySequence.StandardKey.ZoomOut, triggered=lambda: self._zoom_by(-1)
        )
        self.act_zoom_reset = QAction(
            "Restore Default Zoom", self, shortcut="Ctrl+0", triggered=self._zoom_reset
        )
        self.act_toggle_status = QAction(
            "Status Bar", self, checkable=True, checked=True, triggered=self._toggle_status_bar
        )
        self.act_toggle_wrap = QAction(
            "Word Wrap", self, checkable=True, checked=True, triggered=self._toggle_wrap
        )

        # Mode
        self.act_mode_plain = QAction(
            Mode.PLAIN.label, self, checkable=True, checked=True,
            triggered=lambda: self._set_mode(Mode.PLAIN),
        )
        self.act_mode_markup = QAction(
            Mode.MARKUP.label, self, checkable=True,
            triggered=lambda: self._set_mode(Mode.MARKUP),
        )
        self.mode_group = QActionGroup(self)
        self.mode_group.setExclusive(True)
        self.mode_group.addAction(self.act_mode_plain)
        self.mode_group.addAction(self.act_mode_markup)

        self.act_sudo = QAction("Sudo Mode", self, checkable=True, triggered=self._toggle_sudo)

        # Help
        self.act_about = QAction(f"About {APP_NAME}", self, triggered=self._show_about)

    def _build_menu(self):
        m = self.menuBar()
        filem = m.addMenu("&File")
        filem.addAction(self.act_new)
        filem.addAction(self.act_new_window)
        filem.addAction(self.act_open)
        filem.addMenu(self.recent_menu)
        filem.addSeparator()
        filem.addAction(self.act_save)
        filem.addAction(self.act_save_as)
        filem.addSeparator()
        filem.addAction(self.act_print)
        filem.addSeparator()
        filem.addAction(self.exit_action)
        self.set_recents([])

        editm = m.addMenu("&Edit")
        for a in (self.act_undo, self.act_redo):
            editm.addAction(a)
        editm.addSeparator()
        for a in (self.act_cut, self.act_copy, self.act_paste, self.act_delete):
            editm.addAction(a)
        editm.addSeparator()
        for a in (self.act_find, self.act_find_next, self.act_find_prev, self.act_replace, self.act_goto):
            editm.addAction(a)
        editm.addSeparator()
        editm.addAction(self.act_select_all)
        editm.addAction(self.act_time_date)

        viewm = m.addMenu("&View")
        zoomm = viewm.addMenu("Zoom")
        for a in (self.act_zoom_in, self.act_zoom_out, self.act_zoom_reset):
            zoomm.addAction(a)
        viewm.addAction(self.act_toggle_status)
        viewm.addAction(self.act_toggle_wrap)

        modem = m.addMenu("&Mode")
        modem.addAction(self.act_mode_plain)
        modem.addAction(self.act_mode_markup)
        modem.addSeparator()
        modem.addAction(self.act_sudo)

        helpm = m.addMenu("&Help")
        helpm.addAction(self.act_about)

    # ---------- IMainView ----------
    def dialog_parent(self):
        return self

    def set_recents(self, items: list[str]) -> None:
        self.recent_menu.clear()
        if not items:
            na = QAction("(empty)", self)
            na.setEnabled(False)
            self.recent_menu.addAction(na)
            return
        for p in items:
            self.recent_menu.addAction(
                QAction(p, self, triggered=lambda chk=False, x=p: self._open_path(Path(x)))
            )

    # setChecked() emits toggled, not triggered, so these never re-enter the presenter.
    def sync_elevated_action(self, checked: bool) -> None:
        self.act_sudo.setChecked(checked)

    def sync_mode_actions(self, mode: Mode) -> None:
        target = self.act_mode_plain if mode is Mode.PLAIN else self.act_mode_markup
        target.setChecked(True)

    # ---------- IDocumentView ----------
    def replace_content(self, text: str) -> None:
        self.text.replace_content(text)

    def replace_range(self, start: int, end: int, text: str) -> None:
        self.text.replace_range(start, end, text)

    def select_range(self, start: int, end: int) -> None:
        self.text.select_range(start, end)

    def scroll_to_range(self, start: int, end: int) -> None:
        self.text.scroll_to_range(start, end)

    def set_title(self, title: str) -> None:
        self.setWindowTitle(title)

    def set_elevated_indicator_visible(self, visible: bool) -> None:
        self.sudo_label.setVisible(visible)

    def apply_mode(self, mode: Mode) -> None:
        if mode is Mode.MARKUP and self._highlighter is None:
            self._highlighter = MarkdownHighlighter(self.editor.document())
        elif mode is Mode.PLAIN and self._highlighter is not None:
            self._highlighter.setDocument(None)
            self._highlighter = None
        self.mode_label.setText(mode.label)
        self.sync_mode_actions(mode)

    def show_status(self, text: str) -> None:
        self.statusBar().showMessage(text, 3000)

    def show_info(self, title: str, text: str) -> None:
        self.messages.info(self, title, text)

    def show_warning(self, title: str, text: str) -> None:
        self.messages.warning(self, title, text)

    def show_error(self, title: str, text: str) -> None:
        self.messages.error(self, title, text)

    # ---------- Actions ----------
    def _new_file(self):
        if self.presenter:
            self.presenter.new_document()

    def _new_window(self):
        ok, pid = QProcess.startDetached(sys.executable, ["-m", "pypad.main"])
        if not ok:
            self.show_error("New Window", "Could not start a new editor window.")
            return
        logger.info("started new window (pid %s)", pid)

    def _print(self):
        printer = QPrinter(QPrinter.PrinterMode.HighResolution)
        printer.setDocName(self.windowTitle())
        dlg = QPrintDialog(printer, self)
        dlg.setWindowTitle("Print Document")
        if not dlg.exec():
            return
        self.editor.print(printer)
        self.show_status("Sent to printer")
        logger.info("printed %s", self.windowTitle())

    def _open_dialog(self):
        if self.presenter:
            self.presenter.open_dialog()

    def _open_path(self, path: Path):
        if self.presenter:
            self.presenter.open_path(path)

    def _save(self):
        if self.presenter:
            self.presenter.save()

    def _save_as(self):
        if self.presenter:
            self.presenter.save_as()

    def _undo(self):
        if self.presenter:
            self.presenter.session.undo()

    def _redo(self):
        if self.presenter:
            self.presenter.session.redo()

    def _delete_selection(self):
        self.editor.textCursor().removeSelectedText()

    def _insert_time_date(self):
        self.editor.insertPlainText(datetime.now().strftime(TIMESTAMP_FORMAT))

    def _show_find(self):
        if self.find_dialog:
            self.find_dialog.show_find()

    def _show_replace(self):
        if self.find_dialog:
            self.find_dialog.show_replace()

    def _find_next(self):
        if not self.presenter:
            return
        if not self.presenter.session.search_state.pattern:
            self._show_find()
            return
        self.presenter.session.find_next(self.text.selection())

    def _find_previous(self):
        if not self.presenter:
            return
        if not self.presenter.session.search_state.pattern:
            self._show_find()
            return
        self.presenter.session.find_previous(self.text.selection())

    def _set_mode(self, mode: Mode):
        if self.presenter:
            self.presenter.set_mode(mode)

    def _toggle_sudo(self, on: bool):
        if self.presenter:
            self.presenter.toggle_elevated(on)

    def _show_about(self):
        AboutDialog(self._version, self._config_path, self).show()

    def _zoom_by(self, steps: int):
        self._set_zoom(step_zoom(self._zoom, steps))

    def _zoom_reset(self):
        self._set_zoom(ZOOM_DEFAULT)

    def _set_zoom(self, percent: int):
        self._zoom = percent
        f = QFont(self.editor.font())
        f.setPointSizeF(self._base_point_size * percent / 100)
        self.editor.setFont(f)
        self.show_status(f"Zoom {percent}%")

    @property
    def zoom(self) -> int:
        return self._zoom

    def _toggle_status_bar(self, on: bool):
        self.statusBar().setVisible(on)

    def _toggle_wrap(self, on: bool):
        mode = (
            QPlainTextEdit.LineWrapMode.WidgetWidth if on else QPlainTextEdit.LineWrapMode.NoWrap
        )
        self.editor.setLineWrapMode(mode)

    # ---------- Helpers ----------
    def _on_text_changed(self):
        text = self.editor.toPlainText()
        if self.presenter:
            self.presenter.session.on_text_changed(text)
        words, chars = count_words_chars(text)
        self.counts_label.setText(f"{words} words, {chars} chars")

    def _update_position(self):
        line, col = line_col(self.text.text(), self.text.cursor_index())
        self.position_label.setText(f"Ln {line}, Col {col}")

    def eventFilter(self, obj: QObject, event: QEvent) -> bool:
        # Let the window's Undo/Redo actions see these keys instead of the editor.
        if obj is self.editor and event.type() == QEvent.Type.ShortcutOverride:
            if event.matches(QKeySequence.StandardKey.Undo) or event.matches(
                QKeySequence.StandardKey.Redo
            ):
                event.ignore()
                return True
        return super().eventFilter(obj, event)

    # ---------- DnD ----------
    def dragEnterEvent(self, e):
        if e.mimeData().hasUrls():
            e.acceptProposedAction()

    def dropEvent(self, e):
        urls = e.mimeData().urls()
        if not urls:
            return
        local = urls[0].toLocalFile()
        if local:
            self._open_path(Path(local))

    # ---------- Close ----------
    def closeEvent(self, event):
        if self.presenter and not self.presenter.request_close():
            event.ignore()
            return
        self.settings.set_geometry(bytes(self.saveGeometry()))
        super().closeEvent(event)
