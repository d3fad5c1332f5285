from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import QByteArray, Qt, QUrl
from PyQt6.QtGui import QAction, QDesktopServices, QKeySequence
from PyQt6.QtWidgets import (
    QMainWindow,
    QPlainTextEdit,
    QSplitter,
    QStackedWidget,
    QTextBrowser,
    QToolBar,
)

from gemtext.domain.interfaces import ISettingsService
from gemtext.domain.models import FileReference, ViewMode, ViewProjection
from gemtext.services.session_controller import EditorSessionController
from gemtext.services.ui.ports.dialogs import IFileDialogService
from gemtext.services.ui.ports.messages import IMessageService
from gemtext.utils.constants import APP_NAME, OPEN_FILE_FILTER

# QTextDocument block and line separators, as returned by toRawText()
_SEPARATORS = ("\u2029", "\u2028")


def _as_lf(text: str) -> str:
    return text.replace("\r\n", "\n")


class MainWindow(QMainWindow):
    """
    Thin PyQt window. Every user action is forwarded to the session
    controller, which answers by calling render() with a fresh projection.
    """

    def __init__(
        self,
        controller: EditorSessionController,
        settings: ISettingsService,
        *,
        dialogs: IFileDialogService,
        messages: IMessageService,
        start_path: Path | None = None,
        app_title: str = APP_NAME,
    ) -> None:
        super().__init__()
        self._app_title = app_title
        self.setWindowTitle(app_title)
        self.resize(900, 700)

        self.controller = controller
        self.settings = settings
        self.dialogs = dialogs
        self.messages = messages

        # Set while render() pushes text into the editor so it isn't echoed back
        self._rendering = False
        self.last_projection: ViewProjection | None = None

        # Widgets
        self.viewer = QTextBrowser(self)
        # Links never navigate the viewer itself; see _on_link_clicked
        self.viewer.setOpenLinks(False)
        self.viewer.anchorClicked.connect(self._on_link_clicked)

        self.editor = QPlainTextEdit(self)
        self.editor.setTabStopDistance(4 * self.editor.fontMetrics().horizontalAdvance(" "))

        self.stack = QStackedWidget(self)
        self.stack.addWidget(self.viewer)
        self.stack.addWidget(self.editor)

        self.help_panel = QTextBrowser(self)
        self.help_panel.setOpenExternalLinks(True)
        self.help_panel.setVisible(False)

        self.splitter = QSplitter(self)
        self.splitter.setOrientation(Qt.Orientation.Horizontal)
        self.splitter.addWidget(self.stack)
        self.splitter.addWidget(self.help_panel)
        self.splitter.setStretchFactor(0, 3)
        self.splitter.setStretchFactor(1, 1)
        self.setCentralWidget(self.splitter)

        self.editor.textChanged.connect(self._on_text_changed)

        self._build_actions()
        self._build_toolbar()

        geo = self.settings.get_geometry()
        if isinstance(geo, (bytes, bytearray)):
            self.restoreGeometry(QByteArray(geo))

        self.controller.attach_view(self)

        if start_path:
            self.open_path(start_path)

        self.setAcceptDrops(True)

    # ---------- UI creation ----------
    def _build_actions(self):
        self.act_open = QAction(
            "Open File…",
            self,
            shortcut=QKeySequence.StandardKey.Open,
            triggered=self._open_dialog,
        )
        self.act_new = QAction(
            "New Note",
            self,
            shortcut=QKeySequence.StandardKey.New,
            triggered=self._new_file,
        )
        self.act_save = QAction(
            "Save",
            self,
            shortcut=QKeySequence.StandardKey.Save,
            triggered=lambda chk=False: self.controller.save(),
        )
        self.act_edit = QAction(
            "Edit",
            self,
            shortcut="Ctrl+E",
            checkable=True,
            triggered=lambda chk=False: self.controller.toggle_editing(),
        )
        self.act_help = QAction(
            "Help",
            self,
            shortcut="F1",
            checkable=True,
            triggered=lambda chk=False: self.controller.toggle_help(),
        )
        self.act_quit = QAction(
            "Quit", self, shortcut=QKeySequence.StandardKey.Quit, triggered=self.close
        )

    def _build_toolbar(self):
        tb = QToolBar("Main", self)
        tb.setMovable(False)
        tb.addAction(self.act_open)
        tb.addAction(self.act_new)
        tb.addAction(self.act_save)
        tb.addSeparator()
        tb.addAction(self.act_edit)
        tb.addAction(self.act_help)
        self.addToolBar(tb)
        self.addAction(self.act_quit)

    # ---------- View (called by the controller) ----------
    def render(self, projection: ViewProjection) -> None:
        self.last_projection = projection
        editing = projection.mode is ViewMode.EDITING

        self._rendering = True
        try:
            self.setWindowTitle(f"{projection.title} — {self._app_title}")

            self.act_edit.setEnabled(projection.can_edit)
            self.act_edit.setChecked(editing)
            self.act_edit.setText("Done" if editing else "Edit")
            self.act_save.setEnabled(projection.can_edit)
            self.act_save.setVisible(editing)
            self.act_help.setVisible(editing)
            self.act_help.setChecked(projection.help_visible)

            if editing:
                content = _as_lf(projection.content)
                if self.editor_text() != content:
                    self.editor.setPlainText(content)
                self.stack.setCurrentWidget(self.editor)
            else:
                if projection.kind == "markdown":
                    self.viewer.setHtml(projection.content)
                else:
                    self.viewer.setPlainText(projection.content)
                self.stack.setCurrentWidget(self.viewer)

            self.help_panel.setVisible(projection.help_visible)
            if projection.help_visible:
                self.help_panel.setHtml(projection.help_html)
        finally:
            self._rendering = False

        if projection.creation_error:
            self._show_creation_error()

    def _show_creation_error(self) -> None:
        self.messages.error(
            self,
            "Could Not Create File",
            "A new note could not be created. Check that a documents folder is available.",
        )
        self.controller.dismiss_creation_error()

    # ---------- Actions ----------
    def _open_dialog(self):
        path = self.dialogs.get_open_file(self, "Open File", "", OPEN_FILE_FILTER)
        if path:
            self.open_path(path)

    def open_path(self, path: Path) -> None:
        self.controller.select_file(FileReference.from_path(path))

    def _new_file(self):
        self.controller.create_new_file()

    def editor_text(self) -> str:
        """Editor contents with non-breaking spaces intact (toPlainText() folds them)."""
        text = self.editor.document().toRawText()
        for sep in _SEPARATORS:
            text = text.replace(sep, "\n")
        return text

    def _on_text_changed(self):
        if self._rendering:
            return
        self.controller.update_text(self.editor_text())

    def _on_link_clicked(self, url: QUrl) -> None:
        if url.scheme() in ("", "file"):
            if url.hasFragment() and not url.path():
                self.viewer.scrollToAnchor(url.fragment())
                return
            target = Path(url.toLocalFile() or url.path())
            ref = self.controller.file_ref
            if not target.is_absolute() and ref is not None:
                target = ref.path.parent / target
            if target.is_file():
                self.open_path(target)
                return
            url = QUrl.fromLocalFile(str(target))
        QDesktopServices.openUrl(url)

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
            self.open_path(Path(local))

    # ---------- Close ----------
    def closeEvent(self, event):
        self.settings.set_geometry(bytes(self.saveGeometry()))
        self.controller.close()
        super().closeEvent(event)
