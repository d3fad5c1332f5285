from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Protocol, runtime_checkable

from gemtext.domain.errors import AccessGrantDenied, DirectoryResolutionError, FileCreationError
from gemtext.domain.interfaces import (
    IAccessBroker,
    IDirectoryResolver,
    IFileService,
    IMarkdownRenderer,
)
from gemtext.domain.models import FileReference, SessionState, ViewMode, ViewProjection
from gemtext.services.access import scoped_access
from gemtext.services.directories import new_file_name
from gemtext.services.projection import project
from gemtext.services.ui.ports.lifecycle import ILifecycleService
from gemtext.utils.constants import DEFAULT_FILE_EXTENSION

_LOGGER = logging.getLogger(__name__)

# Failures that load/save swallow
_IO_ERRORS = (AccessGrantDenied, OSError, UnicodeDecodeError)


def newline_style(text: str) -> str:
    return "\r\n" if "\r\n" in text else "\n"


def with_newlines(text: str, newline: str) -> str:
    text = text.replace("\r\n", "\n")
    if newline == "\n":
        return text
    return text.replace("\n", newline)


@runtime_checkable
class IEditorView(Protocol):
    """Passive view driven by the controller (implemented by the Qt MainWindow)."""

    def render(self, projection: ViewProjection) -> None: ...


class EditorSessionController:
    """
    Owns the text buffer, the selected file and the view-mode flags.

    All load/save failures stop here: they are logged at DEBUG and the
    in-memory state is left as it was. Only new-file creation failures are
    surfaced, through the creation_error flag of the state.
    """

    def __init__(
        self,
        renderer: IMarkdownRenderer,
        files: IFileService,
        access: IAccessBroker,
        directories: IDirectoryResolver,
        *,
        file_extension: str = DEFAULT_FILE_EXTENSION,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.renderer = renderer
        self.files = files
        self.access = access
        self.directories = directories
        self.file_extension = file_extension
        self._clock = clock
        self._state = SessionState()
        self._view: IEditorView | None = None
        self._lifecycle: ILifecycleService | None = None

    # ---------- session wiring ----------

    def attach_view(self, view: IEditorView) -> None:
        self._view = view
        self._notify()

    def attach_lifecycle(self, lifecycle: ILifecycleService) -> None:
        if self._lifecycle is not None:
            self._lifecycle.unregister(self.on_backgrounded)
        self._lifecycle = lifecycle
        lifecycle.register(self.on_backgrounded)

    def close(self) -> None:
        """End the session: save pending edits and drop lifecycle/view hooks."""
        if self._state.is_editing:
            self.save()
        if self._lifecycle is not None:
            self._lifecycle.unregister(self.on_backgrounded)
            self._lifecycle = None
        self._view = None

    # ---------- state ----------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def text(self) -> str:
        return self._state.text

    @property
    def file_ref(self) -> FileReference | None:
        return self._state.file_ref

    @property
    def mode(self) -> ViewMode:
        return self._state.mode

    def projection(self) -> ViewProjection:
        return project(self._state, self.renderer)

    def _set(self, **changes) -> None:
        self._state = replace(self._state, **changes)

    def _notify(self) -> None:
        if self._view is not None:
            self._view.render(self.projection())

    # ---------- file operations ----------

    def select_file(self, ref: FileReference) -> None:
        """Switch to ref. Unsaved edits in the buffer are discarded."""
        _LOGGER.debug("Selected %s", ref.path)
        self._set(file_ref=ref)
        self.load(ref)
        self._notify()

    def load(self, ref: FileReference | None) -> bool:
        if ref is None:
            return False
        try:
            with scoped_access(self.access, ref):
                text = self.files.read_text(ref.path)
        except _IO_ERRORS:
            _LOGGER.debug("Load failed for %s", ref.path, exc_info=True)
            return False
        self._set(text=text, newline=newline_style(text))
        return True

    def save(self) -> bool:
        ref = self._state.file_ref
        if ref is None:
            return False
        try:
            with scoped_access(self.access, ref):
                self.files.write_text_atomic(ref.path, self._state.text)
        except _IO_ERRORS:
            _LOGGER.debug("Save failed for %s", ref.path, exc_info=True)
            return False
        return True

    def update_text(self, text: str) -> None:
        """
        Buffer mutation from the editing widget. Does not re-render the view.

        Widgets hand back LF-only text; it is mapped to the file's own line
        ending so a CRLF file stays CRLF.
        """
        if not self._state.is_editing:
            return
        self._set(text=with_newlines(text, self._state.newline))

    # ---------- mode switching ----------

    def toggle_editing(self) -> bool:
        """Flip between viewing and editing; returns False when refused."""
        if self._state.is_editing:
            self._set(mode=ViewMode.VIEWING, help_visible=False)
            self.save()
            self.load(self._state.file_ref)
        else:
            if self._state.file_ref is None:
                return False
            self._set(mode=ViewMode.EDITING)
        _LOGGER.debug("Mode is now %s", self._state.mode.value)
        self._notify()
        return True

    def toggle_help(self) -> None:
        if not self._state.is_editing:
            return
        self._set(help_visible=not self._state.help_visible)
        self._notify()

    # ---------- lifecycle ----------

    def on_backgrounded(self) -> None:
        if self._state.is_editing:
            _LOGGER.debug("Backgrounded while editing; saving")
            self.save()

    # ---------- new files ----------

    def create_new_file(self) -> bool:
        try:
            directory = self.directories.resolve()
            path = directory / new_file_name(self._clock, self.file_extension)
            self._create_if_missing(path)
        except (DirectoryResolutionError, FileCreationError):
            _LOGGER.warning("Could not create a new document", exc_info=True)
            self._set(creation_error=True)
            self._notify()
            return False

        ref = FileReference.from_path(path)
        self._set(file_ref=ref)
        self.load(ref)
        self._set(mode=ViewMode.EDITING)
        self._notify()
        return True

    def dismiss_creation_error(self) -> None:
        if self._state.creation_error:
            self._set(creation_error=False)
            self._notify()

    def _create_if_missing(self, path: Path) -> None:
        try:
            if not self.files.exists(path):
                self.files.create_empty(path)
        except OSError as e:
            raise FileCreationError(f"Cannot create {path}: {e}") from e
