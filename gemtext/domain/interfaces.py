from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .models import FileReference


class IMarkdownRenderer(Protocol):
    """Convert Markdown text to full HTML string (including CSS)."""

    def to_html(self, markdown_text: str) -> str: ...


class IFileService(Protocol):
    """Read/write text files. Writes must be atomic."""

    def read_text(self, path: Path) -> str: ...
    def write_text_atomic(self, path: Path, text: str) -> None: ...
    def ensure_directory(self, path: Path) -> None: ...
    def exists(self, path: Path) -> bool: ...
    def create_empty(self, path: Path) -> None: ...


class IAccessBroker(Protocol):
    """Grants time-boxed access to a user-selected file."""

    def start_accessing(self, ref: FileReference) -> bool: ...
    def stop_accessing(self, ref: FileReference) -> None: ...


class IDirectoryResolver(Protocol):
    """Pick the directory new documents are created in."""

    def resolve(self) -> Path: ...


class ISettingsService(Protocol):
    """Persist and retrieve lightweight UI state."""

    def get_geometry(self) -> bytes | None: ...
    def set_geometry(self, blob: bytes) -> None: ...


class IConfigService(Protocol):
    def get(self, section: str, key: str, default: str | None = None) -> str | None: ...
    def app_version(self) -> str: ...
