from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import QIODevice, QSaveFile

from gemtext.domain.interfaces import IFileService


class FileService(IFileService):
    """Strict UTF-8 reads, atomic writes, and the bits needed to create new notes."""

    def read_text(self, path: Path) -> str:
        # Strict decoding: invalid UTF-8 raises UnicodeDecodeError
        return path.read_bytes().decode("utf-8")

    def write_text_atomic(self, path: Path, text: str) -> None:
        sf = QSaveFile(str(path))
        if not sf.open(QIODevice.OpenModeFlag.WriteOnly):
            raise OSError(f"Cannot open for write: {path}")
        sf.write(text.encode("utf-8"))
        if not sf.commit():
            raise OSError(f"Commit failed for: {path}")

    def ensure_directory(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def exists(self, path: Path) -> bool:
        return path.exists()

    def create_empty(self, path: Path) -> None:
        # "x" mode never truncates an existing file
        with path.open("x", encoding="utf-8"):
            pass
