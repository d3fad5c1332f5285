from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path

import pytest
from PyQt6.QtCore import QSettings
from PyQt6.QtWidgets import QApplication

from gemtext.services.access import LocalAccessBroker
from gemtext.services.directories import DocumentDirectoryResolver
from gemtext.services.file_service import FileService
from gemtext.services.markdown_renderer import MarkdownRenderer
from gemtext.services.session_controller import EditorSessionController
from gemtext.services.settings_service import SettingsService

# Headless runs (CI) have no display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


# --- Fallback QApplication fixture (works with or without pytest-qt) ---
@pytest.fixture(scope="session")
def qapp():
    """Provide a QApplication for tests that need Qt.
    Creates one if not present; reuses existing otherwise.
    """
    app = QApplication.instance()
    created = False
    if app is None:
        app = QApplication([])
        created = True
    try:
        yield app
    finally:
        # Don't forcibly quit a shared app; only close if we created it here.
        if created:
            app.quit()


# --- Other common fixtures ---


@pytest.fixture()
def tmp_settings_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.ini"


@pytest.fixture()
def qsettings(tmp_settings_path: Path) -> QSettings:
    # Use an INI file so we don't touch system registry / platform stores
    s = QSettings(str(tmp_settings_path), QSettings.Format.IniFormat)
    s.clear()
    return s


@pytest.fixture()
def settings_service(qsettings: QSettings) -> SettingsService:
    return SettingsService(qsettings)


@pytest.fixture()
def file_service() -> FileService:
    return FileService()


@pytest.fixture()
def renderer() -> MarkdownRenderer:
    return MarkdownRenderer()


@pytest.fixture()
def access() -> LocalAccessBroker:
    return LocalAccessBroker()


@pytest.fixture()
def docs_root(tmp_path: Path) -> Path:
    root = tmp_path / "Documents"
    root.mkdir()
    return root


@pytest.fixture()
def directories(file_service: FileService, docs_root: Path) -> DocumentDirectoryResolver:
    return DocumentDirectoryResolver(file_service, local_root=docs_root)


@pytest.fixture()
def fixed_clock():
    return lambda: datetime(2024, 5, 1, 13, 45, 12)


@pytest.fixture()
def controller(
    renderer, file_service, access, directories, fixed_clock
) -> EditorSessionController:
    return EditorSessionController(
        renderer=renderer,
        files=file_service,
        access=access,
        directories=directories,
        clock=fixed_clock,
    )


@pytest.fixture()
def md_file(tmp_path: Path) -> Path:
    p = tmp_path / "notes.md"
    p.write_text("# Notes\n\nHello *world*.\n", encoding="utf-8")
    return p
