"""Concrete service implementations and the editor session controller."""

from .access import LocalAccessBroker, scoped_access
from .directories import DocumentDirectoryResolver, new_file_name
from .file_service import FileService
from .markdown_renderer import MarkdownRenderer
from .settings_service import SettingsService

__all__ = [
    "DocumentDirectoryResolver",
    "FileService",
    "LocalAccessBroker",
    "MarkdownRenderer",
    "SettingsService",
    "new_file_name",
    "scoped_access",
]
