"""Domain layer: interfaces, errors and simple models (dataclasses)."""

from .errors import AccessGrantDenied, DirectoryResolutionError, FileCreationError, GemTextError
from .interfaces import (
    IAccessBroker,
    IConfigService,
    IDirectoryResolver,
    IFileService,
    IMarkdownRenderer,
    ISettingsService,
)
from .models import FileReference, SessionState, ViewMode, ViewProjection

__all__ = [
    "IMarkdownRenderer",
    "IFileService",
    "IAccessBroker",
    "IDirectoryResolver",
    "ISettingsService",
    "IConfigService",
    "GemTextError",
    "AccessGrantDenied",
    "DirectoryResolutionError",
    "FileCreationError",
    "FileReference",
    "SessionState",
    "ViewMode",
    "ViewProjection",
]
