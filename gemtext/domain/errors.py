from __future__ import annotations

from pathlib import Path


class GemTextError(Exception):
    """Base class for application errors."""


class AccessGrantDenied(GemTextError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"Access denied: {path}")
        self.path = path


class DirectoryResolutionError(GemTextError):
    """No cloud container or local documents directory is usable."""


class FileCreationError(GemTextError):
    pass
