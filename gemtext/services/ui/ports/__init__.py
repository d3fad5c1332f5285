from __future__ import annotations

from .dialogs import IFileDialogService
from .lifecycle import ILifecycleService
from .messages import IMessageService

__all__ = [
    "IFileDialogService",
    "ILifecycleService",
    "IMessageService",
]
