from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class ILifecycleService(Protocol):
    """
    App lifecycle notifications. Callbacks registered here run when the app
    leaves the foreground (window deactivated, minimized, suspended).
    """

    def register(self, on_background: Callable[[], None]) -> None: ...
    def unregister(self, on_background: Callable[[], None]) -> None: ...
