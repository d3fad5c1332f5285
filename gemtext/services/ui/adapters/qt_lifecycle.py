from __future__ import annotations

import logging
from collections.abc import Callable

from PyQt6.QtCore import QObject, Qt
from PyQt6.QtGui import QGuiApplication

_LOGGER = logging.getLogger(__name__)


class QtLifecycleService(QObject):
    """
    ILifecycleService adapter: turns QGuiApplication.applicationStateChanged
    into "entering background" callbacks. Any move away from ApplicationActive
    counts, so a desktop window losing focus behaves like a tablet app being
    sent to the background.
    """

    def __init__(self, app: QGuiApplication | None = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._app = app
        self._callbacks: list[Callable[[], None]] = []
        self._last_state: Qt.ApplicationState | None = None
        if app is not None:
            app.applicationStateChanged.connect(self.on_application_state_changed)

    def register(self, on_background: Callable[[], None]) -> None:
        if on_background not in self._callbacks:
            self._callbacks.append(on_background)

    def unregister(self, on_background: Callable[[], None]) -> None:
        if on_background in self._callbacks:
            self._callbacks.remove(on_background)

    def on_application_state_changed(self, state: Qt.ApplicationState) -> None:
        was_active = self._last_state in (None, Qt.ApplicationState.ApplicationActive)
        self._last_state = state
        if state == Qt.ApplicationState.ApplicationActive or not was_active:
            return
        _LOGGER.debug("Application entering background (%s)", state)
        self.notify_background()

    def notify_background(self) -> None:
        for cb in list(self._callbacks):
            cb()

    def dispose(self) -> None:
        if self._app is not None:
            try:
                self._app.applicationStateChanged.disconnect(self.on_application_state_changed)
            except TypeError:
                _LOGGER.debug("applicationStateChanged was not connected", exc_info=True)
            self._app = None
        self._callbacks.clear()
