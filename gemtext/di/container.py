from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import QSettings
from PyQt6.QtGui import QGuiApplication

from gemtext.domain.interfaces import (
    IAccessBroker,
    IDirectoryResolver,
    IFileService,
    IMarkdownRenderer,
    ISettingsService,
)
from gemtext.services.access import LocalAccessBroker
from gemtext.services.config.app_config import AppConfig, build_app_config
from gemtext.services.directories import DocumentDirectoryResolver
from gemtext.services.file_service import FileService
from gemtext.services.markdown_renderer import MarkdownRenderer
from gemtext.services.session_controller import EditorSessionController
from gemtext.services.settings_service import SettingsService
from gemtext.services.ui.adapters import QtFileDialogService, QtLifecycleService, QtMessageService
from gemtext.services.ui.main_window import MainWindow
from gemtext.services.ui.ports import IFileDialogService, ILifecycleService, IMessageService
from gemtext.utils.constants import APP_NAME, APP_ORG


class Container:
    """
    Lightweight DI container:
      - Wires default services if not provided
      - Builds the session controller from config (storage dirs, file extension)
      - Builds the Qt window and hooks the controller to app lifecycle
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        renderer: IMarkdownRenderer | None = None,
        files: IFileService | None = None,
        access: IAccessBroker | None = None,
        directories: IDirectoryResolver | None = None,
        settings: ISettingsService | None = None,
        qsettings: QSettings | None = None,
        dialogs: IFileDialogService | None = None,
        messages: IMessageService | None = None,
        lifecycle: ILifecycleService | None = None,
    ) -> None:
        self.config: AppConfig = config or build_app_config()
        self.renderer: IMarkdownRenderer = renderer or MarkdownRenderer()
        self.file_service: IFileService = files or FileService()
        self.access: IAccessBroker = access or LocalAccessBroker()
        self.directories: IDirectoryResolver = directories or DocumentDirectoryResolver(
            self.file_service,
            cloud_root=self.config.cloud_dir(),
            local_root=self.config.local_dir(),
        )
        self.settings_service: ISettingsService = settings or SettingsService(
            qsettings or QSettings()
        )
        self.dialogs: IFileDialogService = dialogs or QtFileDialogService()
        self.messages: IMessageService = messages or QtMessageService()
        self.lifecycle = lifecycle

    @staticmethod
    def default(
        qsettings: QSettings | None = None,
        *,
        config: AppConfig | None = None,
        organization: str = APP_ORG,
        application: str = APP_NAME,
    ) -> Container:
        if qsettings is None:
            qsettings = QSettings(organization, application)
        return Container(config=config, qsettings=qsettings)

    # ---------- factories ----------

    def build_session_controller(self) -> EditorSessionController:
        return EditorSessionController(
            renderer=self.renderer,
            files=self.file_service,
            access=self.access,
            directories=self.directories,
            file_extension=self.config.file_extension(),
        )

    def build_main_window(
        self,
        *,
        start_path: Path | None = None,
        app_title: str = APP_NAME,
    ) -> MainWindow:
        """Create the controller and the Qt window, and subscribe to lifecycle changes."""
        controller = self.build_session_controller()
        if self.lifecycle is None:
            self.lifecycle = QtLifecycleService(QGuiApplication.instance())
        controller.attach_lifecycle(self.lifecycle)

        return MainWindow(
            controller,
            self.settings_service,
            dialogs=self.dialogs,
            messages=self.messages,
            start_path=start_path,
            app_title=app_title,
        )
