from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import QSettings

from pypad.domain.interfaces import IFileService, IPrivilegeHelper, ISettingsService
from pypad.services.config.app_config import AppConfig, build_app_config
from pypad.services.elevation import CredentialCache, PrivilegedWriter, SudoHelper
from pypad.services.file_service import FileService
from pypad.services.session import DocumentSession
from pypad.services.settings_service import SettingsService
from pypad.services.ui.adapters import QtFileDialogService, QtMessageService
from pypad.services.ui.main_window import MainWindow
from pypad.services.ui.ports import IFileDialogService, IMessageService
from pypad.services.ui.presenters.main_presenter import MainPresenter
from pypad.utils.constants import APP_NAME, APP_ORG


class Container:
    """
    Lightweight DI container:
      - Wires default services if not provided
      - Builds the elevation stack (helper, credential cache, writer) from config
      - Composes window, session and presenter in the order they depend on each other
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        files: IFileService | None = None,
        settings: ISettingsService | None = None,
        qsettings: QSettings | None = None,
        helper: IPrivilegeHelper | None = None,
        dialogs: IFileDialogService | None = None,
        messages: IMessageService | None = None,
    ) -> None:
        self.config: AppConfig = config or build_app_config()
        self.file_service: IFileService = files or FileService()
        self.settings_service: ISettingsService = settings or SettingsService(
            qsettings or QSettings()
        )
        self.helper: IPrivilegeHelper = helper or SudoHelper(self.config.helper_executable())
        self.dialogs: IFileDialogService = dialogs or QtFileDialogService()
        self.messages: IMessageService = messages or QtMessageService()

    # ---------- Class helpers ----------

    @staticmethod
    def default(
        qsettings: QSettings | None = None,
        *,
        config_path: Path | None = None,
        organization: str = APP_ORG,
        application: str = APP_NAME,
    ) -> Container:
        if qsettings is None:
            qsettings = QSettings(organization, application)
        return Container(config=build_app_config(explicit_ini=config_path), qsettings=qsettings)

    # ---------- Factories ----------

    def build_credentials(self) -> CredentialCache:
        return CredentialCache(self.helper, ttl_seconds=self.config.credential_ttl_seconds())

    def build_writer(self) -> PrivilegedWriter:
        return PrivilegedWriter(
            self.file_service, self.helper, staging_dir=self.config.staging_dir()
        )

    def build_session(self, view, *, mode=None) -> DocumentSession:
        return DocumentSession(
            view,
            files=self.file_service,
            writer=self.build_writer(),
            credentials=self.build_credentials(),
            mode=mode or self.config.default_mode(),
        )

    def build_main_presenter(self, view, session: DocumentSession) -> MainPresenter:
        return MainPresenter(
            view=view,
            session=session,
            settings=self.settings_service,
            messages=self.messages,
            dialogs=self.dialogs,
        )

    def build_main_window(self, *, start_path: Path | None = None, mode=None) -> MainWindow:
        """
        Create the Qt MainWindow, its DocumentSession and the presenter that
        joins them, then open `start_path` if one was given.
        """
        window = MainWindow(
            settings=self.settings_service,
            messages=self.messages,
            version=self.config.get_version(),
            config_path=self.config.loaded_from,
        )
        session = self.build_session(window, mode=mode)
        presenter = self.build_main_presenter(window, session)
        window.attach_presenter(presenter)

        if start_path is not None:
            presenter.open_path(start_path)
        return window
