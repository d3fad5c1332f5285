from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

try:
    from platformdirs import user_documents_dir  # type: ignore
except Exception:
    user_documents_dir = None

from gemtext.domain.errors import DirectoryResolutionError
from gemtext.domain.interfaces import IDirectoryResolver, IFileService
from gemtext.utils.constants import APP_DIR_NAME, DEFAULT_FILE_EXTENSION, NEW_FILE_STEM_FORMAT

_LOGGER = logging.getLogger(__name__)


class DocumentDirectoryResolver(IDirectoryResolver):
    """
    Chooses where new notes go.

    Order:
      1. The synchronized cloud container (e.g. an iCloud Drive, Dropbox or
         Nextcloud folder). Its root must already exist; we only create the
         app folder inside it.
      2. The local documents directory (explicit override, else platformdirs)
         joined with the app folder name.
    """

    def __init__(
        self,
        files: IFileService,
        *,
        cloud_root: Path | None = None,
        local_root: Path | None = None,
        app_dir_name: str = APP_DIR_NAME,
    ) -> None:
        self._files = files
        self._cloud_root = cloud_root
        self._local_root = local_root
        self._app_dir_name = app_dir_name

    def _local_documents(self) -> Path | None:
        if self._local_root is not None:
            return self._local_root
        if user_documents_dir is None:
            return None
        try:
            return Path(user_documents_dir())
        except Exception:
            _LOGGER.debug("platformdirs could not resolve a documents dir", exc_info=True)
            return None

    def candidates(self) -> list[Path]:
        out: list[Path] = []
        if self._cloud_root is not None and self._cloud_root.is_dir():
            out.append(self._cloud_root / self._app_dir_name)
        local = self._local_documents()
        if local is not None:
            out.append(local / self._app_dir_name)
        return out

    def resolve(self) -> Path:
        for candidate in self.candidates():
            try:
                self._files.ensure_directory(candidate)
            except OSError:
                _LOGGER.debug("Cannot use %s for new documents", candidate, exc_info=True)
                continue
            return candidate
        raise DirectoryResolutionError("No cloud container or local documents directory available")


def new_file_name(
    now: Callable[[], datetime] = datetime.now, extension: str = DEFAULT_FILE_EXTENSION
) -> str:
    return f"{now().strftime(NEW_FILE_STEM_FORMAT)}.{extension.lstrip('.')}"
