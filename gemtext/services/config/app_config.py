from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path

from gemtext.services.config.ini_config_service import IniConfigService


def _project_root_fallback() -> Path:
    """
    Project root, also under PyInstaller:
      - onefile/onedir bundles expose sys._MEIPASS
      - dev mode walks up from gemtext/services/config/app_config.py
    """
    meipass = getattr(sys, "_MEIPASS", None)  # type: ignore[attr-defined]
    if meipass:
        return Path(meipass)
    return Path(__file__).resolve().parents[3]


def _optional_path(raw: str | None) -> Path | None:
    raw = (raw or "").strip()
    if not raw:
        return None
    return Path(raw).expanduser()


@dataclass(frozen=True)
class AppConfig:
    """Typed view over IniConfigService for the settings the app actually reads."""

    ini: IniConfigService
    project_root: Path

    def cloud_dir(self) -> Path | None:
        return _optional_path(self.ini.get("storage", "cloud_dir"))

    def local_dir(self) -> Path | None:
        return _optional_path(self.ini.get("storage", "local_dir"))

    def file_extension(self) -> str:
        ext = (self.ini.get("storage", "file_extension", "md") or "md").strip().lstrip(".")
        return ext or "md"

    def log_level(self) -> str:
        return (self.ini.get("logging", "level", "WARNING") or "WARNING").strip().upper()

    def get_version(self) -> str:
        return self.ini.app_version()

    @property
    def loaded_from(self) -> Path | None:
        return self.ini.loaded_from


def build_app_config(
    *, explicit_ini: Path | None = None, project_root: Path | None = None
) -> AppConfig:
    root = project_root or _project_root_fallback()
    ini = IniConfigService(explicit_path=explicit_ini, project_root=root)
    return AppConfig(ini=ini, project_root=root)
