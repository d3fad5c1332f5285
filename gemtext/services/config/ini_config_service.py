# gemtext/services/config/ini_config_service.py
from __future__ import annotations

import configparser
import logging
import os
from pathlib import Path
from typing import Optional

try:
    from platformdirs import user_config_dir  # type: ignore
except Exception:
    user_config_dir = None

from gemtext.domain.interfaces import IConfigService

_LOGGER = logging.getLogger(__name__)

DEFAULTS: dict[str, dict[str, str]] = {
    "app": {"version": "0.0.0"},
    "storage": {"cloud_dir": "", "local_dir": "", "file_extension": "md"},
    "logging": {"level": "WARNING"},
}


class IniConfigService(IConfigService):
    r"""
    INI-backed configuration reader.

    Load order (first hit wins):
      1. Explicit path provided at construction
      2. User config dir (e.g. ~/.config/GemText/config.ini or %APPDATA%\GemText\config.ini)
      3. Project default at <repo>/config/config.ini  (optional)

    Sections that are missing from the file fall back to DEFAULTS.
    """

    DEFAULT_APP_DIR = "GemText"
    DEFAULT_FILE = "config.ini"

    def __init__(self, explicit_path: Optional[Path] = None, project_root: Optional[Path] = None):
        self._parser = configparser.ConfigParser()
        self._parser.read_dict(DEFAULTS)
        self._loaded_from: Optional[Path] = None

        for path in self._candidates(explicit_path, project_root):
            try:
                if path.exists():
                    with path.open("r", encoding="utf-8") as fh:
                        self._parser.read_file(fh)
                    self._loaded_from = path
                    break
            except (OSError, configparser.Error):
                # A broken file must not stop the app; try the next one
                _LOGGER.debug("Skipping unreadable config %s", path, exc_info=True)
                self._parser = configparser.ConfigParser()
                self._parser.read_dict(DEFAULTS)
                continue

        _LOGGER.debug("Configuration loaded from %s", self._loaded_from or "<defaults>")

    def _candidates(self, explicit_path: Optional[Path], project_root: Optional[Path]) -> list[Path]:
        candidates: list[Path] = []
        if explicit_path:
            candidates.append(explicit_path)
        if user_config_dir:
            candidates.append(Path(user_config_dir(self.DEFAULT_APP_DIR)) / self.DEFAULT_FILE)
        else:
            home = Path(os.path.expanduser("~"))
            candidates.append(home / ".config" / self.DEFAULT_APP_DIR / self.DEFAULT_FILE)
        if project_root:
            candidates.append(project_root / "config" / self.DEFAULT_FILE)
        return candidates

    # ----- IConfigService -----

    def get(self, section: str, key: str, default: Optional[str] = None) -> Optional[str]:
        if section not in self._parser:
            return default
        return self._parser[section].get(key, default)

    def app_version(self) -> str:
        return self.get("app", "version", "0.0.0") or "0.0.0"

    @property
    def loaded_from(self) -> Optional[Path]:
        """For diagnostics."""
        return self._loaded_from
