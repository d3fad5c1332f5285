from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from PyQt6.QtWidgets import QApplication

from gemtext.di.container import Container
from gemtext.services.config.app_config import build_app_config
from gemtext.utils.constants import APP_NAME, APP_ORG
from gemtext.utils.logging_setup import configure_logging

_LOGGER = logging.getLogger(__name__)


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="gemtext", description="Minimal markdown viewer/editor")
    parser.add_argument("path", nargs="?", type=Path, help="file to open")
    parser.add_argument("--config", type=Path, default=None, help="explicit config.ini")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    # Qt consumes its own flags (-style, -platform ...) from argv
    args, _unknown = parser.parse_known_args(list(argv[1:]))
    return args


def run_app(argv: Sequence[str]) -> int:
    """
    Bootstraps Qt, composes the application via the DI container,
    and launches the main window.
    """
    args = parse_args(argv)
    config = build_app_config(explicit_ini=args.config)
    configure_logging(args.log_level or config.log_level())
    _LOGGER.debug("Starting %s %s", APP_NAME, config.get_version())

    QApplication.setOrganizationName(APP_ORG)
    QApplication.setApplicationName(APP_NAME)
    app = QApplication(list(argv))

    container = Container.default(config=config)
    win = container.build_main_window(start_path=args.path, app_title=APP_NAME)
    win.show()

    return app.exec()
