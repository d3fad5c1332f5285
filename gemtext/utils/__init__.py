"""App constants and utilities."""

from .constants import (
    APP_DIR_NAME,
    APP_NAME,
    APP_ORG,
    CSS_PREVIEW,
    DEFAULT_FILE_EXTENSION,
    HELP_MARKDOWN,
    HTML_TEMPLATE,
    NEW_FILE_STEM_FORMAT,
    OPEN_FILE_FILTER,
    SETTINGS_GEOMETRY,
)
from .logging_setup import configure_logging

__all__ = [
    "APP_ORG",
    "APP_NAME",
    "APP_DIR_NAME",
    "CSS_PREVIEW",
    "HTML_TEMPLATE",
    "HELP_MARKDOWN",
    "OPEN_FILE_FILTER",
    "NEW_FILE_STEM_FORMAT",
    "DEFAULT_FILE_EXTENSION",
    "SETTINGS_GEOMETRY",
    "configure_logging",
]
