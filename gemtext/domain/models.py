from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ViewMode(Enum):
    VIEWING = "viewing"
    EDITING = "editing"


@dataclass(frozen=True)
class FileReference:
    """Handle to a user-chosen file: the resource path plus a display name."""

    path: Path
    display_name: str = ""

    @classmethod
    def from_path(cls, path: Path | str) -> FileReference:
        p = Path(path)
        return cls(path=p, display_name=p.name)

    @property
    def name(self) -> str:
        return self.display_name or self.path.name


@dataclass(frozen=True)
class SessionState:
    """Read-only snapshot of the editor session."""

    text: str = ""
    file_ref: FileReference | None = None
    mode: ViewMode = ViewMode.VIEWING
    help_visible: bool = False
    creation_error: bool = False
    # Line ending of the loaded file; edits are written back with it
    newline: str = "\n"

    @property
    def is_editing(self) -> bool:
        return self.mode is ViewMode.EDITING

    @property
    def effective_help_visible(self) -> bool:
        return self.help_visible and self.is_editing


@dataclass(frozen=True)
class ViewProjection:
    """What the view should show for a given session state."""

    mode: ViewMode
    kind: str  # "markdown", "plain" or "raw"
    content: str
    title: str = "Untitled"
    can_edit: bool = False
    help_visible: bool = False
    help_html: str = ""
    creation_error: bool = False
