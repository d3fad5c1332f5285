from __future__ import annotations

import logging

from gemtext.domain.interfaces import IMarkdownRenderer
from gemtext.domain.models import SessionState, ViewMode, ViewProjection
from gemtext.utils.constants import HELP_MARKDOWN

_LOGGER = logging.getLogger(__name__)


def render_markdown_or_plain(renderer: IMarkdownRenderer, text: str) -> tuple[str, str]:
    """Return ("markdown", html), or ("plain", text) when rendering fails."""
    try:
        return "markdown", renderer.to_html(text)
    except Exception:
        _LOGGER.debug("Markdown rendering failed; showing plain text", exc_info=True)
        return "plain", text


def project(
    state: SessionState,
    renderer: IMarkdownRenderer,
    *,
    help_markdown: str = HELP_MARKDOWN,
) -> ViewProjection:
    """
    Pure projection of session state to what the view shows.

    Viewing shows the buffer as rendered markdown (plain text on failure);
    editing shows the raw buffer. The help panel only exists while editing.
    """
    if state.mode is ViewMode.EDITING:
        kind, content = "raw", state.text
    else:
        kind, content = render_markdown_or_plain(renderer, state.text)

    help_html = ""
    if state.effective_help_visible:
        _, help_html = render_markdown_or_plain(renderer, help_markdown)

    return ViewProjection(
        mode=state.mode,
        kind=kind,
        content=content,
        title=state.file_ref.name if state.file_ref else "Untitled",
        can_edit=state.file_ref is not None,
        help_visible=state.effective_help_visible,
        help_html=help_html,
        creation_error=state.creation_error,
    )
