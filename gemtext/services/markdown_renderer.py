# gemtext/services/markdown_renderer.py
from __future__ import annotations

import markdown

from gemtext.domain.interfaces import IMarkdownRenderer
from gemtext.utils.constants import CSS_PREVIEW, HTML_TEMPLATE


class MarkdownRenderer(IMarkdownRenderer):
    """
    Converts Markdown to a standalone HTML page for the read-only preview.

    Code blocks are highlighted by Pygments with inline styles, since the
    preview widget has no stylesheet for codehilite classes.
    """

    EXTENSIONS = [
        "extra",
        "sane_lists",
        "smarty",
        "codehilite",
        "toc",
        "pymdownx.tilde",  # ~~strike~~
        "pymdownx.tasklist",  # - [ ] task
    ]

    def __init__(self, css: str = CSS_PREVIEW) -> None:
        self.css = css

    def to_body(self, markdown_text: str) -> str:
        return markdown.markdown(
            markdown_text,
            extensions=self.EXTENSIONS,
            extension_configs={
                "codehilite": {"guess_lang": False, "noclasses": True},
                "pymdownx.tasklist": {"custom_checkbox": False},
            },
            output_format="html5",
        )

    def to_html(self, markdown_text: str) -> str:
        return HTML_TEMPLATE.format(css=self.css, body=self.to_body(markdown_text))
