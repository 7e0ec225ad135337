"""Export a rendered document as Markdown via its HTML form."""

import re

from markdownify import markdownify

from app.models.nodes import Node
from app.services.html_renderer import to_html

# Three or more consecutive newlines (optionally with whitespace-only lines)
_EXCESS_BLANK_LINES_RE = re.compile(r"\n[ \t]*(?:\n[ \t]*){2,}")


def clean_markdown(text: str) -> str:
    """Collapse runs of blank lines to one and strip surrounding whitespace."""
    return _EXCESS_BLANK_LINES_RE.sub("\n\n", text).strip()


def to_markdown(node: Node) -> str:
    """Return ATX-style Markdown for *node* and its subtree."""
    return clean_markdown(markdownify(to_html(node), heading_style="ATX"))
