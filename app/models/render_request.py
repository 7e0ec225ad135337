from typing import Any, Literal

from pydantic import BaseModel, Field


class RenderRequest(BaseModel):
    document: Any = Field(
        default=None,
        description="Modular document JSON as produced by the content pipeline. Any shape is accepted.",
    )
    format: Literal["nodes", "html", "markdown"] = "nodes"
    """Output representation.

    ``"nodes"`` (default)
        The UI-agnostic presentation node tree.

    ``"html"``
        The node tree serialised to HTML markup.

    ``"markdown"``
        The node tree exported as ATX-style Markdown.
    """
