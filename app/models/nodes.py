from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class NodeType(str, Enum):
    """Kinds of presentation node emitted by the renderer."""

    DOCUMENT = "document"
    HEADING = "heading"

    # Byline and featured image
    BYLINE = "byline"
    AVATAR = "avatar"
    AVATAR_PLACEHOLDER = "avatar_placeholder"
    AUTHOR_NAME = "author_name"
    AUTHOR_DETAILS = "author_details"
    AUTHOR_BIO = "author_bio"
    AUTHOR_LINKS = "author_links"
    FEATURED_IMAGE = "featured_image"

    # One container per block type
    HERO = "hero"
    SUMMARY = "summary"
    SECTION = "section"
    LIST = "list"
    STEPS = "steps"
    COMPARISON_TABLE = "comparison_table"
    FAQ = "faq"
    CTA = "cta"
    CONCLUSION = "conclusion"
    SOURCES = "sources"
    BLOCK = "block"

    # Block internals
    ITEMS = "items"
    LIST_ITEM = "list_item"
    STEP = "step"
    TABLE = "table"
    TABLE_HEAD = "table_head"
    TABLE_ROW = "table_row"
    HEADER_CELL = "header_cell"
    CELL = "cell"
    FAQ_ENTRY = "faq_entry"
    QUESTION = "question"
    ANSWER = "answer"
    ACTION = "action"
    LINK_LIST = "link_list"

    # Body content
    MARKDOWN = "markdown"
    PARAGRAPH = "paragraph"
    CODE_BLOCK = "code_block"

    # Inline leaves
    TEXT = "text"
    BREAK = "break"
    BOLD = "bold"
    INLINE_CODE = "inline_code"
    LINK = "link"


class Node(BaseModel):
    """A UI-framework-agnostic presentation node.

    Leaves carry their literal text in ``value``; containers carry ``children``.
    Link and action nodes carry ``href``, ``label`` and ``is_anchor`` in ``attrs``
    so the host can apply its own ``target``/``rel`` conventions.
    """

    type: NodeType
    attrs: Dict[str, Any] = Field(default_factory=dict)
    children: List["Node"] = Field(default_factory=list)
    value: Optional[str] = None

    def plain_text(self) -> str:
        """Concatenated literal text of this subtree, with breaks as newlines."""
        if self.type == NodeType.BREAK:
            return "\n"
        if self.value is not None:
            return self.value
        return "".join(child.plain_text() for child in self.children)

    def find_all(self, node_type: NodeType) -> List["Node"]:
        """Return every descendant (including self) of *node_type*, in document order."""
        found: List[Node] = [self] if self.type == node_type else []
        for child in self.children:
            found.extend(child.find_all(node_type))
        return found


def link_node(href: str, label: str, node_type: NodeType = NodeType.LINK) -> Node:
    """Build a link-like node; targets starting with ``#`` are same-page anchors."""
    return Node(
        type=node_type,
        attrs={"href": href, "label": label, "is_anchor": href.startswith("#")},
        value=label,
    )


# Container types produced for document blocks (one per rendered block)
BLOCK_CONTAINERS = frozenset(
    {
        NodeType.HERO,
        NodeType.SUMMARY,
        NodeType.SECTION,
        NodeType.LIST,
        NodeType.STEPS,
        NodeType.COMPARISON_TABLE,
        NodeType.FAQ,
        NodeType.CTA,
        NodeType.CONCLUSION,
        NodeType.SOURCES,
        NodeType.BLOCK,
    }
)
