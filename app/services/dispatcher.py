"""Per-block-type rendering of a :class:`DocumentBlock` into presentation nodes.

Each renderer returns a single container node, or ``None`` when the block has
nothing to show.  Renderers never raise on under-populated blocks.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from app.models.document import BlockLink, BlockType, DocumentBlock
from app.models.nodes import Node, NodeType, link_node
from app.services.segmenter import CodeSegment, segment
from app.services.tokenizer import (
    BoldToken,
    InlineCodeToken,
    InlineToken,
    LinkToken,
    tokenize,
)

logger = logging.getLogger(__name__)

MIN_HEADING_LEVEL = 2
MAX_HEADING_LEVEL = 4

DEFAULT_CTA_LABEL = "Learn more"
DEFAULT_CTA_HREF = "#"
DEFAULT_SOURCES_HEADING = "Sources"


@dataclass(frozen=True)
class RenderContext:
    """Document-level facts a block renderer may need.

    ``h1`` is the top-level title already rendered for the document, or ``""``.
    """

    h1: str = ""

    def duplicates_title(self, heading: str) -> bool:
        return bool(self.h1) and self.h1.strip() == heading.strip()


def heading_level(level: Optional[int]) -> int:
    """Clamp a block's heading-depth hint into ``2..4``; absent means 2."""
    if level is None or level < MIN_HEADING_LEVEL:
        return MIN_HEADING_LEVEL
    if level > MAX_HEADING_LEVEL:
        return MAX_HEADING_LEVEL
    return level


# ---------------------------------------------------------------------------
# Inline and body content
# ---------------------------------------------------------------------------

def _text_nodes(value: str) -> List[Node]:
    """Plain text with each line break turned into an explicit break node."""
    nodes: List[Node] = []
    for index, line in enumerate(value.split("\n")):
        if index:
            nodes.append(Node(type=NodeType.BREAK))
        if line:
            nodes.append(Node(type=NodeType.TEXT, value=line))
    return nodes


def _token_nodes(token: InlineToken) -> List[Node]:
    if isinstance(token, BoldToken):
        return [Node(type=NodeType.BOLD, value=token.value)]
    if isinstance(token, InlineCodeToken):
        return [Node(type=NodeType.INLINE_CODE, value=token.value)]
    if isinstance(token, LinkToken):
        return [link_node(token.href, token.label)]
    return _text_nodes(token.value)


def render_inline(text: str) -> List[Node]:
    """Tokenize *text* and return the inline nodes, in order."""
    nodes: List[Node] = []
    for token in tokenize(text):
        nodes.extend(_token_nodes(token))
    return nodes


def render_markdown(text: str) -> Optional[Node]:
    """Segment a body into paragraphs and code blocks; ``None`` when nothing survives."""
    children: List[Node] = []
    for seg in segment(text):
        if isinstance(seg, CodeSegment):
            children.append(
                Node(
                    type=NodeType.CODE_BLOCK,
                    attrs={"language": seg.language},
                    value=seg.text,
                )
            )
        else:
            children.append(Node(type=NodeType.PARAGRAPH, children=render_inline(seg.text)))
    if not children:
        return None
    return Node(type=NodeType.MARKDOWN, children=children)


def usable_links(links: List[BlockLink]) -> List[BlockLink]:
    return [link for link in links if link.href]


def render_links(links: List[BlockLink]) -> Optional[Node]:
    """Link list for entries with a non-empty ``href``; ``None`` when none remain."""
    kept = usable_links(links)
    if not kept:
        return None
    return Node(
        type=NodeType.LINK_LIST,
        children=[link_node(link.href, link.display_text) for link in kept],
    )


def _heading(text: str, level: int = MIN_HEADING_LEVEL) -> Node:
    return Node(type=NodeType.HEADING, attrs={"level": level}, value=text)


def _compact(nodes: List[Optional[Node]]) -> List[Node]:
    return [node for node in nodes if node is not None]


def _container(node_type: NodeType, block: DocumentBlock, children: List[Optional[Node]], **attrs) -> Node:
    """Wrap the non-``None`` *children* in a block container node."""
    return Node(
        type=node_type,
        attrs={"block_type": block.block_type, **attrs},
        children=_compact(children),
    )


def _optional_heading(block: DocumentBlock, level: int = MIN_HEADING_LEVEL) -> Optional[Node]:
    return _heading(block.heading, level) if block.heading else None


def _has_body(block: DocumentBlock) -> bool:
    return bool(block.body.strip())


# ---------------------------------------------------------------------------
# Block renderers
# ---------------------------------------------------------------------------

def _render_hero(block: DocumentBlock, context: RenderContext) -> Optional[Node]:
    if not block.heading and not _has_body(block):
        return None
    heading = None
    if block.heading and not context.duplicates_title(block.heading):
        heading = _heading(block.heading)
    return _container(
        NodeType.HERO, block, [heading, render_markdown(block.body), render_links(block.links)]
    )


def _render_prose(node_type: NodeType) -> Callable[[DocumentBlock, RenderContext], Node]:
    """Renderer for blocks made of an optional heading, a body and a link list."""

    def render(block: DocumentBlock, context: RenderContext) -> Node:
        return _container(
            node_type,
            block,
            [_optional_heading(block), render_markdown(block.body), render_links(block.links)],
        )

    return render


def _render_section(block: DocumentBlock, context: RenderContext) -> Node:
    return _container(
        NodeType.SECTION,
        block,
        [
            _optional_heading(block, heading_level(block.level)),
            render_markdown(block.body),
            render_links(block.links),
        ],
    )


def _render_list(block: DocumentBlock, context: RenderContext) -> Node:
    items = Node(
        type=NodeType.ITEMS,
        attrs={"ordered": block.ordered},
        children=[Node(type=NodeType.LIST_ITEM, children=render_inline(item)) for item in block.items],
    )
    return _container(
        NodeType.LIST,
        block,
        [_optional_heading(block), items, render_links(block.links)],
        ordered=block.ordered,
    )


def _render_steps(block: DocumentBlock, context: RenderContext) -> Node:
    steps = Node(
        type=NodeType.ITEMS,
        attrs={"ordered": True},
        children=[
            Node(type=NodeType.STEP, attrs={"number": number}, children=render_inline(item))
            for number, item in enumerate(block.items, start=1)
        ],
    )
    return _container(NodeType.STEPS, block, [_optional_heading(block), steps, render_links(block.links)])


def _render_comparison_table(block: DocumentBlock, context: RenderContext) -> Optional[Node]:
    if not block.table_columns:
        return None
    head = Node(
        type=NodeType.TABLE_HEAD,
        children=[Node(type=NodeType.HEADER_CELL, value=column) for column in block.table_columns],
    )
    # Rows are rendered with whatever cells they have, even if ragged.
    rows = [
        Node(
            type=NodeType.TABLE_ROW,
            children=[Node(type=NodeType.CELL, children=render_inline(cell)) for cell in row],
        )
        for row in block.table_rows
    ]
    table = Node(type=NodeType.TABLE, children=[head, *rows])
    return _container(
        NodeType.COMPARISON_TABLE, block, [_optional_heading(block), table, render_links(block.links)]
    )


def _render_faq(block: DocumentBlock, context: RenderContext) -> Optional[Node]:
    entries = [
        Node(
            type=NodeType.FAQ_ENTRY,
            children=[
                Node(type=NodeType.QUESTION, children=render_inline(item.question)),
                Node(type=NodeType.ANSWER, children=_compact([render_markdown(item.answer)])),
            ],
        )
        for item in block.faq_items
        if item.question
    ]
    if not entries:
        return None
    return _container(NodeType.FAQ, block, [_optional_heading(block), *entries, render_links(block.links)])


def _render_cta(block: DocumentBlock, context: RenderContext) -> Node:
    label = (block.cta.label if block.cta else "") or DEFAULT_CTA_LABEL
    href = (block.cta.href if block.cta else "") or DEFAULT_CTA_HREF
    return _container(
        NodeType.CTA,
        block,
        [_optional_heading(block), render_markdown(block.body), link_node(href, label, NodeType.ACTION)],
    )


def _render_sources(block: DocumentBlock, context: RenderContext) -> Node:
    heading = _heading(block.heading or DEFAULT_SOURCES_HEADING, level=3)
    return _container(
        NodeType.SOURCES, block, [heading, render_markdown(block.body), render_links(block.links)]
    )


def _render_fallback(block: DocumentBlock, context: RenderContext) -> Optional[Node]:
    logger.debug("Rendering unrecognised block type %r with the generic renderer", block.block_type)
    if not block.heading and not _has_body(block):
        return None
    return _container(
        NodeType.BLOCK,
        block,
        [_optional_heading(block), render_markdown(block.body), render_links(block.links)],
    )


_RENDERERS: Dict[BlockType, Callable[[DocumentBlock, RenderContext], Optional[Node]]] = {
    BlockType.HERO: _render_hero,
    BlockType.SUMMARY: _render_prose(NodeType.SUMMARY),
    BlockType.SECTION: _render_section,
    BlockType.LIST: _render_list,
    BlockType.STEPS: _render_steps,
    BlockType.COMPARISON_TABLE: _render_comparison_table,
    BlockType.FAQ: _render_faq,
    BlockType.CTA: _render_cta,
    BlockType.CONCLUSION: _render_prose(NodeType.CONCLUSION),
    BlockType.SOURCES: _render_sources,
    BlockType.UNKNOWN: _render_fallback,
}


def render_block(block: DocumentBlock, context: RenderContext = RenderContext()) -> Optional[Node]:
    """Render *block* with the renderer for its type, or ``None`` if it is empty."""
    return _RENDERERS[block.kind](block, context)
