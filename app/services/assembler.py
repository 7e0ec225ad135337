"""Top-level document rendering: title, byline, featured image, then blocks."""

from typing import Any, List, Optional

from app.models.document import Author, ImageMetadata, ModularDocument
from app.models.nodes import Node, NodeType, link_node
from app.services.coercion import parse_document
from app.services.dispatcher import RenderContext, render_block

DEFAULT_ASPECT_RATIO = 16 / 9
DEFAULT_IMAGE_ALT = "Article featured image"

# Separator between the author's title and location in the byline
DETAILS_SEPARATOR = " · "


def _render_byline(author: Optional[Author]) -> Optional[Node]:
    if author is None or not author.name:
        return None

    children: List[Node] = []
    photo = author.profile_image.signed_url if author.profile_image else ""
    if photo:
        children.append(Node(type=NodeType.AVATAR, attrs={"src": photo, "alt": author.name}))
    else:
        children.append(Node(type=NodeType.AVATAR_PLACEHOLDER))
    children.append(Node(type=NodeType.AUTHOR_NAME, value=author.name))

    info = author.basic_info
    details = [part for part in (info.title, info.location) if part] if info else []
    if details:
        children.append(Node(type=NodeType.AUTHOR_DETAILS, value=DETAILS_SEPARATOR.join(details)))
    if author.bio:
        children.append(Node(type=NodeType.AUTHOR_BIO, value=author.bio))

    profiles = []
    if author.social_urls:
        candidates = (("LinkedIn", author.social_urls.linkedin), ("X", author.social_urls.x))
        profiles = [(label, url) for label, url in candidates if url]
    if profiles:
        children.append(
            Node(type=NodeType.AUTHOR_LINKS, children=[link_node(url, label) for label, url in profiles])
        )
    return Node(type=NodeType.BYLINE, children=children)


def aspect_ratio(image: ImageMetadata) -> float:
    """Width over height when both are known, otherwise 16:9."""
    if image.width and image.height:
        return image.width / image.height
    return DEFAULT_ASPECT_RATIO


def _render_featured_image(image: Optional[ImageMetadata], h1: str) -> Optional[Node]:
    if image is None or not image.signed_url:
        return None
    return Node(
        type=NodeType.FEATURED_IMAGE,
        attrs={
            "src": image.signed_url,
            "alt": image.title_text or h1 or DEFAULT_IMAGE_ALT,
            "width": image.width,
            "height": image.height,
            "aspect_ratio": aspect_ratio(image),
        },
    )


def render_parsed(document: ModularDocument) -> Node:
    """Render an already-coerced document into a ``document`` node."""
    h1 = document.seo_meta.h1 if document.seo_meta else ""
    children: List[Node] = []
    if h1:
        children.append(Node(type=NodeType.HEADING, attrs={"level": 1}, value=h1))

    for node in (_render_byline(document.author), _render_featured_image(document.featured_image, h1)):
        if node is not None:
            children.append(node)

    context = RenderContext(h1=h1)
    for block in document.blocks:
        node = render_block(block, context)
        if node is not None:
            children.append(node)

    return Node(type=NodeType.DOCUMENT, children=children)


def render_document(raw: Any) -> Node:
    """Coerce *raw* JSON and render it.  Never raises on malformed input."""
    return render_parsed(parse_document(raw))
