"""Serialise a presentation node tree to HTML.

This is the adaptation layer between the UI-agnostic node tree and a concrete
markup.  External links open in a new tab with ``noopener noreferrer``;
same-page anchors do not.
"""

from typing import Union

from bs4 import BeautifulSoup, NavigableString, Tag

from app.models.nodes import Node, NodeType

# Node types that map one-to-one onto an element wrapping their children
_ELEMENTS = {
    NodeType.DOCUMENT: "article",
    NodeType.BYLINE: "div",
    NodeType.AUTHOR_NAME: "span",
    NodeType.AUTHOR_DETAILS: "span",
    NodeType.AUTHOR_BIO: "p",
    NodeType.AVATAR_PLACEHOLDER: "span",
    NodeType.HERO: "header",
    NodeType.SUMMARY: "section",
    NodeType.SECTION: "section",
    NodeType.LIST: "section",
    NodeType.STEPS: "section",
    NodeType.COMPARISON_TABLE: "section",
    NodeType.FAQ: "section",
    NodeType.CTA: "aside",
    NodeType.CONCLUSION: "footer",
    NodeType.SOURCES: "section",
    NodeType.BLOCK: "section",
    NodeType.LIST_ITEM: "li",
    NodeType.STEP: "li",
    NodeType.TABLE_ROW: "tr",
    NodeType.HEADER_CELL: "th",
    NodeType.CELL: "td",
    NodeType.FAQ_ENTRY: "details",
    NodeType.QUESTION: "summary",
    NodeType.ANSWER: "div",
    NodeType.MARKDOWN: "div",
    NodeType.PARAGRAPH: "p",
    NodeType.BOLD: "strong",
    NodeType.INLINE_CODE: "code",
}

_LINK_LISTS = {NodeType.LINK_LIST, NodeType.AUTHOR_LINKS}


def _link(soup: BeautifulSoup, node: Node) -> Tag:
    tag = soup.new_tag("a", attrs={"href": node.attrs.get("href", "")})
    if not node.attrs.get("is_anchor"):
        tag["target"] = "_blank"
        tag["rel"] = "noopener noreferrer"
    tag.string = node.attrs.get("label", "")
    return tag


def _featured_image(soup: BeautifulSoup, node: Node) -> Tag:
    width, height = node.attrs.get("width"), node.attrs.get("height")
    ratio = f"{width:g} / {height:g}" if width and height else "16 / 9"
    figure = soup.new_tag("figure")
    figure.append(
        soup.new_tag(
            "img",
            attrs={"src": node.attrs["src"], "alt": node.attrs["alt"], "style": f"aspect-ratio: {ratio}"},
        )
    )
    return figure


def _table(soup: BeautifulSoup, node: Node) -> Tag:
    table = soup.new_tag("table")
    body = soup.new_tag("tbody")
    for child in node.children:
        if child.type == NodeType.TABLE_HEAD:
            head = soup.new_tag("thead")
            row = soup.new_tag("tr")
            for cell in child.children:
                row.append(_build(soup, cell))
            head.append(row)
            table.append(head)
        else:
            body.append(_build(soup, child))
    table.append(body)
    return table


def _build(soup: BeautifulSoup, node: Node) -> Union[Tag, NavigableString]:
    if node.type == NodeType.TEXT:
        return NavigableString(node.value or "")
    if node.type == NodeType.BREAK:
        return soup.new_tag("br")
    if node.type in (NodeType.LINK, NodeType.ACTION):
        return _link(soup, node)
    if node.type == NodeType.HEADING:
        tag = soup.new_tag(f"h{node.attrs.get('level', 2)}")
        tag.string = node.value or ""
        return tag
    if node.type == NodeType.CODE_BLOCK:
        pre = soup.new_tag("pre")
        if node.attrs.get("language"):
            pre["data-language"] = node.attrs["language"]
        code = soup.new_tag("code")
        code.string = node.value or ""
        pre.append(code)
        return pre
    if node.type == NodeType.AVATAR:
        return soup.new_tag("img", attrs={"src": node.attrs["src"], "alt": node.attrs["alt"]})
    if node.type == NodeType.FEATURED_IMAGE:
        return _featured_image(soup, node)
    if node.type == NodeType.TABLE:
        return _table(soup, node)

    if node.type in _LINK_LISTS:
        tag = soup.new_tag("ul")
        for child in node.children:
            item = soup.new_tag("li")
            item.append(_build(soup, child))
            tag.append(item)
        return tag

    if node.type == NodeType.ITEMS:
        tag = soup.new_tag("ol" if node.attrs.get("ordered") else "ul")
    else:
        tag = soup.new_tag(_ELEMENTS.get(node.type, "div"))
        if node.attrs.get("block_type"):
            tag["data-block-type"] = node.attrs["block_type"]
    if node.value is not None:
        tag.string = node.value
    for child in node.children:
        tag.append(_build(soup, child))
    return tag


def to_html(node: Node) -> str:
    """Return the HTML markup for *node* and its subtree."""
    soup = BeautifulSoup("", "lxml")
    return str(_build(soup, node))
