"""Inline tokenizer for paragraph text.

Recognised inline markup, tried in this order at every position:

``[label](target)``
    A link.  ``target`` is either an absolute ``http://``/``https://`` URL
    (no whitespace, no ``)``) or a same-page anchor starting with ``#``.

``**text**``
    Bold.  No ``*`` and no line break inside.

```text```
    Inline code.  No backtick and no line break inside.

The scan is leftmost-first and non-overlapping.  Everything that is not
recognised markup is emitted as :class:`TextToken`, so the concatenated
:attr:`literal` of the returned tokens always reproduces the input exactly.
Something that merely resembles markup (``[label](ftp://x)``, ``**``, an
unclosed backtick) simply stays text.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

_URL_PREFIXES = ("http://", "https://")


@dataclass(frozen=True)
class TextToken:
    value: str

    @property
    def literal(self) -> str:
        return self.value


@dataclass(frozen=True)
class BoldToken:
    value: str

    @property
    def literal(self) -> str:
        return f"**{self.value}**"


@dataclass(frozen=True)
class InlineCodeToken:
    value: str

    @property
    def literal(self) -> str:
        return f"`{self.value}`"


@dataclass(frozen=True)
class LinkToken:
    label: str
    href: str
    is_anchor: bool

    @property
    def literal(self) -> str:
        return f"[{self.label}]({self.href})"


InlineToken = Union[TextToken, BoldToken, InlineCodeToken, LinkToken]

# A matcher returns the token found at a position and the index just past it.
_Match = Optional[Tuple[InlineToken, int]]


def _match_link(text: str, start: int) -> _Match:
    if text[start] != "[":
        return None
    close = text.find("]", start + 1)
    if close <= start + 1 or not text.startswith("(", close + 1):
        return None
    label = text[start + 1:close]
    target_start = close + 2

    if text.startswith("#", target_start):
        end = text.find(")", target_start + 1)
        if end <= target_start + 1:
            return None
    elif text.startswith(_URL_PREFIXES, target_start):
        prefix = 7 if text.startswith("http://", target_start) else 8
        end = target_start + prefix
        while end < len(text) and text[end] != ")" and not text[end].isspace():
            end += 1
        if end == target_start + prefix or not text.startswith(")", end):
            return None
    else:
        return None

    href = text[target_start:end]
    return LinkToken(label=label, href=href, is_anchor=href.startswith("#")), end + 1


def _match_delimited(text: str, start: int, delimiter: str) -> Optional[Tuple[str, int]]:
    """Match ``<delimiter>content<delimiter>`` where content is non-empty and
    contains neither the delimiter's character nor a line break."""
    if not text.startswith(delimiter, start):
        return None
    forbidden = delimiter[0]
    pos = start + len(delimiter)
    while pos < len(text) and text[pos] != forbidden and text[pos] != "\n":
        pos += 1
    if pos == start + len(delimiter) or not text.startswith(delimiter, pos):
        return None
    return text[start + len(delimiter):pos], pos + len(delimiter)


def _match_bold(text: str, start: int) -> _Match:
    found = _match_delimited(text, start, "**")
    if found is None:
        return None
    value, end = found
    return BoldToken(value), end


def _match_inline_code(text: str, start: int) -> _Match:
    found = _match_delimited(text, start, "`")
    if found is None:
        return None
    value, end = found
    return InlineCodeToken(value), end


_MATCHERS = (_match_link, _match_bold, _match_inline_code)


def tokenize(text: str) -> List[InlineToken]:
    """Split *text* into an ordered list of inline tokens covering it exactly once."""
    tokens: List[InlineToken] = []
    plain_start = 0
    pos = 0
    while pos < len(text):
        for matcher in _MATCHERS:
            found = matcher(text, pos)
            if found is not None:
                break
        else:
            pos += 1
            continue

        token, end = found
        if pos > plain_start:
            tokens.append(TextToken(text[plain_start:pos]))
        tokens.append(token)
        plain_start = pos = end

    if plain_start < len(text):
        tokens.append(TextToken(text[plain_start:]))
    return tokens
