"""Split a free-text block body into paragraph and fenced-code segments.

Only triple-backtick fences are recognised.  A fence that is never closed is
left in place as ordinary paragraph text, backticks included.
"""

import re
from dataclasses import dataclass
from typing import List, Union

# Opening fence with an optional language tag, body (non-greedy, may span
# lines), closing fence.
_FENCED_CODE_RE = re.compile(r"```([a-zA-Z0-9_-]+)?\n(.*?)```", re.DOTALL)

# Paragraph separator: two or more consecutive line breaks
_PARAGRAPH_BREAK_RE = re.compile(r"\n{2,}")


@dataclass(frozen=True)
class ParagraphSegment:
    text: str


@dataclass(frozen=True)
class CodeSegment:
    language: str
    text: str


MarkdownSegment = Union[ParagraphSegment, CodeSegment]


def _split_paragraphs(text: str) -> List[ParagraphSegment]:
    """Return the non-empty, trimmed paragraphs of *text* in source order."""
    paragraphs: List[ParagraphSegment] = []
    for chunk in _PARAGRAPH_BREAK_RE.split(text):
        stripped = chunk.strip()
        if stripped:
            paragraphs.append(ParagraphSegment(stripped))
    return paragraphs


def segment(text: str) -> List[MarkdownSegment]:
    """Split *text* into an ordered list of :class:`ParagraphSegment` and :class:`CodeSegment`.

    Fenced regions become one code segment each (with a single trailing newline
    removed); the text between them is split into paragraphs on blank lines.
    A whitespace-only *text* yields an empty list.
    """
    normalized = text.strip()
    if not normalized:
        return []

    segments: List[MarkdownSegment] = []
    cursor = 0
    for match in _FENCED_CODE_RE.finditer(normalized):
        segments.extend(_split_paragraphs(normalized[cursor:match.start()]))
        code = match.group(2)
        if code.endswith("\n"):
            code = code[:-1]
        segments.append(CodeSegment(language=match.group(1) or "", text=code))
        cursor = match.end()

    segments.extend(_split_paragraphs(normalized[cursor:]))
    return segments
