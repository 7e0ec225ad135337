"""Tests for app.services.segmenter.segment."""

import pytest

from app.services.segmenter import CodeSegment, ParagraphSegment, segment


class TestParagraphs:
    def test_splits_on_blank_line(self):
        body = "Hello **world**, see [docs](https://ex.com/d).\n\nSecond para."
        assert segment(body) == [
            ParagraphSegment("Hello **world**, see [docs](https://ex.com/d)."),
            ParagraphSegment("Second para."),
        ]

    def test_single_line_break_stays_in_paragraph(self):
        assert segment("line one\nline two") == [ParagraphSegment("line one\nline two")]

    def test_many_blank_lines_are_one_separator(self):
        assert segment("a\n\n\n\n\nb") == [ParagraphSegment("a"), ParagraphSegment("b")]

    def test_paragraphs_are_trimmed(self):
        assert segment("  a  \n\n   b\t") == [ParagraphSegment("a"), ParagraphSegment("b")]

    @pytest.mark.parametrize("body", ["", "   ", "\n\n\n", " \t\n "])
    def test_whitespace_only_body_yields_nothing(self, body):
        assert segment(body) == []

    @pytest.mark.parametrize(
        "first, second",
        [
            ("one", "two"),
            ("a\n\nb", "c"),
            ("x\ny", "z\n\n\nw"),
        ],
    )
    def test_concatenation_preserves_paragraph_sequence(self, first, second):
        assert segment(first + "\n\n" + second) == segment(first) + segment(second)


class TestFencedCode:
    def test_code_between_paragraphs(self):
        body = "Intro\n\n```python\nprint('hi')\n```\n\nOutro"
        assert segment(body) == [
            ParagraphSegment("Intro"),
            CodeSegment(language="python", text="print('hi')"),
            ParagraphSegment("Outro"),
        ]

    def test_fence_without_language(self):
        assert segment("```\nx = 1\n```") == [CodeSegment(language="", text="x = 1")]

    def test_code_keeps_internal_blank_lines(self):
        assert segment("```\na\n\nb\n```") == [CodeSegment(language="", text="a\n\nb")]

    def test_only_one_trailing_newline_removed(self):
        assert segment("```\nx\n\n```") == [CodeSegment(language="", text="x\n")]

    def test_language_tag_characters(self):
        (code,) = segment("```objective-c_2\n@end\n```")
        assert code.language == "objective-c_2"

    def test_two_fences_are_matched_non_greedily(self):
        body = "```js\na()\n```\nbetween\n```sh\nb\n```"
        assert segment(body) == [
            CodeSegment(language="js", text="a()"),
            ParagraphSegment("between"),
            CodeSegment(language="sh", text="b"),
        ]

    def test_unterminated_fence_is_paragraph_text(self):
        assert segment("```python\nprint(1)") == [ParagraphSegment("```python\nprint(1)")]

    def test_fence_needs_line_break_after_opening(self):
        body = "```python print(1)```"
        assert segment(body) == [ParagraphSegment(body)]
