"""Tests for app.services.html_renderer.to_html and app.services.markdown_export."""

from bs4 import BeautifulSoup

from app.services.assembler import render_document
from app.services.html_renderer import to_html
from app.services.markdown_export import clean_markdown, to_markdown


def _soup(raw: dict) -> BeautifulSoup:
    return BeautifulSoup(to_html(render_document(raw)), "lxml")


class TestLinks:
    def test_external_link_opens_in_new_tab(self):
        soup = _soup({"blocks": [{"block_type": "summary", "body": "See [docs](https://ex.com/d)."}]})
        link = soup.find("a")
        assert link["href"] == "https://ex.com/d"
        assert link["target"] == "_blank"
        assert link["rel"] == ["noopener", "noreferrer"]
        assert link.get_text() == "docs"

    def test_anchor_link_stays_on_page(self):
        soup = _soup({"blocks": [{"block_type": "summary", "body": "Jump to [FAQ](#faq)."}]})
        link = soup.find("a")
        assert link["href"] == "#faq"
        assert not link.has_attr("target")
        assert not link.has_attr("rel")

    def test_block_links_render_as_list(self):
        soup = _soup(
            {"blocks": [{"block_type": "conclusion", "body": "Done.", "links": [{"href": "https://a.io", "anchor": "A"}]}]}
        )
        footer = soup.find("footer")
        assert [a.get_text() for a in footer.select("ul li a")] == ["A"]

    def test_default_cta_action(self):
        soup = _soup({"blocks": [{"block_type": "cta"}]})
        action = soup.find("aside").find("a")
        assert action["href"] == "#"
        assert action.get_text() == "Learn more"


class TestStructure:
    def test_headings(self):
        soup = _soup(
            {
                "seo_meta": {"h1": "Guide"},
                "blocks": [{"block_type": "section", "heading": "Deep", "level": 3}, {"block_type": "sources"}],
            }
        )
        assert soup.find("h1").get_text() == "Guide"
        assert [h.get_text() for h in soup.find_all("h3")] == ["Deep", "Sources"]

    def test_block_type_attribute(self):
        soup = _soup({"blocks": [{"block_type": "mystery", "body": "x"}]})
        assert soup.find("section")["data-block-type"] == "mystery"

    def test_code_block(self):
        soup = _soup({"blocks": [{"block_type": "section", "body": "```python\nprint(1)\n```"}]})
        pre = soup.find("pre")
        assert pre["data-language"] == "python"
        assert pre.find("code").get_text() == "print(1)"

    def test_line_breaks(self):
        soup = _soup({"blocks": [{"block_type": "section", "body": "one\ntwo"}]})
        paragraph = soup.find("p")
        assert len(paragraph.find_all("br")) == 1
        assert paragraph.get_text() == "onetwo"

    def test_ordered_and_bulleted_lists(self):
        soup = _soup(
            {
                "blocks": [
                    {"block_type": "list", "items": ["a", "b"], "ordered": True},
                    {"block_type": "list", "items": ["c"]},
                    {"block_type": "steps", "items": ["d"]},
                ]
            }
        )
        lists = soup.select("section > ol, section > ul")
        assert [tag.name for tag in lists] == ["ol", "ul", "ol"]

    def test_table(self):
        soup = _soup(
            {
                "blocks": [
                    {
                        "block_type": "comparison_table",
                        "table_columns": ["Plan", "Price"],
                        "table_rows": [["Free", "**$0**"], ["Pro"]],
                    }
                ]
            }
        )
        table = soup.find("table")
        assert [th.get_text() for th in table.select("thead th")] == ["Plan", "Price"]
        rows = table.select("tbody tr")
        assert [len(row.find_all("td")) for row in rows] == [2, 1]
        assert rows[0].find("strong").get_text() == "$0"

    def test_featured_image_aspect_ratio(self):
        soup = _soup({"featured_image": {"signed_url": "https://x/y.png", "width": 1200, "height": 630}})
        assert soup.find("img")["style"] == "aspect-ratio: 1200 / 630"

    def test_featured_image_default_ratio(self):
        soup = _soup({"featured_image": {"signed_url": "https://x/y.png"}})
        assert soup.find("img")["style"] == "aspect-ratio: 16 / 9"

    def test_text_is_escaped(self):
        soup = _soup({"blocks": [{"block_type": "section", "body": "<script>alert('x')</script>"}]})
        assert soup.find("script") is None
        assert "alert('x')" in soup.find("p").get_text()


class TestMarkdownExport:
    def test_document_to_markdown(self):
        tree = render_document(
            {
                "seo_meta": {"h1": "Guide"},
                "blocks": [
                    {
                        "block_type": "section",
                        "heading": "Intro",
                        "body": "Hello **world**, see [docs](https://ex.com/d).\n\nSecond para.",
                    }
                ],
            }
        )
        markdown = to_markdown(tree)
        assert markdown.startswith("# Guide")
        assert "## Intro" in markdown
        assert "**world**" in markdown
        assert "[docs](https://ex.com/d)" in markdown
        assert "Second para." in markdown
        assert "\n\n\n" not in markdown

    def test_empty_document(self):
        assert to_markdown(render_document({})) == ""

    def test_clean_markdown_collapses_blank_lines(self):
        assert clean_markdown("\n\na\n\n\n \n\nb\n") == "a\n\nb"
