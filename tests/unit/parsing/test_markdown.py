"""Unit tests for markdown text helpers."""

import pytest

from pharma_reports.parsing.markdown import (
    clean_markdown,
    clean_title,
    extract_markdown_links,
    has_markdown_links,
    is_full_separator_line,
    is_separator_line,
    split_row,
    split_url_fragment,
)


class TestCleanMarkdown:
    """Tests for clean_markdown."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("**Aspirin**", "Aspirin"),
            ("*italic* text", "italic text"),
            ("`NDA` ~~pending~~", "NDA pending"),
            ("[FDA label](https://fda.gov/x#s1)", "FDA label"),
            ("![chart](https://img.example/c.png) Revenue", "chart Revenue"),
            ("  many   spaces\there ", "many spaces here"),
        ],
    )
    def test_strips_markup(self, text: str, expected: str) -> None:
        """Test each kind of markup is removed."""
        assert clean_markdown(text) == expected

    def test_keep_links(self) -> None:
        """Test links survive while emphasis is still stripped."""
        text = "**See** [FDA](https://www.fda.gov/drugs#label)"
        assert clean_markdown(text, keep_links=True) == "See [FDA](https://www.fda.gov/drugs#label)"

    @pytest.mark.parametrize("value", [None, "", 12])
    def test_non_text_input(self, value: object) -> None:
        """Test non-string input cleans to an empty string."""
        assert clean_markdown(value) == ""


class TestCleanTitle:
    """Tests for clean_title."""

    def test_heading_and_colon(self) -> None:
        """Test heading hashes and a trailing colon are removed."""
        assert clean_title("### **Key Findings**:") == "Key Findings"

    def test_numbered_prefix_kept(self) -> None:
        """Test section numbers remain part of the title."""
        assert clean_title("**1. Overview**") == "1. Overview"


class TestSplitRow:
    """Tests for pipe row splitting."""

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("| a | b |", ["a", "b"]),
            ("a | b", ["a", "b"]),
            ("| a | | c |", ["a", "", "c"]),
            ("| x \\| y | z |", ["x | y", "z"]),
            ("| \\- | 10 |", ["-", "10"]),
            ("| \\:--- | a\\-b |", [":---", "a\\-b"]),
        ],
    )
    def test_split(self, line: str, expected: list[str]) -> None:
        """Test border pipes, inner empties and escaped pipes and dashes."""
        assert split_row(line) == expected


class TestSeparatorLine:
    """Tests for separator detection."""

    @pytest.mark.parametrize("line", ["|---|---|", "| :--- | ---: |", "|:-:|", "---|---"])
    def test_separators(self, line: str) -> None:
        """Test dash/colon pipe lines are separators."""
        assert is_separator_line(line)

    @pytest.mark.parametrize("line", ["---", "| a | b |", "| | |", "text - more"])
    def test_not_separators(self, line: str) -> None:
        """Test rules, rows and prose are not separators."""
        assert not is_separator_line(line)

    @pytest.mark.parametrize("line", ["|---|---|", "| :--- | ---: |", "|:---:|", "---|---"])
    def test_full_separators(self, line: str) -> None:
        """Test every cell being three or more dashes makes a full separator."""
        assert is_full_separator_line(line)

    @pytest.mark.parametrize("line", ["| - | - |", "|--|--|", "| --- | - |", "|:-:|", "| a | b |"])
    def test_placeholder_rows_are_not_full_separators(self, line: str) -> None:
        """Test "-" placeholder rows are not full separators."""
        assert not is_full_separator_line(line)


class TestLinks:
    """Tests for inline link extraction."""

    def test_extract_in_order(self) -> None:
        """Test every link is returned in encounter order."""
        text = "[A](https://x.com/1#s1) + [B](https://y.com/2)"
        links = extract_markdown_links(text)
        assert [(link.text, link.url) for link in links] == [
            ("A", "https://x.com/1#s1"),
            ("B", "https://y.com/2"),
        ]
        assert links[0].full_match == "[A](https://x.com/1#s1)"

    def test_has_links(self) -> None:
        """Test link presence detection."""
        assert has_markdown_links("see [A](https://x.com)")
        assert not has_markdown_links("no links [here]")
        assert not has_markdown_links(None)

    def test_split_url_fragment(self) -> None:
        """Test the fragment is split on the first hash."""
        assert split_url_fragment("https://x.com/a#sec") == ("https://x.com/a", "sec")
        assert split_url_fragment("https://x.com/a") == ("https://x.com/a", None)
        assert split_url_fragment("https://x.com/a#") == ("https://x.com/a", None)
        assert split_url_fragment("https://x.com/a#b#c") == ("https://x.com/a", "b#c")
