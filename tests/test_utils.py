"""Tests for archive path helpers."""

import pytest
from epubwalk.utils import clean_text, dirname_parts, join_path, resolve_path


class TestDirnameParts:
    def test_nested_file(self):
        assert dirname_parts("OEBPS/text/ch1.xhtml") == ["OEBPS", "text"]

    def test_root_file(self):
        assert dirname_parts("content.opf") == []


class TestResolvePath:
    """Tests for package-relative href resolution."""

    def test_relative_reference_is_joined(self):
        assert resolve_path("chap1.xhtml", ["OEBPS"]) == "OEBPS/chap1.xhtml"

    def test_already_prefixed_reference_is_unchanged(self):
        assert resolve_path("OEBPS/chap1.xhtml", ["OEBPS"]) == "OEBPS/chap1.xhtml"

    def test_root_base_leaves_reference_alone(self):
        assert resolve_path("chap1.xhtml", []) == "chap1.xhtml"

    def test_nested_base(self):
        assert resolve_path("a.png", ["OPS", "images"]) == "OPS/images/a.png"

    def test_prefix_check_is_plain_string_match(self):
        """A sibling directory sharing the prefix text is not re-joined."""
        assert resolve_path("OEBPS2/x.html", ["OEBPS"]) == "OEBPS2/x.html"

    def test_dot_segments_are_not_normalized(self):
        assert resolve_path("../img/a.png", ["OEBPS", "text"]) == (
            "OEBPS/text/../img/a.png"
        )

    @pytest.mark.parametrize("href", ["a.xhtml", "sub/b.xhtml", "c d.xhtml"])
    def test_unprefixed_equals_directory_join(self, href):
        assert resolve_path(href, ["OPS"]) == "OPS/" + href


class TestJoinPath:
    def test_joins_even_when_prefixed(self):
        assert join_path("OEBPS/a.xhtml", ["OEBPS"]) == "OEBPS/OEBPS/a.xhtml"

    def test_empty_base(self):
        assert join_path("a.xhtml", []) == "a.xhtml"


def test_clean_text_collapses_whitespace():
    assert clean_text("  one\n\ttwo   three ") == "one two three"
