"""Tests for the markup tokenizer, node scanners and fix predicates."""

from __future__ import annotations

import pytest

from svga11y.models import ImgNode, SvgNode
from svga11y.scanner import (
    img_needs_fix,
    iter_tags,
    scan_flagged_nodes,
    scan_img_nodes,
    scan_svg_nodes,
    svg_needs_fix,
)
from tests.conftest import SAMPLE_PAGE


# ── Tokenizer ───────────────────────────────────────────────────────────────


class TestIterTags:
    def test_start_and_end_tags(self) -> None:
        tags = list(iter_tags("<p class='x'>hi</p>"))
        assert [(t.name, t.closing) for t in tags] == [("p", False), ("p", True)]
        assert tags[0].get("class") == "x"

    def test_gt_inside_quoted_value(self) -> None:
        text = '<img alt="a > b" src="x.png">'
        (tag,) = list(iter_tags(text))
        assert tag.end == len(text)
        assert tag.get("alt") == "a > b"
        assert tag.get("src") == "x.png"

    def test_unquoted_and_bare_attributes(self) -> None:
        (tag,) = list(iter_tags("<input type=checkbox checked>"))
        assert tag.get("type") == "checkbox"
        assert tag.get("checked") == ""
        assert tag.get("missing") is None
        assert tag.has("checked")

    def test_attribute_names_case_insensitive(self) -> None:
        (tag,) = list(iter_tags('<SVG ARIA-HIDDEN="true">'))
        assert tag.name == "svg"
        assert tag.get("aria-hidden") == "true"

    def test_first_attribute_occurrence_wins(self) -> None:
        (tag,) = list(iter_tags('<img src="a.png" src="b.png">'))
        assert tag.get("src") == "a.png"

    def test_comments_cdata_and_doctype_skipped(self) -> None:
        text = "<!DOCTYPE html><!-- <svg> --><![CDATA[<img>]]><?xml x?><b>"
        assert [t.name for t in iter_tags(text)] == ["b"]

    def test_self_closing(self) -> None:
        (tag,) = list(iter_tags('<line x1="1"/>'))
        assert tag.self_closing

    def test_unterminated_tag_stops_scan(self) -> None:
        assert [t.name for t in iter_tags('<b></b><img src="x')] == ["b", "b"]

    def test_stray_lt_is_text(self) -> None:
        assert [t.name for t in iter_tags("a < b <i>")] == ["i"]

    def test_unmatched_quote_ends_at_tag_close(self) -> None:
        tags = list(iter_tags("<p title=\"it><img src='a.png'>"))
        assert [t.name for t in tags] == ["p", "img"]
        assert tags[0].get("title") == "it"
        assert tags[1].get("src") == "a.png"


# ── SVG scanning ────────────────────────────────────────────────────────────


class TestScanSvgNodes:
    def test_basic_offsets(self) -> None:
        text = 'x <svg width="10"><rect/></svg> y'
        (node,) = scan_svg_nodes(text)
        assert isinstance(node, SvgNode)
        assert node.raw_markup == text[node.start:node.end]
        assert node.raw_markup.startswith("<svg") and node.raw_markup.endswith("</svg>")
        assert text[node.open_tag.start:node.open_tag.end] == '<svg width="10">'
        assert node.start < node.end
        assert node.open_tag.end <= node.end

    def test_title_and_desc_flags(self) -> None:
        title, desc, plain = scan_svg_nodes(
            "<svg><title>T</title></svg><svg><desc>D</desc></svg><svg><g/></svg>"
        )
        assert title.has_title and not title.has_desc
        assert desc.has_desc and not desc.has_title
        assert not plain.has_title and not plain.has_desc

    @pytest.mark.parametrize("value", ["true", "TRUE", "True"])
    def test_aria_hidden_true_any_case(self, value: str) -> None:
        (node,) = scan_svg_nodes(f'<svg aria-hidden="{value}"></svg>')
        assert node.has_aria_hidden

    def test_aria_hidden_false(self) -> None:
        (node,) = scan_svg_nodes('<svg aria-hidden="false"></svg>')
        assert not node.has_aria_hidden

    def test_unterminated_svg_dropped(self) -> None:
        assert scan_svg_nodes("<svg><rect/>") == []

    def test_uppercase_tags(self) -> None:
        (node,) = scan_svg_nodes("<SVG><TITLE>x</TITLE></SVG>")
        assert node.has_title

    def test_nested_svgs_pair_by_depth(self) -> None:
        text = "<svg id='outer'><svg id='inner'><title>t</title></svg></svg>"
        outer, inner = scan_svg_nodes(text)
        assert outer.start == 0 and outer.end == len(text)
        assert inner.raw_markup == "<svg id='inner'><title>t</title></svg>"
        assert outer.has_title and inner.has_title

    def test_title_outside_svg_ignored(self) -> None:
        (node,) = scan_svg_nodes("<title>page</title><svg></svg>")
        assert not node.has_title

    def test_svg_inside_comment_ignored(self) -> None:
        assert scan_svg_nodes("<!-- <svg></svg> -->") == []

    def test_self_closing_svg_ignored(self) -> None:
        assert scan_svg_nodes("<svg/>") == []

    def test_document_order(self) -> None:
        nodes = scan_svg_nodes(SAMPLE_PAGE)
        assert [n.start for n in nodes] == sorted(n.start for n in nodes)
        assert len(nodes) == 3


# ── IMG scanning ────────────────────────────────────────────────────────────


class TestScanImgNodes:
    def test_alt_absent_vs_empty(self) -> None:
        missing, empty = scan_img_nodes('<img src="a.png"><img src="b.png" alt="">')
        assert missing.alt is None and not missing.has_alt
        assert empty.alt == "" and empty.has_alt

    def test_src_missing_is_empty(self) -> None:
        (node,) = scan_img_nodes("<img>")
        assert node.src == ""

    def test_self_closing_and_raw_markup(self) -> None:
        text = '<p><img src="a.png" /></p>'
        (node,) = scan_img_nodes(text)
        assert isinstance(node, ImgNode)
        assert node.raw_markup == '<img src="a.png" />'
        assert node.open_tag.start == node.start and node.open_tag.end == node.end

    @pytest.mark.parametrize("role", ["presentation", "none", "NONE"])
    def test_presentational_roles(self, role: str) -> None:
        (node,) = scan_img_nodes(f'<img src="a.png" role="{role}">')
        assert node.has_role

    def test_other_role(self) -> None:
        (node,) = scan_img_nodes('<img src="a.png" role="button">')
        assert not node.has_role

    def test_aria_hidden(self) -> None:
        (node,) = scan_img_nodes('<img src="a.png" aria-hidden="true">')
        assert node.has_aria_hidden


# ── Predicates ──────────────────────────────────────────────────────────────


class TestPredicates:
    @pytest.mark.parametrize("inner", [
        "<title>Chart</title>",
        "<desc>Long description</desc>",
        "<g><title>nested</title></g>",
        "<path d='M0 0'/><desc/>",
    ])
    def test_svg_with_title_or_desc_never_needs_fix(self, inner: str) -> None:
        (node,) = scan_svg_nodes(f"<svg>{inner}</svg>")
        assert svg_needs_fix(node) is False

    @pytest.mark.parametrize("inner", ["", "<path d='M0 0'/>", "<text>Hi</text>"])
    def test_hidden_svg_never_needs_fix(self, inner: str) -> None:
        (node,) = scan_svg_nodes(f'<svg aria-hidden="true">{inner}</svg>')
        assert svg_needs_fix(node) is False

    def test_unnamed_svg_needs_fix(self) -> None:
        (node,) = scan_svg_nodes("<svg><path d='M0 0'/></svg>")
        assert svg_needs_fix(node) is True

    @pytest.mark.parametrize("tag", [
        '<img src="a.png" alt="">',
        '<img src="a.png" alt="A cat">',
        "<img alt>",
    ])
    def test_img_with_alt_never_needs_fix(self, tag: str) -> None:
        (node,) = scan_img_nodes(tag)
        assert img_needs_fix(node) is False

    @pytest.mark.parametrize("tag", [
        '<img src="a.png">',
        '<img src="a.png" aria-hidden="false">',
        '<img src="a.png" role="img">',
    ])
    def test_img_without_alt_needs_fix(self, tag: str) -> None:
        (node,) = scan_img_nodes(tag)
        assert img_needs_fix(node) is True

    @pytest.mark.parametrize("tag", [
        '<img src="a.png" aria-hidden="true">',
        '<img src="a.png" role="presentation">',
        '<img src="a.png" role="none">',
    ])
    def test_hidden_or_presentational_img(self, tag: str) -> None:
        (node,) = scan_img_nodes(tag)
        assert img_needs_fix(node) is False

    def test_unmatched_quote_does_not_hide_later_elements(self) -> None:
        text = "<p title=\"it>broken</p><svg><path d='M0 0'/></svg><img src=b.png>"
        assert [type(n).__name__ for n in scan_flagged_nodes(text)] == ["SvgNode", "ImgNode"]

    def test_scan_flagged_nodes(self) -> None:
        nodes = scan_flagged_nodes(SAMPLE_PAGE)
        assert [type(n).__name__ for n in nodes] == ["SvgNode", "ImgNode"]
        assert 'class="icon-trash"' in nodes[0].raw_markup
        assert nodes[1].src == "img/spacer.gif"
