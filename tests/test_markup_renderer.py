"""
Tests for the markup-subset renderer.

Covers each rule, the rule order, and the pass-through behaviour for text
that uses none of the conventions.
"""

import pytest

from hacklearn.render.markup import RULES, render


class TestRules:
    def test_rule_order_is_fixed(self) -> None:
        assert [rule.name for rule in RULES] == [
            "bold",
            "heading3",
            "heading2",
            "heading1",
            "list_item",
            "paragraph_break",
        ]

    def test_bold(self) -> None:
        assert render("a **b** c") == "a <strong>b</strong> c"

    def test_bold_is_non_greedy(self) -> None:
        assert render("**a** and **b**") == "<strong>a</strong> and <strong>b</strong>"

    def test_empty_bold_pair(self) -> None:
        assert render("****") == "<strong></strong>"

    def test_unmatched_bold_marker_is_left_literal(self) -> None:
        assert render("**a** and **b") == "<strong>a</strong> and **b"

    @pytest.mark.parametrize(
        "source, expected",
        [
            ("# Title", "<h1>Title</h1>"),
            ("## Title", "<h2>Title</h2>"),
            ("### Title", "<h3>Title</h3>"),
        ],
    )
    def test_headings(self, source: str, expected: str) -> None:
        assert render(source) == expected

    def test_three_hash_line_is_only_a_level_three_heading(self) -> None:
        html = render("### Deep")
        assert "<h1>" not in html
        assert html == "<h3>Deep</h3>"

    def test_heading_requires_line_start(self) -> None:
        assert render("see # not a heading") == "see # not a heading"

    def test_heading_without_space_is_plain_text(self) -> None:
        assert render("#hashtag") == "#hashtag"

    def test_headings_match_per_line(self) -> None:
        assert render("intro\n## Part\nbody") == "intro\n<h2>Part</h2>\nbody"

    def test_carriage_return_stays_outside_line_tags(self) -> None:
        assert render("# Title\r\n- item\r\nbody") == "<h1>Title</h1>\r\n<li>item</li>\r\nbody"

    def test_list_items_have_no_container(self) -> None:
        assert render("- one\n- two") == "<li>one</li>\n<li>two</li>"

    def test_paragraph_break(self) -> None:
        assert render("a\n\nb") == "a<br/><br/>b"

    def test_single_newline_is_kept(self) -> None:
        assert render("a\nb") == "a\nb"

    def test_bold_inside_list_item(self) -> None:
        assert render("- **Tip:** use a VM") == "<li><strong>Tip:</strong> use a VM</li>"


class TestScenarios:
    def test_sqli_snippet(self) -> None:
        html = render("**SQLi** basics\n\n- parameterize\n- least privilege")
        assert html == (
            "<strong>SQLi</strong> basics<br/><br/>"
            "<li>parameterize</li>\n<li>least privilege</li>"
        )
        assert html.count("<li>") == 2

    def test_heading_then_paragraph(self) -> None:
        assert render("# Intro\n\nText") == "<h1>Intro</h1><br/><br/>Text"


class TestProperties:
    @pytest.mark.parametrize(
        "text",
        [
            "",
            "plain text",
            "line one\nline two",
            "a * single star and a - dash",
            "C# is not a heading",
            "  - indented dash",
            "50% off * 2",
        ],
    )
    def test_plain_text_passes_through(self, text: str) -> None:
        assert render(text) == text
        assert render(render(text)) == text

    @pytest.mark.parametrize(
        "text",
        [
            "**a**",
            "**a** **b** **c**",
            "x **y\nz** w",
            "- **a**\n\n# **b**",
        ],
    )
    def test_balanced_bold_markers_are_consumed(self, text: str) -> None:
        assert text.count("**") % 2 == 0
        assert "**" not in render(text)

    @pytest.mark.parametrize("text", ["**", "***", "a ** b", "\n\n\n", "# ", "- "])
    def test_never_raises(self, text: str) -> None:
        assert isinstance(render(text), str)
