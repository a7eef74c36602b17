"""Tests for the markdown-it to event mapping."""

import doctest
from collections.abc import Iterator

import pytest

from telegram_escape import parser, strikethrough
from telegram_escape.events import (
    BlockQuote,
    CodeBlockEnd,
    CodeBlockStart,
    CodeSpan,
    Emphasis,
    End,
    HardBreak,
    Heading,
    Image,
    Item,
    Link,
    List,
    Paragraph,
    Rule,
    SoftBreak,
    Start,
    Strikethrough,
    Strong,
    TextRun,
)
from telegram_escape.parser import parse_events


def _inline(*events):
    return [Start(Paragraph()), *events, End(Paragraph())]


class TestParseEvents:
    def test_empty(self) -> None:
        assert list(parse_events("")) == []

    def test_returns_iterator(self) -> None:
        assert isinstance(parse_events("text"), Iterator)

    def test_plain_text(self) -> None:
        assert list(parse_events("hello")) == _inline(TextRun("hello"))

    def test_emphasis(self) -> None:
        assert list(parse_events("*hi*")) == _inline(
            Start(Emphasis()), TextRun("hi"), End(Emphasis())
        )

    def test_strong(self) -> None:
        assert list(parse_events("**hi**")) == _inline(
            Start(Strong()), TextRun("hi"), End(Strong())
        )

    def test_strikethrough_enabled(self) -> None:
        assert list(parse_events("~~hi~~")) == _inline(
            Start(Strikethrough()), TextRun("hi"), End(Strikethrough())
        )

    def test_single_tilde_strikethrough(self) -> None:
        assert list(parse_events("~hi~")) == _inline(
            Start(Strikethrough()), TextRun("hi"), End(Strikethrough())
        )

    def test_mismatched_tilde_runs_stay_text(self) -> None:
        assert list(parse_events("~hi~~")) == _inline(TextRun("~hi~~"))

    def test_triple_tilde_is_not_strikethrough(self) -> None:
        assert list(parse_events("x ~~~hi~~~")) == _inline(TextRun("x ~~~hi~~~"))

    def test_strikethrough_inside_emphasis(self) -> None:
        assert list(parse_events("*a ~b~*")) == _inline(
            Start(Emphasis()),
            TextRun("a "),
            Start(Strikethrough()),
            TextRun("b"),
            End(Strikethrough()),
            End(Emphasis()),
        )

    def test_tilde_fence_info_is_kept_raw(self) -> None:
        events = list(parse_events("~~~py`x\\y\ncode\n~~~"))
        assert events[0] == CodeBlockStart(info="py`x\\y")

    def test_code_span(self) -> None:
        assert list(parse_events("`a_b`")) == _inline(CodeSpan("a_b"))

    def test_fenced_code(self) -> None:
        assert list(parse_events("```py\nx = 1\n```")) == [
            CodeBlockStart(info="py"),
            TextRun("x = 1\n"),
            CodeBlockEnd(),
        ]

    def test_empty_fenced_code(self) -> None:
        assert list(parse_events("```\n```")) == [CodeBlockStart(), CodeBlockEnd()]

    def test_indented_code(self) -> None:
        assert list(parse_events("    x = 1")) == [
            CodeBlockStart(info="", fenced=False),
            TextRun("x = 1\n"),
            CodeBlockEnd(),
        ]

    def test_heading_levels(self) -> None:
        assert list(parse_events("## h")) == [
            Start(Heading(2)),
            TextRun("h"),
            End(Heading(2)),
        ]
        assert list(parse_events("h\n===")) == [
            Start(Heading(1)),
            TextRun("h"),
            End(Heading(1)),
        ]

    def test_tight_list_has_no_paragraphs(self) -> None:
        bullets = List(ordered=False, start=1, marker="-")
        assert list(parse_events("- a\n- b")) == [
            Start(bullets),
            Start(Item()),
            TextRun("a"),
            End(Item()),
            Start(Item()),
            TextRun("b"),
            End(Item()),
            End(bullets),
        ]

    def test_loose_list_keeps_paragraphs(self) -> None:
        events = list(parse_events("- a\n\n- b"))
        assert events.count(Start(Paragraph())) == 2

    def test_ordered_list(self) -> None:
        ordered = List(ordered=True, start=3, marker=")")
        events = list(parse_events("3) x"))
        assert events[0] == Start(ordered)
        assert events[-1] == End(ordered)

    def test_link(self) -> None:
        link = Link(url="http://x.com", title=None)
        assert list(parse_events("[a](http://x.com)")) == _inline(
            Start(link), TextRun("a"), End(link)
        )

    def test_link_title(self) -> None:
        events = list(parse_events('[a](http://x.com "T")'))
        assert events[1] == Start(Link(url="http://x.com", title="T"))

    def test_image_alt_text_between_markers(self) -> None:
        image = Image(url="a.png", title=None)
        assert list(parse_events("![alt](a.png)")) == _inline(
            Start(image), TextRun("alt"), End(image)
        )

    def test_breaks(self) -> None:
        assert list(parse_events("a\nb")) == _inline(TextRun("a"), SoftBreak(), TextRun("b"))
        assert list(parse_events("a  \nb")) == _inline(TextRun("a"), HardBreak(), TextRun("b"))

    def test_block_quote(self) -> None:
        assert list(parse_events("> q")) == [
            Start(BlockQuote()),
            *_inline(TextRun("q")),
            End(BlockQuote()),
        ]

    def test_rule(self) -> None:
        assert list(parse_events("---")) == [Rule()]

    def test_html_is_text(self) -> None:
        assert list(parse_events("<b>x</b>")) == _inline(TextRun("<b>x</b>"))

    def test_backslash_escape_is_decoded(self) -> None:
        assert list(parse_events("\\*")) == _inline(TextRun("*"))

    def test_unmatched_delimiters_stay_text(self) -> None:
        events = list(parse_events("a_*~`b"))
        assert all(isinstance(e, (TextRun, Start, End)) for e in events)
        assert "".join(e.content for e in events if isinstance(e, TextRun)) == "a_*~`b"


class TestModuleExamples:
    @pytest.mark.parametrize("module", [parser, strikethrough])
    def test_docstring_examples_run(self, module) -> None:
        result = doctest.testmod(module)
        assert result.attempted > 0
        assert result.failed == 0
