"""Tests for block segmentation: fences, headings, quotes and paragraphs."""

from __future__ import annotations

from chat_markup.block_segmenter import segment_blocks, split_fences
from chat_markup.types import (
    Blockquote,
    Bold,
    CodeBlock,
    Heading,
    InlineCode,
    LineBreak,
    Paragraph,
    Text,
)


class TestSplitFences:
    def test_no_fence(self):
        assert list(split_fences("plain")) == ["plain"]

    def test_fence_with_language(self):
        segments = list(split_fences("a```py\nx = 1\n```b"))
        assert segments == ["a", CodeBlock("py", "x = 1\n", True), "b"]

    def test_fence_without_language_or_newline(self):
        segments = list(split_fences("```x```"))
        assert segments == ["", CodeBlock("x", "", False), ""]

    def test_fence_without_language(self):
        segments = list(split_fences("```\ncode```"))
        assert segments == ["", CodeBlock(None, "code", True), ""]

    def test_body_is_non_greedy(self):
        segments = list(split_fences("```\na``` mid ```\nb```"))
        assert segments == [
            "",
            CodeBlock(None, "a", True),
            " mid ",
            CodeBlock(None, "b", True),
            "",
        ]

    def test_unclosed_fence_is_text(self):
        assert list(split_fences("```js\ncode")) == ["```js\ncode"]

    def test_second_unclosed_fence_is_text(self):
        segments = list(split_fences("```\na``` then ```b"))
        assert segments == ["", CodeBlock(None, "a", True), " then ```b"]


class TestParagraphs:
    def test_empty_input(self):
        assert segment_blocks("") == []

    def test_single_line(self):
        assert segment_blocks("hello") == [Paragraph((Text("hello"),))]

    def test_lines_join_with_line_breaks(self):
        assert segment_blocks("a\nb") == [Paragraph((Text("a"), LineBreak(), Text("b")))]

    def test_blank_line_stays_in_paragraph(self):
        blocks = segment_blocks("a\n\nb")
        assert blocks == [Paragraph((Text("a"), LineBreak(), LineBreak(), Text("b")))]

    def test_trailing_newline(self):
        assert segment_blocks("a\n") == [Paragraph((Text("a"), LineBreak()))]


class TestHeadings:
    def test_levels(self):
        blocks = segment_blocks("# one\n## two\n### three")
        assert blocks == [
            Heading(1, (Text("one"),)),
            Heading(2, (Text("two"),)),
            Heading(3, (Text("three"),)),
        ]

    def test_four_hashes_is_paragraph(self):
        assert segment_blocks("#### four") == [Paragraph((Text("#### four"),))]

    def test_hash_without_space_is_paragraph(self):
        assert segment_blocks("#tag") == [Paragraph((Text("#tag"),))]

    def test_tab_separator(self):
        assert segment_blocks("#\tTitle") == [Heading(1, (Text("Title"),), "\t")]

    def test_tab_without_content_is_paragraph(self):
        assert segment_blocks("##\t") == [Paragraph((Text("##\t"),))]

    def test_hash_without_content_is_paragraph(self):
        assert segment_blocks("# ") == [Paragraph((Text("# "),))]

    def test_heading_content_is_inline_parsed(self):
        assert segment_blocks("# **big**") == [Heading(1, (Bold((Text("big"),)),))]

    def test_heading_splits_paragraphs(self):
        blocks = segment_blocks("a\n# h\nb")
        assert blocks == [
            Paragraph((Text("a"),)),
            Heading(1, (Text("h"),)),
            Paragraph((Text("b"),)),
        ]


class TestBlockquotes:
    def test_consecutive_lines_accumulate(self):
        blocks = segment_blocks("> one\n> two")
        assert blocks == [Blockquote(((Text("one"),), (Text("two"),)))]

    def test_non_quote_line_flushes(self):
        blocks = segment_blocks("> q\nafter")
        assert blocks == [
            Blockquote(((Text("q"),),)),
            Paragraph((Text("after"),)),
        ]

    def test_prefix_requires_space(self):
        assert segment_blocks(">nope") == [Paragraph((Text(">nope"),))]

    def test_quote_line_with_empty_rest(self):
        assert segment_blocks("> ") == [Blockquote(((),))]

    def test_hash_line_inside_quote_is_quoted(self):
        blocks = segment_blocks("> # not a heading")
        assert blocks == [Blockquote(((Text("# not a heading"),),))]


class TestCodeBlocks:
    def test_fence_content_is_not_inline_parsed(self):
        blocks = segment_blocks("```\n**x** @y\n```")
        assert blocks == [CodeBlock(None, "**x** @y\n", True)]

    def test_text_around_fence(self):
        blocks = segment_blocks("`x` ```js\ncode\n``` more")
        assert blocks == [
            Paragraph((InlineCode("x"), Text(" "))),
            CodeBlock("js", "code\n", True),
            Paragraph((Text(" more"),)),
        ]

    def test_fence_followed_by_quote(self):
        blocks = segment_blocks("```\nc```\n> q")
        assert blocks == [
            CodeBlock(None, "c", True),
            Paragraph(()),
            Blockquote(((Text("q"),),)),
        ]
