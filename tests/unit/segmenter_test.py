"""Tests for the end-to-end segmenter: delimiters first, then line heuristics."""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from baseline_buddy.config import SegmenterConfig
from baseline_buddy.core.segmenter import Segmenter, merge_adjacent, segment
from baseline_buddy.models import Segment, SegmentKind

P = Segment.prose
C = Segment.code

HEURISTIC_SAMPLES = [
    "How are you?",
    "const x = 1;\nfunction f() { return x; }",
    "Explain\n\nif (a) { b(); }\n\nwhat is this?",
    "const a = 1;\n// explain b\nconst b = 2;",
    "Add this rule:\n.button {\n  color: red;\n}",
    "Run this query:\nSELECT id, name\nFROM users\nWHERE active = 1;",
    "Hello!\nconst a = 1;\nThanks\nconsole.log(a);\nDone.",
    "const a = 1;\nfoo bar\nbaz qux\nconst b = 2;",
    "<div class=\"box\">\n  <p>Hello</p>\n</div>\nThat is the markup.",
    "/*\n What is this?\n*/\nlet x;\n\n\nhow are you",
]

ODD_INPUTS = ["\x00\x01", "```", "`", "``", "\r\n\r\n", "}}}{{{", "/*", "<!--", "``` ```", "\t", "é ü ß ∑"]


def _kinds(segments: list[Segment]) -> list[SegmentKind]:
    return [s.kind for s in segments]


def _squash(text: str) -> str:
    return "".join(text.split())


class TestDocumentedExamples:
    def test_fenced_block_beats_heuristics(self) -> None:
        text = "Here is some code:\n```python\nprint('hi')\n```\nThat's it."
        assert segment(text) == [P("Here is some code:"), C("print('hi')", "python"), P("That's it.")]

    def test_fence_between_prose(self) -> None:
        text = "intro\n```js\nconst a = 1;\n```\noutro"
        assert segment(text) == [P("intro"), C("const a = 1;", "js"), P("outro")]

    def test_question_is_prose(self) -> None:
        assert segment("How are you?") == [P("How are you?")]

    def test_pure_code_is_one_segment(self) -> None:
        text = "const x = 1;\nfunction f() { return x; }"
        assert segment(text) == [C(text)]

    def test_array_and_log_are_one_code_segment(self) -> None:
        text = "const x = [1,2,3];\nconsole.log(x);"
        assert segment(text) == [C(text)]

    def test_comment_inside_code_stays_code(self) -> None:
        text = "const a = 1;\n// explain b\nconst b = 2;"
        assert segment(text) == [C(text)]

    def test_text_code_text(self) -> None:
        assert segment("Explain\n\nif (a) { b(); }\n\nwhat is this?") == [
            P("Explain"),
            C("if (a) { b(); }"),
            P("what is this?"),
        ]

    def test_question_after_code_block(self) -> None:
        text = (
            "Explain\n\n"
            "if (navigator.share) {\n"
            "  navigator.share({ title: 'Hello', url: location.href });\n"
            "} else {\n"
            "  console.log('Web Share API not supported.');\n"
            "}\n\n"
            "what is the code ?"
        )
        result = segment(text)
        assert _kinds(result) == [SegmentKind.PROSE, SegmentKind.CODE, SegmentKind.PROSE]
        assert result[1].content.startswith("if (navigator.share) {")
        assert result[1].content.endswith("}")
        assert result[2] == P("what is the code ?")


class TestEmptyInput:
    @pytest.mark.parametrize("text", ["", " ", "\n\n", " \t\r\n "])
    def test_blank_input_has_no_segments(self, text: str) -> None:
        assert segment(text) == []


class TestProseOnly:
    def test_plain_paragraph_is_one_trimmed_prose_segment(self) -> None:
        text = "  Hello there, this is just some text.\nNothing else here.  "
        assert segment(text) == [P(text.strip())]

    def test_crlf_prose_is_kept_verbatim(self) -> None:
        text = "Hello there\r\nHow are you?"
        assert segment(text) == [P(text)]

    def test_markdown_heading_is_prose(self) -> None:
        text = "# Compatibility report\nThe Web Share API is not supported in Firefox."
        assert segment(text) == [P(text)]

    @pytest.mark.parametrize(
        "text",
        [
            "update your browser to the latest version",
            "select an option from the menu",
        ],
    )
    def test_lowercase_query_words_are_prose(self, text: str) -> None:
        assert segment(text) == [P(text)]


    def test_long_lowercase_line_is_prose_and_fast(self) -> None:
        line = ("make sure polyfills load first " * 7).strip()
        start = time.perf_counter()
        assert segment(line) == [P(line)]
        assert time.perf_counter() - start < 1.0

    def test_lowercase_paragraphs(self) -> None:
        text = (
            "make sure polyfills load first, thanks\n\n"
            "the share api only exists in secure contexts, so test over https.\n\n"
            "firefox on desktop still has no support for it."
        )
        start = time.perf_counter()
        assert segment(text) == [P(text)]
        assert time.perf_counter() - start < 1.0


class TestCodeDetection:
    def test_stylesheet_after_prose(self) -> None:
        text = "Add this rule:\n.button {\n  color: red;\n}"
        assert segment(text) == [P("Add this rule:"), C(".button {\n  color: red;\n}")]

    def test_markup_block(self) -> None:
        text = "<div class=\"box\">\n  <p>Hello</p>\n</div>"
        assert segment(text) == [C(text)]

    def test_uppercase_query(self) -> None:
        text = "Run this query:\nSELECT id, name\nFROM users\nWHERE active = 1;"
        assert segment(text) == [P("Run this query:"), C("SELECT id, name\nFROM users\nWHERE active = 1;")]

    def test_hash_comment_inside_code_run(self) -> None:
        text = "x = compute()\n# cache the result\ncache[x] = True"
        assert segment(text) == [C(text)]

    def test_definite_code_beats_short_text(self) -> None:
        text = "Explain:\ndo {\n  tick();\n} while (running);"
        assert segment(text) == [P("Explain:"), C("do {\n  tick();\n} while (running);")]

    def test_block_comment_keeps_prose_like_lines_as_code(self) -> None:
        code = "/*\n This explains how the cache works in detail.\n What is this?\n*/\nfunction cache() {\n  return 1;\n}"
        assert segment("Here is the helper:\n" + code) == [P("Here is the helper:"), C(code)]

    def test_code_keeps_first_line_indentation(self) -> None:
        assert segment("\n\n    return;\n\n") == [C("    return;")]


class TestRunSmoothing:
    def test_single_ambiguous_line_stays_in_code(self) -> None:
        text = "const a = 1;\nfoo bar\nconst b = 2;"
        assert segment(text) == [C(text)]

    def test_single_ambiguous_line_breaks_with_eager_threshold(self, eager_segmenter: Segmenter) -> None:
        text = "const a = 1;\nfoo bar\nconst b = 2;"
        assert eager_segmenter.segment(text) == [C("const a = 1;"), P("foo bar"), C("const b = 2;")]

    def test_two_ambiguous_lines_end_the_run(self) -> None:
        assert segment("const a = 1;\nfoo bar\nbaz qux") == [C("const a = 1;"), P("foo bar\nbaz qux")]

    def test_long_natural_language_line_ends_the_run(self) -> None:
        text = "const a = 1;\nThis function stores the value for later use."
        assert segment(text) == [C("const a = 1;"), P("This function stores the value for later use.")]

    def test_short_text_always_ends_the_run(self) -> None:
        assert segment("const a = 1;\nThanks!") == [C("const a = 1;"), P("Thanks!")]

    def test_undecided_line_at_end_stays_code(self) -> None:
        assert segment("const a = 1;\nfoo bar") == [C("const a = 1;\nfoo bar")]


class TestDelimitedPass:
    def test_fence_without_tag_defaults_to_javascript(self) -> None:
        assert segment("```\nlet a;\n```") == [C("let a;", "javascript")]

    def test_unterminated_fence_takes_the_rest(self) -> None:
        text = "Try this:\n```js\nconst a = 1;\nconsole.log(a);"
        assert segment(text) == [P("Try this:"), C("const a = 1;\nconsole.log(a);", "js")]

    def test_fences_suppress_heuristics(self) -> None:
        text = "const a = 1;\n```py\nx = 1\n```"
        assert segment(text) == [P("const a = 1;"), C("x = 1", "py")]

    def test_back_to_back_fences_are_merged(self) -> None:
        text = "```js\na()\n```\n```css\nb {}\n```"
        assert segment(text) == [C("a()\nb {}", "js")]

    def test_inline_spans(self) -> None:
        result = segment("Use `fetch` to call the API.")
        assert result == [P("Use "), C("fetch", inline=True), P(" to call the API.")]


    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("```", [P("```")]),
            ("```js", [P("```js")]),
            ("```js\n", [P("```js")]),
            ("Intro\n```", [P("Intro\n```")]),
            ("``` ```", [P("``` ```")]),
        ],
    )
    def test_bare_delimiters_stay_prose(self, text: str, expected: list[Segment]) -> None:
        assert segment(text) == expected


class TestConfidenceThreshold:
    LOW = "see the docs for details ("

    def test_disabled_by_default(self) -> None:
        assert segment(self.LOW) == [C(self.LOW)]

    def test_low_scoring_run_is_demoted(self) -> None:
        strict = Segmenter(config=SegmenterConfig(confidence_threshold=0.5))
        assert strict.segment(self.LOW) == [P(self.LOW)]

    def test_run_above_threshold_stays_code(self) -> None:
        lenient = Segmenter(config=SegmenterConfig(confidence_threshold=0.2))
        assert lenient.segment(self.LOW) == [C(self.LOW)]

    def test_real_code_survives_strict_threshold(self) -> None:
        strict = Segmenter(config=SegmenterConfig(confidence_threshold=0.5))
        text = "const a = 1;\nconst b = a + 2;"
        assert strict.segment(text) == [C(text)]

    def test_fenced_code_is_never_demoted(self) -> None:
        strict = Segmenter(config=SegmenterConfig(confidence_threshold=0.9))
        assert strict.segment("```\nfoo bar\n```") == [C("foo bar", "javascript")]

    def test_demoted_run_merges_with_neighbouring_prose(self) -> None:
        strict = Segmenter(config=SegmenterConfig(confidence_threshold=0.5))
        text = "Hello there\n" + self.LOW
        assert strict.segment(text) == [P(text)]


class TestMergeAdjacent:
    def test_merges_runs_of_same_kind(self) -> None:
        merged = merge_adjacent([P("a"), P("b"), C("x", "js"), C("y", "css"), P("c")])
        assert merged == [P("a\nb"), C("x\ny", "js"), P("c")]

    def test_language_falls_back_to_later_segment(self) -> None:
        assert merge_adjacent([C("x"), C("y", "ts")]) == [C("x\ny", "ts")]

    def test_inline_only_when_all_parts_are_inline(self) -> None:
        merged = merge_adjacent([C("x", inline=True), C("y")])
        assert merged[0].inline is False


class TestInvariants:
    @pytest.mark.parametrize("text", HEURISTIC_SAMPLES + ODD_INPUTS)
    def test_kinds_alternate_and_contents_are_non_empty(self, text: str) -> None:
        result = segment(text)
        for left, right in zip(result, result[1:], strict=False):
            assert left.kind != right.kind
        assert all(s.content.strip() for s in result)

    @pytest.mark.parametrize("text", HEURISTIC_SAMPLES)
    def test_heuristic_pass_keeps_every_character(self, text: str) -> None:
        result = segment(text)
        assert _squash("".join(s.content for s in result)) == _squash(text)

    def test_calls_do_not_leak_state(self) -> None:
        segment("/*\nan open comment")
        assert segment("Hello there") == [P("Hello there")]

    def test_deterministic(self) -> None:
        for text in HEURISTIC_SAMPLES:
            assert segment(text) == segment(text)

    def test_shared_instance_across_threads(self, segmenter: Segmenter) -> None:
        expected = [segmenter.segment(t) for t in HEURISTIC_SAMPLES]
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(segmenter.segment, HEURISTIC_SAMPLES * 5))
        assert results == expected * 5
