"""Tests for the unsafe-pattern screener."""

from __future__ import annotations

import pytest

from componentsmith.extraction.schemas import CodeBlock
from componentsmith.safety.screener import (
    find_unsafe_patterns,
    screen_for_unsafe_content,
)


class TestScreenForUnsafeContent:
    @pytest.mark.parametrize(
        "code",
        [
            "eval('2 + 2')",
            "const c = document.cookie;",
            "localStorage.setItem('k', 'v')",
            "sessionStorage.getItem('k')",
            "window.open('https://evil.example')",
            "window.open(url)",
            "setTimeout(run, 100)",
            "const f = new Function('return 1');",
            "Function('return this')()",
            "const f = Function(src); f();",
        ],
    )
    def test_unsafe_blocks(self, code: str) -> None:
        assert screen_for_unsafe_content("", [{"code": code}]) is True

    @pytest.mark.parametrize(
        "code",
        [
            "console.log('hello')",
            "const add = function (a, b) { return a + b; };",
            "button.onclick = function() {};",
            "useEffect(() => {}, []);",
            "evaluate(score)",
        ],
    )
    def test_safe_blocks(self, code: str) -> None:
        assert screen_for_unsafe_content("", [{"code": code}]) is False

    def test_case_insensitive(self) -> None:
        assert screen_for_unsafe_content("EVAL(x)", []) is True
        assert screen_for_unsafe_content("Document.Cookie", []) is True

    def test_narrative_only(self) -> None:
        assert screen_for_unsafe_content("call eval(x) here") is True

    def test_empty_inputs(self) -> None:
        assert screen_for_unsafe_content("", []) is False
        assert screen_for_unsafe_content(None) is False

    def test_accepts_code_blocks(self) -> None:
        blocks = [CodeBlock(code="x = 1"), CodeBlock(code="eval(y)")]
        assert screen_for_unsafe_content("fine", blocks) is True

    def test_accepts_plain_strings(self) -> None:
        assert screen_for_unsafe_content("", ["setTimeout(f)"]) is True

    def test_block_without_code(self) -> None:
        assert screen_for_unsafe_content("", [{}, {"code": None}]) is False


class TestFindUnsafePatterns:
    def test_locations_reported(self) -> None:
        findings = find_unsafe_patterns(
            "read document.cookie",
            [CodeBlock(code="ok()"), CodeBlock(code="eval(x)")],
        )
        assert [(f.pattern, f.location) for f in findings] == [
            ("cookie_access", "narrative"),
            ("eval", "block[1]"),
        ]

    def test_external_window_also_matches_window_open(self) -> None:
        findings = find_unsafe_patterns(
            "", ["window.open('http://x.example')"]
        )
        names = {f.pattern for f in findings}
        assert names == {"external_window", "window_open"}

    def test_no_findings(self) -> None:
        assert find_unsafe_patterns("all good", ["x = 1"]) == []


def test_documented_examples() -> None:
    assert screen_for_unsafe_content("", [{"code": "document.cookie"}])
    assert not screen_for_unsafe_content("hello", [{"code": "1+1"}])
