"""
Test Suite for Style Sanitizer

Tests the CSS value grammar with legitimate values, edge cases, and
malicious attack vectors.

Run with:
    pytest tests/security/test_style_sanitizer.py -v
"""

import time

import pytest

from safedom.security import sanitize_style
from safedom.security.style_sanitizer import are_style_segments_safe, has_balanced_quotes, is_safe_style_value


class TestStyleSanitizer:
    """Tests for CSS value sanitization"""

    @pytest.mark.parametrize(
        "value",
        [
            "red",
            "#fff",
            "10px",
            "50%",
            "0 auto",
            "bold !important",
            "'Open Sans', sans-serif",
            '"Helvetica Neue", Arial',
            "background: red; color: blue;",
            "color: red",
            "margin : 0",
            "rgb(255, 0, 0)",
            "rgba(0,0,0,0.5)",
            "hsl(120, 100%, 50%)",
            "hsla(120, 100%, 50%, 0.3)",
            "0 0 10px rgba(0, 0, 0, .5)",
            "translateX(10px)",
            "translate3d(1px, 2px, 3px)",
            "rotate(45deg) scale(1.5)",
            "matrix(1, 0, 0, 1, 0, 0)",
            "perspective(500px)",
            "transform: rotate(45deg);",
            "url(image.png)",
            "url(https://example.com/bg.png)",
            "url('https://example.com/bg.png')",
            'url("/img/bg.png")',
            "unsafe",
        ],
    )
    def test_safe_values_unchanged(self, value):
        """Test that values matching the grammar pass through unchanged"""
        assert sanitize_style(value) == value

    @pytest.mark.parametrize(
        "value",
        [
            "url(javascript:evil())",
            "url(javascript:evil)",
            "url('javascript:evil')",
            "url(data:text/html,foo)",
            r"url(\6a avascript\3a alert)",
            "expression(alert(1))",
            "red; background: url(javascript:alert(1))",
            "calc(100% - 10px)",
            "'unterminated",
            'font-family: "a',
            "}body{background:red",
            "behavior: url(x.htc)",
            "<script>",
            "rgb(1;2)",
            "a:b:c",
        ],
    )
    def test_unsafe_values_replaced(self, value):
        """Test that anything outside the grammar becomes the sentinel"""
        assert sanitize_style(value) == "unsafe"

    def test_empty_and_whitespace(self):
        """Test that empty and blank values sanitize to empty"""
        assert sanitize_style("") == ""
        assert sanitize_style("   ") == ""

    def test_value_is_trimmed(self):
        """Test that surrounding whitespace is trimmed"""
        assert sanitize_style("  red  ") == "red"

    def test_segments_validated_independently(self):
        """Test the per-declaration fallback for values joined with ';'"""
        value = "url(a.png); color: red"
        assert not is_safe_style_value(value)
        assert are_style_segments_safe(value)
        assert sanitize_style(value) == value

    def test_segment_fallback_fails_on_one_bad_segment(self):
        """Test that a single unsafe segment rejects the whole value"""
        assert sanitize_style("url(a.png); url(javascript:x)") == "unsafe"

    def test_only_separators_rejected(self):
        """Test that a value of bare separators has no segment to accept"""
        assert not are_style_segments_safe(";;")
        assert sanitize_style(";;") == "unsafe"

    def test_idempotent(self):
        """Test that sanitizing twice changes nothing more"""
        for value in ["red", "url(javascript:evil())", " color: blue; ", "expression(x)"]:
            once = sanitize_style(value)
            assert sanitize_style(once) == once

    def test_long_rejected_value_is_fast(self):
        """Test that long rejected values do not trigger catastrophic backtracking"""
        value = "a" * 2000 + "("
        start = time.monotonic()
        assert sanitize_style(value) == "unsafe"
        assert time.monotonic() - start < 5

    def test_many_declarations_rejected_fast(self):
        """Test that many key/value pairs followed by garbage are rejected quickly"""
        value = "color: red blue green " * 40 + "("
        start = time.monotonic()
        assert sanitize_style(value) == "unsafe"
        assert time.monotonic() - start < 5

    def test_long_accepted_value_is_fast(self):
        """Test that validation time grows linearly for long legitimate values"""
        value = "a" * 50000
        start = time.monotonic()
        assert sanitize_style(value) == value
        assert time.monotonic() - start < 1

    def test_long_rejected_word_is_fast(self):
        """Test that a long word followed by garbage is rejected quickly"""
        value = "a" * 50000 + "("
        start = time.monotonic()
        assert sanitize_style(value) == "unsafe"
        assert time.monotonic() - start < 1

    def test_long_declaration_list_is_fast(self):
        """Test that thousands of declarations validate quickly"""
        value = "color: red; transform: rotate(45deg) scale(2); " * 2000
        start = time.monotonic()
        assert sanitize_style(value) == value.strip()
        assert time.monotonic() - start < 1

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("color: rgb(1, 2, 3)", True),
            ("color:rgb(1, 2, 3)", False),
            ("a:bb:c", True),
            ("a:b:c", False),
            ("rgb(1)rgb(2)", True),
            ("rgb(1);color: red", True),
            ("rgb(1):x", False),
            ("color: red;;", False),
            ("color:", False),
            ("scale(2", False),
            ("width: 10px ; ", True),
            ("margin  : 0", False),
            ("prefixtranslate3d(1px)", True),
        ],
    )
    def test_grammar_boundaries(self, value, expected):
        """Test where keys, values and function calls may start and end"""
        assert is_safe_style_value(value) is expected

    def test_diagnostic_reported_in_dev_mode(self, collected_diagnostics):
        """Test that a rejected value is reported"""
        sanitize_style("expression(alert(1))")

        assert len(collected_diagnostics) == 1
        assert collected_diagnostics[0].context == "style"
        assert collected_diagnostics[0].value == "expression(alert(1))"


class TestBalancedQuotes:
    """Tests for the quote balance helper"""

    @pytest.mark.parametrize("value", ["", "plain", "'a'", '"a"', "\"it's\"", "'say \"hi\"'", r"'it\'s'"])
    def test_balanced(self, value):
        """Test that paired and nested-other-kind quotes are balanced"""
        assert has_balanced_quotes(value)

    @pytest.mark.parametrize("value", ["'", '"', "'a", "a\"b'c\"d'", r"'a\'"])
    def test_unbalanced(self, value):
        """Test that an open quoted span is detected"""
        assert not has_balanced_quotes(value)
