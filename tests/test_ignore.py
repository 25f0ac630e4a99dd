# tests/test_ignore.py
"""
Tests for the ignore-pattern matcher.
"""

import pytest

from sfclint.errors import ConfigurationError
from sfclint.ignore import IgnoreMatcher


class TestMatching:

    def test_prefix_pattern(self):
        matcher = IgnoreMatcher(["^Foo"])
        assert matcher.matches("FooBar")
        assert not matcher.matches("BarFoo")

    def test_pattern_matches_other_casing_form(self):
        # <foo-bar> is exempted through its pascal form
        assert IgnoreMatcher(["^Foo"]).matches("foo-bar")

    def test_snake_form(self):
        assert IgnoreMatcher(["^my_"]).matches("MyWidget")

    def test_raw_name(self):
        assert IgnoreMatcher([r"^x\.y$"]).matches("x.y")

    def test_search_is_unanchored(self):
        assert IgnoreMatcher(["Icon"]).matches("AppIconLarge")

    def test_any_pattern_suffices(self):
        matcher = IgnoreMatcher(["^router-", "^Base"])
        assert matcher.matches("router-link")
        assert matcher.matches("base-button")
        assert not matcher.matches("app-button")

    def test_no_patterns_match_nothing(self):
        assert not IgnoreMatcher().matches("Anything")


class TestValidation:

    def test_invalid_regex_fails_fast(self):
        with pytest.raises(ConfigurationError, match=r"ignorePatterns\[1\]"):
            IgnoreMatcher(["^ok", "(unclosed"])

    def test_non_string_pattern(self):
        with pytest.raises(ConfigurationError, match="must be a string"):
            IgnoreMatcher([42])

    def test_patterns_are_kept_in_order(self):
        assert IgnoreMatcher(["b", "a"]).patterns == ["b", "a"]
