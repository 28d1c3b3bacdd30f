"""
Tests for ignore matchers.
"""

import re

import pytest

from attribute_reader.errors import IgnoreRuleError
from attribute_reader.ignore import (
    ExactValue,
    IgnoreMatcher,
    OneOf,
    Pattern,
    make_ignore_rules,
    make_matcher,
    strictly_equal,
)


class TestStrictEquality:
    """Tests for comparison without coercion."""

    def test_same_strings(self):
        assert strictly_equal("string", "string")

    def test_string_vs_number(self):
        assert not strictly_equal("42", 42)
        assert not strictly_equal(42, "42")

    def test_int_vs_float(self):
        assert strictly_equal(42, 42.0)

    def test_bool_vs_int(self):
        assert not strictly_equal(True, 1)
        assert not strictly_equal(0, False)
        assert strictly_equal(False, False)

    def test_none(self):
        assert not strictly_equal("", None)
        assert strictly_equal(None, None)


class TestMatchers:
    """Tests for the matcher variants."""

    def test_exact_value(self):
        matcher = ExactValue("string")
        assert matcher.matches("string")
        assert not matcher.matches("String")
        assert not matcher.matches(None)

    def test_one_of(self):
        matcher = OneOf(("string", "integer"))
        assert matcher.matches("integer")
        assert not matcher.matches("double")

    def test_pattern(self):
        matcher = Pattern(re.compile("^geom"))
        assert matcher.matches("geom_col")
        assert not matcher.matches("attr1")
        assert not matcher.matches(None)

    def test_pattern_on_number(self):
        """Test that non-string values are matched by their string form."""
        assert Pattern(re.compile("^4")).matches(42)

    def test_pattern_on_boolean(self):
        """Test that booleans are matched as lowercase schema text."""
        assert Pattern(re.compile("^true$")).matches(True)
        assert Pattern(re.compile("^false$")).matches(False)
        assert not Pattern(re.compile("True")).matches(True)

    def test_base_matcher_never_matches(self):
        assert not IgnoreMatcher().matches("anything")


class TestMakeMatcher:
    """Tests for building matchers from rule shapes."""

    def test_string_rule(self):
        assert make_matcher("string") == ExactValue("string")

    def test_number_rule(self):
        assert make_matcher(42) == ExactValue(42)

    def test_list_rule(self):
        assert make_matcher(["string", "integer"]) == OneOf(("string", "integer"))

    def test_set_rule(self):
        matcher = make_matcher({"a", "b"})
        assert isinstance(matcher, OneOf)
        assert matcher.matches("a")

    def test_regex_rule(self):
        matcher = make_matcher(re.compile("^geom"))
        assert isinstance(matcher, Pattern)
        assert matcher.matches("geometry")

    def test_pattern_mapping_rule(self):
        matcher = make_matcher({"pattern": "^GEOM", "flags": "i"})
        assert isinstance(matcher, Pattern)
        assert matcher.matches("the_geom") is False
        assert matcher.matches("geom_col")

    def test_matcher_passthrough(self):
        matcher = OneOf(("x",))
        assert make_matcher(matcher) is matcher

    def test_unknown_rule_shape(self):
        with pytest.raises(IgnoreRuleError):
            make_matcher(object())

    def test_unknown_mapping_shape(self):
        with pytest.raises(IgnoreRuleError):
            make_matcher({"equals": "string"})

    def test_invalid_pattern(self):
        with pytest.raises(IgnoreRuleError):
            make_matcher({"pattern": "("})

    def test_invalid_flag(self):
        with pytest.raises(IgnoreRuleError):
            make_matcher({"pattern": "a", "flags": "q"})

    def test_make_ignore_rules(self):
        rules = make_ignore_rules({"type": "string", "name": re.compile("^geom")})
        assert set(rules) == {"type", "name"}
        assert isinstance(rules["name"], Pattern)

    def test_make_ignore_rules_empty(self):
        assert make_ignore_rules(None) == {}

    def test_make_ignore_rules_not_mapping(self):
        with pytest.raises(IgnoreRuleError):
            make_ignore_rules(["type"])

    @pytest.mark.parametrize("ignore", [[], "", ()])
    def test_make_ignore_rules_empty_non_mapping(self, ignore):
        """Test that empty values of the wrong shape are still rejected."""
        with pytest.raises(IgnoreRuleError):
            make_ignore_rules(ignore)

    def test_make_ignore_rules_empty_mapping(self):
        assert make_ignore_rules({}) == {}
