"""
Ignore rules for attribute records.

An ignore rule maps a field name to a matcher. When a record's value for
that field matches, the whole record is dropped. Three matcher shapes
exist:

- ExactValue: the value equals a single string, number or boolean
- OneOf: the value is a member of a set of values
- Pattern: a regular expression matches the value
"""

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from attribute_reader.errors import IgnoreRuleError

_REGEX_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
}


def strictly_equal(expected: Any, actual: Any) -> bool:
    """
    Compare two values without type coercion.

    Numbers compare by value across int/float, but never against strings or
    booleans ("42" != 42, True != 1).
    """
    if isinstance(expected, bool) or isinstance(actual, bool):
        return type(expected) is type(actual) and expected == actual
    if isinstance(expected, (int, float)) and isinstance(actual, (int, float)):
        return expected == actual
    if isinstance(expected, str) or isinstance(actual, str):
        return isinstance(expected, str) and isinstance(actual, str) and expected == actual
    return type(expected) is type(actual) and expected == actual


class IgnoreMatcher:
    """Base class for ignore matchers."""

    def matches(self, value: Any) -> bool:
        """Return True if a record with this field value should be ignored."""
        return False


@dataclass(frozen=True)
class ExactValue(IgnoreMatcher):
    """Matches a single value exactly."""

    value: Any

    def matches(self, value: Any) -> bool:
        return strictly_equal(self.value, value)


@dataclass(frozen=True)
class OneOf(IgnoreMatcher):
    """Matches any of a set of values."""

    values: tuple[Any, ...]

    def matches(self, value: Any) -> bool:
        return any(strictly_equal(candidate, value) for candidate in self.values)


@dataclass(frozen=True)
class Pattern(IgnoreMatcher):
    """Matches values whose string form contains a regular expression match."""

    regex: re.Pattern

    def matches(self, value: Any) -> bool:
        if value is None:
            return False
        if isinstance(value, bool):
            # Booleans match in their schema text form
            value = "true" if value else "false"
        return self.regex.search(str(value)) is not None


def _compile_flags(flags: str) -> int:
    compiled = 0
    for flag in flags:
        if flag not in _REGEX_FLAGS:
            raise IgnoreRuleError(f"Unknown regular expression flag '{flag}'")
        compiled |= _REGEX_FLAGS[flag]
    return compiled


def make_matcher(rule: Any) -> IgnoreMatcher:
    """
    Build a matcher from an ignore rule.

    Args:
        rule: A string, number or boolean (exact match); a list, tuple, set
              or frozenset (membership); a compiled regular expression, or a
              mapping {"pattern": "...", "flags": "i"} (pattern match); or an
              IgnoreMatcher instance

    Returns:
        IgnoreMatcher for the rule

    Raises:
        IgnoreRuleError: If the rule shape is not recognized
    """
    if isinstance(rule, IgnoreMatcher):
        return rule
    if isinstance(rule, (str, bool, int, float)):
        return ExactValue(rule)
    if isinstance(rule, (list, tuple, set, frozenset)):
        return OneOf(tuple(rule))
    if isinstance(rule, re.Pattern):
        return Pattern(rule)
    if isinstance(rule, Mapping) and set(rule) <= {"pattern", "flags"} and "pattern" in rule:
        try:
            regex = re.compile(rule["pattern"], _compile_flags(rule.get("flags", "")))
        except (re.error, TypeError) as e:
            raise IgnoreRuleError(f"Invalid ignore pattern {rule['pattern']!r}: {e}") from e
        return Pattern(regex)
    raise IgnoreRuleError(
        f"Unrecognized ignore rule {rule!r}: expected a value, a collection of "
        "values or a regular expression"
    )


def make_ignore_rules(ignore: Optional[Mapping[str, Any]]) -> dict[str, IgnoreMatcher]:
    """Normalize an ignore mapping of field name to rule into matchers."""
    if ignore is None:
        return {}
    if not isinstance(ignore, Mapping):
        raise IgnoreRuleError(
            f"Ignore rules must be a mapping of field name to rule, got {type(ignore).__name__}"
        )
    return {name: make_matcher(rule) for name, rule in ignore.items()}
