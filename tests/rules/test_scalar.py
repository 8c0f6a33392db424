# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for tagrules.rules.scalar - integer and text checks."""

from __future__ import annotations

import pytest

from tagrules.rules import validate_int, validate_text
from tagrules.violation import Violation, ViolationKind


def kind_of(violation: Violation | None) -> ViolationKind | None:
    return None if violation is None else violation.kind


# =============================================================================
# Tests: validate_int
# =============================================================================


class TestValidateInt:
    """Tests for integer rules."""

    def test_empty_rule_passes(self):
        """Empty expression never fails."""
        assert validate_int("", -999) is None

    @pytest.mark.parametrize(
        "expression,value,expected",
        [
            ("min:18", 18, None),
            ("min:18", 17, ViolationKind.BELOW_MINIMUM),
            ("min:-5", -5, None),
            ("max:10", 10, None),
            ("max:10", 11, ViolationKind.ABOVE_MAXIMUM),
            ("in:1,2,3", 2, None),
            ("in:1,2,3", 4, ViolationKind.NOT_IN_SET),
            ("in:-1,+2", 2, None),
        ],
    )
    def test_rules(self, expression, value, expected):
        """Bounds and membership against integer values."""
        assert kind_of(validate_int(expression, value)) is expected

    @pytest.mark.parametrize("expression", ["min:abc", "max:abc", "min:", "max:1e3"])
    def test_bad_bound_is_syntax_error(self, expression):
        """Non-numeric bound is INVALID_RULE_SYNTAX regardless of value."""
        assert kind_of(validate_int(expression, 0)) is ViolationKind.INVALID_RULE_SYNTAX

    @pytest.mark.parametrize("expression", ["in:", "in:,1"])
    def test_empty_membership_is_not_in_set(self, expression):
        """Empty membership list reports NOT_IN_SET."""
        assert kind_of(validate_int(expression, 1)) is ViolationKind.NOT_IN_SET

    def test_bad_token_before_match(self):
        """A non-integer token reached before a match is INVALID_MEMBERSHIP_TOKEN."""
        result = validate_int("in:1,x,3", 3)
        assert kind_of(result) is ViolationKind.INVALID_MEMBERSHIP_TOKEN

    def test_bad_token_after_match_is_not_seen(self):
        """Tokens after the matching one are not parsed."""
        assert validate_int("in:1,x", 1) is None

    @pytest.mark.parametrize("expression", ["len:5", "inner", "foo", "regexp:1"])
    def test_unexpected_rule(self, expression):
        """len:, inner and unknown prefixes are unexpected on integers."""
        assert kind_of(validate_int(expression, 5)) is ViolationKind.UNEXPECTED_RULE

    def test_field_path_recorded(self):
        """Violation carries the given field path."""
        violation = validate_int("min:1", 0, "ages[2]")
        assert violation == Violation(kind=ViolationKind.BELOW_MINIMUM, field="ages[2]")


# =============================================================================
# Tests: validate_text
# =============================================================================


class TestValidateText:
    """Tests for text rules."""

    def test_empty_rule_passes(self):
        """Empty expression never fails."""
        assert validate_text("", "") is None

    @pytest.mark.parametrize(
        "expression,value,expected",
        [
            ("len:5", "hello", None),
            ("len:5", "hell", ViolationKind.WRONG_LENGTH),
            ("len:0", "", None),
            ("min:2", "ab", None),
            ("min:2", "a", ViolationKind.BELOW_MINIMUM),
            ("max:3", "abc", None),
            ("max:3", "abcd", ViolationKind.ABOVE_MAXIMUM),
            ("in:admin,staff", "staff", None),
            ("in:admin,staff", "guest", ViolationKind.NOT_IN_SET),
            ("in:a,,b", "", None),
        ],
    )
    def test_rules(self, expression, value, expected):
        """Length, bounds and membership against text values."""
        assert kind_of(validate_text(expression, value)) is expected

    def test_length_counts_utf8_bytes(self):
        """Lengths are UTF-8 byte counts: "é" counts twice."""
        assert kind_of(validate_text("len:5", "héllo")) is ViolationKind.WRONG_LENGTH
        assert validate_text("len:6", "héllo") is None
        assert kind_of(validate_text("max:5", "héllo")) is ViolationKind.ABOVE_MAXIMUM
        assert validate_text("min:6", "héllo") is None

    def test_membership_is_literal(self):
        """Tokens compare as literal strings, numbers included."""
        assert validate_text("in:1,2", "1") is None
        assert kind_of(validate_text("in:1,2", "01")) is ViolationKind.NOT_IN_SET

    @pytest.mark.parametrize("expression", ["in:", "in:,a"])
    def test_empty_membership_is_not_in_set(self, expression):
        """Empty membership list reports NOT_IN_SET, even for empty text."""
        assert kind_of(validate_text(expression, "")) is ViolationKind.NOT_IN_SET

    @pytest.mark.parametrize("expression", ["len:abc", "min:abc", "max:abc"])
    def test_bad_bound_is_syntax_error(self, expression):
        """Non-numeric bound is INVALID_RULE_SYNTAX."""
        assert kind_of(validate_text(expression, "x")) is ViolationKind.INVALID_RULE_SYNTAX

    @pytest.mark.parametrize("expression", ["inner", "regexp:\\w+", "size:3"])
    def test_unexpected_rule(self, expression):
        """Unknown prefixes are unexpected on text."""
        assert kind_of(validate_text(expression, "x")) is ViolationKind.UNEXPECTED_RULE
