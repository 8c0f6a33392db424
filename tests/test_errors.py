# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for tagrules.errors and tagrules.violation."""

from __future__ import annotations

import pytest

from tagrules.errors import (
    MembershipEmptyError,
    MembershipTokenError,
    NotARecordError,
    RuleError,
    RuleSyntaxError,
    TagrulesError,
    UnexpectedRuleError,
    ValidationErrors,
)
from tagrules.violation import Violation, ViolationKind

# =============================================================================
# Tests: Violation
# =============================================================================


class TestViolation:
    """Tests for the Violation record."""

    def test_message_from_kind(self):
        violation = Violation(kind=ViolationKind.WRONG_LENGTH, field="code")
        assert violation.message == "wrong len"
        assert str(violation) == "wrong len"

    def test_message_from_cause(self):
        """Opaque violations render their cause."""
        violation = Violation(
            kind=ViolationKind.OPAQUE, field="inner", cause=NotARecordError()
        )
        assert violation.message == "wrong argument given, should be a record"

    def test_nested_prefixes_path(self):
        violation = Violation(kind=ViolationKind.BELOW_MINIMUM, field="zip")
        assert violation.nested("address").field == "address.zip"
        assert violation.nested("a").nested("b").field == "b.a.zip"

    def test_nested_empty_path(self):
        assert Violation(kind=ViolationKind.OPAQUE).nested("x").field == "x"

    def test_immutable(self):
        violation = Violation(kind=ViolationKind.NOT_IN_SET)
        with pytest.raises(AttributeError):
            violation.field = "other"

    def test_to_dict(self):
        violation = Violation(kind=ViolationKind.ABOVE_MAXIMUM, field="age")
        assert violation.to_dict() == {
            "kind": "ABOVE_MAXIMUM",
            "field": "age",
            "message": "wrong max",
        }

    def test_kind_messages_unique(self):
        """Each kind renders a distinct message."""
        messages = [k.value for k in ViolationKind]
        assert len(messages) == len(set(messages))


# =============================================================================
# Tests: Error hierarchy
# =============================================================================


class TestTagrulesError:
    """Tests for the base error and structural errors."""

    def test_default_message_and_details(self):
        error = NotARecordError(details={"type": "int"})
        assert str(error) == "wrong argument given, should be a record"
        assert error.details == {"type": "int"}
        assert isinstance(error, TagrulesError)

    def test_to_dict(self):
        error = NotARecordError()
        assert error.to_dict() == {
            "error": "NotARecordError",
            "message": "wrong argument given, should be a record",
            "details": {},
        }

    def test_custom_message(self):
        assert str(TagrulesError("boom")) == "boom"


class TestRuleErrors:
    """Rule errors map to violation kinds."""

    @pytest.mark.parametrize(
        "error_cls,kind",
        [
            (UnexpectedRuleError, ViolationKind.UNEXPECTED_RULE),
            (RuleSyntaxError, ViolationKind.INVALID_RULE_SYNTAX),
            (MembershipEmptyError, ViolationKind.NOT_IN_SET),
            (MembershipTokenError, ViolationKind.INVALID_MEMBERSHIP_TOKEN),
        ],
    )
    def test_kind_and_message(self, error_cls, kind):
        error = error_cls()
        assert isinstance(error, RuleError)
        assert error.kind is kind
        assert str(error) == kind.value


# =============================================================================
# Tests: ValidationErrors
# =============================================================================


class TestValidationErrors:
    """Tests for the aggregated violation list."""

    @pytest.fixture
    def errors(self):
        return ValidationErrors(
            [
                Violation(kind=ViolationKind.WRONG_LENGTH, field="code"),
                Violation(kind=ViolationKind.NOT_IN_SET, field="role"),
                Violation(kind=ViolationKind.BELOW_MINIMUM, field="age"),
            ]
        )

    def test_empty_rejected(self):
        """An empty list is never a failure."""
        with pytest.raises(ValueError, match="at least one violation"):
            ValidationErrors([])

    def test_str_joins_messages(self, errors):
        assert str(errors) == "wrong len. wrong in. wrong min"

    def test_single_violation_has_no_separator(self):
        errors = ValidationErrors([Violation(kind=ViolationKind.WRONG_LENGTH)])
        assert str(errors) == "wrong len"

    def test_sequence_protocol(self, errors):
        assert len(errors) == 3
        assert errors[1].field == "role"
        assert [v.field for v in errors] == ["code", "role", "age"]

    def test_kinds_and_has(self, errors):
        assert errors.kinds() == [
            ViolationKind.WRONG_LENGTH,
            ViolationKind.NOT_IN_SET,
            ViolationKind.BELOW_MINIMUM,
        ]
        assert errors.has(ViolationKind.NOT_IN_SET)
        assert not errors.has(ViolationKind.OPAQUE)

    def test_to_dict(self, errors):
        data = errors.to_dict()
        assert data["error"] == "ValidationErrors"
        assert data["details"] == {"count": 3}
        assert [v["field"] for v in data["violations"]] == ["code", "role", "age"]

    def test_is_catchable_as_base(self, errors):
        with pytest.raises(TagrulesError):
            raise errors
