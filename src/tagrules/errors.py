# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Exception hierarchy for tagrules.

TagrulesError
├── NotARecordError      - top-level value is not a record (aborts the call)
├── ValidationErrors     - ordered, non-empty list of field violations
└── RuleError            - rule evaluation failure, converted to a violation
    ├── UnexpectedRuleError
    ├── RuleSyntaxError
    ├── MembershipEmptyError
    └── MembershipTokenError
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, ClassVar

from .violation import ViolationKind

if TYPE_CHECKING:
    from .violation import Violation

__all__ = (
    "MembershipEmptyError",
    "MembershipTokenError",
    "NotARecordError",
    "RuleError",
    "RuleSyntaxError",
    "TagrulesError",
    "UnexpectedRuleError",
    "ValidationErrors",
)


class TagrulesError(Exception):
    """Base error carrying a message and structured details."""

    default_message: ClassVar[str] = "tagrules error"

    def __init__(
        self, message: str | None = None, *, details: dict[str, Any] | None = None
    ):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": self.details,
        }


class NotARecordError(TagrulesError):
    default_message = "wrong argument given, should be a record"


class RuleError(TagrulesError):
    """Rule could not be applied; ``kind`` names the violation it becomes."""

    kind: ClassVar[ViolationKind]

    def __init__(
        self, message: str | None = None, *, details: dict[str, Any] | None = None
    ):
        super().__init__(message or self.kind.value, details=details)


class UnexpectedRuleError(RuleError):
    kind = ViolationKind.UNEXPECTED_RULE


class RuleSyntaxError(RuleError):
    kind = ViolationKind.INVALID_RULE_SYNTAX


class MembershipEmptyError(RuleError):
    # Reported as "not in set", not as a syntax error.
    kind = ViolationKind.NOT_IN_SET


class MembershipTokenError(RuleError):
    kind = ViolationKind.INVALID_MEMBERSHIP_TOKEN


class ValidationErrors(TagrulesError):
    """All violations found in one validation pass, in field order.

    Rendered as each violation's message joined by ``". "``.

    Raises:
        ValueError: If constructed without violations.
    """

    separator: ClassVar[str] = ". "

    def __init__(self, violations: list[Violation] | tuple[Violation, ...]):
        if not violations:
            raise ValueError("ValidationErrors requires at least one violation")
        self.violations: tuple[Violation, ...] = tuple(violations)
        super().__init__(
            self.separator.join(v.message for v in self.violations),
            details={"count": len(self.violations)},
        )

    def __len__(self) -> int:
        return len(self.violations)

    def __iter__(self) -> Iterator[Violation]:
        return iter(self.violations)

    def __getitem__(self, index: int) -> Violation:
        return self.violations[index]

    def kinds(self) -> list[ViolationKind]:
        """Violation kinds in order."""
        return [v.kind for v in self.violations]

    def has(self, kind: ViolationKind) -> bool:
        return any(v.kind is kind for v in self.violations)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["violations"] = [v.to_dict() for v in self.violations]
        return data
