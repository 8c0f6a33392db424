# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Violation records produced by field checks."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

__all__ = ("Violation", "ViolationKind")


class ViolationKind(str, Enum):
    """Closed set of violation kinds. Value is the user-facing message.

    RULE_ON_PRIVATE_FIELD    - rule attached to a field named with a leading underscore
    UNEXPECTED_RULE          - rule text matches no prefix valid for the field
    INVALID_RULE_SYNTAX      - numeric argument does not parse
    WRONG_LENGTH             - text length differs from len:N
    NOT_IN_SET               - value not among in: tokens (or token list empty)
    BELOW_MINIMUM            - value (or length) below min:N
    ABOVE_MAXIMUM            - value (or length) above max:N
    INVALID_MEMBERSHIP_TOKEN - in: token on an integer field is not an integer
    OPAQUE                   - nested record failed with a non-violation error
    """

    RULE_ON_PRIVATE_FIELD = "validation for private field is not allowed"
    UNEXPECTED_RULE = "unexpected validate value"
    INVALID_RULE_SYNTAX = "invalid validator syntax"
    WRONG_LENGTH = "wrong len"
    NOT_IN_SET = "wrong in"
    BELOW_MINIMUM = "wrong min"
    ABOVE_MAXIMUM = "wrong max"
    INVALID_MEMBERSHIP_TOKEN = "invalid in token"
    OPAQUE = "nested validation failed"


@dataclass(frozen=True, slots=True)
class Violation:
    """One failure for one field or sequence element.

    Attributes:
        kind: What went wrong.
        field: Dotted path to the field, with ``[i]`` for sequence elements.
        cause: Wrapped exception for OPAQUE violations, otherwise None.
    """

    kind: ViolationKind
    field: str = ""
    cause: BaseException | None = None

    @property
    def message(self) -> str:
        if self.cause is not None:
            return str(self.cause)
        return self.kind.value

    def nested(self, prefix: str) -> Violation:
        """Copy with the path re-rooted under a parent field."""
        path = f"{prefix}.{self.field}" if self.field else prefix
        return replace(self, field=path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.name,
            "field": self.field,
            "message": self.message,
        }

    def __str__(self) -> str:
        return self.message
