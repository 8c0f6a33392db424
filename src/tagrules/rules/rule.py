# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Rule expression parsing.

Grammar (one per field):
    ""              no check
    "len:<uint>"    exact text length
    "in:<a>,<b>"    membership
    "min:<int>"     lower bound on value or length
    "max:<int>"     upper bound on value or length

The parser only splits prefix from argument. Argument interpretation
(bound(), tokens()) raises RuleError subclasses that callers turn into
violations.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from tagrules.errors import (
    MembershipEmptyError,
    RuleSyntaxError,
    UnexpectedRuleError,
)

__all__ = (
    "ALL_KINDS",
    "Rule",
    "RuleKind",
    "parse_int",
    "parse_rule",
)

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


class RuleKind(str, Enum):
    """Recognized rule kinds. Value is the expression prefix without ':'."""

    LENGTH = "len"
    MEMBERSHIP = "in"
    MINIMUM = "min"
    MAXIMUM = "max"

    @property
    def prefix(self) -> str:
        return f"{self.value}:"


ALL_KINDS: tuple[RuleKind, ...] = tuple(RuleKind)


def parse_int(text: str) -> int | None:
    """Strict base-10 integer: optional sign then ASCII digits. None on failure."""
    if _INT_PATTERN.fullmatch(text) is None:
        return None
    return int(text)


@dataclass(frozen=True, slots=True)
class Rule:
    """Parsed rule expression.

    Attributes:
        kind: Rule kind, or None for the empty expression.
        argument: Text after the prefix.
        raw: Original expression.
    """

    kind: RuleKind | None
    argument: str = ""
    raw: str = ""

    @property
    def is_empty(self) -> bool:
        return self.kind is None

    def bound(self) -> int:
        """Integer argument for len/min/max.

        Raises:
            RuleSyntaxError: If the argument is not a base-10 integer.
        """
        value = parse_int(self.argument)
        if value is None:
            raise RuleSyntaxError(details={"rule": self.raw, "argument": self.argument})
        return value

    def tokens(self) -> list[str]:
        """Comma-separated membership tokens, order preserved.

        Raises:
            MembershipEmptyError: If the list is empty or starts with an empty token.
        """
        values = self.argument.split(",")
        if not values or values[0] == "":
            raise MembershipEmptyError(details={"rule": self.raw})
        return values


def parse_rule(expression: str, allowed: tuple[RuleKind, ...] = ALL_KINDS) -> Rule:
    """Split a rule expression into kind and argument.

    Args:
        expression: Raw rule text from field metadata.
        allowed: Kinds valid for the target field, tried in order.

    Returns:
        Rule with kind None for the empty expression.

    Raises:
        UnexpectedRuleError: If no allowed prefix matches.
    """
    if expression == "":
        return Rule(kind=None)

    for kind in allowed:
        if expression.startswith(kind.prefix):
            return Rule(
                kind=kind,
                argument=expression[len(kind.prefix) :],
                raw=expression,
            )

    raise UnexpectedRuleError(
        details={"rule": expression, "allowed": [k.value for k in allowed]}
    )
