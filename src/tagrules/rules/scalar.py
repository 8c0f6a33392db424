# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Scalar checks for integer and text values.

Each function applies one rule expression to one value and returns at most
one Violation. Rule errors never escape; they become the returned violation.
"""

from __future__ import annotations

from tagrules.errors import MembershipTokenError, RuleError
from tagrules.violation import Violation, ViolationKind

from .rule import Rule, RuleKind, parse_int, parse_rule

__all__ = ("INT_KINDS", "TEXT_KINDS", "validate_int", "validate_text")

INT_KINDS: tuple[RuleKind, ...] = (
    RuleKind.MEMBERSHIP,
    RuleKind.MINIMUM,
    RuleKind.MAXIMUM,
)
TEXT_KINDS: tuple[RuleKind, ...] = (
    RuleKind.LENGTH,
    RuleKind.MEMBERSHIP,
    RuleKind.MINIMUM,
    RuleKind.MAXIMUM,
)


def _int_member(rule: Rule, value: int) -> bool:
    # Tokens are parsed lazily: a bad token after a match is never seen.
    for token in rule.tokens():
        candidate = parse_int(token)
        if candidate is None:
            raise MembershipTokenError(details={"rule": rule.raw, "token": token})
        if candidate == value:
            return True
    return False


def _byte_length(value: str) -> int:
    return len(value.encode("utf-8", "surrogatepass"))


def _check_int(rule: Rule, value: int) -> ViolationKind | None:
    match rule.kind:
        case None:
            return None
        case RuleKind.MEMBERSHIP:
            return None if _int_member(rule, value) else ViolationKind.NOT_IN_SET
        case RuleKind.MINIMUM:
            return ViolationKind.BELOW_MINIMUM if value < rule.bound() else None
        case RuleKind.MAXIMUM:
            return ViolationKind.ABOVE_MAXIMUM if value > rule.bound() else None
        case _:
            return ViolationKind.UNEXPECTED_RULE


def _check_text(rule: Rule, value: str) -> ViolationKind | None:
    size = _byte_length(value)
    match rule.kind:
        case None:
            return None
        case RuleKind.LENGTH:
            return ViolationKind.WRONG_LENGTH if size != rule.bound() else None
        case RuleKind.MEMBERSHIP:
            return None if value in rule.tokens() else ViolationKind.NOT_IN_SET
        case RuleKind.MINIMUM:
            return ViolationKind.BELOW_MINIMUM if size < rule.bound() else None
        case RuleKind.MAXIMUM:
            return ViolationKind.ABOVE_MAXIMUM if size > rule.bound() else None
        case _:
            return ViolationKind.UNEXPECTED_RULE


def validate_int(expression: str, value: int, field: str = "") -> Violation | None:
    """Apply an in/min/max rule to an integer.

    Args:
        expression: Rule text; empty always passes.
        value: Integer to check.
        field: Path recorded on the violation.

    Returns:
        Violation, or None if the value satisfies the rule.
    """
    try:
        kind = _check_int(parse_rule(expression, INT_KINDS), value)
    except RuleError as e:
        kind = e.kind
    return Violation(kind=kind, field=field) if kind is not None else None


def validate_text(expression: str, value: str, field: str = "") -> Violation | None:
    """Apply a len/in/min/max rule to a string. Lengths count UTF-8 bytes."""
    try:
        kind = _check_text(parse_rule(expression, TEXT_KINDS), value)
    except RuleError as e:
        kind = e.kind
    return Violation(kind=kind, field=field) if kind is not None else None
