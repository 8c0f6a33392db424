# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Rules module: rule expression parsing and scalar checks.

Core exports:
- Rule, RuleKind, parse_rule: Rule expression parser
- validate_int, validate_text: Scalar validators returning at most one Violation
"""

from .rule import ALL_KINDS, Rule, RuleKind, parse_int, parse_rule
from .scalar import INT_KINDS, TEXT_KINDS, validate_int, validate_text

__all__ = (
    # Parser
    "ALL_KINDS",
    "Rule",
    "RuleKind",
    "parse_int",
    "parse_rule",
    # Scalar validators
    "INT_KINDS",
    "TEXT_KINDS",
    "validate_int",
    "validate_text",
)
