# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Validator - walks a record's fields and aggregates every violation.

Flow:
    validate(record)
      -> not a record?            raise NotARecordError (no field is read)
      -> for each field, in declaration order:
           private with a rule    RULE_ON_PRIVATE_FIELD
           INTEGER / TEXT         scalar check
           *_SEQUENCE             scalar check per element
           RECORD + "inner"       recurse, splice nested violations inline
           UNRESOLVED             classified by the runtime value
           anything else          ignored
      -> violations?              raise ValidationErrors

Validation never mutates its input and keeps no state between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from .config import ValidatorConfig
from .errors import NotARecordError, TagrulesError, ValidationErrors
from .fields import FieldDescriptor, FieldShape, describe_fields, is_record
from .rules import validate_int, validate_text
from .violation import Violation, ViolationKind

__all__ = ("Validator", "collect_violations", "is_valid", "validate")

logger = logging.getLogger(__name__)


def _type_mismatch(path: str, expected: str, value: Any) -> Violation:
    cause = TypeError(f"{path}: expected {expected}, got {type(value).__name__}")
    return Violation(kind=ViolationKind.OPAQUE, field=path, cause=cause)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class Validator:
    """Rule-driven record validator.

    Example:
        @dataclass
        class User:
            name: Annotated[str, Validate("min:1")]
            age: Annotated[int, Validate("min:18")]
            roles: Annotated[list[str], Validate("in:admin,staff")]

        Validator().validate(User(name="", age=12, roles=["admin"]))
        # ValidationErrors: wrong min. wrong min
    """

    def __init__(self, config: ValidatorConfig | None = None):
        self.config = config or ValidatorConfig()

    def validate(self, value: Any) -> None:
        """Validate a record.

        Raises:
            NotARecordError: If value is not a dataclass or model instance.
            ValidationErrors: If any field fails; holds every violation in order.
        """
        violations = self.collect(value)
        if violations:
            raise ValidationErrors(violations)

    def is_valid(self, value: Any) -> bool:
        """True if value is a record with no violations."""
        try:
            return not self.collect(value)
        except NotARecordError:
            return False

    def collect(self, value: Any) -> list[Violation]:
        """Check every field and return all violations in field order.

        Raises:
            NotARecordError: If value is not a dataclass or model instance.
        """
        if not is_record(value):
            raise NotARecordError(details={"type": type(value).__name__})

        record_type = type(value)
        violations: list[Violation] = []
        for descriptor in describe_fields(record_type, self.config.metadata_key):
            violations.extend(self._check_field(value, descriptor))

        logger.debug(
            "Validated %s: %d violation(s)", record_type.__name__, len(violations)
        )
        return violations

    def _check_field(self, record: Any, descriptor: FieldDescriptor) -> list[Violation]:
        rule, name = descriptor.rule, descriptor.name

        if rule == "":
            return []
        if not descriptor.public:
            return [Violation(kind=ViolationKind.RULE_ON_PRIVATE_FIELD, field=name)]

        value = getattr(record, name)

        match descriptor.shape:
            case FieldShape.INTEGER:
                return self._check_scalar(rule, value, name, integer=True)
            case FieldShape.TEXT:
                return self._check_scalar(rule, value, name, integer=False)
            case FieldShape.INTEGER_SEQUENCE:
                return self._check_sequence(rule, value, name, integer=True)
            case FieldShape.TEXT_SEQUENCE:
                return self._check_sequence(rule, value, name, integer=False)
            case FieldShape.RECORD:
                return self._check_record(rule, value, name)
            case FieldShape.UNRESOLVED:
                return self._check_unresolved(rule, value, name, descriptor.annotation)
            case FieldShape.UNSUPPORTED:
                logger.debug("Ignoring rule %r on unsupported field %s", rule, name)
                return []

    def _check_scalar(
        self, rule: str, value: Any, path: str, *, integer: bool
    ) -> list[Violation]:
        if integer:
            if not _is_int(value):
                return [_type_mismatch(path, "int", value)]
            violation = validate_int(rule, value, path)
        else:
            if not isinstance(value, str):
                return [_type_mismatch(path, "str", value)]
            violation = validate_text(rule, value, path)
        return [violation] if violation is not None else []

    def _check_sequence(
        self, rule: str, value: Any, path: str, *, integer: bool
    ) -> list[Violation]:
        if isinstance(value, str) or not isinstance(value, Sequence):
            return [_type_mismatch(path, "sequence", value)]

        violations = []
        for index, element in enumerate(value):
            violations.extend(
                self._check_scalar(rule, element, f"{path}[{index}]", integer=integer)
            )
        return violations

    def _check_record(self, rule: str, value: Any, path: str) -> list[Violation]:
        if rule != self.config.recursive_token:
            logger.debug("Ignoring rule %r on record field %s", rule, path)
            return []
        return self._check_nested(value, path)

    def _check_unresolved(
        self, rule: str, value: Any, path: str, annotation: Any
    ) -> list[Violation]:
        # The declared type is unknown; classify by the value actually held.
        if is_record(value):
            return self._check_record(rule, value, path)
        if _is_int(value):
            return self._check_scalar(rule, value, path, integer=True)
        if isinstance(value, str):
            return self._check_scalar(rule, value, path, integer=False)
        cause = TypeError(f"{path}: cannot resolve annotation {annotation!r}")
        return [Violation(kind=ViolationKind.OPAQUE, field=path, cause=cause)]

    def _check_nested(self, value: Any, path: str) -> list[Violation]:
        logger.debug("Recursing into %s", path)
        try:
            self.validate(value)
        except ValidationErrors as e:
            return [v.nested(path) for v in e]
        except TagrulesError as e:
            return [Violation(kind=ViolationKind.OPAQUE, field=path, cause=e)]
        return []


_default_validator = Validator()


def validate(value: Any) -> None:
    """Validate a record with the default configuration.

    Raises:
        NotARecordError: If value is not a dataclass or model instance.
        ValidationErrors: If any field fails.
    """
    _default_validator.validate(value)


def collect_violations(value: Any) -> list[Violation]:
    """All violations for a record, empty if valid."""
    return _default_validator.collect(value)


def is_valid(value: Any) -> bool:
    return _default_validator.is_valid(value)
