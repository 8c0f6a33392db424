# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""tagrules - Declarative field rules for dataclasses and pydantic models.

Attach a rule expression to each field, then validate an instance to get
every violation in field order:

    from tagrules import Tag, Validate, validate

    @dataclass
    class Order:
        code: Tag[str, "len:5"]
        qty: Annotated[int, Validate("min:1")]

    validate(Order(code="abc", qty=0))
    # ValidationErrors: wrong len. wrong min
"""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

# Lazy import mapping: name -> (module, attribute)
_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    # Validator
    "Validator": ("tagrules.validator", "Validator"),
    "validate": ("tagrules.validator", "validate"),
    "collect_violations": ("tagrules.validator", "collect_violations"),
    "is_valid": ("tagrules.validator", "is_valid"),
    "ValidatorConfig": ("tagrules.config", "ValidatorConfig"),
    # Fields
    "FieldDescriptor": ("tagrules.fields", "FieldDescriptor"),
    "FieldShape": ("tagrules.fields", "FieldShape"),
    "Tag": ("tagrules.fields", "Tag"),
    "Validate": ("tagrules.fields", "Validate"),
    "describe_fields": ("tagrules.fields", "describe_fields"),
    # Violations and errors
    "Violation": ("tagrules.violation", "Violation"),
    "ViolationKind": ("tagrules.violation", "ViolationKind"),
    "TagrulesError": ("tagrules.errors", "TagrulesError"),
    "NotARecordError": ("tagrules.errors", "NotARecordError"),
    "ValidationErrors": ("tagrules.errors", "ValidationErrors"),
}

_LOADED: dict[str, object] = {}


def __getattr__(name: str) -> object:
    """Lazy import attributes on first access."""
    if name in _LOADED:
        return _LOADED[name]

    if name in _LAZY_IMPORTS:
        from importlib import import_module

        module_name, attr_name = _LAZY_IMPORTS[name]
        value = getattr(import_module(module_name), attr_name)
        _LOADED[name] = value
        return value

    raise AttributeError(f"module 'tagrules' has no attribute {name!r}")


def __dir__() -> list[str]:
    """List available attributes."""
    return list(_LAZY_IMPORTS.keys())


__all__ = tuple(_LAZY_IMPORTS)

if TYPE_CHECKING:
    from tagrules.config import ValidatorConfig
    from tagrules.errors import NotARecordError, TagrulesError, ValidationErrors
    from tagrules.fields import (
        FieldDescriptor,
        FieldShape,
        Tag,
        Validate,
        describe_fields,
    )
    from tagrules.validator import Validator, collect_violations, is_valid, validate
    from tagrules.violation import Violation, ViolationKind
