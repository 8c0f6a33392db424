# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Field descriptors for record types.

Attaching rules:
    age: Annotated[int, Validate("min:18")]
    age: Tag[int, "min:18"]                                  # same thing
    age: int = dataclasses.field(metadata={"validate": "min:18"})
    age: int = pydantic.Field(json_schema_extra={"validate": "min:18"})

Records are dataclass instances and pydantic model instances. Descriptors
are derived once per record type and cached for as long as the type lives.
"""

from __future__ import annotations

import builtins
import dataclasses
import inspect
import logging
import sys
import weakref
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, ForwardRef, get_args, get_origin

from pydantic import BaseModel

__all__ = (
    "FieldDescriptor",
    "FieldShape",
    "Tag",
    "Validate",
    "describe_fields",
    "is_record",
    "is_record_type",
    "resolve_shape",
)

logger = logging.getLogger(__name__)


class Validate:
    """Rule expression marker carried in Annotated metadata.

    Example:
        code: Annotated[str, Validate("len:5")]
        address: Annotated[Address, Validate.inner()]
    """

    __slots__ = ("expression",)

    def __init__(self, expression: str):
        if not isinstance(expression, str):
            raise TypeError(
                f"Rule expression must be a string, got {type(expression).__name__}"
            )
        self.expression = expression

    @classmethod
    def inner(cls, token: str = "inner") -> Validate:
        """Marker requesting recursive validation of a nested record.

        The token must equal the validator's ``recursive_token``; pass it
        explicitly when running under a ValidatorConfig with a custom one.
        """
        return cls(token)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Validate):
            return NotImplemented
        return self.expression == other.expression

    def __hash__(self) -> int:
        return hash((Validate, self.expression))

    def __repr__(self) -> str:
        return f"Validate({self.expression!r})"


class _Tag:
    """Shorthand: Tag[T, "rule"] -> Annotated[T, Validate("rule")]."""

    def __class_getitem__(cls, params: tuple[Any, str]) -> Any:
        if not isinstance(params, tuple) or len(params) != 2:
            raise TypeError('Tag requires two parameters: Tag[T, "rule"]')
        tp, expression = params
        return Annotated[tp, Validate(expression)]


Tag = _Tag


class FieldShape(str, Enum):
    """Static classification of a field's declared type."""

    INTEGER = "integer"
    TEXT = "text"
    INTEGER_SEQUENCE = "integer_sequence"
    TEXT_SEQUENCE = "text_sequence"
    RECORD = "record"
    # Names a type the defining module cannot see (function-local class,
    # TYPE_CHECKING-only import). Classified from the runtime value.
    UNRESOLVED = "unresolved"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """Read-only view of one record field.

    Attributes:
        name: Attribute name.
        shape: Declared shape.
        rule: Raw rule expression, "" when absent.
        annotation: Declared type with Annotated metadata stripped.
    """

    name: str
    shape: FieldShape
    rule: str = ""
    annotation: Any = None

    @property
    def public(self) -> bool:
        return not self.name.startswith("_")


def _is_class(tp: Any) -> bool:
    return isinstance(tp, type) and get_origin(tp) is None


def is_record_type(tp: Any) -> bool:
    """True for dataclass classes and pydantic model classes."""
    if not _is_class(tp):
        return False
    return dataclasses.is_dataclass(tp) or issubclass(tp, BaseModel)


def is_record(value: Any) -> bool:
    """True for dataclass instances and pydantic model instances, not classes."""
    if isinstance(value, type):
        return False
    return isinstance(value, BaseModel) or dataclasses.is_dataclass(value)


class _UnresolvedMeta(type):
    """Metaclass of placeholders standing in for names eval could not find."""

    def __getattr__(cls, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return _unresolved(f"{cls.__name__}.{name}")

    def __getitem__(cls, params: Any) -> Any:
        return cls

    def __repr__(cls) -> str:
        return cls.__name__


class _Unresolved(metaclass=_UnresolvedMeta):
    pass


def _unresolved(name: str) -> type:
    return _UnresolvedMeta(name, (_Unresolved,), {"__module__": __name__})


def _is_unresolved(tp: Any) -> bool:
    if isinstance(tp, (str, ForwardRef)):
        return True
    return _is_class(tp) and issubclass(tp, _Unresolved)


def _split_annotated(annotation: Any) -> tuple[Any, tuple[Any, ...]]:
    if get_origin(annotation) is Annotated:
        base, *metadata = get_args(annotation)
        return base, tuple(metadata)
    return annotation, ()


def _is_int_type(tp: Any) -> bool:
    return _is_class(tp) and issubclass(tp, int) and not issubclass(tp, bool)


def _is_text_type(tp: Any) -> bool:
    return _is_class(tp) and issubclass(tp, str)


def _sequence_element(annotation: Any) -> Any:
    """Element type for list[X], tuple[X, ...], Sequence[X]; None otherwise."""
    origin = get_origin(annotation)
    args = get_args(annotation)
    if origin in (list, Sequence) and len(args) == 1:
        return args[0]
    if origin is tuple and len(args) == 2 and args[1] is Ellipsis:
        return args[0]
    return None


def resolve_shape(annotation: Any) -> FieldShape:
    """Classify a type annotation.

    bool, float, dict, optionals and unions are UNSUPPORTED. Annotations
    naming types that could not be resolved are UNRESOLVED.
    """
    annotation, _ = _split_annotated(annotation)

    if _is_unresolved(annotation):
        return FieldShape.UNRESOLVED
    if _is_int_type(annotation):
        return FieldShape.INTEGER
    if _is_text_type(annotation):
        return FieldShape.TEXT
    if is_record_type(annotation):
        return FieldShape.RECORD

    element = _sequence_element(annotation)
    if element is not None:
        element, _ = _split_annotated(element)
        if _is_unresolved(element):
            return FieldShape.UNRESOLVED
        if _is_int_type(element):
            return FieldShape.INTEGER_SEQUENCE
        if _is_text_type(element):
            return FieldShape.TEXT_SEQUENCE

    return FieldShape.UNSUPPORTED


def _marker_rule(metadata: Sequence[Any]) -> str | None:
    for item in metadata:
        if isinstance(item, Validate):
            return item.expression
    return None


def _extra_rule(extra: Any, metadata_key: str) -> str:
    if isinstance(extra, Mapping):
        rule = extra.get(metadata_key, "")
        return rule if isinstance(rule, str) else ""
    return ""


class _LenientNamespace(dict):
    """Eval locals that fall back to module globals, builtins, then placeholders."""

    def __init__(self, localns: Mapping[str, Any], globalns: dict[str, Any]):
        super().__init__(localns)
        self._globalns = globalns

    def __missing__(self, key: str) -> Any:
        if key in self._globalns:
            return self._globalns[key]
        if hasattr(builtins, key):
            return getattr(builtins, key)
        return _unresolved(key)


def _evaluate(
    annotation: Any, globalns: dict[str, Any], localns: dict[str, Any]
) -> Any:
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, globalns, _LenientNamespace(localns, globalns))
    except (AttributeError, NameError, SyntaxError, TypeError) as e:
        logger.debug("Cannot evaluate annotation %r: %s", annotation, e)
        return annotation


def _type_hints(record_type: type) -> dict[str, Any]:
    """Annotations across the MRO, base classes first, evaluated one by one.

    Names the defining module cannot see evaluate to placeholder classes, so
    one such annotation keeps its own Annotated metadata and never affects
    its neighbours.
    """
    hints: dict[str, Any] = {}
    for klass in reversed(record_type.__mro__):
        if klass is object or klass is BaseModel:
            continue
        module = sys.modules.get(klass.__module__)
        globalns = vars(module) if module is not None else {}
        localns = dict(vars(klass))
        for name, annotation in inspect.get_annotations(klass).items():
            hints[name] = _evaluate(annotation, globalns, localns)
    return hints


def _dataclass_fields(record_type: type, metadata_key: str) -> list[FieldDescriptor]:
    hints = _type_hints(record_type)
    out = []
    for f in dataclasses.fields(record_type):
        annotation = hints.get(f.name, f.type)
        base, metadata = _split_annotated(annotation)
        rule = _marker_rule(metadata)
        if rule is None:
            rule = _extra_rule(f.metadata, metadata_key)
        out.append(
            FieldDescriptor(
                name=f.name,
                shape=resolve_shape(base),
                rule=rule,
                annotation=base,
            )
        )
    return out


def _model_fields(
    record_type: type[BaseModel], metadata_key: str
) -> list[FieldDescriptor]:
    model_fields = record_type.model_fields
    private = getattr(record_type, "__private_attributes__", {})
    hints = _type_hints(record_type)

    names = [n for n in hints if n in model_fields or n in private]
    names += [n for n in (*model_fields, *private) if n not in names]

    out = []
    for name in names:
        hint = hints.get(name)
        base, metadata = _split_annotated(hint)
        rule = _marker_rule(metadata)

        info = model_fields.get(name)
        if info is not None:
            if rule is None:
                rule = _marker_rule(info.metadata)
            if rule is None:
                rule = _extra_rule(info.json_schema_extra, metadata_key)
            if hint is None or _is_unresolved(base):
                base = info.annotation

        out.append(
            FieldDescriptor(
                name=name,
                shape=resolve_shape(base),
                rule=rule or "",
                annotation=base,
            )
        )
    return out


_descriptor_cache: weakref.WeakKeyDictionary[
    type, dict[str, tuple[FieldDescriptor, ...]]
] = weakref.WeakKeyDictionary()


def describe_fields(
    record_type: type, metadata_key: str = "validate"
) -> tuple[FieldDescriptor, ...]:
    """Field descriptors of a record type in declaration order.

    Args:
        record_type: Dataclass or pydantic model class.
        metadata_key: Key for rules stored in field metadata.

    Returns:
        Tuple of FieldDescriptor, cached per (type, key). The cache holds
        the type weakly, so classes created at runtime can still be freed.

    Raises:
        TypeError: If record_type is not a record type.
    """
    if not is_record_type(record_type):
        raise TypeError(f"{record_type!r} is not a dataclass or pydantic model")

    by_key = _descriptor_cache.setdefault(record_type, {})
    descriptors = by_key.get(metadata_key)
    if descriptors is None:
        if issubclass(record_type, BaseModel):
            descriptors = tuple(_model_fields(record_type, metadata_key))
        else:
            descriptors = tuple(_dataclass_fields(record_type, metadata_key))
        by_key[metadata_key] = descriptors
    return descriptors
