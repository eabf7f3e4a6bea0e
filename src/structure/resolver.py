"""Field resolution shared by every introspection operation.

``field_list`` turns a record into its visible fields: exported, not excluded
by tag, in declaration order. It is recomputed on every call.
"""

from __future__ import annotations

import dataclasses
import logging
import numbers
import typing
from decimal import Decimal
from fractions import Fraction
from typing import Any

from structure.errors import NotRecordError
from structure.parsing import lookup_tag
from structure.types import (
    TAG_NAMESPACE,
    TAG_STRING_KEY,
    ZERO_KEY,
    FieldDescriptor,
    Ref,
    TagDirective,
)

logger = logging.getLogger(__name__)


# Zero value for each builtin type; parametrised generics use their origin
ZERO_VALUES: dict[type, Any] = {
    bool: False,
    int: 0,
    float: 0.0,
    complex: 0j,
    str: "",
    bytes: b"",
    bytearray: bytearray(),
    list: [],
    dict: {},
    set: set(),
    frozenset: frozenset(),
    tuple: (),
    Decimal: Decimal(0),
    Fraction: Fraction(0),
}

_MISSING = object()


def deref(value: Any) -> Any:
    """Follow one level of ``Ref`` indirection."""
    if isinstance(value, Ref):
        return value.deref()
    return value


def is_record(value: Any) -> bool:
    """Return whether value is a dataclass instance (not a dataclass class)."""
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def record_value(value: Any) -> Any:
    """Dereference value and check it is a record, raising otherwise."""
    record = deref(value)
    if not is_record(record):
        raise NotRecordError(record)
    return record


def zero_value(tp: Any) -> Any:
    """Return the zero value of a declared type.

    Types declaring ``__zero__`` (a value or a zero-argument callable) supply
    their own. Builtins come from ``ZERO_VALUES``. Anything else, including
    optionals and unresolved string annotations, has ``None`` as its zero.
    """
    declared = getattr(tp, "__zero__", _MISSING) if isinstance(tp, type) else _MISSING
    if declared is not _MISSING:
        return declared() if callable(declared) else declared

    origin = typing.get_origin(tp)
    if origin is typing.Annotated:
        return zero_value(typing.get_args(tp)[0])
    if isinstance(origin, type):
        tp = origin

    if isinstance(tp, type) and tp in ZERO_VALUES:
        return _fresh(ZERO_VALUES[tp])
    return None


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


def is_zero(value: Any, zero: Any) -> bool:
    """Deep, type-aware comparison of value against a zero value.

    Numbers compare by value across numeric types, so ``0`` in a ``float``
    field is zero. ``bool`` is never treated as a number here.
    """
    if _is_number(zero) and _is_number(value):
        return value == zero
    return type(value) is type(zero) and value == zero


def declares_record(tp: Any) -> bool | None:
    """Return whether a declared type is a record type.

    None means the annotation could not be resolved to a type.
    """
    if isinstance(tp, str):
        return None
    if typing.get_origin(tp) is typing.Annotated:
        tp = typing.get_args(tp)[0]
    return isinstance(tp, type) and dataclasses.is_dataclass(tp)


def holds_record(descriptor: FieldDescriptor, value: Any) -> bool:
    """Return whether a field value is a nested record to expand.

    The declared type decides; the value is only consulted when the
    annotation could not be resolved.
    """
    if descriptor.record is False:
        return False
    return is_record(value)


def _fresh(zero: Any) -> Any:
    # mutable zeros are shared in ZERO_VALUES; hand out copies
    if isinstance(zero, (list, dict, set, bytearray)):
        return zero.copy()
    return zero


def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as exc:
        logger.debug("Could not resolve annotations of %s: %s", cls.__name__, exc)
        return {}


def _tag_value(f: dataclasses.Field, tag_name: str) -> str | None:
    """Read the tag for ``tag_name`` from a field's metadata.

    A direct ``metadata[tag_name]`` entry wins over a tag string
    stored under ``metadata["tag"]``.
    """
    value = f.metadata.get(tag_name)
    if value is not None:
        return str(value)
    tag_string = f.metadata.get(TAG_STRING_KEY)
    if tag_string:
        return lookup_tag(tag_string, tag_name)
    return None


def describe_field(
    f: dataclasses.Field, hints: dict[str, Any], tag_name: str = TAG_NAMESPACE
) -> FieldDescriptor:
    """Build the descriptor for a single dataclass field."""
    tag = _tag_value(f, tag_name)
    directive = TagDirective.from_tag(tag)
    declared = hints.get(f.name, f.type)
    if ZERO_KEY in f.metadata:
        zero = f.metadata[ZERO_KEY]
    else:
        zero = zero_value(declared)
    return FieldDescriptor(
        name=f.name,
        type=declared,
        directive=directive,
        override=tag if directive is TagDirective.RENAME else None,
        exported=not f.name.startswith("_"),
        zero=zero,
        record=declares_record(declared),
    )


def field_list(
    value: Any, tag_name: str = TAG_NAMESPACE
) -> tuple[Any, list[FieldDescriptor]]:
    """Return the record behind value and its visible fields.

    Args:
        value: A dataclass instance or a ``Ref`` to one.
        tag_name: Metadata namespace holding the rename/exclude tag.

    Returns:
        ``(record, fields)`` where ``fields`` lists the exported, non-excluded
        fields in declaration order. Read a field's current value with
        ``getattr(record, descriptor.name)``.

    Raises:
        NotRecordError: If value (after one dereference) is not a record.
    """
    record = record_value(value)
    cls = type(record)
    hints = _type_hints(cls)

    fields: list[FieldDescriptor] = []
    for f in dataclasses.fields(record):
        descriptor = describe_field(f, hints, tag_name)
        if not descriptor.is_visible:
            reason = "excluded" if descriptor.exported else "unexported"
            logger.debug("Skipping %s field %s.%s", reason, cls.__name__, f.name)
            continue
        fields.append(descriptor)

    logger.debug("Resolved %d visible field(s) on %s", len(fields), cls.__name__)
    return record, fields
