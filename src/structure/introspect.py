"""Record introspection operations.

Every function here accepts a dataclass instance, or a ``Ref`` to one, and
reads it without modifying it. A field whose current value is itself a record
is expanded when the field is declared with a record type; a field declared
``Any`` or ``Optional[...]``, and a ``Ref`` stored in a field, are plain values.

Fields are controlled through dataclass field metadata::

    @dataclass
    class Person:
        Name: str = field(metadata={"structure": "myName"})  # key "myName" in to_map
        Secret: str = field(metadata={"structure": "-"})     # ignored everywhere
        Age: int = field(default=0, metadata={"tag": 'structure:"age"'})
        _cache: dict = field(default_factory=dict)           # unexported, ignored
"""

from __future__ import annotations

from typing import Any

from structure.resolver import (
    deref,
    field_list,
    holds_record,
    is_record,
    is_zero,
    record_value,
)
from structure.types import TAG_NAMESPACE


def to_map(instance: Any, *, tag_name: str = TAG_NAMESPACE) -> dict[str, Any]:
    """Convert a record to a dict keyed by field name.

    Keys are the declared field names unless the field's tag renames it.
    Nested records become nested dicts. When two fields resolve to the same
    key, the later field wins.

    Raises:
        NotRecordError: If instance is not a record.
    """
    record, fields = field_list(instance, tag_name)

    out: dict[str, Any] = {}
    for descriptor in fields:
        value = getattr(record, descriptor.name)
        if holds_record(descriptor, value):
            value = to_map(value, tag_name=tag_name)
        out[descriptor.output_name] = value
    return out


def to_values(instance: Any, *, tag_name: str = TAG_NAMESPACE) -> list[Any]:
    """Return the record's field values in declaration order.

    Nested records are flattened: their values are spliced in place.

    Raises:
        NotRecordError: If instance is not a record.
    """
    record, fields = field_list(instance, tag_name)

    values: list[Any] = []
    for descriptor in fields:
        value = getattr(record, descriptor.name)
        if holds_record(descriptor, value):
            values.extend(to_values(value, tag_name=tag_name))
        else:
            values.append(value)
    return values


def is_fully_populated(instance: Any, *, tag_name: str = TAG_NAMESPACE) -> bool:
    """Return True if no visible field holds its type's zero value.

    Nested records must be fully populated themselves. Checking stops at the
    first field that fails. A record without visible fields is fully
    populated.

    Raises:
        NotRecordError: If instance is not a record.
    """
    record, fields = field_list(instance, tag_name)

    for descriptor in fields:
        value = getattr(record, descriptor.name)
        if holds_record(descriptor, value):
            if not is_fully_populated(value, tag_name=tag_name):
                return False
            continue

        if is_zero(value, descriptor.zero):
            return False

    return True


def field_names(instance: Any, *, tag_name: str = TAG_NAMESPACE) -> list[str]:
    """Return the declared names of the record's visible fields.

    Rename tags are ignored here; excluded fields are still left out.

    A nested record contributes its own names first, followed by the name of
    the field holding it: ``Outer(Inner=Inner(A=1), X=2)`` gives
    ``["A", "Inner", "X"]``. This ordering is kept for compatibility and
    should not be relied on beyond that.

    Raises:
        NotRecordError: If instance is not a record.
    """
    record, fields = field_list(instance, tag_name)

    names: list[str] = []
    for descriptor in fields:
        value = getattr(record, descriptor.name)
        if holds_record(descriptor, value):
            names.extend(field_names(value, tag_name=tag_name))
        names.append(descriptor.name)
    return names


def is_record_type(value: Any) -> bool:
    """Return True if value is a record or a ``Ref`` to one. Never raises."""
    return is_record(deref(value))


def type_name(instance: Any) -> str:
    """Return the record's class name, or "" for an unnamed record class.

    Raises:
        NotRecordError: If instance is not a record.
    """
    return type(record_value(instance)).__name__
