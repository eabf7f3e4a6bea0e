"""Core types for record introspection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

# Default tag namespace looked up in a field's metadata
TAG_NAMESPACE = "structure"

# Metadata key holding a tag string, e.g. 'structure:"myName" json:"name"'
TAG_STRING_KEY = "tag"

# Metadata key holding an explicit zero-value template for a field
ZERO_KEY = "zero"

# Tag value that removes a field from every operation
EXCLUDE_MARKER = "-"


class TagDirective(Enum):
    """What a field's tag asks the introspector to do with it."""

    USE_DECLARED = "use_declared"
    RENAME = "rename"
    EXCLUDE = "exclude"

    @classmethod
    def from_tag(cls, value: str | None) -> TagDirective:
        """Classify a raw tag value."""
        if not value:
            return cls.USE_DECLARED
        if value == EXCLUDE_MARKER:
            return cls.EXCLUDE
        return cls.RENAME


@dataclass(frozen=True)
class FieldDescriptor:
    """A resolved view of one record field.

    ``type`` is the declared annotation, resolved to a real type where
    possible and left as the raw annotation otherwise. ``record`` tells
    whether that type is a record type, or is None when it is unresolved.
    """

    name: str
    type: Any
    directive: TagDirective = TagDirective.USE_DECLARED
    override: str | None = None
    exported: bool = True
    zero: Any = None
    record: bool | None = None

    @property
    def is_excluded(self) -> bool:
        return self.directive is TagDirective.EXCLUDE

    @property
    def is_visible(self) -> bool:
        """Return whether the field takes part in introspection."""
        return self.exported and not self.is_excluded

    @property
    def output_name(self) -> str:
        """Return the key used for this field in ``to_map``."""
        if self.directive is TagDirective.RENAME and self.override:
            return self.override
        return self.name


class Ref:
    """One level of indirection to a value.

    Public operations dereference a ``Ref`` they are handed directly, the way
    they would follow a pointer. A ``Ref`` stored in a record field is an
    ordinary leaf value and is never followed.
    """

    __slots__ = ("target",)

    def __init__(self, target: Any) -> None:
        self.target = target

    def deref(self) -> Any:
        """Return the referenced value."""
        return self.target

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ref):
            return NotImplemented
        return self.target == other.target

    def __hash__(self) -> int:
        return hash(self.target)

    def __repr__(self) -> str:
        return f"Ref({self.target!r})"
