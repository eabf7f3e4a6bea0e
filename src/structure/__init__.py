"""structure - Reflection-based introspection utilities for dataclass records."""

from structure.errors import NotRecordError, StructureError, TagSyntaxError
from structure.introspect import (
    field_names,
    is_fully_populated,
    is_record_type,
    to_map,
    to_values,
    type_name,
)
from structure.parsing import TagParser, lookup_tag
from structure.resolver import field_list, zero_value
from structure.types import TAG_NAMESPACE, FieldDescriptor, Ref, TagDirective

__all__ = [
    # Main API
    "to_map",
    "to_values",
    "is_fully_populated",
    "field_names",
    "is_record_type",
    "type_name",
    # Field resolution
    "field_list",
    "zero_value",
    "FieldDescriptor",
    "TagDirective",
    "TAG_NAMESPACE",
    "Ref",
    # Tags
    "TagParser",
    "lookup_tag",
    # Errors
    "StructureError",
    "NotRecordError",
    "TagSyntaxError",
]

__version__ = "0.1.0"
