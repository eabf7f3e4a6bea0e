"""Exceptions raised by the structure library."""

from __future__ import annotations


class StructureError(Exception):
    """Base class for all errors raised by this library."""


class NotRecordError(StructureError, TypeError):
    """Raised when a record (dataclass instance) is required but not given.

    This signals a caller bug: check with ``is_record_type`` first when the
    input may not be a record.
    """

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(
            f"not a struct: expected a dataclass instance, got {type(value).__name__}"
        )


class TagSyntaxError(StructureError, SyntaxError):
    """Raised when a field tag string cannot be parsed."""
