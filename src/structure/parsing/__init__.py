"""Parsing module for field tag strings."""

from structure.parsing.tag_lexer import TagLexer
from structure.parsing.tag_parser import TagPair, TagParser, lookup_tag, parse_tag

__all__ = [
    "TagLexer",
    "TagPair",
    "TagParser",
    "lookup_tag",
    "parse_tag",
]
