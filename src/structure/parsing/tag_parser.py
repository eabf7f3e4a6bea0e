"""Parser for struct tag strings.

A tag string is a whitespace separated list of ``key:"value"`` pairs::

    structure:"myName" json:"name,omitempty"

Keys may repeat; lookups return the first match.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any

import ply.yacc as yacc

from structure.errors import TagSyntaxError
from structure.parsing.tag_lexer import TagLexer


@dataclass(frozen=True)
class TagPair:
    """One ``key:"value"`` entry of a tag string."""

    key: str
    value: str


class TagParser:
    """Parser for tag strings."""

    tokens = TagLexer.tokens

    def __init__(self) -> None:
        self.lexer = TagLexer()
        self.lexer.build()
        self.parser: yacc.LRParser = None  # type: ignore

    def p_tag(self, p: yacc.YaccProduction) -> None:
        """tag : pair_list"""
        p[0] = p[1]

    def p_pair_list_single(self, p: yacc.YaccProduction) -> None:
        """pair_list : pair"""
        p[0] = [p[1]]

    def p_pair_list_multiple(self, p: yacc.YaccProduction) -> None:
        """pair_list : pair_list pair"""
        p[0] = p[1]
        p[0].append(p[2])

    def p_pair(self, p: yacc.YaccProduction) -> None:
        """pair : KEY COLON STRING"""
        p[0] = TagPair(key=p[1], value=p[3])

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            raise TagSyntaxError(f"Syntax error at '{p.value}' (position {p.lexpos})")
        else:
            raise TagSyntaxError("Syntax error at end of tag")

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        self.parser = yacc.yacc(module=self, start="tag", **kwargs)

    def parse(self, data: str) -> list[TagPair]:
        """Parse a tag string into its ordered pairs."""
        if not data or not data.strip():
            return []
        if self.parser is None:
            self.build(debug=False, write_tables=False)
        pairs = self.parser.parse(data, lexer=self.lexer.lexer)
        return pairs or []


_local = threading.local()


def _thread_parser() -> TagParser:
    """Return this thread's parser, building it on first use."""
    parser = getattr(_local, "parser", None)
    if parser is None:
        parser = TagParser()
        _local.parser = parser
    return parser


def parse_tag(data: str) -> list[TagPair]:
    """Parse a tag string into ``TagPair`` entries."""
    return _thread_parser().parse(data)


def lookup_tag(data: str, key: str) -> str | None:
    """Return the value stored under ``key`` in a tag string, or None."""
    for pair in parse_tag(data):
        if pair.key == key:
            return pair.value
    return None
