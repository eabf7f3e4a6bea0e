"""Lexer for struct tag strings."""

import ast

import ply.lex as lex

from structure.errors import TagSyntaxError


class TagLexer:
    """Lexer for tokenizing tag strings such as ``structure:"name" json:"n"``."""

    # Token list
    tokens = [
        "KEY",
        "COLON",
        "STRING",
    ]

    # Simple tokens
    t_COLON = r":"

    # Ignored characters (pairs are whitespace separated)
    t_ignore = " \t\r\n"

    def __init__(self) -> None:
        self.lexer: lex.LexToken = None  # type: ignore

    def t_STRING(self, t: lex.LexToken) -> lex.LexToken:
        r'"(?:[^"\\\n]|\\.)*"'
        try:
            t.value = ast.literal_eval(t.value)
        except (SyntaxError, ValueError) as exc:
            raise TagSyntaxError(f"Invalid quoted value {t.value} at position {t.lexpos}") from exc
        return t

    def t_KEY(self, t: lex.LexToken) -> lex.LexToken:
        r'[^\s:"\x00-\x1f\x7f]+'
        return t

    def t_error(self, t: lex.LexToken) -> None:
        raise TagSyntaxError(f"Illegal character '{t.value[0]}' at position {t.lexpos}")

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

    def input(self, data: str) -> None:
        """Set the input string to tokenize."""
        self.lexer.input(data)

    def token(self) -> lex.LexToken | None:
        """Return the next token."""
        return self.lexer.token()

    def tokenize(self, data: str) -> list[lex.LexToken]:
        """Tokenize the input and return all tokens."""
        self.input(data)
        tokens = []
        while True:
            tok = self.token()
            if tok is None:
                break
            tokens.append(tok)
        return tokens
