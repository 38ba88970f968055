"""Lexer for the schema definition language."""

from __future__ import annotations

from typing import Iterator

import ply.lex as lex

KEYWORDS = {
    "type": "TYPE",
    "extends": "EXTENDS",
}


class SchemaLexer:
    """Tokenizer for schema definitions.

    Punctuation (``{ } [ ] : , @``) is returned as ply literals, so the token
    type is the character itself.
    """

    tokens = ["IDENTIFIER"] + list(KEYWORDS.values())
    literals = "{}[]:,@"

    t_ignore = " \t\r"
    t_ignore_COMMENT = r"\#[^\n]*"

    def __init__(self) -> None:
        self.lexer = lex.lex(module=self)

    def t_IDENTIFIER(self, t: lex.LexToken) -> lex.LexToken:
        r"[a-zA-Z_][a-zA-Z0-9_]*"
        t.type = KEYWORDS.get(t.value, "IDENTIFIER")
        return t

    def t_newline(self, t: lex.LexToken) -> None:
        r"\n+"
        t.lexer.lineno += len(t.value)

    def t_error(self, t: lex.LexToken) -> None:
        raise SyntaxError(f"Illegal character '{t.value[0]}' at line {t.lineno}")

    def reset(self, data: str) -> lex.Lexer:
        """Load ``data`` into the lexer, starting again at line 1."""
        self.lexer.lineno = 1
        self.lexer.input(data)
        return self.lexer

    def tokenize(self, data: str) -> Iterator[lex.LexToken]:
        """Yield the tokens of ``data``."""
        yield from self.reset(data)
