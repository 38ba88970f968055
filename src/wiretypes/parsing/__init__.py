"""Parsing module for the schema definition language."""

from wiretypes.parsing.schema_lexer import SchemaLexer
from wiretypes.parsing.schema_parser import FieldSpec, SchemaParser, TypeRef, TypeSpec

__all__ = [
    "FieldSpec",
    "SchemaLexer",
    "SchemaParser",
    "TypeRef",
    "TypeSpec",
]
