"""Parser for the schema definition language.

A schema is a list of type definitions:

    type CurrencyType {
        code: string,
        amount: float,
    }

    type ConvertCurrencyRequest extends RequestBase {
        baseAmountList: CurrencyType[],
        @ebl:version: string,
    }

``@`` marks an attribute field, ``ns:`` qualifies a field with a namespace
and ``[]`` declares an array field. Each definition becomes a DataType
subclass with the listed fields declared in order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import ply.yacc as yacc

from wiretypes.base import DataType
from wiretypes.parsing.schema_lexer import SchemaLexer
from wiretypes.simple_types import BUILTIN_TYPES

logger = logging.getLogger(__name__)


@dataclass
class TypeRef:
    """Reference to a type, possibly as an array."""

    name: str
    is_array: bool = False


@dataclass
class FieldSpec:
    """Specification for a field before resolution."""

    name: str
    type_ref: TypeRef
    attribute: bool = False
    namespace: str | None = None


@dataclass
class TypeSpec:
    """Specification for a declared type before resolution."""

    name: str
    fields: list[FieldSpec] = field(default_factory=list)
    parent: str | None = None
    lineno: int = 0


class SchemaParser:
    """Parser that turns schema definitions into DataType subclasses."""

    tokens = SchemaLexer.tokens

    def __init__(self, module: str = "wiretypes.generated") -> None:
        self.lexer = SchemaLexer()
        self.parser: yacc.LRParser = None  # type: ignore
        self.module = module
        self._specs: dict[str, TypeSpec] = {}
        self._known: dict[str, type] = {}
        self._classes: dict[str, type[DataType]] = {}
        self._in_progress: set[str] = set()

    def p_schema(self, p: yacc.YaccProduction) -> None:
        """schema : statement_list
                  | empty"""
        p[0] = p[1] or []

    def p_empty(self, p: yacc.YaccProduction) -> None:
        """empty :"""
        p[0] = None

    def p_statement_list_single(self, p: yacc.YaccProduction) -> None:
        """statement_list : type_def"""
        p[0] = [p[1]]

    def p_statement_list_multiple(self, p: yacc.YaccProduction) -> None:
        """statement_list : statement_list type_def"""
        p[0] = p[1] + [p[2]]

    def p_type_def(self, p: yacc.YaccProduction) -> None:
        """type_def : TYPE IDENTIFIER parent '{' field_list '}'
                    | TYPE IDENTIFIER parent '{' field_list ',' '}'"""
        p[0] = TypeSpec(name=p[2], fields=p[5], parent=p[3], lineno=p.lineno(1))

    def p_type_def_empty(self, p: yacc.YaccProduction) -> None:
        """type_def : TYPE IDENTIFIER parent '{' '}'"""
        p[0] = TypeSpec(name=p[2], fields=[], parent=p[3], lineno=p.lineno(1))

    def p_parent(self, p: yacc.YaccProduction) -> None:
        """parent : EXTENDS IDENTIFIER
                  | empty"""
        p[0] = p[2] if len(p) == 3 else None

    def p_field_list_single(self, p: yacc.YaccProduction) -> None:
        """field_list : field"""
        p[0] = [p[1]]

    def p_field_list_multiple(self, p: yacc.YaccProduction) -> None:
        """field_list : field_list ',' field"""
        p[0] = p[1] + [p[3]]

    def p_name(self, p: yacc.YaccProduction) -> None:
        """name : IDENTIFIER
                | TYPE
                | EXTENDS"""
        p[0] = p[1]

    def p_field(self, p: yacc.YaccProduction) -> None:
        """field : name ':' type_ref
                 | '@' name ':' type_ref"""
        if len(p) == 4:
            p[0] = FieldSpec(name=p[1], type_ref=p[3])
        else:
            p[0] = FieldSpec(name=p[2], type_ref=p[4], attribute=True)

    def p_field_namespaced(self, p: yacc.YaccProduction) -> None:
        """field : name ':' name ':' type_ref
                 | '@' name ':' name ':' type_ref"""
        if len(p) == 6:
            p[0] = FieldSpec(name=p[3], type_ref=p[5], namespace=p[1])
        else:
            p[0] = FieldSpec(name=p[4], type_ref=p[6], attribute=True, namespace=p[2])

    def p_type_ref_simple(self, p: yacc.YaccProduction) -> None:
        """type_ref : IDENTIFIER"""
        p[0] = TypeRef(name=p[1], is_array=False)

    def p_type_ref_array(self, p: yacc.YaccProduction) -> None:
        """type_ref : IDENTIFIER '[' ']'"""
        p[0] = TypeRef(name=p[1], is_array=True)

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            raise SyntaxError(f"Syntax error at '{p.value}' (line {p.lineno})")
        else:
            raise SyntaxError("Syntax error at end of input")

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        self.parser = yacc.yacc(module=self, **kwargs)

    def parse_specs(self, data: str) -> list[TypeSpec]:
        """Parse schema text into unresolved type specs."""
        if self.parser is None:
            self.build(debug=False, write_tables=False)
        specs = self.parser.parse(lexer=self.lexer.reset(data))
        return specs or []

    def parse(self, data: str, known_types: dict[str, type] | None = None) -> dict[str, type[DataType]]:
        """Parse schema text and return the declared types by name.

        Args:
            data: Schema definitions.
            known_types: Types defined elsewhere that fields and ``extends``
                may refer to by name.

        Returns:
            Mapping of type name to the generated DataType subclass, in
            definition order.
        """
        specs = self.parse_specs(data)

        self._specs = {}
        for spec in specs:
            if spec.name in self._specs:
                raise ValueError(f"Type '{spec.name}' is already defined (line {spec.lineno})")
            self._specs[spec.name] = spec
        self._known = dict(known_types or {})
        self._classes = {}
        self._in_progress = set()

        for spec in specs:
            self._build_type(spec.name)

        return {spec.name: self._classes[spec.name] for spec in specs}

    def _build_type(self, name: str) -> type[DataType]:
        """Create the class for a spec, building its parent first.

        The parent's fields are all declared before the subclass is created,
        so the subclass snapshot includes them.
        """
        existing = self._classes.get(name)
        if existing is not None:
            return existing
        if name in self._in_progress:
            raise ValueError(f"Cannot resolve types: circular 'extends' through '{name}'")

        spec = self._specs[name]
        self._in_progress.add(name)
        parent = self._resolve_parent(spec)
        cls = type(spec.name, (parent,), {"__module__": self.module})
        self._classes[name] = cls

        for field_spec in spec.fields:
            cls.add_member(
                field_spec.name,
                self._resolve_type_ref(field_spec.type_ref, spec.name),
                array=field_spec.type_ref.is_array,
                attribute=field_spec.attribute,
                namespace=field_spec.namespace,
            )
        self._in_progress.discard(name)
        logger.debug("Built type %s(%s) with %d fields", name, parent.__name__, len(spec.fields))
        return cls

    def _resolve_parent(self, spec: TypeSpec) -> type[DataType]:
        if spec.parent is None:
            return DataType
        if spec.parent in self._specs:
            if spec.parent in self._in_progress:
                raise ValueError(
                    f"Type '{spec.name}' extends '{spec.parent}' before it is fully defined"
                )
            return self._build_type(spec.parent)
        known = self._known.get(spec.parent)
        if isinstance(known, type) and issubclass(known, DataType):
            return known
        raise ValueError(f"Type '{spec.name}' extends unknown type '{spec.parent}'")

    def _resolve_type_ref(self, type_ref: TypeRef, owner: str) -> type:
        """Resolve a field's type name to a class."""
        name = type_ref.name
        if name in self._classes:
            return self._classes[name]
        if name in self._specs:
            return self._build_type(name)
        if name in self._known:
            return self._known[name]
        if name in BUILTIN_TYPES:
            return BUILTIN_TYPES[name]
        raise ValueError(f"Unknown type '{name}' used in type '{owner}'")
