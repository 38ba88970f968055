"""wiretypes - Declarative typed messages for semi-structured API payloads."""

from wiretypes.base import DataType, HashOptions, Member
from wiretypes.coercion import SparseArray, coerce_array, coerce_object
from wiretypes.errors import (
    FieldCoercionError,
    InvalidInputShapeError,
    UnknownFieldError,
    WireTypesError,
)
from wiretypes.parsing import SchemaParser
from wiretypes.schema import Schema
from wiretypes.simple_types import Boolean, Date, DateTime, Float, Integer, String
from wiretypes.types import CONTENT_KEY, FieldDeclaration, MemberRegistry

__all__ = [
    # Main API
    "DataType",
    "Member",
    "HashOptions",
    "Schema",
    "SchemaParser",
    # Declarations
    "FieldDeclaration",
    "MemberRegistry",
    "CONTENT_KEY",
    # Coercion
    "SparseArray",
    "coerce_array",
    "coerce_object",
    # Leaf types
    "String",
    "Integer",
    "Float",
    "Boolean",
    "Date",
    "DateTime",
    # Errors
    "WireTypesError",
    "FieldCoercionError",
    "UnknownFieldError",
    "InvalidInputShapeError",
]

__version__ = "0.1.0"
