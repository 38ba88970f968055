"""Exceptions raised while building typed objects from raw data."""

from __future__ import annotations

from typing import Any


class WireTypesError(Exception):
    """Base class for all errors raised by wiretypes."""

    pass


class FieldCoercionError(WireTypesError, TypeError):
    """Raised when a raw value cannot be converted to a field's declared type."""

    def __init__(self, type_name: str, field_name: str, value: Any, cause: BaseException | None = None) -> None:
        self.type_name = type_name
        self.field_name = field_name
        self.value = value
        self.cause = cause
        reason = f"{cause}" if cause is not None else "invalid value"
        super().__init__(f"{reason}({value!r}) for {type_name}.{field_name} member")


class UnknownFieldError(FieldCoercionError):
    """Raised when raw data names a key that no field of the type accepts."""

    def __init__(self, type_name: str, key: str, value: Any) -> None:
        self.key = key
        super().__init__(type_name, key, value, cause=None)
        self.args = (f"unknown field {key!r} ({value!r}) for {type_name}",)


class InvalidInputShapeError(WireTypesError, ValueError):
    """Raised when a type receives data that is neither a mapping nor content."""

    def __init__(self, type_name: str, value: Any) -> None:
        self.type_name = type_name
        self.value = value
        super().__init__(f"invalid data({value!r}) for {type_name} class")


__all__ = [
    "WireTypesError",
    "FieldCoercionError",
    "UnknownFieldError",
    "InvalidInputShapeError",
]
