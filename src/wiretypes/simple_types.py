"""Leaf value types that parse the scalars found in raw message data."""

from __future__ import annotations

import datetime
import math
from collections.abc import Mapping
from typing import Any


class String(str):
    """Text value; any scalar is converted with ``str``."""

    def __new__(cls, value: Any = "") -> String:
        if isinstance(value, (Mapping, list, tuple)):
            raise TypeError(f"cannot convert {type(value).__name__} to string")
        return super().__new__(cls, value)


class Integer(int):
    """Integer value; accepts ints and numeric strings such as ``"55"``."""

    def __new__(cls, value: Any = 0) -> Integer:
        if isinstance(value, str):
            value = value.strip()
        elif isinstance(value, float) and math.isfinite(value) and not value.is_integer():
            raise ValueError(f"invalid integer value {value!r}")
        return super().__new__(cls, value)


class Float(float):
    """Floating point value; accepts numbers and numeric strings."""

    pass


class Boolean:
    """Boolean value parsed from ``true``/``false``/``1``/``0``.

    Constructing a Boolean returns a plain ``bool``.
    """

    TRUE_VALUES = frozenset({"true", "1", "yes"})
    FALSE_VALUES = frozenset({"false", "0", "no"})

    def __new__(cls, value: Any = False) -> bool:  # type: ignore[misc]
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return bool(value)
        text = str(value).strip().lower()
        if text in cls.TRUE_VALUES:
            return True
        if text in cls.FALSE_VALUES:
            return False
        raise ValueError(f"invalid boolean value {value!r}")


def _parse_iso(text: str) -> datetime.datetime:
    text = text.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return datetime.datetime.fromisoformat(text)


class Date(datetime.date):
    """Calendar date; accepts ``date`` instances and ISO-8601 strings."""

    def __new__(cls, value: Any, *args: Any) -> Date:
        # (year, month, day) and pickle state go straight to date
        if args or isinstance(value, (int, bytes)):
            return super().__new__(cls, value, *args)
        if not isinstance(value, datetime.date):
            value = _parse_iso(str(value))
        return super().__new__(cls, value.year, value.month, value.day)


class DateTime(datetime.datetime):
    """Timestamp; accepts ``datetime``/``date`` instances and ISO-8601 strings."""

    def __new__(cls, value: Any, *args: Any, **kwargs: Any) -> DateTime:
        if args or kwargs or isinstance(value, (int, bytes)):
            return super().__new__(cls, value, *args, **kwargs)
        if isinstance(value, datetime.datetime):
            parsed = value
        elif isinstance(value, datetime.date):
            parsed = datetime.datetime(value.year, value.month, value.day)
        else:
            parsed = _parse_iso(str(value))
        return super().__new__(
            cls,
            parsed.year,
            parsed.month,
            parsed.day,
            parsed.hour,
            parsed.minute,
            parsed.second,
            parsed.microsecond,
            parsed.tzinfo,
            fold=parsed.fold,
        )


# Names accepted for leaf types in the schema language
BUILTIN_TYPES: dict[str, type] = {
    "string": String,
    "integer": Integer,
    "float": Float,
    "boolean": Boolean,
    "date": Date,
    "datetime": DateTime,
}
