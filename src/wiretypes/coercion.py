"""Conversion of raw values into declared field types."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Callable, Iterable, SupportsIndex

_NUMERIC_KEY = re.compile(r"[0-9]+")


def is_empty(value: Any) -> bool:
    """Return whether a raw value stands for "no value"."""
    return value is None or (isinstance(value, str) and value == "")


def coerce_object(value: Any, klass: type) -> Any:
    """Convert ``value`` into an instance of ``klass``.

    Instances of ``klass`` are returned unchanged, None and the empty string
    become None, anything else is passed to the ``klass`` constructor.

    Example:
        coerce_object({"amount": "55", "code": "USD"}, CurrencyType)
        # <CurrencyType amount='55' code='USD'>
    """
    if isinstance(value, klass):
        return value
    if is_empty(value):
        return None
    return klass(value)


class ElementConverter:
    """Converts array items to ``klass``, using ``default`` for None."""

    def __init__(self, klass: type, default: Any = None) -> None:
        self.klass = klass
        self.default = default

    def __call__(self, item: Any) -> Any:
        return coerce_object(self.default if item is None else item, self.klass)

    def __repr__(self) -> str:
        return f"ElementConverter({self.klass.__name__}, default={self.default!r})"


class SparseArray(list):
    """List that converts every stored item and fills unset positions.

    Reading an index past the end (or holding None) stores and returns the
    converted default at that index. Writing past the end fills the gap
    with converted defaults.
    """

    def __init__(self, convert: Callable[[Any], Any] | None = None) -> None:
        super().__init__()
        self._convert = convert

    def _coerce(self, value: Any) -> Any:
        return self._convert(value) if self._convert is not None else value

    def __getitem__(self, index):  # type: ignore[override]
        if isinstance(index, slice):
            return super().__getitem__(index)
        if index < len(self):
            value = super().__getitem__(index)
            if value is not None:
                return value
        self[index] = None
        return super().__getitem__(index)

    def __setitem__(self, index, value) -> None:  # type: ignore[override]
        if isinstance(index, slice):
            super().__setitem__(index, [self._coerce(item) for item in value])
            return
        value = self._coerce(value)
        if index >= len(self):
            for _ in range(len(self), index):
                super().append(self._coerce(None))
            super().append(value)
        else:
            super().__setitem__(index, value)

    def append(self, value: Any) -> None:
        super().append(self._coerce(value))

    def extend(self, values: Iterable[Any]) -> None:
        super().extend(self._coerce(item) for item in values)

    def insert(self, index: SupportsIndex, value: Any) -> None:
        super().insert(index, self._coerce(value))

    def __iadd__(self, values: Iterable[Any]) -> SparseArray:  # type: ignore[override]
        self.extend(values)
        return self

    def __reduce__(self):
        # The converter must exist before pickle replays the items
        return (type(self), (self._convert,), None, iter(self))

    def merge(self, data: Any) -> SparseArray:
        """Merge raw data into the array and return it.

        Accepts a list or tuple (stored by position), a mapping whose keys are
        all numeric strings (sparse indices), or a single value stored at
        index 0.
        """
        if isinstance(data, (list, tuple)):
            for index, item in enumerate(data):
                self[index] = item
        elif (
            isinstance(data, Mapping)
            and data
            and all(_NUMERIC_KEY.fullmatch(str(key)) for key in data)
        ):
            for key, item in data.items():
                self[int(key)] = item
        else:
            self[0] = data
        return self


def coerce_array(value: Any, klass: type) -> SparseArray:
    """Convert ``value`` into a SparseArray of ``klass`` instances.

    Example:
        coerce_array([{"amount": "55", "code": "USD"}], CurrencyType)
        coerce_array({"0": {"amount": "55", "code": "USD"}}, CurrencyType)
        coerce_array({"amount": "55", "code": "USD"}, CurrencyType)
        # [<CurrencyType amount='55' code='USD'>]
    """
    from wiretypes.base import DataType

    default: Any = {} if isinstance(klass, type) and issubclass(klass, DataType) else None
    return SparseArray(ElementConverter(klass, default)).merge(value)
