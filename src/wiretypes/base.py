"""Declarative typed objects built from and serialized to raw mappings.

A type declares its fields once, either in the class body with ``Member`` or
afterwards with the declaration classmethods:

    class CurrencyType(DataType):
        amount = Member(Float)
        code = Member(String)

    class ConvertCurrencyRequest(DataType):
        baseAmountList = Member(CurrencyType, array=True)
        conversionType = Member(String)

    ConvertCurrencyRequest.add_attribute("version", namespace="ebl")

Instances accept a raw mapping whose keys may use any spelling of a field
(``baseAmountList``, ``base_amount_list``, ``ebl:version``, ``@version``,
``@ebl:version``) and convert nested values recursively. ``to_hash`` turns
the object graph back into plain dicts and lists.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any, ClassVar

from wiretypes.coercion import coerce_array, coerce_object
from wiretypes.errors import FieldCoercionError, InvalidInputShapeError, UnknownFieldError
from wiretypes.names import attribute_key, namespaced_key
from wiretypes.simple_types import String
from wiretypes.types import CONTENT_KEY, FieldDeclaration, MemberRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HashOptions:
    """Key shaping options for ``DataType.to_hash``.

    attribute: prefix attribute fields with ``@``.
    namespace: qualify namespaced fields as ``ns:name``.
    symbol: intern the emitted keys.
    """

    attribute: bool = True
    namespace: bool = True
    symbol: bool = True

    def merge(self, **overrides: Any) -> HashOptions:
        """Return a copy with the given options replaced."""
        unknown = set(overrides) - {"attribute", "namespace", "symbol"}
        if unknown:
            raise TypeError(f"Unknown hash options: {sorted(unknown)}")
        return replace(self, **{key: bool(value) for key, value in overrides.items()})


DEFAULT_HASH_OPTIONS = HashOptions()


class Member:
    """Class-body field declaration, collected when the class is created."""

    def __init__(
        self,
        klass: type,
        *,
        array: bool = False,
        attribute: bool = False,
        namespace: str | None = None,
    ) -> None:
        self.klass = klass
        self.array = array
        self.attribute = attribute
        self.namespace = namespace

    def __repr__(self) -> str:
        return (
            f"Member({self.klass.__name__}, array={self.array}, "
            f"attribute={self.attribute}, namespace={self.namespace!r})"
        )


class DataType:
    """Base class for declared message types."""

    _members: ClassVar[MemberRegistry] = MemberRegistry("DataType")

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        # Snapshot the parent's fields; later parent declarations stay there
        cls._members = cls._members.copy(cls.__name__)
        declared = [
            (name, value) for name, value in list(vars(cls).items()) if isinstance(value, Member)
        ]
        for name, member in declared:
            delattr(cls, name)
            cls.add_member(
                name,
                member.klass,
                array=member.array,
                attribute=member.attribute,
                namespace=member.namespace,
            )

    # ---- declaration -------------------------------------------------

    @classmethod
    def members(cls) -> MemberRegistry:
        """Return the type's field registry."""
        return cls._members

    @classmethod
    def member_names(cls) -> list[str]:
        return cls._members.names()

    @classmethod
    def add_member(
        cls,
        name: str,
        klass: type,
        *,
        array: bool = False,
        attribute: bool = False,
        namespace: str | None = None,
    ) -> FieldDeclaration:
        """Declare a field on this type.

        Args:
            name: Canonical field name.
            klass: Leaf type or DataType subclass held by the field.
            array: Whether the field holds a list of ``klass`` values.
            attribute: Whether the field is serialized as ``@name``.
            namespace: Namespace prefix used as ``ns:name``.

        Returns:
            The registered FieldDeclaration.
        """
        if cls is DataType:
            raise TypeError("Fields must be declared on a DataType subclass")
        declaration = FieldDeclaration(
            name=str(name),
            value_type=klass,
            array=array,
            attribute=attribute,
            namespace=namespace,
        )
        cls._members.declare(declaration)
        logger.debug("Declared %s.%s as %r", cls.__name__, name, declaration)
        return declaration

    @classmethod
    def object_of(cls, name: str, klass: type, **options: Any) -> FieldDeclaration:
        """Declare a single-valued field of type ``klass``."""
        return cls.add_member(name, klass, **options)

    @classmethod
    def array_of(cls, name: str, klass: type, **options: Any) -> FieldDeclaration:
        """Declare a field holding a list of ``klass`` values."""
        options["array"] = True
        return cls.add_member(name, klass, **options)

    @classmethod
    def add_attribute(cls, name: str, **options: Any) -> FieldDeclaration:
        """Declare a string attribute field."""
        options["attribute"] = True
        return cls.add_member(name, String, **options)

    @classmethod
    def add_content(cls, klass: type = String) -> FieldDeclaration:
        """Declare the content field that receives a bare constructor argument."""
        return cls.add_member(CONTENT_KEY, klass)

    # ---- construction ------------------------------------------------

    def __init__(self, data: Any = None) -> None:
        object.__setattr__(self, "_values", {})
        if data is None:
            return
        if isinstance(data, Mapping):
            for key, value in data.items():
                self.set(key, value)
        elif self._members.content is not None:
            self.set(CONTENT_KEY, data)
        else:
            raise InvalidInputShapeError(type(self).__name__, data)

    # ---- field access ------------------------------------------------

    def _declaration(self, key: str, value: Any = None) -> FieldDeclaration:
        name = self._members.resolve(key)
        if name is None:
            raise UnknownFieldError(type(self).__name__, str(key), value)
        return self._members.get_or_raise(name)

    def set(self, key: str, value: Any) -> None:
        """Convert ``value`` to the field's declared type and store it."""
        declaration = self._declaration(key, value)
        try:
            if declaration.array:
                converted = coerce_array(value, declaration.value_type)
            else:
                converted = coerce_object(value, declaration.value_type)
        except Exception as error:
            logger.debug(
                "Coercion failed for %s.%s: %s", type(self).__name__, declaration.name, error
            )
            raise FieldCoercionError(type(self).__name__, declaration.name, value, error) from error
        self._values[declaration.name] = converted

    def get(self, key: str) -> Any:
        """Return a field's value, storing its default first when unset."""
        declaration = self._declaration(key)
        value = self._values.get(declaration.name)
        if value is None:
            default = declaration.default_value
            if default is not None:
                self.set(declaration.name, default)
                value = self._values[declaration.name]
        return value

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self.get(name)
        except UnknownFieldError as error:
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute '{name}'"
            ) from error

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            self.set(name, value)

    # ---- serialization -----------------------------------------------

    def hash_key(self, name: str, options: HashOptions = DEFAULT_HASH_OPTIONS) -> str:
        """Return the output key for a field under ``options``.

        Example:
            hash_key("amount")  # "ebl:amount" for a field in namespace ebl
            hash_key("type")    # "@type" for an attribute field
        """
        key = name
        if name != CONTENT_KEY:
            declaration = self._members.get_or_raise(name)
            if declaration.namespace and options.namespace:
                key = namespaced_key(declaration.namespace, key)
            if declaration.attribute and options.attribute:
                key = attribute_key(key)
        return sys.intern(key) if options.symbol else key

    def to_hash(self, options: HashOptions | None = None, **overrides: Any) -> dict[str, Any]:
        """Serialize the set fields into a plain dict.

        Args:
            options: Base options, defaulting to ``HashOptions()``.
            **overrides: ``attribute``, ``namespace`` or ``symbol`` flags.

        Fields that were never set (or hold None) are left out.
        """
        options = (options or DEFAULT_HASH_OPTIONS).merge(**overrides)
        result: dict[str, Any] = {}
        for name in self._members.names():
            value = self._values.get(name)
            if value is not None:
                result[self.hash_key(name, options)] = _value_to_hash(value, options)
        return result

    to_representation = to_hash

    # ---- misc --------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_hash() == other.to_hash()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        values = " ".join(
            f"{name}={value!r}" for name, value in self._values.items() if value is not None
        )
        return f"<{type(self).__name__} {values}>" if values else f"<{type(self).__name__}>"


def _value_to_hash(value: Any, options: HashOptions) -> Any:
    """Recursively convert a stored value for ``to_hash``."""
    if isinstance(value, list):
        return [_value_to_hash(item, options) for item in value]
    if isinstance(value, DataType):
        return value.to_hash(options)
    return value
