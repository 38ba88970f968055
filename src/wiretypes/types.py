"""Field declarations and per-type member registries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

from wiretypes.names import (
    attribute_key,
    namespaced_attribute_key,
    namespaced_key,
    snakecase,
)

# Member that receives a bare scalar passed to a type's constructor
CONTENT_KEY = "value"


@dataclass(frozen=True)
class FieldDeclaration:
    """Definition of a named field on a declared type."""

    name: str
    value_type: type
    array: bool = False
    attribute: bool = False
    namespace: str | None = None

    @property
    def is_composite(self) -> bool:
        """Return whether the field holds nested declared types."""
        from wiretypes.base import DataType

        return isinstance(self.value_type, type) and issubclass(self.value_type, DataType)

    @property
    def is_content(self) -> bool:
        return self.name == CONTENT_KEY

    @property
    def default_value(self) -> Any:
        """Raw value assigned when an unset field is read.

        Arrays default to an empty list, nested types to an empty mapping and
        leaf values to None (which leaves the field unset).
        """
        if self.array:
            return []
        if self.is_composite:
            return {}
        return None

    @property
    def aliases(self) -> tuple[str, ...]:
        """Every accepted spelling of the field, canonical name first."""
        spellings = [self.name, snakecase(self.name)]
        if self.namespace:
            spellings.append(namespaced_key(self.namespace, self.name))
        if self.attribute:
            spellings.append(attribute_key(self.name))
            if self.namespace:
                spellings.append(namespaced_attribute_key(self.namespace, self.name))
        # Preserve order, drop duplicates (e.g. already lowercase names)
        return tuple(dict.fromkeys(spellings))


class MemberRegistry:
    """Ordered table of the fields declared on one type.

    Every spelling listed in ``FieldDeclaration.aliases`` resolves to the
    canonical field name. Canonical names take precedence over aliases of
    other fields.
    """

    def __init__(self, owner: str = "") -> None:
        self.owner = owner
        self._fields: dict[str, FieldDeclaration] = {}
        self._aliases: dict[str, str] = {}

    def declare(self, declaration: FieldDeclaration) -> None:
        """Register a field, replacing any earlier declaration of the same name.

        A replaced field keeps its position in the field order.
        """
        name = declaration.name
        if name in self._fields:
            self._aliases = {
                alias: target for alias, target in self._aliases.items() if target != name
            }
        self._fields[name] = declaration
        for alias in declaration.aliases:
            self._aliases[alias] = name

    def get(self, name: str) -> FieldDeclaration | None:
        """Get a field by canonical name."""
        return self._fields.get(name)

    def get_or_raise(self, name: str) -> FieldDeclaration:
        """Get a field by canonical name, raising if not found."""
        declaration = self._fields.get(name)
        if declaration is None:
            raise KeyError(f"Field '{name}' not found in type '{self.owner}'")
        return declaration

    def resolve(self, key: str) -> str | None:
        """Return the canonical field name for any accepted spelling."""
        key = str(key)
        if key in self._fields:
            return key
        return self._aliases.get(key)

    def names(self) -> list[str]:
        """List canonical field names in declaration order."""
        return list(self._fields.keys())

    def copy(self, owner: str) -> MemberRegistry:
        """Return an independent snapshot of this registry for a subtype."""
        snapshot = MemberRegistry(owner)
        snapshot._fields = dict(self._fields)
        snapshot._aliases = dict(self._aliases)
        return snapshot

    @property
    def content(self) -> FieldDeclaration | None:
        """The content field, if the type declares one."""
        return self._fields.get(CONTENT_KEY)

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[FieldDeclaration]:
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"MemberRegistry({self.owner!r}, {self.names()!r})"
