"""Schema class for working with types declared in the schema language."""

from __future__ import annotations

from typing import Any

from wiretypes.base import DataType
from wiretypes.parsing import SchemaParser


class Schema:
    """Set of DataType subclasses declared by one schema source."""

    def __init__(self, types: dict[str, type[DataType]]) -> None:
        """Initialize a schema.

        Args:
            types: Declared types keyed by name.
        """
        self.types = dict(types)

    @classmethod
    def parse(cls, definitions: str, known_types: dict[str, type] | None = None) -> Schema:
        """Parse schema definitions and create a schema.

        Args:
            definitions: Schema language source.
            known_types: Types defined elsewhere that the source may refer to.

        Returns:
            A new Schema instance.
        """
        parser = SchemaParser()
        return cls(parser.parse(definitions, known_types))

    def get_type(self, name: str) -> type[DataType]:
        """Get a declared type by name.

        Raises:
            KeyError: If the type is not declared.
        """
        type_def = self.types.get(name)
        if type_def is None:
            raise KeyError(f"Type '{name}' not found")
        return type_def

    def list_types(self) -> list[str]:
        """List declared type names in definition order."""
        return list(self.types.keys())

    def create_instance(self, type_name: str, values: Any = None) -> DataType:
        """Build an instance of a declared type from raw values.

        Args:
            type_name: Name of the type to instantiate.
            values: Raw mapping (or content scalar) for the instance.
        """
        return self.get_type(type_name)(values)

    def __contains__(self, name: object) -> bool:
        return name in self.types

    def __getitem__(self, name: str) -> type[DataType]:
        return self.get_type(name)
