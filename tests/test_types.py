"""Tests for field declarations and member registries."""

import pytest

from wiretypes.base import DataType
from wiretypes.simple_types import Integer, String
from wiretypes.types import CONTENT_KEY, FieldDeclaration, MemberRegistry


class Nested(DataType):
    pass


class TestFieldDeclaration:
    """Tests for FieldDeclaration."""

    def test_aliases_canonical_and_snakecase(self):
        """Test the canonical and snakecase aliases."""
        declaration = FieldDeclaration(name="baseAmount", value_type=String)
        assert declaration.aliases == ("baseAmount", "base_amount")

    def test_aliases_drop_duplicate_spellings(self):
        """Test that equal spellings give one alias."""
        declaration = FieldDeclaration(name="amount", value_type=String)
        assert declaration.aliases == ("amount",)

    def test_aliases_with_namespace(self):
        """Test aliases with a namespace."""
        declaration = FieldDeclaration(name="errorCode", value_type=String, namespace="ebl")
        assert declaration.aliases == ("errorCode", "error_code", "ebl:errorCode")

    def test_aliases_with_attribute_and_namespace(self):
        """Test aliases with attribute and namespace prefixes."""
        declaration = FieldDeclaration(
            name="amount", value_type=String, attribute=True, namespace="ebl"
        )
        assert declaration.aliases == ("amount", "ebl:amount", "@amount", "@ebl:amount")

    def test_default_values(self):
        """Test the declaration defaults."""
        assert FieldDeclaration(name="a", value_type=String).default_value is None
        assert FieldDeclaration(name="a", value_type=String, array=True).default_value == []
        assert FieldDeclaration(name="a", value_type=Nested).default_value == {}
        assert FieldDeclaration(name="a", value_type=Nested, array=True).default_value == []

    def test_is_composite(self):
        """Test is_composite for leaf and declared types."""
        assert FieldDeclaration(name="a", value_type=Nested).is_composite is True
        assert FieldDeclaration(name="a", value_type=String).is_composite is False

    def test_is_content(self):
        """Test is_content for the content field."""
        assert FieldDeclaration(name=CONTENT_KEY, value_type=String).is_content is True
        assert FieldDeclaration(name="other", value_type=String).is_content is False

    def test_is_immutable(self):
        """Test that declarations are frozen."""
        declaration = FieldDeclaration(name="a", value_type=String)
        with pytest.raises(AttributeError):
            declaration.name = "b"  # type: ignore[misc]


class TestMemberRegistry:
    """Tests for MemberRegistry."""

    @pytest.fixture
    def registry(self):
        registry = MemberRegistry("Sample")
        registry.declare(FieldDeclaration(name="errorCode", value_type=String))
        registry.declare(
            FieldDeclaration(name="severity", value_type=String, attribute=True, namespace="ebl")
        )
        return registry

    def test_names_in_declaration_order(self, registry):
        """Test that names follow declaration order."""
        registry.declare(FieldDeclaration(name="longMessage", value_type=String))
        assert registry.names() == ["errorCode", "severity", "longMessage"]

    def test_resolve_every_alias(self, registry):
        """Test resolving each alias to its declaration."""
        assert registry.resolve("errorCode") == "errorCode"
        assert registry.resolve("error_code") == "errorCode"
        assert registry.resolve("ebl:severity") == "severity"
        assert registry.resolve("@severity") == "severity"
        assert registry.resolve("@ebl:severity") == "severity"
        assert registry.resolve("missing") is None

    def test_redeclare_keeps_position_and_replaces_aliases(self, registry):
        """Test redeclaring a field."""
        registry.declare(FieldDeclaration(name="severity", value_type=Integer, namespace="ns"))
        registry.declare(FieldDeclaration(name="errorCode", value_type=Integer))
        assert registry.names() == ["errorCode", "severity"]
        assert registry.get("severity").value_type is Integer
        assert registry.get("errorCode").value_type is Integer
        assert registry.resolve("ns:severity") == "severity"
        assert registry.resolve("ebl:severity") is None
        assert registry.resolve("@severity") is None

    def test_canonical_name_wins_over_alias(self, registry):
        """Test that a field name beats another field's alias."""
        registry.declare(FieldDeclaration(name="error_code", value_type=String))
        assert registry.resolve("error_code") == "error_code"
        assert registry.resolve("errorCode") == "errorCode"

    def test_copy_is_independent(self, registry):
        """Test that a copy does not share declarations."""
        snapshot = registry.copy("Child")
        snapshot.declare(FieldDeclaration(name="extra", value_type=String))
        registry.declare(FieldDeclaration(name="late", value_type=String))
        assert snapshot.owner == "Child"
        assert snapshot.names() == ["errorCode", "severity", "extra"]
        assert registry.names() == ["errorCode", "severity", "late"]
        assert snapshot.resolve("late") is None

    def test_get_or_raise(self, registry):
        """Test get_or_raise for a missing name."""
        assert registry.get_or_raise("errorCode").name == "errorCode"
        with pytest.raises(KeyError, match="Field 'nope' not found in type 'Sample'"):
            registry.get_or_raise("nope")

    def test_content(self, registry):
        """Test looking up the content field."""
        assert registry.content is None
        registry.declare(FieldDeclaration(name=CONTENT_KEY, value_type=String))
        assert registry.content.name == CONTENT_KEY

    def test_container_protocol(self, registry):
        """Test len, iter and in."""
        assert "errorCode" in registry
        assert "error_code" not in registry
        assert len(registry) == 2
        assert [d.name for d in registry] == ["errorCode", "severity"]
