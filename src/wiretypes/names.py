"""Key spellings for declared fields."""

from __future__ import annotations

import re

# Prefix marking a key as an attribute (XML-as-hash convention)
ATTRIBUTE_MARKER = "@"

# Separator between a namespace prefix and a field name
NAMESPACE_SEPARATOR = ":"

_LOWER_UPPER = re.compile(r"([a-z])([A-Z])")
_ACRONYM_BOUNDARY = re.compile(r"([A-Z])([A-Z][a-z])")


def snakecase(name: str) -> str:
    """Return the lowercase, underscore separated spelling of a field name.

    A boundary is inserted between a lowercase letter and a following
    uppercase letter, and between two uppercase letters when the second one
    starts a lowercase run:

        >>> snakecase("baseAmountList")
        'base_amount_list'
        >>> snakecase("HTTPSubCode")
        'http_sub_code'
        >>> snakecase("ID")
        'id'
    """
    name = _LOWER_UPPER.sub(r"\1_\2", str(name))
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    return name.lower()


def attribute_key(name: str) -> str:
    """Return ``name`` marked as an attribute key (``@name``)."""
    return f"{ATTRIBUTE_MARKER}{name}"


def namespaced_key(namespace: str, name: str) -> str:
    """Return ``name`` qualified by ``namespace`` (``ns:name``)."""
    return f"{namespace}{NAMESPACE_SEPARATOR}{name}"


def namespaced_attribute_key(namespace: str, name: str) -> str:
    """Return the attribute-marked, namespace-qualified key (``@ns:name``)."""
    return attribute_key(namespaced_key(namespace, name))
