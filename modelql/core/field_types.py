"""Field-type trees: named types wrapped in list-of / required-of nodes.

The tree mirrors GraphQL type references (``Foo``, ``[Foo]``, ``Foo!``,
``[Foo!]!`` ...) and is immutable. Every transformation returns a new tree,
so a node shared between several derivations is never rewritten in place.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from graphql import GraphQLSyntaxError, parse_type
from graphql.language import ListTypeNode, NamedTypeNode, NonNullTypeNode, TypeNode

from ..errors import SchemaError

__all__ = [
    'NamedType',
    'ListType',
    'RequiredType',
    'FieldType',
    'from_type_node',
    'parse_field_type',
]


@dataclass(frozen=True)
class NamedType:
    name: str

    def render(self) -> str:
        return self.name

    def leaf_name(self) -> str:
        return self.name

    def replace_leaf(self, name: str) -> 'FieldType':
        return NamedType(name)

    def strip_required(self) -> 'FieldType':
        return self

    def is_plural(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class ListType:
    inner: 'FieldType'

    def render(self) -> str:
        return f"[{self.inner.render()}]"

    def leaf_name(self) -> str:
        return self.inner.leaf_name()

    def replace_leaf(self, name: str) -> 'FieldType':
        return ListType(self.inner.replace_leaf(name))

    def strip_required(self) -> 'FieldType':
        return self

    def is_plural(self) -> bool:
        return True

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class RequiredType:
    inner: 'FieldType'

    def render(self) -> str:
        return f"{self.inner.render()}!"

    def leaf_name(self) -> str:
        return self.inner.leaf_name()

    def replace_leaf(self, name: str) -> 'FieldType':
        return RequiredType(self.inner.replace_leaf(name))

    def strip_required(self) -> 'FieldType':
        """Drop exactly this one outer required wrapper."""
        return self.inner

    def is_plural(self) -> bool:
        # [X]! is plural, X! is not; deeper nesting is not inspected
        return isinstance(self.inner, ListType)

    def __str__(self) -> str:
        return self.render()


FieldType = Union[NamedType, ListType, RequiredType]


def from_type_node(node: TypeNode) -> FieldType:
    """Convert a graphql-core type reference node into a field-type tree."""
    if isinstance(node, NonNullTypeNode):
        return RequiredType(from_type_node(node.type))
    if isinstance(node, ListTypeNode):
        return ListType(from_type_node(node.type))
    if isinstance(node, NamedTypeNode):
        return NamedType(node.name.value)
    raise SchemaError(f"Unsupported type reference node: {type(node).__name__}")


def parse_field_type(text: str) -> FieldType:
    """Parse a rendered type reference such as ``[Foo!]!`` back into a tree."""
    try:
        return from_type_node(parse_type(text))
    except GraphQLSyntaxError as e:
        raise SchemaError(f"Invalid type reference {text!r}: {e.message}") from e
