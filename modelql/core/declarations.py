"""Typed view over a parsed schema document.

graphql-core does the parsing; this module narrows its AST down to the three
things the generators care about: declarations (types), their arguments
(fields) and the directives attached to either.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Set, Tuple

from graphql import GraphQLSyntaxError, parse
from graphql.language import (
    DirectiveDefinitionNode,
    DirectiveNode,
    DocumentNode,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    NullValueNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    StringValueNode,
)
from graphql.utilities import value_from_ast_untyped

from ..errors import SchemaError
from .field_types import FieldType, from_type_node
from .naming import CONNECTION_DIRECTIVE, FROM_FIELD_ARGUMENT, MODEL_DIRECTIVE

__all__ = [
    'DirectiveArgument',
    'Directive',
    'Argument',
    'Declaration',
    'Connection',
    'parse_document',
    'declarations_from_document',
    'parse_declarations',
    'defined_directive_names',
]

_logger = logging.getLogger("modelql")

_DECLARATION_NODES = (
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
)


@dataclass(frozen=True)
class DirectiveArgument:
    """A ``name: value`` pair on a directive.

    ``value`` is the plain Python value of the literal (``None`` for ``null``);
    ``node`` keeps the original AST literal so callers can check its kind.
    """

    name: str
    value: Any
    node: Any = field(default=None, compare=False, repr=False)

    @property
    def is_null(self) -> bool:
        return isinstance(self.node, NullValueNode)


@dataclass(frozen=True)
class Directive:
    name: str
    arguments: Tuple[DirectiveArgument, ...] = ()

    def argument(self, name: str) -> Optional[DirectiveArgument]:
        for arg in self.arguments:
            if arg.name == name:
                return arg
        return None


@dataclass(frozen=True)
class Argument:
    """A field of a declaration together with its type tree and directives."""

    name: str
    type: FieldType
    directives: Tuple[Directive, ...] = ()

    def directive(self, name: str) -> Optional[Directive]:
        for d in self.directives:
            if d.name == name:
                return d
        return None

    def has_directive(self, name: str) -> bool:
        return self.directive(name) is not None

    @property
    def connection(self) -> Optional['Connection']:
        """The ``@connection`` settings, or None when the directive is absent."""
        d = self.directive(CONNECTION_DIRECTIVE)
        if d is None:
            return None
        return Connection.from_directive(d, owner=self.name)


@dataclass(frozen=True)
class Declaration:
    name: str
    arguments: Tuple[Argument, ...] = ()
    directives: Tuple[Directive, ...] = ()
    kind: str = 'type'

    def directive(self, name: str) -> Optional[Directive]:
        for d in self.directives:
            if d.name == name:
                return d
        return None

    def has_directive(self, name: str) -> bool:
        return self.directive(name) is not None

    @property
    def is_model(self) -> bool:
        return self.has_directive(MODEL_DIRECTIVE)

    def connection_arguments(self) -> List[Argument]:
        return [a for a in self.arguments if a.has_directive(CONNECTION_DIRECTIVE)]


@dataclass(frozen=True)
class Connection:
    """Settings of a ``@connection`` directive.

    ``from_field`` is None both when the ``fromField`` argument is missing and
    when it is given as ``null``; ``has_from_field_argument`` tells those apart.
    """

    from_field: Optional[str] = None
    has_from_field_argument: bool = False

    @classmethod
    def from_directive(cls, directive: Directive, *, owner: str = '') -> 'Connection':
        arg = directive.argument(FROM_FIELD_ARGUMENT)
        if arg is None:
            return cls()
        if arg.is_null:
            return cls(from_field=None, has_from_field_argument=True)
        if not isinstance(arg.node, StringValueNode):
            raise SchemaError(
                f"@{directive.name}({FROM_FIELD_ARGUMENT}:) on '{owner}' must be a string, "
                f"got {type(arg.node).__name__}"
            )
        return cls(from_field=arg.value, has_from_field_argument=True)

    @property
    def is_inverse(self) -> bool:
        return bool(self.from_field)


def _directives(nodes: Optional[Tuple[DirectiveNode, ...]]) -> Tuple[Directive, ...]:
    out = []
    for node in nodes or ():
        args = tuple(
            DirectiveArgument(
                name=a.name.value,
                value=value_from_ast_untyped(a.value),
                node=a.value,
            )
            for a in (node.arguments or ())
        )
        out.append(Directive(name=node.name.value, arguments=args))
    return tuple(out)


def _argument(node: Any) -> Argument:
    # FieldDefinitionNode and InputValueDefinitionNode share name/type/directives
    return Argument(
        name=node.name.value,
        type=from_type_node(node.type),
        directives=_directives(node.directives),
    )


def _kind(node: Any) -> str:
    if isinstance(node, (InputObjectTypeDefinitionNode, InputObjectTypeExtensionNode)):
        return 'input'
    if isinstance(node, (InterfaceTypeDefinitionNode, InterfaceTypeExtensionNode)):
        return 'interface'
    return 'type'


def parse_document(schema_text: str) -> DocumentNode:
    """Parse SDL text, turning syntax errors into :class:`SchemaError`."""
    try:
        return parse(schema_text)
    except GraphQLSyntaxError as e:
        raise SchemaError(f"Schema could not be parsed: {e.message} at {e.locations}") from e


def declarations_from_document(document: DocumentNode) -> List[Declaration]:
    """Collect declarations in document order.

    ``extend type T`` blocks are merged into the declaration of ``T``: fields
    and directives are appended in the order they appear, so a model marked
    through an extension gets the fields of the base type too.
    """
    decls: Dict[Tuple[str, str], Declaration] = {}
    for node in document.definitions:
        if not isinstance(node, _DECLARATION_NODES):
            continue
        decl = Declaration(
            name=node.name.value,
            arguments=tuple(_argument(f) for f in (node.fields or ())),
            directives=_directives(node.directives),
            kind=_kind(node),
        )
        key = (decl.kind, decl.name)
        previous = decls.get(key)
        if previous is not None:
            decl = replace(
                previous,
                arguments=previous.arguments + decl.arguments,
                directives=previous.directives + decl.directives,
            )
        decls[key] = decl
    _logger.debug("parsed %d declarations", len(decls))
    return list(decls.values())


def parse_declarations(schema_text: str) -> List[Declaration]:
    return declarations_from_document(parse_document(schema_text))


def defined_directive_names(document: DocumentNode) -> Set[str]:
    return {
        node.name.value
        for node in document.definitions
        if isinstance(node, DirectiveDefinitionNode)
    }
