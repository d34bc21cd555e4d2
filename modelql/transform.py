"""Schema transformation: annotated SDL in, CRUD-augmented SDL out.

The output is the original text followed by

- ``directive`` definitions for ``@model``/``@connection`` when the input
  does not define them,
- ``TCreate`` / ``TUpdate`` inputs per model,
- a ``Query`` type with ``listTs: [T!]!`` per model,
- a ``Mutation`` type with ``createT``, ``updateT`` and ``deleteT`` per model,
- ``extend type T { id: ID! }`` per model.

The same input always produces the same output.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

from graphql.language import DocumentNode

from .core.declarations import (
    Connection,
    Declaration,
    declarations_from_document,
    defined_directive_names,
    parse_document,
)
from .core.naming import (
    CONNECTION_DIRECTIVE,
    FROM_FIELD_ARGUMENT,
    ID_FIELD,
    MODEL_DIRECTIVE,
    create_field_name,
    create_input_name,
    delete_field_name,
    list_field_name,
    update_field_name,
    update_input_name,
)
from .inputs import InputType, build_model_inputs

__all__ = [
    'TransformedSchema',
    'select_models',
    'check_connections',
    'directive_definitions',
    'query_fields',
    'mutation_fields',
    'render_query_type',
    'render_mutation_type',
    'render_id_extensions',
    'transform',
    'transform_schema',
]

_logger = logging.getLogger("modelql")

_INDENT = '    '

_DIRECTIVE_DEFINITIONS = {
    MODEL_DIRECTIVE: f"directive @{MODEL_DIRECTIVE} on OBJECT",
    CONNECTION_DIRECTIVE: f"directive @{CONNECTION_DIRECTIVE}({FROM_FIELD_ARGUMENT}: String) on FIELD_DEFINITION",
}


@dataclass(frozen=True)
class TransformedSchema:
    """Result of :func:`transform`: the parsed input plus the augmented SDL."""

    source: str
    document: DocumentNode
    declarations: Tuple[Declaration, ...]
    models: Tuple[Declaration, ...]
    inputs: Tuple[InputType, ...]
    sdl: str


def select_models(declarations: List[Declaration]) -> List[Declaration]:
    return [d for d in declarations if d.is_model]


def check_connections(declarations: List[Declaration]) -> None:
    """Raise :class:`SchemaError` for the first malformed ``@connection`` argument."""
    for decl in declarations:
        for arg in decl.connection_arguments():
            Connection.from_directive(arg.directive(CONNECTION_DIRECTIVE), owner=f"{decl.name}.{arg.name}")


def directive_definitions(document: DocumentNode) -> List[str]:
    defined = defined_directive_names(document)
    return [sdl for name, sdl in _DIRECTIVE_DEFINITIONS.items() if name not in defined]


def query_fields(models: List[Declaration]) -> List[str]:
    return [f"{list_field_name(m.name)}: [{m.name}!]!" for m in models]


def mutation_fields(models: List[Declaration]) -> List[str]:
    # grouped by operation, then by model
    creates = [f"{create_field_name(m.name)}({m.name}: {create_input_name(m.name)}!): {m.name}" for m in models]
    updates = [
        f"{update_field_name(m.name)}(id: ID!, {m.name}: {update_input_name(m.name)}!): {m.name}"
        for m in models
    ]
    deletes = [f"{delete_field_name(m.name)}(id: ID!): Boolean" for m in models]
    return creates + updates + deletes


def _render_type(name: str, fields: List[str]) -> str:
    body = '\n'.join(f"{_INDENT}{f}" for f in fields)
    return f"type {name} {{\n{body}\n}}"


def render_query_type(models: List[Declaration]) -> str:
    return _render_type('Query', query_fields(models))


def render_mutation_type(models: List[Declaration]) -> str:
    return _render_type('Mutation', mutation_fields(models))


def render_id_extensions(models: List[Declaration]) -> str:
    return '\n'.join(f"extend type {m.name} {{ {ID_FIELD}: ID! }}" for m in models)


def transform(schema_text: str) -> TransformedSchema:
    """Parse ``schema_text`` and build the augmented schema.

    Raises:
        SchemaError: when the text cannot be parsed or a directive is malformed.
    """
    document = parse_document(schema_text)
    declarations = declarations_from_document(document)
    models = select_models(declarations)
    check_connections(declarations)
    inputs = build_model_inputs(models)

    parts = [schema_text]
    parts.extend(directive_definitions(document))
    parts.extend(i.render() for i in inputs)
    if models:
        # a type with an empty field list is not valid SDL
        parts.append(render_query_type(models))
        parts.append(render_mutation_type(models))
        parts.append(render_id_extensions(models))
    sdl = '\n\n'.join(p.strip('\n') for p in parts if p.strip()) + '\n'

    _logger.debug("models: %s", [m.name for m in models])
    _logger.debug("transformed schema:\n%s", sdl)
    return TransformedSchema(
        source=schema_text,
        document=document,
        declarations=tuple(declarations),
        models=tuple(models),
        inputs=tuple(inputs),
        sdl=sdl,
    )


def transform_schema(schema_text: str) -> str:
    """Return the augmented SDL for ``schema_text``."""
    return transform(schema_text).sdl
