"""Name composition for generated types and root fields.

Names are plain concatenations; plural forms and collisions between
generated and user-declared names are not detected.
"""
from __future__ import annotations

from typing import FrozenSet

__all__ = [
    'SCALARS',
    'PLACEHOLDER_SCALAR',
    'MODEL_DIRECTIVE',
    'CONNECTION_DIRECTIVE',
    'FROM_FIELD_ARGUMENT',
    'ID_FIELD',
    'is_scalar',
    'create_input_name',
    'update_input_name',
    'list_field_name',
    'create_field_name',
    'update_field_name',
    'delete_field_name',
]

SCALARS: FrozenSet[str] = frozenset({'String', 'Int', 'Float', 'Boolean', 'ID'})
PLACEHOLDER_SCALAR = 'ID'

MODEL_DIRECTIVE = 'model'
CONNECTION_DIRECTIVE = 'connection'
FROM_FIELD_ARGUMENT = 'fromField'

ID_FIELD = 'id'


def is_scalar(type_name: str) -> bool:
    return type_name in SCALARS


def create_input_name(type_name: str) -> str:
    return f"{type_name}Create"


def update_input_name(type_name: str) -> str:
    return f"{type_name}Update"


def list_field_name(type_name: str) -> str:
    return f"list{type_name}s"


def create_field_name(type_name: str) -> str:
    return f"create{type_name}"


def update_field_name(type_name: str) -> str:
    return f"update{type_name}"


def delete_field_name(type_name: str) -> str:
    return f"delete{type_name}"
