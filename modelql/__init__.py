"""modelql public API and lightweight lazy exports.

Derives a CRUD GraphQL API from SDL annotated with ``@model`` and
``@connection(fromField:)``, backed by an in-memory store.

Exposes:
- ModelSchema, Store, SchemaError, ModelQLError
- transform_schema (annotated SDL -> augmented SDL)
- Lazy: create_app (imports FastAPI only when used)
"""
from __future__ import annotations

from .errors import ModelQLError, SchemaError
from .registry import ModelSchema
from .store import Store
from .transform import transform, transform_schema

__version__ = "0.1.0"


def __getattr__(name: str):  # PEP 562 lazy exports
    if name == 'create_app':
        from .server import create_app as _create_app
        return _create_app
    raise AttributeError(name)


__all__ = [
    'ModelSchema', 'Store', 'SchemaError', 'ModelQLError',
    'transform', 'transform_schema', 'create_app',
]
