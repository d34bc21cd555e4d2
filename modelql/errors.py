from __future__ import annotations

__all__ = ['ModelQLError', 'SchemaError']


class ModelQLError(Exception):
    """Base class for errors raised by modelql."""


class SchemaError(ModelQLError, ValueError):
    """The input schema cannot be parsed or carries a malformed directive.

    Raised while building a schema, before any resolver is installed.
    """
