"""Resolvers for ``@connection`` fields.

Two strategies, picked per field:

- forward (no ``fromField``): the parent record stores the related id(s) in
  the field itself; plural fields hold a list of ids.
- inverse (``fromField: "g"``): scan the related partition for records whose
  field ``g`` references the parent, either by equality or, when ``g`` holds
  a list, by membership.

Resolvers only read the store. A missing partition or an unknown
``fromField`` yields ``[]`` for plural fields and ``None`` for singular ones.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from .core.declarations import Argument, Declaration
from .core.naming import ID_FIELD
from .store import Record, Store

__all__ = [
    'RelationResolver',
    'RelationResolvers',
    'field_value',
    'references',
    'build_relation_resolver',
    'build_relation_resolvers',
]

_logger = logging.getLogger("modelql")

RelationResult = Union[Record, List[Record], None]
RelationResolver = Callable[[Any], RelationResult]
RelationResolvers = Dict[str, Dict[str, RelationResolver]]


def field_value(source: Any, name: str) -> Any:
    """Read ``name`` from a record mapping or an object attribute."""
    if source is None:
        return None
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def _as_id_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


def references(value: Any, parent_id: str) -> bool:
    """True when a stored field value points at ``parent_id``."""
    if value is None:
        return False
    if isinstance(value, (list, tuple, set, frozenset)):
        return any(v is not None and str(v) == parent_id for v in value)
    return str(value) == parent_id


def _forward(store: Store, target: str, name: str, plural: bool) -> RelationResolver:
    if plural:
        def resolve_many(source: Any) -> List[Record]:
            return store.get_many(target, _as_id_list(field_value(source, name)))
        return resolve_many

    def resolve_one(source: Any) -> Optional[Record]:
        return store.get(target, field_value(source, name))
    return resolve_one


def _inverse(store: Store, target: str, from_field: str, plural: bool) -> RelationResolver:
    def _matches(source: Any) -> Iterable[Record]:
        parent_id = field_value(source, ID_FIELD)
        if parent_id is None:
            return ()
        key = str(parent_id)
        return (r for r in store.partition(target) if references(r.get(from_field), key))

    if plural:
        def resolve_many(source: Any) -> List[Record]:
            return list(_matches(source))
        return resolve_many

    def resolve_one(source: Any) -> Optional[Record]:
        return next(iter(_matches(source)), None)
    return resolve_one


def build_relation_resolver(store: Store, arg: Argument) -> RelationResolver:
    """Build the resolver for one ``@connection`` field.

    Raises:
        SchemaError: when ``fromField`` is not a string literal.
    """
    connection = arg.connection
    if connection is None:
        raise ValueError(f"Field '{arg.name}' has no @connection directive")
    target = arg.type.leaf_name()
    plural = arg.type.is_plural()
    if connection.is_inverse:
        return _inverse(store, target, connection.from_field, plural)
    return _forward(store, target, arg.name, plural)


def build_relation_resolvers(store: Store, declarations: Iterable[Declaration]) -> RelationResolvers:
    """Return ``{type name: {field name: resolver}}`` for every ``@connection`` field of an object type."""
    out: RelationResolvers = {}
    for decl in declarations:
        # interface fields are resolved by the implementing object types
        if decl.kind != 'type':
            continue
        args = decl.connection_arguments()
        if not args:
            continue
        fields = out.setdefault(decl.name, {})
        for arg in args:
            fields[arg.name] = build_relation_resolver(store, arg)
    _logger.debug("relation resolvers: %s", {k: sorted(v) for k, v in out.items()})
    return out
