"""
CRUD resolver factory.

For every model ``T`` four resolvers over the store partition ``T``:

- ``listTs()`` -> current records
- ``createT(payload)`` -> new record with a fresh id
- ``updateT(id, payload)`` -> merged record, or None for an unknown id
- ``deleteT(id)`` -> True, or False for an unknown id

The resolvers take plain Python arguments; :mod:`modelql.registry` adapts
them to graphql-core's ``(source, info, **args)`` calling convention.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from .core.declarations import Declaration
from .core.naming import create_field_name, delete_field_name, list_field_name, update_field_name
from .store import Record, Store

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModelResolvers:
    """The four generated resolvers of one model."""

    type_name: str
    list: Callable[[], List[Record]]
    create: Callable[[Optional[Mapping[str, Any]]], Record]
    update: Callable[[Any, Optional[Mapping[str, Any]]], Optional[Record]]
    delete: Callable[[Any], bool]

    def query_fields(self) -> Dict[str, Callable[..., Any]]:
        return {list_field_name(self.type_name): self.list}

    def mutation_fields(self) -> Dict[str, Callable[..., Any]]:
        return {
            create_field_name(self.type_name): self.create,
            update_field_name(self.type_name): self.update,
            delete_field_name(self.type_name): self.delete,
        }


class CrudResolverFactory:
    """Builds list/create/update/delete resolvers bound to one :class:`Store`."""

    def __init__(self, store: Store):
        self.store = store

    def list_resolver(self, type_name: str) -> Callable[[], List[Record]]:
        store = self.store

        def list_records() -> List[Record]:
            return store.partition(type_name)

        list_records.__name__ = list_field_name(type_name)
        return list_records

    def create_resolver(self, type_name: str) -> Callable[[Optional[Mapping[str, Any]]], Record]:
        store = self.store

        def create_record(payload: Optional[Mapping[str, Any]] = None) -> Record:
            return store.insert(type_name, payload)

        create_record.__name__ = create_field_name(type_name)
        return create_record

    def update_resolver(self, type_name: str) -> Callable[[Any, Optional[Mapping[str, Any]]], Optional[Record]]:
        store = self.store

        def update_record(record_id: Any, payload: Optional[Mapping[str, Any]] = None) -> Optional[Record]:
            updated = store.update(type_name, record_id, payload)
            if updated is None:
                logger.debug("update%s: no record with id %r", type_name, record_id)
            return updated

        update_record.__name__ = update_field_name(type_name)
        return update_record

    def delete_resolver(self, type_name: str) -> Callable[[Any], bool]:
        store = self.store

        def delete_record(record_id: Any) -> bool:
            deleted = store.delete(type_name, record_id)
            if not deleted:
                logger.debug("delete%s: no record with id %r", type_name, record_id)
            return deleted

        delete_record.__name__ = delete_field_name(type_name)
        return delete_record

    def for_model(self, model: Declaration) -> ModelResolvers:
        name = model.name
        return ModelResolvers(
            type_name=name,
            list=self.list_resolver(name),
            create=self.create_resolver(name),
            update=self.update_resolver(name),
            delete=self.delete_resolver(name),
        )

    def build(self, models: Iterable[Declaration]) -> Dict[str, ModelResolvers]:
        """Return ``{model name: ModelResolvers}`` in model order."""
        return {m.name: self.for_model(m) for m in models}


def generate_list_resolvers(store: Store, models: Iterable[Declaration]) -> Dict[str, Callable[[], List[Record]]]:
    """``{"listTs": resolver}`` for every model."""
    factory = CrudResolverFactory(store)
    return {list_field_name(m.name): factory.list_resolver(m.name) for m in models}


def generate_mutation_resolvers(store: Store, models: Iterable[Declaration]) -> Dict[str, Callable[..., Any]]:
    """``{"createT"|"updateT"|"deleteT": resolver}`` for every model."""
    out: Dict[str, Callable[..., Any]] = {}
    for resolvers in CrudResolverFactory(store).build(models).values():
        out.update(resolvers.mutation_fields())
    return out
