"""ModelSchema: ties the transformer, the store and the resolver factories together.

Typical use::

    schema = ModelSchema.from_sdl(open('schema.graphql').read())
    result = await schema.execute('{ listUsers { id name } }')

``ModelSchema`` owns one :class:`~modelql.store.Store`. Pass an existing
store to share records between schemas or to inspect them in tests.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from graphql import (
    ExecutionResult,
    GraphQLError,
    GraphQLObjectType,
    GraphQLSchema,
    build_schema,
    graphql,
    graphql_sync,
)

from .core.declarations import Declaration
from .core.naming import ID_FIELD, create_field_name, delete_field_name, update_field_name
from .errors import SchemaError
from .factory import CrudResolverFactory, ModelResolvers
from .relations import RelationResolvers, build_relation_resolvers
from .store import Store
from .transform import TransformedSchema, transform

__all__ = ['ModelSchema', 'ResolverMap', 'bind_resolvers']

_logger = logging.getLogger("modelql")

# {"Query": {...}, "Mutation": {...}, "<Type>": {"<field>": resolve(source, info, **args)}}
ResolverMap = Dict[str, Dict[str, Callable[..., Any]]]


def _query_field(fn: Callable[[], Any]) -> Callable[..., Any]:
    def resolve(_root, _info, **_args):
        return fn()
    return resolve


def _create_field(fn: Callable[..., Any], type_name: str) -> Callable[..., Any]:
    def resolve(_root, _info, **args):
        return fn(args.get(type_name))
    return resolve


def _update_field(fn: Callable[..., Any], type_name: str) -> Callable[..., Any]:
    def resolve(_root, _info, **args):
        return fn(args.get(ID_FIELD), args.get(type_name))
    return resolve


def _delete_field(fn: Callable[..., Any]) -> Callable[..., Any]:
    def resolve(_root, _info, **args):
        return fn(args.get(ID_FIELD))
    return resolve


def _relation_field(fn: Callable[[Any], Any]) -> Callable[..., Any]:
    def resolve(source, _info, **_args):
        return fn(source)
    return resolve


def bind_resolvers(schema: GraphQLSchema, resolvers: ResolverMap) -> GraphQLSchema:
    """Attach ``resolvers`` to the fields of ``schema`` in place and return it.

    Raises:
        SchemaError: when a resolver targets a type or field missing from the schema.
    """
    for type_name, fields in resolvers.items():
        gql_type = schema.get_type(type_name)
        if not isinstance(gql_type, GraphQLObjectType):
            raise SchemaError(f"Resolvers given for '{type_name}', which is not an object type of the schema")
        for field_name, resolve in fields.items():
            gql_field = gql_type.fields.get(field_name)
            if gql_field is None:
                raise SchemaError(f"Resolver given for unknown field '{type_name}.{field_name}'")
            gql_field.resolve = resolve
    return schema


class ModelSchema:
    """Executable CRUD schema derived from ``@model``/``@connection`` annotated SDL."""

    def __init__(self, transformed: TransformedSchema, store: Optional[Store] = None):
        self.transformed = transformed
        self.store = store if store is not None else Store()
        self.crud: Dict[str, ModelResolvers] = CrudResolverFactory(self.store).build(transformed.models)
        self.relations: RelationResolvers = build_relation_resolvers(self.store, transformed.declarations)
        self._graphql_schema: Optional[GraphQLSchema] = None
        _logger.debug("list resolvers: %s", self.query_field_names())
        _logger.debug("mutation resolvers: %s", self.mutation_field_names())

    @classmethod
    def from_sdl(cls, schema_text: str, *, store: Optional[Store] = None) -> 'ModelSchema':
        """Transform ``schema_text`` and build resolvers for it.

        Raises:
            SchemaError: for unparseable text, a malformed directive argument, or
                augmented SDL that graphql-core refuses to build.
        """
        model_schema = cls(transform(schema_text), store=store)
        # build eagerly so a broken schema fails at startup, not on first request
        model_schema.graphql_schema
        return model_schema

    @property
    def sdl(self) -> str:
        return self.transformed.sdl

    @property
    def models(self) -> List[Declaration]:
        return list(self.transformed.models)

    def query_field_names(self) -> List[str]:
        return [name for r in self.crud.values() for name in r.query_fields()]

    def mutation_field_names(self) -> List[str]:
        return [name for r in self.crud.values() for name in r.mutation_fields()]

    def resolver_map(self) -> ResolverMap:
        """Resolvers in graphql-core's calling convention, keyed by type and field."""
        query: Dict[str, Callable[..., Any]] = {}
        mutation: Dict[str, Callable[..., Any]] = {}
        for type_name, r in self.crud.items():
            for name, fn in r.query_fields().items():
                query[name] = _query_field(fn)
            mutation[create_field_name(type_name)] = _create_field(r.create, type_name)
            mutation[update_field_name(type_name)] = _update_field(r.update, type_name)
            mutation[delete_field_name(type_name)] = _delete_field(r.delete)
        out: ResolverMap = {
            type_name: {name: _relation_field(fn) for name, fn in fields.items()}
            for type_name, fields in self.relations.items()
        }
        if query:
            out['Query'] = query
        if mutation:
            out['Mutation'] = mutation
        return out

    @property
    def graphql_schema(self) -> GraphQLSchema:
        if self._graphql_schema is None:
            try:
                schema = build_schema(self.sdl)
            except (GraphQLError, TypeError) as e:
                raise SchemaError(f"Augmented schema could not be built: {e}") from e
            self._graphql_schema = bind_resolvers(schema, self.resolver_map())
        return self._graphql_schema

    async def execute(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
        operation_name: Optional[str] = None,
        context: Any = None,
    ) -> ExecutionResult:
        return await graphql(
            self.graphql_schema,
            query,
            variable_values=variables,
            operation_name=operation_name,
            context_value=context,
        )

    def execute_sync(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
        operation_name: Optional[str] = None,
        context: Any = None,
    ) -> ExecutionResult:
        return graphql_sync(
            self.graphql_schema,
            query,
            variable_values=variables,
            operation_name=operation_name,
            context_value=context,
        )

    def __repr__(self) -> str:
        return f"ModelSchema(models={[m.name for m in self.transformed.models]}, store={self.store!r})"
