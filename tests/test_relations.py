import pytest

from modelql.core.declarations import parse_declarations
from modelql.relations import build_relation_resolver, build_relation_resolvers, references
from tests.schema import BLOG_SDL


def test_resolvers_keyed_by_type_and_field(blog_schema):
    assert {t: sorted(f) for t, f in blog_schema.relations.items()} == {
        'User': ['latestPost', 'posts'],
        'Post': ['author', 'tags'],
        'Tag': ['posts'],
    }


def test_forward_plural_returns_members_in_partition_order(blog_schema, populated_blog):
    news, tech = populated_blog['tags']
    graphql = populated_blog['posts'][1]
    reordered = dict(graphql, tags=[tech['id'], news['id']])
    assert blog_schema.relations['Post']['tags'](reordered) == [news, tech]


def test_forward_plural_with_missing_value(blog_schema, populated_blog):
    assert blog_schema.relations['Post']['tags']({'id': '9'}) == []
    assert blog_schema.relations['Post']['tags']({'id': '9', 'tags': None}) == []


def test_forward_singular_looks_up_by_identifier(blog_schema, populated_blog):
    ann, bob = populated_blog['users']
    other = populated_blog['posts'][2]
    assert blog_schema.relations['Post']['author'](other) == bob
    # by id, not by position: removing Ann must not shift Bob
    blog_schema.crud['User'].delete(ann['id'])
    assert blog_schema.relations['Post']['author'](other) == bob
    assert blog_schema.relations['Post']['author'](populated_blog['posts'][0]) is None


def test_inverse_plural_matches_by_equality(blog_schema, populated_blog):
    ann, bob = populated_blog['users']
    hello, graphql, other = populated_blog['posts']
    assert blog_schema.relations['User']['posts'](ann) == [hello, graphql]
    assert blog_schema.relations['User']['posts'](bob) == [other]


def test_inverse_plural_matches_list_membership(blog_schema, populated_blog):
    news, tech = populated_blog['tags']
    hello, graphql, _ = populated_blog['posts']
    assert blog_schema.relations['Tag']['posts'](news) == [hello, graphql]
    assert blog_schema.relations['Tag']['posts'](tech) == [graphql]


def test_inverse_singular_returns_first_match_or_none(blog_schema, populated_blog):
    ann, _ = populated_blog['users']
    dave = blog_schema.crud['User'].create({'name': 'Dave'})
    assert blog_schema.relations['User']['latestPost'](ann) == populated_blog['posts'][0]
    assert blog_schema.relations['User']['latestPost'](dave) is None


def test_missing_partition_degrades_to_empty(store):
    relations = build_relation_resolvers(store, parse_declarations(BLOG_SDL))
    assert relations['User']['posts']({'id': '0'}) == []
    assert relations['User']['latestPost']({'id': '0'}) is None
    assert relations['Post']['author']({'id': '0', 'author': '0'}) is None
    assert relations['Post']['tags']({'id': '0', 'tags': ['0']}) == []


def test_unknown_from_field_degrades_to_empty(store):
    decls = parse_declarations(
        'type A @model { bs: [B] @connection(fromField: "nope") } type B @model { x: Int }'
    )
    store.insert('B', {'x': 1})
    resolve = build_relation_resolvers(store, decls)['A']['bs']
    assert resolve({'id': '0'}) == []


def test_relations_do_not_mutate_store(blog_schema, populated_blog):
    before = blog_schema.store.snapshot()
    for fields in blog_schema.relations.values():
        for resolve in fields.values():
            for user in populated_blog['users']:
                resolve(user)
    assert blog_schema.store.snapshot() == before


def test_field_without_connection_is_rejected(store):
    title = parse_declarations(BLOG_SDL)[1].arguments[0]
    with pytest.raises(ValueError):
        build_relation_resolver(store, title)


@pytest.mark.parametrize(
    "value,expected",
    [('1', True), (1, True), ('2', False), (['0', '1'], True), (['0'], False), (None, False), ([], False)],
)
def test_references(value, expected):
    assert references(value, '1') is expected
