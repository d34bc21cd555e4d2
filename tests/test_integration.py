"""
End-to-end tests: annotated SDL -> ModelSchema -> graphql-core execution.
"""

import pytest

from modelql import ModelSchema, SchemaError
from tests.schema import EMPTY_MODEL_SDL, EXTENDED_MODEL_SDL, INTERFACE_SDL


@pytest.mark.asyncio
async def test_create_and_list_user_post(user_post_schema):
    res = await user_post_schema.execute('mutation { createUser(User: {name: "Ann"}) { id name } }')
    assert res.errors is None, res.errors
    assert res.data == {'createUser': {'id': '0', 'name': 'Ann'}}

    res = await user_post_schema.execute(
        'mutation { createPost(Post: {title: "Hi", author: "0"}) { id title } }'
    )
    assert res.errors is None, res.errors
    assert res.data == {'createPost': {'id': '0', 'title': 'Hi'}}
    assert user_post_schema.store.partition('Post') == [{'id': '0', 'title': 'Hi', 'author': '0'}]

    res = await user_post_schema.execute('{ listPosts { id title } }')
    assert res.errors is None, res.errors
    assert res.data == {'listPosts': [{'id': '0', 'title': 'Hi'}]}


@pytest.mark.asyncio
async def test_update_and_delete_through_graphql(blog_schema, populated_blog):
    ann = populated_blog['users'][0]
    res = await blog_schema.execute(
        'mutation($id: ID!, $u: UserUpdate!) { updateUser(id: $id, User: $u) { id name email } }',
        variables={'id': ann['id'], 'u': {'email': 'ann@new.example'}},
    )
    assert res.errors is None, res.errors
    assert res.data['updateUser'] == {'id': ann['id'], 'name': 'Ann', 'email': 'ann@new.example'}

    res = await blog_schema.execute('mutation { updateUser(id: "77", User: {name: "x"}) { id } }')
    assert res.errors is None, res.errors
    assert res.data == {'updateUser': None}

    res = await blog_schema.execute('mutation { deleteTag(id: "1") missing: deleteTag(id: "1") }')
    assert res.errors is None, res.errors
    assert res.data == {'deleteTag': True, 'missing': False}
    assert [t['label'] for t in blog_schema.store.partition('Tag')] == ['news']


@pytest.mark.asyncio
async def test_relations_through_graphql(blog_schema, populated_blog):
    query = '''
    {
      listUsers {
        name
        posts { title tags { label } }
        latestPost { title author { name } }
      }
      listTags { label posts { title } }
    }
    '''
    res = await blog_schema.execute(query)
    assert res.errors is None, res.errors
    assert res.data['listUsers'] == [
        {
            'name': 'Ann',
            'posts': [
                {'title': 'Hello', 'tags': [{'label': 'news'}]},
                {'title': 'GraphQL', 'tags': [{'label': 'news'}, {'label': 'tech'}]},
            ],
            'latestPost': {'title': 'Hello', 'author': {'name': 'Ann'}},
        },
        {
            'name': 'Bob',
            'posts': [{'title': 'Other', 'tags': []}],
            'latestPost': {'title': 'Other', 'author': {'name': 'Bob'}},
        },
    ]
    assert res.data['listTags'] == [
        {'label': 'news', 'posts': [{'title': 'Hello'}, {'title': 'GraphQL'}]},
        {'label': 'tech', 'posts': [{'title': 'GraphQL'}]},
    ]


def test_create_with_list_of_ids_sync(blog_schema):
    res = blog_schema.execute_sync('mutation { createTag(Tag: {label: "a"}) { id } }')
    assert res.errors is None, res.errors
    res = blog_schema.execute_sync(
        'mutation { createUser(User: {name: "Ann"}) { id } '
        'createPost(Post: {title: "t", author: "0", tags: ["0"]}) { id tags { label } author { name } } }'
    )
    assert res.errors is None, res.errors
    assert res.data['createPost'] == {'id': '0', 'tags': [{'label': 'a'}], 'author': {'name': 'Ann'}}


def test_schemas_with_separate_stores_are_isolated():
    sdl = 'type Item @model { n: Int }'
    first = ModelSchema.from_sdl(sdl)
    second = ModelSchema.from_sdl(sdl)
    first.crud['Item'].create({'n': 1})
    assert second.crud['Item'].list() == []
    assert first.store is not second.store


def test_model_without_fields_still_builds():
    schema = ModelSchema.from_sdl(EMPTY_MODEL_SDL)
    assert 'listMarkers' in schema.graphql_schema.query_type.fields
    assert schema.crud['Marker'].create(None) == {'id': '0'}


def test_resolver_map_shape(blog_schema):
    resolvers = blog_schema.resolver_map()
    assert set(resolvers) == {'Query', 'Mutation', 'User', 'Post', 'Tag'}
    assert set(resolvers['Query']) == {'listUsers', 'listPosts', 'listTags'}
    assert 'deleteTag' in resolvers['Mutation']


def test_broken_augmented_schema_raises_schema_error():
    # Post is referenced but never declared
    with pytest.raises(SchemaError):
        ModelSchema.from_sdl('type User @model { post: Post }')


def test_model_with_existing_id_field_is_rejected():
    with pytest.raises(SchemaError):
        ModelSchema.from_sdl('type User @model { id: ID! name: String }')


@pytest.mark.asyncio
async def test_connection_on_interface_field_is_resolved_by_model():
    schema = ModelSchema.from_sdl(INTERFACE_SDL)
    assert {t: sorted(f) for t, f in schema.relations.items()} == {'Doc': ['owner']}
    res = await schema.execute(
        'mutation { createUser(User: {name: "Ann"}) { id } '
        'createDoc(Doc: {title: "d", owner: "0"}) { id } }'
    )
    assert res.errors is None, res.errors
    res = await schema.execute('{ listDocs { title owner { name } } }')
    assert res.errors is None, res.errors
    assert res.data == {'listDocs': [{'title': 'd', 'owner': {'name': 'Ann'}}]}


def test_model_declared_on_extension_uses_all_fields():
    schema = ModelSchema.from_sdl(EXTENDED_MODEL_SDL)
    assert [m.name for m in schema.models] == ['User']
    user_create = schema.graphql_schema.get_type('UserCreate')
    assert set(user_create.fields) == {'name', 'email'}
    res = schema.execute_sync('mutation { createUser(User: {name: "Ann", email: "a@x"}) { id name email } }')
    assert res.errors is None, res.errors
    assert res.data == {'createUser': {'id': '0', 'name': 'Ann', 'email': 'a@x'}}
