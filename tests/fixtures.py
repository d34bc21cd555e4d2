"""Record fixtures for modelql tests (shared)."""

import pytest

from modelql import ModelSchema


def seed_blog(blog: ModelSchema):
    """Create two users, three posts and two tags through the generated resolvers."""
    users = blog.crud['User']
    posts = blog.crud['Post']
    tags = blog.crud['Tag']
    ann = users.create({'name': 'Ann', 'email': 'ann@example.com'})
    bob = users.create({'name': 'Bob', 'email': 'bob@example.com'})
    news = tags.create({'label': 'news'})
    tech = tags.create({'label': 'tech'})
    hello = posts.create({'title': 'Hello', 'author': ann['id'], 'tags': [news['id']]})
    graphql = posts.create({'title': 'GraphQL', 'author': ann['id'], 'tags': [news['id'], tech['id']]})
    other = posts.create({'title': 'Other', 'author': bob['id'], 'tags': []})
    return {
        'users': [ann, bob],
        'tags': [news, tech],
        'posts': [hello, graphql, other],
    }


@pytest.fixture(scope="function")
def populated_blog(blog_schema):
    return seed_blog(blog_schema)
