"""FastAPI app exposing examples/schema.graphql with a GraphiQL playground.

Run this file to start a local server and open http://127.0.0.1:4000/graphql

Environment variables:
  DEMO_SEED   set to '0' to skip demo data seeding (default '1')
"""
from __future__ import annotations

import logging
import os
from pathlib import Path

from modelql import ModelSchema, create_app
from modelql.config import configure_logging

SCHEMA_PATH = Path(__file__).with_name("schema.graphql")

_logger = logging.getLogger("modelql.examples")


def seed(model_schema: ModelSchema) -> None:
    users = model_schema.crud["User"]
    posts = model_schema.crud["Post"]
    tags = model_schema.crud["Tag"]
    alice = users.create({"name": "Alice", "email": "alice@example.com"})
    bob = users.create({"name": "Bob"})
    intro = tags.create({"label": "intro"})
    graphql = tags.create({"label": "graphql"})
    posts.create({"title": "First Post", "body": "Hello world!", "author": alice["id"], "tags": [intro["id"]]})
    posts.create({"title": "GraphQL is Great", "author": alice["id"], "tags": [intro["id"], graphql["id"]]})
    posts.create({"title": "Bob's notes", "author": bob["id"], "tags": []})
    _logger.info("seeded %s", model_schema.store)


model_schema = ModelSchema.from_sdl(SCHEMA_PATH.read_text(encoding="utf-8"))
if os.getenv("DEMO_SEED", "1") != "0":
    seed(model_schema)

app = create_app(model_schema)


if __name__ == "__main__":
    # Local dev runner
    import uvicorn

    configure_logging("DEBUG")
    uvicorn.run(app, host="127.0.0.1", port=4000)
