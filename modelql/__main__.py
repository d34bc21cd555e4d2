"""Command line entry point: ``python -m modelql [--schema PATH] [--host H] [--port P]``."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import Settings, configure_logging, load_settings
from .errors import SchemaError
from .registry import ModelSchema

_logger = logging.getLogger("modelql")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="modelql",
        description="Serve a CRUD GraphQL API generated from a @model annotated schema.",
    )
    parser.add_argument("--schema", dest="schema_path", help="path to the annotated schema file")
    parser.add_argument("--host", help="bind address")
    parser.add_argument("--port", type=int, help="port to listen on")
    parser.add_argument("--log-level", dest="log_level", help="logging level, e.g. DEBUG")
    parser.add_argument("--no-graphiql", dest="graphiql", action="store_false", default=None,
                        help="do not serve GraphiQL on GET /graphql")
    return parser


def resolve_settings(argv: Optional[List[str]] = None) -> Settings:
    """Environment settings overridden by command line flags."""
    args = build_parser().parse_args(argv)
    settings = load_settings()
    for name in ("schema_path", "host", "port", "log_level", "graphiql"):
        value = getattr(args, name)
        if value is not None:
            setattr(settings, name, value)
    return settings


def load_model_schema(path: str) -> ModelSchema:
    with open(path, encoding="utf-8") as fh:
        return ModelSchema.from_sdl(fh.read())


def main(argv: Optional[List[str]] = None) -> int:
    settings = resolve_settings(argv)
    configure_logging(settings.log_level)
    try:
        model_schema = load_model_schema(settings.schema_path)
    except FileNotFoundError:
        _logger.error("Schema file not found: %s", settings.schema_path)
        return 1
    except SchemaError as e:
        _logger.error("Invalid schema %s: %s", settings.schema_path, e)
        return 1

    import uvicorn
    from .server import create_app

    app = create_app(model_schema, graphiql=settings.graphiql)
    _logger.info("Server is running on http://%s:%d/graphql", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
