"""FastAPI app serving a :class:`~modelql.registry.ModelSchema` over HTTP.

Routes:
  POST /graphql   {"query", "variables", "operationName"} -> {"data", "errors"?}
  GET  /graphql   GraphiQL playground (when enabled)
  GET  /schema    augmented SDL as text
  GET  /          redirect to /graphql
"""
from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, RedirectResponse

from .registry import ModelSchema

__all__ = ['create_app']

_logger = logging.getLogger("modelql")

_GRAPHIQL_HTML = """<!DOCTYPE html>
<html>
<head>
  <title>modelql</title>
  <link rel="stylesheet" href="https://unpkg.com/graphiql/graphiql.min.css" />
</head>
<body style="margin: 0;">
  <div id="graphiql" style="height: 100vh;"></div>
  <script crossorigin src="https://unpkg.com/react/umd/react.production.min.js"></script>
  <script crossorigin src="https://unpkg.com/react-dom/umd/react-dom.production.min.js"></script>
  <script crossorigin src="https://unpkg.com/graphiql/graphiql.min.js"></script>
  <script>
    const fetcher = GraphiQL.createFetcher({ url: window.location.href });
    ReactDOM.render(React.createElement(GraphiQL, { fetcher }), document.getElementById('graphiql'));
  </script>
</body>
</html>
"""


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"errors": [{"message": message}]})


def create_app(model_schema: ModelSchema, *, graphiql: bool = True) -> FastAPI:
    app = FastAPI(title="modelql")
    app.state.model_schema = model_schema

    @app.get("/")
    async def root() -> RedirectResponse:
        return RedirectResponse(url="/graphql")

    @app.get("/schema", response_class=PlainTextResponse)
    async def schema_sdl() -> str:
        return model_schema.sdl

    @app.get("/graphql")
    async def graphiql_page():
        if not graphiql:
            return _error("GraphiQL is disabled", 404)
        return HTMLResponse(content=_GRAPHIQL_HTML)

    @app.post("/graphql")
    async def graphql_endpoint(request: Request) -> JSONResponse:
        try:
            data = await request.json()
        except ValueError:
            return _error("Request body must be JSON", 400)
        if not isinstance(data, dict) or not data.get("query"):
            return _error("No GraphQL query provided", 400)
        variables = data.get("variables")
        if variables is not None and not isinstance(variables, dict):
            return _error("'variables' must be an object", 400)
        result = await model_schema.execute(
            data["query"],
            variables=variables,
            operation_name=data.get("operationName"),
            context={"request": request},
        )
        payload: Dict[str, Any] = result.formatted
        if result.errors:
            _logger.debug("graphql errors: %s", [e.message for e in result.errors])
        return JSONResponse(content=payload)

    return app
