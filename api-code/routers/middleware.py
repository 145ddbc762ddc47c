from __future__ import annotations

import logging

from fastapi import FastAPI, Request, Response
from fastapi.exception_handlers import http_exception_handler
from starlette.exceptions import HTTPException as StarletteHTTPException

from domain import MethodNotAllowedError

from .chat import to_http_response
from .transport import CORS_HEADERS, error_response, internal_error_response


logger = logging.getLogger("relay-chat.transport")


def install_http_policies(app: FastAPI) -> None:
    """Stamp CORS headers on every response and turn stray exceptions into JSON errors."""

    @app.middleware("http")
    async def apply_cors_headers(request: Request, call_next) -> Response:
        response = await call_next(request)
        for name, value in CORS_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> Response:
        # the router rejects methods it has no route for before the chat adapter runs
        if exc.status_code == 405:
            return to_http_response(error_response(MethodNotAllowedError("Method not allowed")))
        return await http_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> Response:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return to_http_response(internal_error_response())
