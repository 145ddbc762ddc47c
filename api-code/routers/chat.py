from __future__ import annotations

from fastapi import APIRouter, Request, Response

from schemas import ChatResponse, ErrorResponse
from services import ChatService

from .transport import RelayResponse, dispatch_chat


CHAT_PATH = "/api/chat"
ROUTED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or blank message"},
    405: {"model": ErrorResponse, "description": "Method other than POST or OPTIONS"},
    500: {"model": ErrorResponse, "description": "Missing API key or provider failure"},
}


def to_http_response(relay: RelayResponse) -> Response:
    return Response(
        content=relay.body,
        status_code=relay.status_code,
        headers=dict(relay.headers),
        media_type=relay.media_type,
    )


def build_chat_router(chat_service: ChatService) -> APIRouter:
    """Create the chat router wired to the provided chat service.

    Every method is routed to the adapter so that method gating and CORS
    headers are decided in one place for both deployment shapes.
    """
    router = APIRouter(tags=["chat"])

    @router.api_route(
        CHAT_PATH,
        methods=ROUTED_METHODS,
        summary="Relay one chat message",
        responses={200: {"model": ChatResponse}, **ERROR_RESPONSES},
    )
    async def chat_endpoint(request: Request) -> Response:
        raw_body = await request.body()
        relay = await dispatch_chat(chat_service, request.method, raw_body)
        return to_http_response(relay)

    return router
