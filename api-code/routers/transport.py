from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import pydantic

from domain import ChatError, MethodNotAllowedError
from schemas import ChatRequest
from services import ChatService


logger = logging.getLogger("relay-chat.transport")

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}
JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class RelayResponse:
    """Transport-neutral HTTP response produced by the chat adapter."""

    status_code: int
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=lambda: dict(CORS_HEADERS))

    @property
    def media_type(self) -> Optional[str]:
        return JSON_CONTENT_TYPE if self.body else None


def render_json(payload: Any) -> bytes:
    """Serialize ``payload`` exactly the way every deployment shape sends it."""
    return json.dumps(
        payload, ensure_ascii=False, allow_nan=False, separators=(",", ":")
    ).encode("utf-8")


def json_response(status_code: int, payload: Any) -> RelayResponse:
    return RelayResponse(status_code=status_code, body=render_json(payload))


def error_response(error: ChatError) -> RelayResponse:
    return json_response(error.status_code, error.to_payload())


def parse_chat_request(raw_body: bytes) -> ChatRequest:
    """Decode a JSON body; anything unusable becomes a request without a message."""
    if not raw_body or not raw_body.strip():
        return ChatRequest()
    try:
        return ChatRequest.model_validate_json(raw_body)
    except pydantic.ValidationError as exc:
        logger.info("Unreadable chat body treated as missing message: %s", exc.errors()[0]["msg"])
        return ChatRequest()


async def dispatch_chat(service: ChatService, method: str, raw_body: bytes) -> RelayResponse:
    """Run one /api/chat request through method gating, parsing and the chat service."""
    method = method.upper()
    if method == "OPTIONS":
        return RelayResponse(status_code=200)

    try:
        if method != "POST":
            raise MethodNotAllowedError("Method not allowed")
        reply = await service.handle(parse_chat_request(raw_body))
    except ChatError as exc:
        return error_response(exc)
    except Exception:  # pylint: disable=broad-except
        logger.exception("Unhandled error while processing chat request.")
        return internal_error_response()

    return json_response(200, reply.model_dump())


def internal_error_response() -> RelayResponse:
    return json_response(500, {"error": "Internal server error"})
