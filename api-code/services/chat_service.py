from __future__ import annotations

import logging
from typing import Optional

from domain import ConfigError, ProviderError, UpstreamError, ValidationError
from schemas import ChatRequest, ChatResponse
from settings import Settings

from .completion import CompletionClient
from .gemini_client import GeminiCompletionClient


logger = logging.getLogger("relay-chat.chat")

MESSAGE_REQUIRED = "Message is required"
API_KEY_MISSING = "API key not configured"
UPSTREAM_FAILED = "Failed to process chat request"

ECHO_NOTE = (
    "This is a demo response. To connect a real AI model:\n"
    "1. Add GEMINI_API_KEY to your .env file\n"
    "2. Set CHAT_MODE=gemini\n"
    "3. Restart the server\n\n"
    "```python\n"
    "# What the server does once a key is configured\n"
    "model = genai.GenerativeModel(\"gemini-2.5-flash\")\n"
    "reply = model.generate_content(message).text\n"
    "```"
)


def echo_reply(message: str) -> str:
    """Deterministic demo reply; depends on ``message`` only."""
    return f"Echo: {message}\n\n{ECHO_NOTE}"


class ChatService:
    """Validates a chat request and answers it locally or through a completion client."""

    def __init__(self, client: Optional[CompletionClient] = None, *, echo: bool = False):
        self.client = client
        self.echo = echo

    async def handle(self, payload: ChatRequest) -> ChatResponse:
        message = payload.message
        if not isinstance(message, str) or not message.strip():
            raise ValidationError(MESSAGE_REQUIRED)

        if self.echo:
            return ChatResponse(reply=echo_reply(message))

        if self.client is None or not self.client.configured:
            logger.error("Chat request rejected: provider API key is not configured.")
            raise ConfigError(API_KEY_MISSING)

        try:
            reply = await self.client.generate(message)
        except ProviderError as exc:
            logger.exception("Error processing chat request: %s", exc.message)
            raise UpstreamError(UPSTREAM_FAILED, details=exc.message) from exc

        return ChatResponse(reply=reply)


def build_chat_service(settings: Settings) -> ChatService:
    if settings.chat_mode == "echo":
        logger.info("CHAT_MODE=echo; replies are generated locally.")
        return ChatService(echo=True)

    if not settings.api_key:
        logger.warning("GEMINI_API_KEY missing; chat requests will fail with a config error.")
    client = GeminiCompletionClient(
        api_key=settings.api_key,
        model_name=settings.gemini_model,
        timeout=settings.gemini_timeout_seconds,
    )
    return ChatService(client)
