from .chat_service import ChatService, build_chat_service, echo_reply
from .completion import CompletionClient
from .gemini_client import GeminiCompletionClient

__all__ = [
    "ChatService",
    "CompletionClient",
    "GeminiCompletionClient",
    "build_chat_service",
    "echo_reply",
]
