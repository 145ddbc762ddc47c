from .chat import ChatRequest, ChatResponse, ErrorResponse
from .health import HealthResponse, utc_timestamp

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "ErrorResponse",
    "HealthResponse",
    "utc_timestamp",
]
