from .chat import CHAT_PATH, build_chat_router, to_http_response
from .health import build_health_router
from .middleware import install_http_policies
from .transport import CORS_HEADERS, RelayResponse, dispatch_chat, render_json

__all__ = [
    "CHAT_PATH",
    "CORS_HEADERS",
    "RelayResponse",
    "build_chat_router",
    "build_health_router",
    "dispatch_chat",
    "install_http_policies",
    "render_json",
    "to_http_response",
]
