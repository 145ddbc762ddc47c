from __future__ import annotations

import logging
import sys
from pathlib import Path

from fastapi import FastAPI


PROJECT_ROOT = Path(__file__).resolve().parent
API_CODE_PATH = PROJECT_ROOT / "api-code"
if str(API_CODE_PATH) not in sys.path:
    sys.path.insert(0, str(API_CODE_PATH))

from env_loader import load_local_env  # noqa: E402
from routers import (  # noqa: E402
    build_chat_router,
    build_health_router,
    install_http_policies,
)
from services import ChatService, build_chat_service  # noqa: E402
from settings import Settings, get_settings  # noqa: E402


logger = logging.getLogger("relay-chat")


def create_app(settings: Settings, chat_service: ChatService | None = None) -> FastAPI:
    """Build the long-lived server: /api/chat, /health and the shared CORS policy."""
    app = FastAPI(
        title="Relay Chat API",
        version="0.1.0",
        description="Chat relay backend: echo demo mode or Google Gemini.",
    )
    install_http_policies(app)

    service = chat_service or build_chat_service(settings)
    app.include_router(build_chat_router(service))
    app.include_router(build_health_router())

    @app.on_event("startup")
    async def on_startup() -> None:
        logger.info("Server running on port %d", settings.port)
        logger.info("Health check: http://localhost:%d/health", settings.port)

    return app


load_local_env()
settings = get_settings()

logging.basicConfig(level=settings.log_level.upper())

app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app_main:app", host="0.0.0.0", port=settings.port)
