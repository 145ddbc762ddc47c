"""Serverless entry point: one stateless invocation per /api/chat request."""
from __future__ import annotations

import logging
import sys
from pathlib import Path

from fastapi import FastAPI
from mangum import Mangum


PROJECT_ROOT = Path(__file__).resolve().parent.parent
API_CODE_PATH = PROJECT_ROOT / "api-code"
if str(API_CODE_PATH) not in sys.path:
    sys.path.insert(0, str(API_CODE_PATH))

from routers import build_chat_router, install_http_policies  # noqa: E402
from services import ChatService, build_chat_service  # noqa: E402
from settings import Settings, get_settings  # noqa: E402


settings = get_settings()

logging.basicConfig(level=settings.log_level.upper())


def build_function_app(settings: Settings, chat_service: ChatService | None = None) -> FastAPI:
    app = FastAPI(title="Relay Chat function", docs_url=None, redoc_url=None, openapi_url=None)
    install_http_policies(app)
    app.include_router(build_chat_router(chat_service or build_chat_service(settings)))
    return app


app = build_function_app(settings)
handler = Mangum(app, lifespan="off")
