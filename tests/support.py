from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
API_CODE_PATH = PROJECT_ROOT / "api-code"
for path in (API_CODE_PATH, PROJECT_ROOT):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from domain import ProviderError  # noqa: E402
from services import CompletionClient  # noqa: E402


class FakeCompletionClient(CompletionClient):
    def __init__(
        self,
        reply: str = "pong",
        *,
        error: Exception | None = None,
        configured: bool = True,
    ) -> None:
        self.reply = reply
        self.error = error
        self._configured = configured
        self.prompts: list[str] = []

    @property
    def configured(self) -> bool:
        return self._configured

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


def failing_client(message: str = "quota exceeded") -> FakeCompletionClient:
    return FakeCompletionClient(error=ProviderError(message, RuntimeError(message)))
