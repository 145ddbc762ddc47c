from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

try:
    import google.generativeai as genai
except ImportError as exc:  # pragma: no cover - dependency managed via pyproject.toml
    raise RuntimeError(
        "The google-generativeai package is required. Install the project dependencies."
    ) from exc

from domain import ProviderError
from settings import DEFAULT_GEMINI_MODEL, DEFAULT_GEMINI_TIMEOUT_SECONDS

from .completion import CompletionClient


logger = logging.getLogger("relay-chat.gemini")


class GeminiCompletionClient(CompletionClient):
    """Gemini-backed completion client. The SDK is configured once per instance."""

    def __init__(
        self,
        api_key: Optional[str],
        model_name: str = DEFAULT_GEMINI_MODEL,
        timeout: float = DEFAULT_GEMINI_TIMEOUT_SECONDS,
    ):
        self.api_key = (api_key or "").strip() or None
        self.model_name = model_name
        self.timeout = timeout
        self._model: Any = None
        if self.api_key:
            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(self.model_name)

    @property
    def configured(self) -> bool:
        return self._model is not None

    async def generate(self, prompt: str) -> str:
        if not prompt:
            raise ValueError("Prompt must be a non-empty string.")
        if not self.configured:
            raise ProviderError("Gemini API key not configured")

        try:
            response_text = await asyncio.wait_for(
                asyncio.to_thread(self._call_gemini, prompt), timeout=self.timeout
            )
        except asyncio.TimeoutError as exc:
            raise ProviderError(
                f"Gemini request timed out after {self.timeout:g}s", exc
            ) from exc
        except ProviderError:
            raise
        except Exception as exc:  # pylint: disable=broad-except
            raise ProviderError(str(exc) or exc.__class__.__name__, exc) from exc

        if not response_text:
            raise ProviderError("Gemini returned an empty response")
        return response_text

    def _call_gemini(self, prompt: str) -> str:
        response: Any = self._model.generate_content(
            prompt, request_options={"timeout": self.timeout}
        )
        return _extract_text(response)


def _extract_text(response: Any) -> str:
    try:
        text = getattr(response, "text", None)
    except ValueError:
        # .text raises when the candidate was blocked or carries no parts
        text = None
    if text:
        return text.strip()

    candidates = getattr(response, "candidates", None) or []
    for candidate in candidates:
        content = getattr(candidate, "content", None)
        if not content:
            continue
        for part in getattr(content, "parts", None) or []:
            part_text = getattr(part, "text", None)
            if part_text:
                return part_text.strip()

    logger.warning("Gemini response carried no text parts.")
    return ""
