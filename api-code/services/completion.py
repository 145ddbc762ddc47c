from __future__ import annotations

from abc import ABC, abstractmethod


class CompletionClient(ABC):
    """Single-shot text generation against a remote provider."""

    @property
    @abstractmethod
    def configured(self) -> bool:
        """True when credentials are present and a call may be attempted."""

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Return the provider's reply to ``prompt``.

        Raises ``ProviderError`` on transport, authentication, timeout or
        malformed-response failures. Implementations never retry.
        """
