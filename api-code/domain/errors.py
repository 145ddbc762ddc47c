from __future__ import annotations

from typing import Dict, Optional


class ChatError(Exception):
    """Terminal per-request failure that maps onto an HTTP error response."""

    status_code = 500

    def __init__(self, message: str, *, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self) -> Dict[str, str]:
        payload = {"error": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(ChatError):
    status_code = 400


class MethodNotAllowedError(ChatError):
    status_code = 405


class ConfigError(ChatError):
    status_code = 500


class UpstreamError(ChatError):
    status_code = 500


class ProviderError(Exception):
    """Raised by completion clients when the remote provider call fails."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
