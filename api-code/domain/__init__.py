from .errors import (
    ChatError,
    ConfigError,
    MethodNotAllowedError,
    ProviderError,
    UpstreamError,
    ValidationError,
)

__all__ = [
    "ChatError",
    "ConfigError",
    "MethodNotAllowedError",
    "ProviderError",
    "UpstreamError",
    "ValidationError",
]
