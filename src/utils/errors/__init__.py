"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    ConfigError,
    IntegrationError,
    PayloadError,
    SignatureError,
    UpstreamAuthError,
    UpstreamError,
    ValidationError,
)

__all__ = [
    "ConfigError",
    "IntegrationError",
    "PayloadError",
    "SignatureError",
    "UpstreamAuthError",
    "UpstreamError",
    "ValidationError",
]
