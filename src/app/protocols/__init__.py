"""Protocolos e contratos do core da aplicação."""

from .dealmaker import DealmakerClientProtocol, TokenProviderProtocol

__all__ = [
    "DealmakerClientProtocol",
    "TokenProviderProtocol",
]
