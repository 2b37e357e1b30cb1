"""Taxonomia de erros da integração com a DealMaker.

Cada erro carrega um `reason` legível por máquina e o `http_status` que a
camada HTTP deve devolver. Mensagens nunca incluem tokens ou secrets.
"""

from __future__ import annotations

from typing import Any


class IntegrationError(Exception):
    """Base para falhas tratadas pela camada HTTP."""

    reason: str = "integration_error"
    http_status: int = 500

    def to_dict(self) -> dict[str, Any]:
        """Campos estruturados para a resposta de erro (sem o `ok`)."""
        return {"error": self.reason, "message": str(self)}


class ConfigError(IntegrationError):
    """Configuração obrigatória ausente."""

    reason = "config_error"
    http_status = 500

    def __init__(self, missing: list[str] | tuple[str, ...]) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing required environment variables: {', '.join(self.missing)}")

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "missing": self.missing}


class ValidationError(IntegrationError):
    """Campo enviado pelo chamador ausente ou inválido."""

    reason = "validation_error"
    http_status = 400

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"Missing required field: {field}")

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "field": self.field}


class UpstreamAuthError(IntegrationError):
    """Falha no endpoint de token (client credentials)."""

    reason = "upstream_auth_error"
    http_status = 500

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if self.status_code is not None:
            data["status"] = self.status_code
        if self.body is not None:
            data["details"] = self.body
        return data


class UpstreamError(IntegrationError):
    """Falha de uma chamada à API do provedor (perfil, investidor, patch, link).

    `status_code` é o status devolvido pelo provedor; None quando a falha foi
    de transporte (timeout ou conexão).
    """

    reason = "upstream_error"

    def __init__(
        self,
        step: str,
        status_code: int | None,
        body: Any = None,
        *,
        message: str | None = None,
        is_retryable: bool = False,
        is_timeout: bool = False,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message or f"Provider call failed at step '{step}'")
        self.step = step
        self.status_code = status_code
        self.body = body
        self.is_retryable = is_retryable
        self.is_timeout = is_timeout
        self.context = dict(context or {})

    @property
    def http_status(self) -> int:  # type: ignore[override]
        if self.status_code is not None:
            return self.status_code
        return 504 if self.is_timeout else 502

    def to_dict(self) -> dict[str, Any]:
        data = {**super().to_dict(), "step": self.step, "retryable": self.is_retryable}
        if self.status_code is not None:
            data["status"] = self.status_code
        if self.body is not None:
            data["details"] = self.body
        data.update(self.context)
        return data


class SignatureError(IntegrationError):
    """Assinatura do webhook inválida ou ausente."""

    reason = "invalid_signature"
    http_status = 401


class PayloadError(IntegrationError):
    """Payload do webhook malformado (após assinatura aceita)."""

    reason = "invalid_payload"
    http_status = 400
