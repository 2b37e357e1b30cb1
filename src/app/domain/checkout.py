"""Checkout: modelos do fluxo de investimento.

O formulário do site chega como um mapeamento plano campo → valor.
Nada aqui é persistido: InvestorFormInput e CheckoutResult vivem
apenas durante uma requisição de checkout.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

MINIMAL_REQUIRED_FIELDS: tuple[str, ...] = ("email", "investment_value")

# Ordem de validação do modo strict
PROFILE_REQUIRED_FIELDS: tuple[str, ...] = (
    "first_name",
    "last_name",
    "phone_number",
    "date_of_birth",
    "taxpayer_id",
    "country",
    "street_address",
    "city",
    "region",
    "postal_code",
)

STRICT_REQUIRED_FIELDS: tuple[str, ...] = (
    "email",
    *PROFILE_REQUIRED_FIELDS,
    "investment_value",
)

UTM_FIELDS: tuple[str, ...] = (
    "utm_source",
    "utm_medium",
    "utm_campaign",
    "utm_content",
    "utm_term",
)

CANADA_CODES = frozenset({"CA", "CANADA"})
_TRUTHY = frozenset({"true", "1", "yes", "on"})


class CheckoutMode(str, Enum):
    """Modo de operação do checkout."""

    STRICT = "strict"  # perfil primeiro, tudo obrigatório
    INVESTMENT_FIRST = "investment_first"  # investidor primeiro, perfil best-effort


class CheckoutStep(str, Enum):
    """Etapas (chamadas ao provedor) de um checkout."""

    PROFILE = "profile"
    INVESTOR = "investor"
    PATCH = "patch"
    OTP_LINK = "otp_link"


class StepPolicy(str, Enum):
    """O que fazer quando uma etapa falha."""

    FATAL = "fatal"  # aborta o checkout e devolve o erro do provedor
    BEST_EFFORT = "best_effort"  # loga e segue


@dataclass(frozen=True)
class InvestorFormInput:
    """Dados do formulário de investimento."""

    fields: Mapping[str, Any]

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> InvestorFormInput:
        """Cria a partir do body JSON já parseado."""
        return cls(fields=dict(data))

    def get(self, name: str) -> str | None:
        """Valor textual do campo, ou None se ausente/vazio."""
        value = self.fields.get(name)
        if value is None or isinstance(value, bool):
            return None
        text = str(value).strip()
        return text or None

    def has(self, name: str) -> bool:
        return self.get(name) is not None

    def first_missing(self, names: tuple[str, ...]) -> str | None:
        """Primeiro campo ausente, na ordem dada."""
        for name in names:
            if not self.has(name):
                return name
        return None

    @property
    def is_accredited(self) -> bool:
        value = self.fields.get("is_accredited")
        if isinstance(value, bool):
            return value
        if value is None:
            return False
        return str(value).strip().lower() in _TRUTHY

    @property
    def has_full_profile(self) -> bool:
        return self.first_missing(PROFILE_REQUIRED_FIELDS) is None


@dataclass(frozen=True)
class UsCategoryPending:
    """Categoria US fica em aberto; a UI do provedor obriga a escolha."""

    us_accredited_category: None = None
    ca_accredited_investor: bool = False


@dataclass(frozen=True)
class CanadianAccredited:
    """Investidor canadense, com o flag de credenciamento."""

    accredited: bool

    @property
    def us_accredited_category(self) -> None:
        return None

    @property
    def ca_accredited_investor(self) -> bool:
        return self.accredited


AccreditationStatus = UsCategoryPending | CanadianAccredited


def derive_accreditation(is_accredited: bool, country: str | None) -> AccreditationStatus:
    """Deriva o status de credenciamento a partir do país.

    Nunca define categoria US programaticamente, mesmo que o formulário
    tenha enviado uma.
    """
    if country and country.strip().upper() in CANADA_CODES:
        return CanadianAccredited(accredited=is_accredited)
    return UsCategoryPending()


def build_utm_tags(form: InvestorFormInput) -> list[str]:
    """Tags "chave=valor" para cada UTM presente, na ordem fixa de UTM_FIELDS."""
    return [f"{name}={form.get(name)}" for name in UTM_FIELDS if form.has(name)]


@dataclass(frozen=True)
class CheckoutResult:
    """Resultado de um checkout concluído.

    `deal_investor_id` sempre referencia um investidor aceito pelo provedor.
    `investor_profile_id` pode ser None no modo investment_first.
    """

    redirect_url: str
    deal_investor_id: str
    investor_profile_id: str | None = None
    profile_created: bool = False
    profile_linked: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Converte para o body JSON da resposta."""
        return {
            "redirect_url": self.redirect_url,
            "deal_investor_id": self.deal_investor_id,
            "investor_profile_id": self.investor_profile_id,
            "profile_created": self.profile_created,
            "profile_linked": self.profile_linked,
        }
