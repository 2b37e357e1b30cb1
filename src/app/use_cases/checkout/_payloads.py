"""Mapeamento formulário → payloads da API DealMaker."""

from __future__ import annotations

from typing import Any

from app.domain.checkout import (
    InvestorFormInput,
    build_utm_tags,
    derive_accreditation,
)
from utils.errors import ValidationError

PROFILE_FORM_FIELDS: tuple[str, ...] = (
    "first_name",
    "last_name",
    "date_of_birth",
    "taxpayer_id",
    "phone_number",
    "country",
    "street_address",
    "unit2",
    "city",
    "region",
    "postal_code",
)


def parse_investment_value(form: InvestorFormInput) -> int | float:
    """Valor do investimento como número positivo.

    Raises:
        ValidationError: Se ausente, não numérico ou <= 0.
    """
    raw = form.get("investment_value")
    if raw is None:
        raise ValidationError("investment_value")
    try:
        value = float(raw.replace(",", ""))
    except ValueError as exc:
        raise ValidationError(
            "investment_value", "investment_value must be a number"
        ) from exc
    if value != value or value <= 0 or value == float("inf"):
        raise ValidationError("investment_value", "investment_value must be positive")
    return int(value) if value.is_integer() else value


def email_local_part(email: str) -> str:
    local, _, _ = email.partition("@")
    return local or email


def build_profile_payload(form: InvestorFormInput) -> dict[str, Any]:
    """Payload do perfil individual (enviado form-encoded)."""
    accreditation = derive_accreditation(form.is_accredited, form.get("country"))
    payload: dict[str, Any] = {
        "email": form.get("email"),
        "us_accredited_category": accreditation.us_accredited_category,
        "ca_accredited_investor": accreditation.ca_accredited_investor,
    }
    for name in PROFILE_FORM_FIELDS:
        payload[name] = form.get(name)
    return payload


def build_investor_payload(
    form: InvestorFormInput,
    *,
    investment_value: int | float,
    investor_profile_id: str | None = None,
    placeholder_last_name: str | None = None,
    tagging: bool = False,
) -> dict[str, Any]:
    """Payload do investidor do deal (JSON). Chaves com None são omitidas.

    Com `placeholder_last_name`, nome e sobrenome ausentes recebem defaults
    (parte local do email / placeholder).
    """
    email = form.get("email")
    first_name = form.get("first_name")
    last_name = form.get("last_name")
    if placeholder_last_name is not None and email:
        first_name = first_name or email_local_part(email)
        last_name = last_name or placeholder_last_name

    payload: dict[str, Any] = {
        "email": email,
        "email_confirmation": email,
        "investor_profile_id": investor_profile_id,
        "first_name": first_name,
        "last_name": last_name,
        "phone_number": form.get("phone_number"),
        "investment_value": investment_value,
        "allocation_unit": "amount",
        "state": "draft",
    }
    if tagging:
        tags = build_utm_tags(form)
        if tags:
            payload["tags"] = tags
    return {key: value for key, value in payload.items() if value is not None}
