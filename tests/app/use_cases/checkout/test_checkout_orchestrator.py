"""Testes para CheckoutOrchestrator."""

from __future__ import annotations

import logging

import pytest

from app.domain.checkout import CheckoutMode, InvestorFormInput
from app.use_cases.checkout import CheckoutConfig, CheckoutOrchestrator
from tests.fakes.fake_dealmaker import FakeDealmakerClient, FakeTokenProvider
from utils.errors import UpstreamError, ValidationError

FULL_FORM = {
    "email": "jane.doe@example.com",
    "first_name": "Jane",
    "last_name": "Doe",
    "phone_number": "+15555550100",
    "date_of_birth": "1990-04-01",
    "taxpayer_id": "123-45-6789",
    "country": "US",
    "street_address": "1 Main St",
    "city": "Austin",
    "region": "TX",
    "postal_code": "73301",
    "investment_value": "2500",
}


def _orchestrator(
    client: FakeDealmakerClient,
    mode: CheckoutMode = CheckoutMode.STRICT,
    **overrides: object,
) -> tuple[CheckoutOrchestrator, FakeTokenProvider]:
    token_provider = FakeTokenProvider()
    config = CheckoutConfig(
        deal_id="4127",
        mode=mode,
        app_base_url="https://app.example.test",
        **overrides,  # type: ignore[arg-type]
    )
    return CheckoutOrchestrator(config, token_provider, client), token_provider


def _form(**changes: object) -> InvestorFormInput:
    data = {**FULL_FORM, **changes}
    return InvestorFormInput.from_mapping({k: v for k, v in data.items() if v is not None})


class TestStrictMode:
    """Modo strict: perfil → investidor → link."""

    @pytest.mark.asyncio
    async def test_success_calls_steps_in_order(self) -> None:
        client = FakeDealmakerClient()
        orchestrator, _ = _orchestrator(client)

        result = await orchestrator.run(_form())

        assert client.calls == ["profile", "investor", "otp_link"]
        assert result.investor_profile_id == "prof-1"
        assert result.deal_investor_id == "inv-1"
        assert result.redirect_url == "https://app.example.test/otp/xyz"
        assert result.profile_created is True
        assert client.payloads["investor"]["investor_profile_id"] == "prof-1"

    @pytest.mark.asyncio
    async def test_profile_failure_never_creates_investor(self) -> None:
        client = FakeDealmakerClient(failures={"profile": (422, {"errors": ["bad dob"]})})
        orchestrator, _ = _orchestrator(client)

        with pytest.raises(UpstreamError) as exc_info:
            await orchestrator.run(_form())

        assert client.calls == ["profile"]
        assert exc_info.value.step == "profile"
        assert exc_info.value.http_status == 422
        assert exc_info.value.body == {"errors": ["bad dob"]}

    @pytest.mark.asyncio
    async def test_missing_field_fails_before_any_call(self) -> None:
        client = FakeDealmakerClient()
        orchestrator, token_provider = _orchestrator(client)

        with pytest.raises(ValidationError) as exc_info:
            await orchestrator.run(_form(taxpayer_id="  "))

        assert exc_info.value.field == "taxpayer_id"
        assert client.calls == []
        assert token_provider.calls == 0

    @pytest.mark.asyncio
    async def test_invalid_investment_value(self) -> None:
        orchestrator, _ = _orchestrator(FakeDealmakerClient())

        with pytest.raises(ValidationError) as exc_info:
            await orchestrator.run(_form(investment_value="lots"))

        assert exc_info.value.field == "investment_value"

    @pytest.mark.asyncio
    async def test_otp_failure_carries_investor_id(self) -> None:
        client = FakeDealmakerClient(failures={"otp_link": (404, "not found")})
        orchestrator, _ = _orchestrator(client)

        with pytest.raises(UpstreamError) as exc_info:
            await orchestrator.run(_form())

        assert exc_info.value.step == "otp_link"
        assert exc_info.value.context["deal_investor_id"] == "inv-1"

    @pytest.mark.asyncio
    async def test_otp_response_without_link_is_upstream_error(self) -> None:
        client = FakeDealmakerClient(otp_link=None)
        orchestrator, _ = _orchestrator(client)

        with pytest.raises(UpstreamError) as exc_info:
            await orchestrator.run(_form())

        assert exc_info.value.step == "otp_link"
        assert exc_info.value.http_status == 502

    @pytest.mark.asyncio
    async def test_investor_access_link_skips_otp_call(self) -> None:
        client = FakeDealmakerClient(investor_access_link="https://app.example.test/direct")
        orchestrator, _ = _orchestrator(client)

        result = await orchestrator.run(_form())

        assert client.calls == ["profile", "investor"]
        assert result.redirect_url == "https://app.example.test/direct"

    @pytest.mark.asyncio
    async def test_computed_fallback_when_otp_step_disabled(self) -> None:
        client = FakeDealmakerClient()
        orchestrator, _ = _orchestrator(client, fetch_otp_link=False)

        result = await orchestrator.run(_form())

        assert "otp_link" not in client.calls
        assert (
            result.redirect_url
            == "https://app.example.test/deals/4127/investors/inv-1/otp_access"
        )

    @pytest.mark.asyncio
    async def test_investor_without_id_is_rejected(self) -> None:
        client = FakeDealmakerClient(investor_id=None)
        orchestrator, _ = _orchestrator(client)

        with pytest.raises(UpstreamError) as exc_info:
            await orchestrator.run(_form())

        assert exc_info.value.step == "investor"
        assert "otp_link" not in client.calls

    @pytest.mark.asyncio
    async def test_utm_tags_attached_to_investor(self) -> None:
        client = FakeDealmakerClient()
        orchestrator, _ = _orchestrator(client)

        await orchestrator.run(_form(utm_source="fb", utm_campaign="spring"))

        assert client.payloads["investor"]["tags"] == ["utm_source=fb", "utm_campaign=spring"]

    @pytest.mark.asyncio
    async def test_tagging_disabled_omits_tags(self) -> None:
        client = FakeDealmakerClient()
        orchestrator, _ = _orchestrator(client, tagging=False)

        await orchestrator.run(_form(utm_source="fb"))

        assert "tags" not in client.payloads["investor"]

    @pytest.mark.asyncio
    async def test_numeric_zero_ids_are_accepted(self) -> None:
        client = FakeDealmakerClient(profile_id=0, investor_id=0)
        orchestrator, _ = _orchestrator(client)

        result = await orchestrator.run(_form())

        assert result.investor_profile_id == "0"
        assert result.deal_investor_id == "0"
        assert client.calls == ["profile", "investor", "otp_link"]


class TestInvestmentFirstMode:
    """Modo investment_first: investidor primeiro, perfil best-effort."""

    @pytest.mark.asyncio
    async def test_minimal_form_defaults_names(self) -> None:
        client = FakeDealmakerClient()
        orchestrator, _ = _orchestrator(client, CheckoutMode.INVESTMENT_FIRST)
        form = InvestorFormInput.from_mapping(
            {"email": "sam.smith@example.com", "investment_value": 1000}
        )

        result = await orchestrator.run(form)

        investor_payload = client.payloads["investor"]
        assert investor_payload["first_name"] == "sam.smith"
        assert investor_payload["last_name"] == "Investor"
        assert investor_payload["investment_value"] == 1000
        assert "investor_profile_id" not in investor_payload
        assert client.calls == ["investor", "otp_link"]
        assert result.profile_created is False
        assert result.investor_profile_id is None

    @pytest.mark.asyncio
    async def test_missing_email_is_validation_error(self) -> None:
        orchestrator, _ = _orchestrator(FakeDealmakerClient(), CheckoutMode.INVESTMENT_FIRST)

        with pytest.raises(ValidationError) as exc_info:
            await orchestrator.run(InvestorFormInput.from_mapping({"investment_value": 10}))

        assert exc_info.value.field == "email"

    @pytest.mark.asyncio
    async def test_full_profile_is_created_and_linked(self) -> None:
        client = FakeDealmakerClient()
        orchestrator, _ = _orchestrator(client, CheckoutMode.INVESTMENT_FIRST)

        result = await orchestrator.run(_form())

        assert client.calls == ["investor", "profile", "patch", "otp_link"]
        assert client.payloads["patch"] == {"investor_profile_id": "prof-1"}
        assert result.investor_profile_id == "prof-1"
        assert result.profile_created is True
        assert result.profile_linked is True

    @pytest.mark.asyncio
    async def test_profile_failure_is_swallowed(self, caplog: pytest.LogCaptureFixture) -> None:
        client = FakeDealmakerClient(failures={"profile": (500, "boom")})
        orchestrator, _ = _orchestrator(client, CheckoutMode.INVESTMENT_FIRST)

        with caplog.at_level(logging.WARNING):
            result = await orchestrator.run(_form())

        assert result.deal_investor_id == "inv-1"
        assert result.investor_profile_id is None
        assert result.profile_created is False
        assert "patch" not in client.calls
        assert any(record.getMessage() == "checkout_step_degraded" for record in caplog.records)

    @pytest.mark.asyncio
    async def test_patch_failure_is_swallowed(self) -> None:
        client = FakeDealmakerClient(failures={"patch": (409, "conflict")})
        orchestrator, _ = _orchestrator(client, CheckoutMode.INVESTMENT_FIRST)

        result = await orchestrator.run(_form())

        assert result.profile_created is True
        assert result.profile_linked is False
        assert result.redirect_url == "https://app.example.test/otp/xyz"

    @pytest.mark.asyncio
    async def test_investor_failure_is_fatal(self) -> None:
        client = FakeDealmakerClient(failures={"investor": (400, {"error": "dup"})})
        orchestrator, _ = _orchestrator(client, CheckoutMode.INVESTMENT_FIRST)

        with pytest.raises(UpstreamError) as exc_info:
            await orchestrator.run(_form())

        assert exc_info.value.http_status == 400
        assert client.calls == ["investor"]
