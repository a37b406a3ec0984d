"""Integration tests for the HTTP-backed providers."""

import json
from decimal import Decimal
from urllib.parse import parse_qs
from uuid import uuid4

import httpx
import pytest

from src.application.interfaces.providers import PaymentSessionRequest
from src.domain.exceptions.location_error import LocationUnresolvedError
from src.domain.exceptions.payment_error import PaymentInitiationError
from src.domain.exceptions.provider_error import (
    ProviderAPIError,
    ProviderConfigurationError,
)
from src.domain.value_objects.location import Coordinates, LocationReference
from src.infrastructure.external.http_client import HTTPClient
from src.infrastructure.providers.google_maps.verifier import GoogleMapsLocationVerifier
from src.infrastructure.providers.resend.mailer import ResendProposalMailer
from src.infrastructure.providers.stripe.provider import StripePaymentProvider

BASE = Coordinates(lat=28.5383, lng=-81.3792)


@pytest.mark.integration
class TestHTTPClient:
    """Integration tests for the retrying HTTP client."""

    @pytest.mark.asyncio
    async def test_retries_server_errors(self):
        """Test 5xx replies are retried until one succeeds."""
        calls = []

        def handler(request):
            calls.append(request)
            if len(calls) < 3:
                return httpx.Response(503)
            return httpx.Response(200, json={"ok": True})

        async with HTTPClient(
            "test", max_retries=3, backoff_factor=0, transport=httpx.MockTransport(handler)
        ) as client:
            response = await client.get("https://api.test/ping")

        assert response.status_code == 200
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_client_errors_not_retried(self):
        """Test 4xx replies are returned at once."""
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(400, json={"error": "bad"})

        async with HTTPClient(
            "test", max_retries=3, backoff_factor=0, transport=httpx.MockTransport(handler)
        ) as client:
            response = await client.post("https://api.test/things", json={})

        assert response.status_code == 400
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_network_error_exhausts_retries(self):
        """Test connection failures surface as provider errors."""

        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        async with HTTPClient(
            "test", max_retries=1, backoff_factor=0, transport=httpx.MockTransport(handler)
        ) as client:
            with pytest.raises(ProviderAPIError) as exc_info:
                await client.get("https://api.test/ping")

        assert exc_info.value.status_code == 0

    @pytest.mark.asyncio
    async def test_timeout(self):
        """Test timeouts surface as 408."""

        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        async with HTTPClient(
            "test", max_retries=0, backoff_factor=0, transport=httpx.MockTransport(handler)
        ) as client:
            with pytest.raises(ProviderAPIError) as exc_info:
                await client.get("https://api.test/ping")

        assert exc_info.value.status_code == 408


@pytest.mark.integration
class TestStripePaymentProvider:
    """Integration tests for StripePaymentProvider."""

    @pytest.fixture
    def session_request(self):
        """Deposit session request for 1070.00."""
        return PaymentSessionRequest(
            proposal_id=uuid4(),
            amount=Decimal("1070.00"),
            currency="usd",
            customer_name="Dana Whitfield",
            customer_email="dana@example.com",
            description="Deposit for proposal",
            success_url="https://proposals.test/p/1?payment=success",
            cancel_url="https://proposals.test/p/1?payment=cancelled",
            idempotency_key="deposit-abc",
        )

    def test_requires_secret_key(self):
        """Test the provider refuses to start without a key."""
        with pytest.raises(ProviderConfigurationError):
            StripePaymentProvider(secret_key=None, webhook_secret="whsec")

    @pytest.mark.asyncio
    async def test_create_deposit_session(self, session_request):
        """Test the checkout session is created with minor-unit amounts."""
        captured = {}

        def handler(request):
            captured["request"] = request
            return httpx.Response(
                200, json={"id": "cs_live_1", "url": "https://checkout.stripe.test/cs_live_1"}
            )

        provider = StripePaymentProvider(
            secret_key="sk_test_123",
            webhook_secret="whsec",
            base_url="https://stripe.test/v1",
            transport=httpx.MockTransport(handler),
        )

        session = await provider.create_deposit_session(session_request)

        assert session.session_id == "cs_live_1"
        assert session.redirect_url == "https://checkout.stripe.test/cs_live_1"

        request = captured["request"]
        assert str(request.url) == "https://stripe.test/v1/checkout/sessions"
        assert request.headers["Authorization"] == "Bearer sk_test_123"
        assert request.headers["Idempotency-Key"] == "deposit-abc"
        form = parse_qs(request.content.decode())
        assert form["line_items[0][price_data][unit_amount]"] == ["107000"]
        assert form["metadata[proposal_id]"] == [str(session_request.proposal_id)]
        assert form["client_reference_id"] == [str(session_request.proposal_id)]

    @pytest.mark.asyncio
    async def test_rejected_session(self, session_request):
        """Test API rejections become initiation errors."""
        provider = StripePaymentProvider(
            secret_key="sk_test_123",
            webhook_secret="whsec",
            transport=httpx.MockTransport(
                lambda request: httpx.Response(402, json={"error": {"message": "declined"}})
            ),
        )

        with pytest.raises(PaymentInitiationError) as exc_info:
            await provider.create_deposit_session(session_request)

        assert exc_info.value.provider == "stripe"


@pytest.mark.integration
class TestGoogleMapsLocationVerifier:
    """Integration tests for GoogleMapsLocationVerifier."""

    def _handler(self, geocode_body, distance_body):
        def handler(request):
            if request.url.path.endswith("geocode/json"):
                return httpx.Response(200, json=geocode_body)
            return httpx.Response(200, json=distance_body)

        return handler

    def _verifier(self, handler):
        return GoogleMapsLocationVerifier(
            api_key="maps-key",
            base=BASE,
            base_url="https://maps.test/api",
            transport=httpx.MockTransport(handler),
        )

    @pytest.mark.asyncio
    async def test_verify_address(self):
        """Test geocoding and routing are combined."""
        handler = self._handler(
            {
                "status": "OK",
                "results": [
                    {
                        "formatted_address": "1200 Cypress Hollow Rd, Sanford, FL 32771",
                        "geometry": {"location": {"lat": 28.8, "lng": -81.27}},
                    }
                ],
            },
            {
                "status": "OK",
                "rows": [
                    {
                        "elements": [
                            {
                                "status": "OK",
                                "duration": {"value": 2400},
                                "distance": {"value": 40234},
                            }
                        ]
                    }
                ],
            },
        )

        result = await self._verifier(handler).verify(
            LocationReference(address="1200 Cypress Hollow Rd")
        )

        assert result.address == "1200 Cypress Hollow Rd, Sanford, FL 32771"
        assert result.coordinates == Coordinates(lat=28.8, lng=-81.27)
        assert result.duration_seconds == 2400
        assert result.distance_meters == 40234
        assert result.within_service_area is True

    @pytest.mark.asyncio
    async def test_zero_results(self):
        """Test an unknown address is unresolved."""
        handler = self._handler({"status": "ZERO_RESULTS", "results": []}, {})

        with pytest.raises(LocationUnresolvedError):
            await self._verifier(handler).verify(LocationReference(address="Nowhere Lane 0"))

    @pytest.mark.asyncio
    async def test_no_route(self):
        """Test a location without a driving route is unresolved."""
        handler = self._handler(
            {
                "status": "OK",
                "results": [{"geometry": {"location": {"lat": 25.0, "lng": -77.3}}}],
            },
            {"status": "OK", "rows": [{"elements": [{"status": "ZERO_RESULTS"}]}]},
        )

        with pytest.raises(LocationUnresolvedError, match="no driving route"):
            await self._verifier(handler).verify(LocationReference(place_id="ChIJ_island"))

    @pytest.mark.asyncio
    async def test_api_error(self):
        """Test provider errors are reported as unresolved locations."""
        verifier = self._verifier(lambda request: httpx.Response(403, text="denied"))

        with pytest.raises(LocationUnresolvedError) as exc_info:
            await verifier.verify(LocationReference(address="1200 Cypress Hollow Rd"))

        assert isinstance(exc_info.value.__cause__, ProviderAPIError)

    @pytest.mark.asyncio
    async def test_non_json_reply(self):
        """Test an HTML error page served with 200 is an unresolved location."""
        verifier = self._verifier(
            lambda request: httpx.Response(
                200, text="<html>maintenance</html>", headers={"Content-Type": "text/html"}
            )
        )

        with pytest.raises(LocationUnresolvedError) as exc_info:
            await verifier.verify(LocationReference(address="1200 Cypress Hollow Rd"))

        assert isinstance(exc_info.value.__cause__, ProviderAPIError)
        assert exc_info.value.__cause__.status_code == 200


@pytest.mark.integration
class TestResendProposalMailer:
    """Integration tests for ResendProposalMailer."""

    @pytest.mark.asyncio
    async def test_send_proposal(self, draft_proposal):
        """Test the email is posted and its id returned."""
        captured = {}

        def handler(request):
            captured["body"] = json.loads(request.content)
            captured["headers"] = request.headers
            return httpx.Response(200, json={"id": "re_123"})

        mailer = ResendProposalMailer(
            api_key="re_key",
            from_email="Proposals <proposals@example.com>",
            transport=httpx.MockTransport(handler),
        )
        approve_url = f"https://proposals.test/p/{draft_proposal.id}?t=tok"

        email_id = await mailer.send_proposal(draft_proposal, approve_url)

        assert email_id == "re_123"
        assert captured["body"]["to"] == ["dana@example.com"]
        assert approve_url in captured["body"]["text"]
        assert captured["headers"]["Authorization"] == "Bearer re_key"

    @pytest.mark.asyncio
    async def test_send_failure(self, draft_proposal):
        """Test rejected sends raise provider errors."""
        mailer = ResendProposalMailer(
            api_key="re_key",
            from_email="Proposals <proposals@example.com>",
            transport=httpx.MockTransport(
                lambda request: httpx.Response(422, json={"message": "invalid to"})
            ),
        )

        with pytest.raises(ProviderAPIError) as exc_info:
            await mailer.send_proposal(draft_proposal, "https://proposals.test/p/1?t=x")

        assert exc_info.value.status_code == 422

    def test_requires_api_key(self):
        """Test the mailer refuses to start without a key."""
        with pytest.raises(ProviderConfigurationError):
            ResendProposalMailer(api_key="", from_email="proposals@example.com")
