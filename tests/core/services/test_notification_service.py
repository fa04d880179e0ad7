"""Tests for NotificationService - valuation report email."""

from unittest.mock import Mock

import pytest
import responses

from clients.email_client import EmailGatewayClient, EmailGatewayError
from clients.geocoding_client import GEOCODE_URL, GeocodeResult, GeocodingClient
from core.exceptions import DependencyError
from core.services.intake_service import IntakeService
from core.services.notification_service import NotificationService, format_currency, report_subject


@pytest.fixture
def completed(valuation_service, event_bus, contact, property_data):
    intake = IntakeService(valuation_service, event_bus)
    valuation = intake.start_intake(contact)
    return intake.complete_intake(valuation.id, property_data)


@pytest.fixture
def email_client():
    return Mock(spec=EmailGatewayClient)


@pytest.fixture
def geocoder():
    mock = Mock(spec=GeocodingClient)
    mock.geocode.return_value = GeocodeResult(
        lat=39.78, lng=-89.65, formatted_address="123 Main St, Springfield, IL 62701, USA"
    )
    mock.street_view_url.return_value = "https://maps.example/streetview?loc=39.78,-89.65"
    return mock


def _service(email_client, geocoder=None) -> NotificationService:
    return NotificationService(
        email_client,
        from_email="reports@site.test",
        site_base_url="https://site.test/",
        geocoder=geocoder,
    )


class TestFormatting:

    def test_currency(self):
        assert format_currency(835417) == "$835,417"
        assert format_currency(0) == "$0"
        assert format_currency(-1250.4) == "-$1,250"

    def test_subject(self, completed):
        assert report_subject(completed) == (
            "Your Post Office Property Valuation - $835,417 - $1,253,125"
        )


class TestRenderReport:

    def test_contains_estimates_and_breakdown(self, completed, email_client):
        html = _service(email_client).render_report(completed)

        assert "Dana Whitfield" in html
        assert "$835,417" in html
        assert "$1,253,125" in html
        assert "12% cap rate" in html
        assert "8% cap rate" in html
        assert "$100,250" in html  # net operating income
        assert "https://site.test/contact" in html

    def test_without_geocoder_uses_entered_address(self, completed, email_client):
        html = _service(email_client).render_report(completed)

        assert "123 Main St, Springfield, IL 62701" in html
        assert "<img" not in html

    def test_with_geocoder_adds_street_view(self, completed, email_client, geocoder):
        html = _service(email_client, geocoder).render_report(completed)

        assert "62701, USA" in html
        assert 'src="https://maps.example/streetview?loc=39.78,-89.65"' in html
        geocoder.geocode.assert_called_once_with("123 Main St, Springfield, IL 62701")

    def test_geocoder_miss_falls_back(self, completed, email_client, geocoder):
        geocoder.geocode.return_value = None
        html = _service(email_client, geocoder).render_report(completed)

        assert "<img" not in html
        geocoder.street_view_url.assert_not_called()

    @responses.activate
    def test_non_object_geocode_response_falls_back(self, completed, email_client):
        responses.add(responses.GET, GEOCODE_URL, json=["unexpected"])
        service = _service(email_client, GeocodingClient(api_key="maps-key"))

        html = service.render_report(completed)

        assert "123 Main St, Springfield, IL 62701" in html
        assert "<img" not in html

    def test_user_input_is_escaped(self, valuation_service, completed, email_client):
        valuation_service.update(completed.id, {"first_name": "<script>x</script>"})
        html = _service(email_client).render_report(valuation_service.get(completed.id))

        assert "<script>" not in html
        assert "&lt;script&gt;" in html


class TestSendValuationReport:

    def test_sends_to_owner(self, completed, email_client):
        assert _service(email_client).send_valuation_report(completed) is True

        kwargs = email_client.send_html.call_args.kwargs
        assert kwargs["to"] == "dana@example.com"
        assert kwargs["from_email"] == "reports@site.test"
        assert kwargs["subject"].endswith("$835,417 - $1,253,125")
        assert "<html>" in kwargs["html"]

    def test_gateway_failure_becomes_dependency_error(self, completed, email_client):
        email_client.send_html.side_effect = EmailGatewayError("Gateway error: quota")

        with pytest.raises(DependencyError, match="quota"):
            _service(email_client).send_valuation_report(completed)

    def test_not_configured_skips(self, completed):
        service = _service(None)
        assert service.enabled is False
        assert service.send_valuation_report(completed) is False

    def test_requires_estimates(self, valuation_service, contact, email_client):
        valuation = valuation_service.create(contact)

        with pytest.raises(ValueError, match="no estimates"):
            _service(email_client).send_valuation_report(valuation)
        email_client.send_html.assert_not_called()
