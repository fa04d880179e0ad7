"""
Valuation report email.

Given a completed valuation, geocodes the address (optional), builds a
street view image URL, renders the HTML report and hands it to the email
gateway. Collaborator failures surface as DependencyError; the intake path
only reaches this through the event bus, which logs and swallows them.
"""

import logging

from jinja2 import Environment, StrictUndefined

from clients.email_client import EmailGatewayClient, EmailGatewayError
from clients.geocoding_client import GeocodingClient
from core.calculator import DEFAULT_ASSUMPTIONS, net_operating_income
from core.config import ValuationAssumptions
from core.exceptions import DependencyError
from core.models import Valuation, ValuationProperty
from utils.timezone import now_utc

logger = logging.getLogger(__name__)


REPORT_TEMPLATE = """\
<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Your USPS Property Valuation Report</title>
</head>
<body style="margin: 0; padding: 0; font-family: -apple-system, 'Segoe UI', sans-serif; background-color: #F8FAFC;">
  <table width="100%" cellpadding="0" cellspacing="0" style="padding: 40px 20px;">
    <tr><td align="center">
      <table width="600" cellpadding="0" cellspacing="0" style="background-color: #FFFFFF; border-radius: 12px;">
        <tr>
          <td style="background-color: #004B87; padding: 40px 30px; text-align: center;">
            <h1 style="color: #FFFFFF; font-size: 32px; margin: 0 0 10px 0;">Your Property Valuation Report</h1>
            <p style="color: #E0E7EE; font-size: 16px; margin: 0;">Confidential Analysis for {{ full_name }}</p>
          </td>
        </tr>
        <tr>
          <td style="padding: 30px; border-bottom: 2px solid #E5E7EB;">
            <h2 style="color: #0D1B2A; font-size: 18px; margin: 0 0 10px 0;">Property Address</h2>
            <p style="color: #64748B; font-size: 16px; margin: 0;">{{ address }}</p>
          </td>
        </tr>
        {% if street_view_url %}
        <tr>
          <td style="padding: 0 30px 30px 30px;">
            <img src="{{ street_view_url }}" alt="Property Street View" style="width: 100%; max-width: 600px; border-radius: 8px; margin: 20px 0;" />
            <p style="color: #94A3B8; font-size: 12px; margin: 5px 0 0 0; font-style: italic;">Imagery &copy; Google. Street View provided for reference only.</p>
          </td>
        </tr>
        {% endif %}
        <tr>
          <td style="padding: 30px; background-color: #F8FAFC;">
            <h2 style="color: #0D1B2A; font-size: 22px; margin: 0 0 20px 0; text-align: center;">Estimated Property Value</h2>
            <table width="100%" cellpadding="0" cellspacing="0">
              <tr>
                <td width="48%" style="border: 2px solid #E0E7EE; border-radius: 8px; padding: 20px; text-align: center;">
                  <p style="color: #64748B; font-size: 14px; font-weight: 600; margin: 0 0 10px 0;">CONSERVATIVE ESTIMATE</p>
                  <p style="color: #004B87; font-size: 36px; font-weight: 700; margin: 0 0 5px 0;">{{ conservative | currency }}</p>
                  <p style="color: #94A3B8; font-size: 12px; margin: 0;">{{ conservative_rate | percent }} cap rate</p>
                </td>
                <td width="4%"></td>
                <td width="48%" style="border: 2px solid #004B87; border-radius: 8px; padding: 20px; text-align: center;">
                  <p style="color: #004B87; font-size: 14px; font-weight: 600; margin: 0 0 10px 0;">OPTIMISTIC ESTIMATE</p>
                  <p style="color: #004B87; font-size: 36px; font-weight: 700; margin: 0 0 5px 0;">{{ optimistic | currency }}</p>
                  <p style="color: #94A3B8; font-size: 12px; margin: 0;">{{ optimistic_rate | percent }} cap rate</p>
                </td>
              </tr>
            </table>
          </td>
        </tr>
        <tr>
          <td style="padding: 30px;">
            <h3 style="color: #0D1B2A; font-size: 18px; margin: 0 0 15px 0;">Valuation Breakdown</h3>
            <table width="100%" cellpadding="8" cellspacing="0" style="border-collapse: collapse;">
              {% for label, amount in breakdown %}
              <tr style="border-bottom: 1px solid #E5E7EB;">
                <td style="color: #64748B; font-size: 14px; padding: 10px 0;">{{ label }}</td>
                <td style="color: #0D1B2A; font-size: 14px; font-weight: 600; text-align: right; padding: 10px 0;">{{ amount | currency }}</td>
              </tr>
              {% endfor %}
              <tr>
                <td style="color: #004B87; font-size: 16px; font-weight: 700; padding: 15px 0 10px 0;">Net Operating Income</td>
                <td style="color: #004B87; font-size: 16px; font-weight: 700; text-align: right; padding: 15px 0 10px 0;">{{ noi | currency }}</td>
              </tr>
            </table>
          </td>
        </tr>
        <tr>
          <td style="padding: 30px; background-color: #F0F9FF; border-top: 2px solid #E5E7EB;">
            <h3 style="color: #0D1B2A; font-size: 18px; margin: 0 0 15px 0;">What Happens Next?</h3>
            <ul style="color: #475569; font-size: 14px; line-height: 1.8; margin: 0; padding-left: 20px;">
              <li>Our team will review your property details within 24-48 hours</li>
              <li>We'll connect you with qualified buyers from our nationwide network</li>
              <li>You'll receive a no-obligation cash offer with <strong>zero broker fees</strong></li>
              <li>Close in as few as 45 days with full transparency throughout</li>
            </ul>
          </td>
        </tr>
        <tr>
          <td style="padding: 30px; text-align: center;">
            <a href="{{ site_base_url }}/contact" style="display: inline-block; background-color: #004B87; color: #FFFFFF; text-decoration: none; padding: 16px 32px; border-radius: 6px; font-size: 16px; font-weight: 600;">Contact Us for More Information</a>
          </td>
        </tr>
        <tr>
          <td style="padding: 30px; background-color: #F8FAFC; border-top: 2px solid #E5E7EB; text-align: center;">
            <p style="color: #94A3B8; font-size: 12px; margin: 0 0 10px 0;">This valuation is an estimate only and is not a formal appraisal.</p>
            <p style="color: #94A3B8; font-size: 12px; margin: 0 0 10px 0;">We own multiple post offices and charge zero broker fees.</p>
            <p style="color: #94A3B8; font-size: 12px; margin: 0;">&copy; {{ year }} Sell My Post Office. All rights reserved.</p>
          </td>
        </tr>
      </table>
    </td></tr>
  </table>
</body>
</html>
"""


def format_currency(value) -> str:
    """Whole-dollar amount with thousands separators, e.g. '$835,417'."""
    amount = round(float(value))
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,}"


def _format_percent(rate: float) -> str:
    return f"{rate * 100:g}%"


_env = Environment(autoescape=True, undefined=StrictUndefined)
_env.filters["currency"] = format_currency
_env.filters["percent"] = _format_percent
_report_template = _env.from_string(REPORT_TEMPLATE)


def report_subject(valuation: Valuation) -> str:
    return (
        "Your Post Office Property Valuation - "
        f"{format_currency(valuation.conservative_estimate)} - "
        f"{format_currency(valuation.optimistic_estimate)}"
    )


class NotificationService:
    """Sends valuation reports by email."""

    def __init__(
        self,
        email_client: EmailGatewayClient | None,
        from_email: str,
        site_base_url: str,
        geocoder: GeocodingClient | None = None,
        assumptions: ValuationAssumptions = DEFAULT_ASSUMPTIONS,
    ):
        self.email_client = email_client
        self.from_email = from_email
        self.site_base_url = site_base_url.rstrip("/")
        self.geocoder = geocoder
        self.assumptions = assumptions

    @property
    def enabled(self) -> bool:
        return self.email_client is not None

    def render_report(self, valuation: Valuation) -> str:
        """
        Render the HTML report for a completed valuation.

        Geocoding, when configured, supplies the formatted address and the
        street view image; otherwise the address is shown as entered.
        """
        address = valuation.property_address or ""
        street_view_url = None

        if self.geocoder is not None and address:
            location = self.geocoder.geocode(address)
            if location is not None:
                address = location.formatted_address
                street_view_url = self.geocoder.street_view_url(location.lat, location.lng)

        inputs = ValuationProperty.model_validate(valuation.model_dump())
        maintenance = inputs.square_footage * self.assumptions.maintenance_cost_per_sqft
        taxes_label = "Property Taxes (Reimbursed)" if inputs.taxes_reimbursed else "Property Taxes"
        sqft = f"{inputs.square_footage:,.0f}"

        breakdown = [
            ("Annual Rent", inputs.annual_rent),
            (taxes_label, 0 if inputs.taxes_reimbursed else inputs.annual_property_taxes),
            ("Insurance", inputs.annual_insurance),
            (f"Maintenance ({sqft} sq ft x ${self.assumptions.maintenance_cost_per_sqft:.2f})", maintenance),
        ]

        return _report_template.render(
            full_name=valuation.full_name,
            address=address,
            street_view_url=street_view_url,
            conservative=valuation.conservative_estimate,
            optimistic=valuation.optimistic_estimate,
            conservative_rate=self.assumptions.conservative_cap_rate,
            optimistic_rate=self.assumptions.optimistic_cap_rate,
            breakdown=breakdown,
            noi=net_operating_income(inputs, self.assumptions),
            site_base_url=self.site_base_url,
            year=now_utc().year,
        )

    def send_valuation_report(self, valuation: Valuation) -> bool:
        """
        Email the valuation report to the property owner.

        Args:
            valuation: Completed valuation (both estimates set)

        Returns:
            True if sent, False if email is not configured

        Raises:
            ValueError: If the valuation has no estimates
            DependencyError: If the email gateway rejects or can't be reached
        """
        if not valuation.has_estimates:
            raise ValueError(f"Valuation {valuation.id} has no estimates to report")

        if not self.enabled:
            logger.warning(f"Email not configured - skipping report for valuation {valuation.id}")
            return False

        html = self.render_report(valuation)

        try:
            self.email_client.send_html(
                to=valuation.email,
                subject=report_subject(valuation),
                html=html,
                from_email=self.from_email,
            )
        except EmailGatewayError as e:
            raise DependencyError(f"Valuation report for {valuation.id} not sent: {e}") from e

        logger.info(f"Valuation report sent for {valuation.id}")
        return True
