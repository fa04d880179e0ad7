"""
Outbound email through an HTTP gateway.

Each request body is signed with HMAC-SHA256 over the exact JSON bytes
sent; the gateway checks X-Signature against its copy of the secret and
X-API-Key against its key list.
"""

import hashlib
import hmac
import json
import logging

import requests

logger = logging.getLogger(__name__)


class EmailGatewayError(Exception):
    """The gateway could not be reached or refused the message."""


class EmailGatewayClient:
    """Signed JSON POSTs to the email gateway over a pooled session."""

    def __init__(self, gateway_url: str, api_key: str, hmac_secret: str, timeout: float = 10):
        """
        Args:
            gateway_url: Gateway send endpoint
            api_key: Sent as X-API-Key
            hmac_secret: Signing key for X-Signature
            timeout: Seconds before a send is abandoned

        Raises:
            ValueError: If any credential is empty
        """
        for name, value in (("gateway_url", gateway_url), ("api_key", api_key), ("hmac_secret", hmac_secret)):
            if not value:
                raise ValueError(f"{name} is required")

        self.gateway_url = gateway_url
        self.timeout = timeout
        self._secret = hmac_secret.encode("utf-8")
        self._session = requests.Session()
        self._session.headers.update({
            "Content-Type": "application/json",
            "X-API-Key": api_key,
        })

    def sign(self, body: str) -> str:
        """Hex HMAC-SHA256 of a request body."""
        return hmac.new(self._secret, body.encode("utf-8"), hashlib.sha256).hexdigest()

    def _post(self, payload: dict) -> None:
        body = json.dumps(payload, separators=(",", ":"))

        try:
            response = self._session.post(
                self.gateway_url,
                data=body,
                headers={"X-Signature": self.sign(body)},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise EmailGatewayError(f"Connection failed: {e}") from e

        try:
            result = response.json()
        except ValueError as e:
            raise EmailGatewayError(
                f"Gateway returned non-JSON ({response.status_code}): {response.text[:200]}"
            ) from e

        if response.status_code != 200 or not result.get("success"):
            raise EmailGatewayError(
                f"Gateway error ({response.status_code}): {result.get('message', 'Unknown error')}"
            )

    def send_html(self, to: str, subject: str, html: str, from_email: str) -> None:
        """
        Send one HTML message.

        Raises:
            EmailGatewayError: On connection failure or a rejected send
        """
        self._post({
            "type": "html",
            "email": to,
            "from": from_email,
            "subject": subject,
            "html": html,
        })
        logger.info(f"Email sent to {to}: {subject}")
