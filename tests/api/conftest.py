"""API test fixtures - the full app over an in-memory blob store."""

from unittest.mock import Mock

import pytest
from starlette.testclient import TestClient

from app import create_app
from clients.email_client import EmailGatewayClient


# =============================================================================
# APP FIXTURES
# =============================================================================


@pytest.fixture
def email_client():
    """Gateway double; every send succeeds unless a test says otherwise."""
    return Mock(spec=EmailGatewayClient)


@pytest.fixture
def app(site_config, auth_config, blobs, email_client):
    return create_app(
        site_config=site_config,
        auth_config=auth_config,
        blob_store=blobs,
        email_client=email_client,
    )


@pytest.fixture
def services(app) -> dict:
    return app.state.services


# =============================================================================
# CLIENT FIXTURES
# =============================================================================


@pytest.fixture
def client(app):
    """Anonymous test client."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def admin_client(app, auth_config):
    """Test client holding a session cookie from a real login."""
    c = TestClient(app, raise_server_exceptions=False)
    response = c.post("/admin/login", json={
        "username": auth_config.admin_username,
        "password": auth_config.admin_password,
    })
    assert response.status_code == 200
    return c


# =============================================================================
# PAYLOADS
# =============================================================================


@pytest.fixture
def contact_payload() -> dict:
    return {
        "first_name": "Dana",
        "last_name": "Whitfield",
        "email": "dana@example.com",
        "phone": "555-0100",
    }


@pytest.fixture
def property_payload() -> dict:
    return {
        "property_address": "123 Main St, Springfield, IL 62701",
        "city": "Springfield",
        "state": "IL",
        "zip_code": "62701",
        "annual_rent": 120000,
        "annual_property_taxes": 8000,
        "taxes_reimbursed": False,
        "annual_insurance": 3000,
        "square_footage": 5000,
    }
