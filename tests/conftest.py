"""Shared test fixtures. The suite runs entirely in memory."""

import pytest

from auth.config import AuthConfig
from core.config import SiteConfig
from core.event_bus import EventBus
from core.models import ValuationContact, ValuationProperty
from core.services.lead_service import LeadService
from core.services.valuation_service import ValuationService
from core.storage import MemoryBlobStore
from utils.admin_context import clear_current_admin


# =============================================================================
# CONSTANTS
# =============================================================================

TEST_ADMIN_USER = "admin"
TEST_ADMIN_PASS = "correct-horse-battery-staple"
TEST_JWT_SECRET = "test-jwt-secret-with-enough-length-for-hs256"


@pytest.fixture(autouse=True)
def reset_admin_context():
    """Ensure clean admin context before and after each test."""
    clear_current_admin()
    yield
    clear_current_admin()


# =============================================================================
# CONFIG FIXTURES
# =============================================================================


@pytest.fixture
def auth_config() -> AuthConfig:
    return AuthConfig(
        admin_username=TEST_ADMIN_USER,
        admin_password=TEST_ADMIN_PASS,
        jwt_secret=TEST_JWT_SECRET,
    )


@pytest.fixture
def site_config() -> SiteConfig:
    return SiteConfig(site_base_url="https://site.test")


# =============================================================================
# STORAGE FIXTURES
# =============================================================================


@pytest.fixture
def blobs() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture
def valuation_service(blobs) -> ValuationService:
    return ValuationService(blobs)


@pytest.fixture
def lead_service(blobs) -> LeadService:
    return LeadService(blobs)


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


# =============================================================================
# DOMAIN DATA
# =============================================================================


@pytest.fixture
def contact() -> ValuationContact:
    return ValuationContact(
        first_name="Dana",
        last_name="Whitfield",
        email="dana@example.com",
        phone="555-0100",
    )


@pytest.fixture
def property_data() -> ValuationProperty:
    """The worked example: NOI 100250, estimates 835417 / 1253125."""
    return ValuationProperty(
        property_address="123 Main St, Springfield, IL 62701",
        city="Springfield",
        state="IL",
        zip_code="62701",
        annual_rent=120000,
        annual_property_taxes=8000,
        taxes_reimbursed=False,
        annual_insurance=3000,
        square_footage=5000,
    )
