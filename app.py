"""
Application wiring.

Builds the stores, services and routers and returns the FastAPI app.
Run with:

    uvicorn app:create_app --factory
"""

import logging
import os

import uvicorn
from fastapi import FastAPI

from api.admin import create_admin_router
from api.blog import create_blog_router
from api.errors import register_error_handlers
from api.leads import create_leads_router
from api.middleware import RequestIDMiddleware
from api.base import success_response
from api.valuations import create_valuations_router
from auth.api import create_auth_router
from auth.config import AuthConfig
from auth.security_logger import SecurityLogger
from auth.security_middleware import AdminAuthMiddleware
from auth.service import AuthService
from auth.session import SessionManager
from clients.email_client import EmailGatewayClient
from clients.geocoding_client import GeocodingClient
from core.config import SiteConfig, load_settings
from core.event_bus import EventBus
from core.events import ValuationCompleted
from core.handlers.valuation_completed_handler import handle_valuation_completed
from core.services.admin_service import AdminService
from core.services.blog_service import BlogService
from core.services.intake_service import IntakeService
from core.services.lead_service import LeadService
from core.services.notification_service import NotificationService
from core.services.valuation_service import ValuationService
from core.storage import BlobStore, build_blob_store

logger = logging.getLogger(__name__)


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or os.environ.get("LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_services(
    site_config: SiteConfig,
    blob_store: BlobStore,
    email_client: EmailGatewayClient | None = None,
    geocoder: GeocodingClient | None = None,
) -> dict:
    """
    Construct every service and subscribe event handlers.

    Email and geocoding clients are built from configuration when not
    passed in; either may end up None, which disables that collaborator.
    """
    if email_client is None and site_config.email is not None:
        email_client = EmailGatewayClient(
            site_config.email.gateway_url,
            site_config.email.api_key,
            site_config.email.hmac_secret,
        )
    if geocoder is None and site_config.google_maps_api_key:
        geocoder = GeocodingClient(site_config.google_maps_api_key)

    event_bus = EventBus()

    valuation = ValuationService(blob_store)
    lead = LeadService(blob_store)
    blog = BlogService(blob_store)

    notification = NotificationService(
        email_client,
        from_email=site_config.email.from_email if site_config.email else "reports@sellmypostoffice.com",
        site_base_url=site_config.site_base_url,
        geocoder=geocoder,
        assumptions=site_config.assumptions,
    )

    intake = IntakeService(valuation, event_bus, assumptions=site_config.assumptions)
    admin = AdminService(valuation, lead, notification, max_page_size=site_config.max_page_size)

    event_bus.subscribe(ValuationCompleted, handle_valuation_completed(notification))

    return {
        "event_bus": event_bus,
        "valuation": valuation,
        "lead": lead,
        "blog": blog,
        "notification": notification,
        "intake": intake,
        "admin": admin,
    }


def create_app(
    site_config: SiteConfig | None = None,
    auth_config: AuthConfig | None = None,
    blob_store: BlobStore | None = None,
    email_client: EmailGatewayClient | None = None,
    geocoder: GeocodingClient | None = None,
) -> FastAPI:
    """
    Build the FastAPI app.

    Configuration not passed in is loaded from the environment; a missing
    signing secret or admin credential raises ConfigurationError here and
    aborts startup.
    """
    if site_config is None or auth_config is None:
        loaded_site, loaded_auth = load_settings()
        site_config = site_config or loaded_site
        auth_config = auth_config or loaded_auth

    if blob_store is None:
        blob_store = build_blob_store(site_config)

    services = build_services(site_config, blob_store, email_client, geocoder)

    auth_service = AuthService(
        auth_config,
        SessionManager(auth_config),
        SecurityLogger(),
    )

    app = FastAPI(title="Sell My Post Office API")
    app.state.services = services

    # Added last runs first: request id wraps the admin gate.
    app.add_middleware(AdminAuthMiddleware, auth_service=auth_service)
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)

    @app.get("/health")
    async def health():
        return success_response({"status": "ok"}).model_dump(mode="json")

    app.include_router(create_valuations_router(services))
    app.include_router(create_leads_router(services))
    app.include_router(create_blog_router(services))
    app.include_router(create_auth_router(auth_service), prefix="/admin")
    app.include_router(
        create_admin_router(
            services,
            default_page_size=site_config.default_page_size,
            max_page_size=site_config.max_page_size,
        ),
        prefix="/admin",
    )

    logger.info(
        f"App ready (environment={site_config.environment}, "
        f"storage={site_config.storage_backend}, "
        f"email={'on' if services['notification'].enabled else 'off'})"
    )
    return app


def main() -> None:
    configure_logging()
    uvicorn.run(
        "app:create_app",
        factory=True,
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "8000")),
    )


if __name__ == "__main__":
    main()
