"""
Site configuration.

Non-secret tunables live in SiteConfig. Secrets come from the environment
(a local .env is loaded first) and, when VAULT_ADDR is set, from Vault for
anything the environment does not provide.

Missing admin credentials or signing secret is fatal: the admin gate
cannot run without them.
"""

import logging
import os
from typing import Literal, Mapping

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

from auth.config import AuthConfig
from core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class ValuationAssumptions(BaseModel):
    """Business constants for the cap-rate valuation."""

    maintenance_cost_per_sqft: float = Field(default=1.75, ge=0)
    conservative_cap_rate: float = Field(default=0.12, gt=0)
    optimistic_cap_rate: float = Field(default=0.08, gt=0)

    @model_validator(mode="after")
    def optimistic_rate_not_above_conservative(self) -> "ValuationAssumptions":
        """A lower cap rate means a higher value; the optimistic rate must be the lower one."""
        if self.optimistic_cap_rate > self.conservative_cap_rate:
            raise ValueError("optimistic_cap_rate must not exceed conservative_cap_rate")
        return self


class EmailConfig(BaseModel):
    """Outbound email gateway credentials and sender identity."""

    gateway_url: str
    api_key: str
    hmac_secret: str
    from_email: str = "reports@sellmypostoffice.com"


class SiteConfig(BaseModel):
    """Application settings that are not part of the admin gate."""

    environment: str = "development"
    storage_backend: Literal["memory", "valkey", "postgres"] = "memory"
    valkey_url: str | None = None
    database_url: str | None = None

    site_base_url: str = "https://www.sellmypostoffice.com"
    email: EmailConfig | None = None
    google_maps_api_key: str | None = None

    assumptions: ValuationAssumptions = Field(default_factory=ValuationAssumptions)

    default_page_size: int = Field(default=20, ge=1)
    max_page_size: int = Field(default=100, ge=1)

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("production", "prod")


def load_settings(environ: Mapping[str, str] | None = None) -> tuple[SiteConfig, AuthConfig]:
    """
    Build SiteConfig and AuthConfig from the environment.

    Args:
        environ: Mapping to read from. Defaults to os.environ after loading .env.

    Raises:
        ConfigurationError: If the signing secret or admin credentials are missing.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    use_vault = bool(environ.get("VAULT_ADDR"))

    def secret(env_name: str, vault_path: str, field: str) -> str | None:
        value = environ.get(env_name)
        if value:
            return value
        if not use_vault:
            return None
        from clients.vault_client import VaultError, get_secret_value

        try:
            return get_secret_value(vault_path, field, environ=environ)
        except VaultError as e:
            raise ConfigurationError(f"Vault unavailable: {e}") from e
        except (PermissionError, KeyError) as e:
            logger.warning(f"Secret {vault_path}/{field} unavailable in Vault: {e}")
            return None

    admin_user = secret("ADMIN_USER", "admin", "username")
    admin_pass = secret("ADMIN_PASS", "admin", "password")
    jwt_secret = secret("JWT_SECRET", "admin", "jwt_secret")

    missing = [
        name for name, value in (
            ("ADMIN_USER", admin_user),
            ("ADMIN_PASS", admin_pass),
            ("JWT_SECRET", jwt_secret),
        )
        if not value
    ]
    if missing:
        raise ConfigurationError(
            f"Required configuration missing: {', '.join(missing)}"
        )

    environment = environ.get("ENVIRONMENT", "development")

    email = None
    gateway_url = secret("EMAIL_GATEWAY_URL", "email", "gateway_url")
    api_key = secret("EMAIL_API_KEY", "email", "api_key")
    hmac_secret = secret("EMAIL_HMAC_SECRET", "email", "hmac_secret")
    if gateway_url and api_key and hmac_secret:
        email = EmailConfig(
            gateway_url=gateway_url,
            api_key=api_key,
            hmac_secret=hmac_secret,
            from_email=environ.get("FROM_EMAIL") or EmailConfig.model_fields["from_email"].default,
        )
    else:
        logger.warning("Email gateway not configured - valuation reports will not be sent")

    maps_key = secret("GOOGLE_MAPS_API_KEY", "maps", "api_key")
    if not maps_key:
        logger.warning("Google Maps API key not configured - reports will omit street view")

    backend = environ.get("STORAGE_BACKEND", "memory")
    if backend not in ("memory", "valkey", "postgres"):
        raise ConfigurationError(f"Unknown STORAGE_BACKEND '{backend}'")
    valkey_url = secret("VALKEY_URL", "valkey", "url") if backend == "valkey" else None
    database_url = secret("DATABASE_URL", "database", "url") if backend == "postgres" else None

    site = SiteConfig(
        environment=environment,
        storage_backend=backend,
        valkey_url=valkey_url,
        database_url=database_url,
        site_base_url=environ.get("SITE_BASE_URL") or SiteConfig.model_fields["site_base_url"].default,
        email=email,
        google_maps_api_key=maps_key,
    )

    auth = AuthConfig(
        admin_username=admin_user,
        admin_password=admin_pass,
        jwt_secret=jwt_secret,
        secure_cookies=site.is_production,
    )

    return site, auth
