"""Admin authentication configuration."""

from pydantic import BaseModel, Field


class AuthConfig(BaseModel):
    """
    Admin gate configuration.

    Credentials and the signing secret come from the environment (or Vault);
    there is no user table. A single admin role exists.
    """

    admin_username: str = Field(..., min_length=1)
    admin_password: str = Field(..., min_length=1)

    # Token signing
    jwt_secret: str = Field(..., min_length=1, description="HMAC secret for session tokens")
    jwt_algorithm: str = Field(default="HS256")

    # Session settings
    session_expiry_days: int = Field(
        default=7,
        description="Session token lifetime in days",
        ge=1,
        le=90,
    )
    cookie_name: str = Field(default="admin_token")
    secure_cookies: bool = Field(
        default=False,
        description="Set the Secure cookie flag (enabled in production)",
    )

    @property
    def session_max_age_seconds(self) -> int:
        return self.session_expiry_days * 24 * 3600
