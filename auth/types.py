"""Pydantic models for auth domain."""

from datetime import datetime

from pydantic import BaseModel, Field

ADMIN_ROLE = "admin"


class AdminLogin(BaseModel):
    """Request payload for admin login."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class SessionClaims(BaseModel):
    """Claims carried by a verified session token."""

    role: str
    sub: str = Field(..., description="Admin username")
    iat: datetime
    exp: datetime


class AdminSession(BaseModel):
    """A freshly issued session: the signed token and its claims."""

    token: str
    claims: SessionClaims
    max_age_seconds: int
