"""Lead (contact form submission) domain models."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class LeadCreate(BaseModel):
    """Data submitted by the public contact form."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str | None = Field(None, max_length=50)
    message: str | None = Field(None, max_length=5000)
    source: str | None = Field(None, max_length=255, description="Page or campaign tag")


class Lead(BaseModel):
    """Full lead entity as stored. Never mutated after creation."""

    id: str
    name: str
    email: str
    phone: str | None = None
    message: str | None = None
    source: str | None = None
    created_at: datetime


class LeadIndexEntry(BaseModel):
    """Denormalized summary kept in the leads index."""

    id: str
    name: str
    email: str
    created_at: datetime

    @classmethod
    def from_lead(cls, lead: Lead) -> "LeadIndexEntry":
        return cls(id=lead.id, name=lead.name, email=lead.email, created_at=lead.created_at)
