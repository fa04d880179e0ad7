"""Valuation domain models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, EmailStr, Field


class ValuationStage(int, Enum):
    """Coarse stage shown in the admin table and used by the stage filter."""

    CONTACT = 1
    PROPERTY = 2
    COMPLETED = 3


class ValuationContact(BaseModel):
    """Stage 1 input: who is asking for the valuation."""

    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str | None = Field(None, max_length=50)


class ValuationProperty(BaseModel):
    """Stage 2 input: the property financials fed to the calculator."""

    property_address: str = Field(..., min_length=1, max_length=500)
    city: str | None = Field(None, max_length=255)
    state: str | None = Field(None, max_length=100)
    zip_code: str | None = Field(None, max_length=20)
    annual_rent: float = Field(..., ge=0)
    annual_property_taxes: float = Field(..., ge=0)
    taxes_reimbursed: bool = False
    annual_insurance: float = Field(..., ge=0)
    square_footage: float = Field(..., gt=0)


class ValuationEstimate(BaseModel):
    """Calculator output."""

    conservative_estimate: int = Field(..., ge=0)
    optimistic_estimate: int = Field(..., ge=0)


class Valuation(BaseModel):
    """Full valuation entity as stored."""

    id: str
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    property_address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    annual_rent: float | None = None
    annual_property_taxes: float | None = None
    taxes_reimbursed: bool | None = None
    annual_insurance: float | None = None
    square_footage: float | None = None
    conservative_estimate: int | None = None
    optimistic_estimate: int | None = None
    stage1_completed: bool = True
    stage2_completed: bool = False
    created_at: datetime
    updated_at: datetime

    @property
    def has_estimates(self) -> bool:
        return self.conservative_estimate is not None and self.optimistic_estimate is not None

    @property
    def stage(self) -> ValuationStage:
        if self.stage2_completed and self.has_estimates:
            return ValuationStage.COMPLETED
        if self.stage2_completed:
            return ValuationStage.PROPERTY
        return ValuationStage.CONTACT

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class ValuationIndexEntry(BaseModel):
    """Denormalized summary kept in the valuations index for listing and search."""

    id: str
    email: str
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    stage: ValuationStage
    conservative: int | None = None
    optimistic: int | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_valuation(cls, valuation: Valuation) -> "ValuationIndexEntry":
        return cls(
            id=valuation.id,
            email=valuation.email,
            street=valuation.property_address,
            city=valuation.city,
            state=valuation.state,
            zip_code=valuation.zip_code,
            stage=valuation.stage,
            conservative=valuation.conservative_estimate,
            optimistic=valuation.optimistic_estimate,
            created_at=valuation.created_at,
            updated_at=valuation.updated_at,
        )
