"""Public contact form route: /leads."""

from fastapi import APIRouter

from api.base import success_response
from core.models import LeadCreate


def create_leads_router(services: dict) -> APIRouter:
    router = APIRouter(tags=["leads"])

    lead_svc = services["lead"]

    @router.post("/leads")
    async def create_lead(body: LeadCreate):
        lead = lead_svc.create(body)
        return success_response(lead.model_dump(mode="json")).model_dump(mode="json")

    return router
