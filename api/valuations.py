"""Public valuation intake routes: /valuations."""

from fastapi import APIRouter

from api.base import success_response
from core.exceptions import NotFoundError
from core.models import ValuationContact, ValuationProperty


def create_valuations_router(services: dict) -> APIRouter:
    router = APIRouter(tags=["valuations"])

    intake_svc = services["intake"]
    valuation_svc = services["valuation"]

    @router.post("/valuations")
    async def start_valuation(body: ValuationContact):
        """Stage 1: create the valuation and return it with its id."""
        valuation = intake_svc.start_intake(body)
        return success_response(valuation.model_dump(mode="json")).model_dump(mode="json")

    @router.get("/valuations/{valuation_id}")
    async def get_valuation(valuation_id: str):
        """Fetch one valuation, used to resume stage 2."""
        valuation = valuation_svc.get(valuation_id)
        if valuation is None:
            raise NotFoundError(f"Valuation {valuation_id} not found")
        return success_response(valuation.model_dump(mode="json")).model_dump(mode="json")

    @router.patch("/valuations/{valuation_id}")
    async def complete_valuation(valuation_id: str, body: ValuationProperty):
        """Stage 2: compute estimates. Email delivery never affects the response."""
        valuation = intake_svc.complete_intake(valuation_id, body)
        return success_response(valuation.model_dump(mode="json")).model_dump(mode="json")

    return router
