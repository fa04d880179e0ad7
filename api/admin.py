"""Admin back-office routes under /admin. All gated by AdminAuthMiddleware."""

from typing import Literal

from fastapi import APIRouter, Query
from fastapi.responses import Response

from api.base import success_response


def create_admin_router(services: dict, default_page_size: int = 20, max_page_size: int = 100) -> APIRouter:
    router = APIRouter(tags=["admin"])

    admin_svc = services["admin"]

    @router.get("/stats")
    async def stats():
        return success_response(admin_svc.stats()).model_dump(mode="json")

    # -------------------------------------------------------------------------
    # Valuations
    # -------------------------------------------------------------------------

    @router.get("/valuations")
    async def list_valuations(
        q: str | None = Query(None, max_length=200),
        stage: int | None = Query(None, ge=1, le=3),
        page: int = Query(1, ge=1),
        limit: int = Query(default_page_size, ge=1, le=max_page_size),
    ):
        result = admin_svc.list_valuations(search=q, stage=stage, page=page, page_size=limit)
        return success_response(result).model_dump(mode="json")

    @router.delete("/valuations/{valuation_id}")
    async def delete_valuation(valuation_id: str):
        deleted = admin_svc.delete_valuation(valuation_id)
        return success_response({"deleted": deleted, "id": valuation_id}).model_dump(mode="json")

    @router.post("/valuations/{valuation_id}/resend")
    async def resend_valuation(valuation_id: str):
        admin_svc.resend_valuation_notification(valuation_id)
        return success_response({"sent": True, "id": valuation_id}).model_dump(mode="json")

    # -------------------------------------------------------------------------
    # Leads
    # -------------------------------------------------------------------------

    @router.get("/leads")
    async def list_leads(
        q: str | None = Query(None, max_length=200),
        page: int = Query(1, ge=1),
        limit: int = Query(default_page_size, ge=1, le=max_page_size),
    ):
        result = admin_svc.list_leads(search=q, page=page, page_size=limit)
        return success_response(result).model_dump(mode="json")

    @router.delete("/leads/{lead_id}")
    async def delete_lead(lead_id: str):
        deleted = admin_svc.delete_lead(lead_id)
        return success_response({"deleted": deleted, "id": lead_id}).model_dump(mode="json")

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    @router.get("/export")
    async def export_csv(type: Literal["valuations", "leads"] = Query("valuations")):
        filename, csv_text = admin_svc.export_csv(type)
        return Response(
            content=csv_text,
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    return router
