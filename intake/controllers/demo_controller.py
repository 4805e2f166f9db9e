# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: demo booking endpoints."""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query

from intake.core.dependencies import Page, get_page, get_demo_service, require_admin
from intake.schemas import DemoOut, DemoSummary, dump, paginated, success
from intake.services.demo_service import DemoService

router = APIRouter(prefix="/api/demo", tags=["Demo"])


@router.post("", status_code=201)
def book_demo(
    payload: Dict[str, Any] = Body(...),
    service: DemoService = Depends(get_demo_service),
):
    """Public demo booking; reports whether each email went out."""
    result = service.book_demo(payload)
    emails = result["emails_sent"]
    return success(
        {
            "demo": dump(DemoSummary, result["demo"]),
            "emailsSent": {
                "confirmation": emails["confirmation"],
                "adminNotification": emails["admin_notification"],
            },
        },
        "Demo booked successfully",
    )


@router.get("", dependencies=[Depends(require_admin)])
def list_demos(
    status: Optional[str] = None,
    service_filter: Optional[str] = Query(default=None, alias="service"),
    paging: Page = Depends(get_page),
    service: DemoService = Depends(get_demo_service),
):
    total, demos = service.list_demos(status, service_filter, paging.page, paging.limit)
    items = [dump(DemoOut, d) for d in demos]
    return success(paginated("demo", items, total, paging.page, paging.limit))


@router.get("/{demo_id}", dependencies=[Depends(require_admin)])
def get_demo(demo_id: str, service: DemoService = Depends(get_demo_service)):
    return success({"demo": dump(DemoOut, service.get_demo(demo_id))})


@router.put("/{demo_id}", dependencies=[Depends(require_admin)])
def update_demo(
    demo_id: str,
    payload: Dict[str, Any] = Body(...),
    service: DemoService = Depends(get_demo_service),
):
    demo = service.update_demo(demo_id, payload)
    return success({"demo": dump(DemoOut, demo)}, "Demo booking updated successfully")


@router.delete("/{demo_id}", dependencies=[Depends(require_admin)])
def delete_demo(demo_id: str, service: DemoService = Depends(get_demo_service)):
    service.delete_demo(demo_id)
    return success(message="Demo booking deleted successfully")
