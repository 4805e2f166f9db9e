# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: contact form endpoints.
Thin HTTP layer: delegates ALL logic to ContactService.
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query

from intake.core.dependencies import Page, get_page, get_contact_service, require_admin
from intake.schemas import ContactOut, ContactSummary, dump, paginated, success
from intake.services.contact_service import ContactService

router = APIRouter(prefix="/api/contact", tags=["Contact"])


@router.post("", status_code=201)
def submit_contact(
    payload: Dict[str, Any] = Body(...),
    service: ContactService = Depends(get_contact_service),
):
    """Public contact form."""
    result = service.create_contact(payload)
    return success(
        {"contact": dump(ContactSummary, result["contact"]), "emailSent": result["email_sent"]},
        "Contact form submitted successfully",
    )


@router.get("", dependencies=[Depends(require_admin)])
def list_contacts(
    status: Optional[str] = None,
    service_filter: Optional[str] = Query(default=None, alias="service"),
    paging: Page = Depends(get_page),
    service: ContactService = Depends(get_contact_service),
):
    total, contacts = service.list_contacts(status, service_filter, paging.page, paging.limit)
    items = [dump(ContactOut, c) for c in contacts]
    return success(paginated("contact", items, total, paging.page, paging.limit))


@router.get("/{contact_id}", dependencies=[Depends(require_admin)])
def get_contact(contact_id: str, service: ContactService = Depends(get_contact_service)):
    return success({"contact": dump(ContactOut, service.get_contact(contact_id))})


@router.put("/{contact_id}", dependencies=[Depends(require_admin)])
def update_contact(
    contact_id: str,
    payload: Dict[str, Any] = Body(...),
    service: ContactService = Depends(get_contact_service),
):
    """Set status, and optionally priority and notes."""
    contact = service.update_contact(contact_id, payload)
    return success({"contact": dump(ContactOut, contact)}, "Contact updated successfully")


@router.delete("/{contact_id}", dependencies=[Depends(require_admin)])
def delete_contact(contact_id: str, service: ContactService = Depends(get_contact_service)):
    service.delete_contact(contact_id)
    return success(message="Contact deleted successfully")
