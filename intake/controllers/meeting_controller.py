# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: meeting requests. Scheduling is public, everything else is admin-only."""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends

from intake.core.dependencies import Page, get_page, get_meeting_service, require_admin
from intake.schemas import MeetingOut, MeetingSummary, dump, paginated, success
from intake.services.meeting_service import MeetingService

router = APIRouter(prefix="/api/meetings", tags=["Meetings"])


@router.post("/schedule", status_code=201)
def schedule_meeting(
    payload: Dict[str, Any] = Body(...),
    service: MeetingService = Depends(get_meeting_service),
):
    meeting = service.schedule_meeting(payload)
    return success(dump(MeetingSummary, meeting), "Meeting request submitted successfully")


@router.get("", dependencies=[Depends(require_admin)])
def list_meetings(
    status: Optional[str] = None,
    paging: Page = Depends(get_page),
    service: MeetingService = Depends(get_meeting_service),
):
    total, meetings = service.list_meetings(status, paging.page, paging.limit)
    items = [dump(MeetingOut, m) for m in meetings]
    return success(paginated("meeting", items, total, paging.page, paging.limit))


@router.get("/{meeting_id}", dependencies=[Depends(require_admin)])
def get_meeting(meeting_id: str, service: MeetingService = Depends(get_meeting_service)):
    return success({"meeting": dump(MeetingOut, service.get_meeting(meeting_id))})


@router.patch("/{meeting_id}/status", dependencies=[Depends(require_admin)])
def update_meeting_status(
    meeting_id: str,
    payload: Dict[str, Any] = Body(...),
    service: MeetingService = Depends(get_meeting_service),
):
    meeting = service.update_status(meeting_id, payload)
    return success({"meeting": dump(MeetingOut, meeting)}, "Meeting status updated successfully")
