# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Business logic for meeting requests. Meetings send no email and cannot be deleted."""
from typing import Any, Dict, List, Optional, Tuple

from intake.core.errors import NotFoundError, ValidationError
from intake.core.logging import get_logger
from intake.metrics import STATUS_UPDATES, SUBMISSIONS_CREATED
from intake.repositories.meeting_repository import MeetingRepository
from intake.services.validation import validate_meeting, validate_meeting_status

logger = get_logger(__name__)

NOT_FOUND = "Meeting not found"


class MeetingService:
    def __init__(self, repo: MeetingRepository):
        self._repo = repo

    def schedule_meeting(self, payload: Any) -> Dict[str, Any]:
        result = validate_meeting(payload)
        if not result.ok:
            raise ValidationError(result.violations)
        meeting = self._repo.create(result.data)
        SUBMISSIONS_CREATED.labels(kind="meeting").inc()
        logger.info("Meeting requested id=%s", meeting["id"])
        return meeting

    def list_meetings(self, status: Optional[str] = None, page: int = 1,
                      limit: int = 10) -> Tuple[int, List[Dict[str, Any]]]:
        return self._repo.list(page=page, limit=limit, status=status)

    def get_meeting(self, meeting_id: str) -> Dict[str, Any]:
        meeting = self._repo.get(meeting_id)
        if not meeting:
            raise NotFoundError(NOT_FOUND)
        return meeting

    def update_status(self, meeting_id: str, payload: Any) -> Dict[str, Any]:
        """Set the status and, when supplied, the meeting link."""
        result = validate_meeting_status(payload)
        if not result.ok:
            raise ValidationError(result.violations)

        meeting = self._repo.update(meeting_id, result.data)
        if not meeting:
            raise NotFoundError(NOT_FOUND)
        STATUS_UPDATES.labels(kind="meeting", status=meeting["status"]).inc()
        logger.info("Meeting status updated id=%s status=%s", meeting_id, meeting["status"])
        return meeting
