# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Business logic for demo bookings.

Status lifecycle: pending → confirmed → completed, with cancelled reachable
from anywhere. Any status value is accepted from any state.
"""
from typing import Any, Dict, List, Optional, Tuple

from intake.core.errors import NotFoundError, ValidationError
from intake.core.logging import get_logger
from intake.metrics import RECORDS_DELETED, STATUS_UPDATES, SUBMISSIONS_CREATED
from intake.repositories.demo_repository import DemoRepository
from intake.services.notifier import DEMO_ADMIN, DEMO_CONFIRMATION, NotificationDispatcher
from intake.services.validation import validate_demo, validate_demo_update

logger = get_logger(__name__)

NOT_FOUND = "Demo booking not found"


class DemoService:
    def __init__(self, repo: DemoRepository, dispatcher: NotificationDispatcher):
        self._repo = repo
        self._dispatcher = dispatcher

    def book_demo(self, payload: Any) -> Dict[str, Any]:
        """Validate and store the booking, then send the requester
        confirmation and the staff notice in parallel.

        Returns ``{demo, emails_sent: {confirmation, admin_notification}}``.
        """
        result = validate_demo(payload)
        if not result.ok:
            raise ValidationError(result.violations)

        demo = self._repo.create(result.data)
        SUBMISSIONS_CREATED.labels(kind="demo").inc()

        confirmation, admin_notification = self._dispatcher.send_all([
            (DEMO_CONFIRMATION, demo),
            (DEMO_ADMIN, demo),
        ])
        logger.info("Demo booked id=%s service=%s date=%s confirmation=%s admin=%s",
                    demo["id"], demo["service"], demo["preferred_date"],
                    confirmation, admin_notification)
        return {
            "demo": demo,
            "emails_sent": {
                "confirmation": confirmation,
                "admin_notification": admin_notification,
            },
        }

    def list_demos(self, status: Optional[str] = None, service: Optional[str] = None,
                   page: int = 1, limit: int = 10) -> Tuple[int, List[Dict[str, Any]]]:
        return self._repo.list(page=page, limit=limit, status=status, service=service)

    def get_demo(self, demo_id: str) -> Dict[str, Any]:
        demo = self._repo.get(demo_id)
        if not demo:
            raise NotFoundError(NOT_FOUND)
        return demo

    def update_demo(self, demo_id: str, payload: Any) -> Dict[str, Any]:
        result = validate_demo_update(payload)
        if not result.ok:
            raise ValidationError(result.violations)

        demo = self._repo.update(demo_id, result.data)
        if not demo:
            raise NotFoundError(NOT_FOUND)
        STATUS_UPDATES.labels(kind="demo", status=demo["status"]).inc()
        logger.info("Demo updated id=%s status=%s", demo_id, demo["status"])
        return demo

    def delete_demo(self, demo_id: str) -> None:
        if not self._repo.delete(demo_id):
            raise NotFoundError(NOT_FOUND)
        RECORDS_DELETED.labels(kind="demo").inc()
        logger.info("Demo deleted id=%s", demo_id)
