# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Business logic for contact inquiries.

Status lifecycle: new → in-progress → contacted → completed. Ordering is not
enforced; an admin may set any of the four values from any state.
"""
from typing import Any, Dict, List, Optional, Tuple

from intake.core.errors import NotFoundError, ValidationError
from intake.core.logging import get_logger
from intake.metrics import RECORDS_DELETED, STATUS_UPDATES, SUBMISSIONS_CREATED
from intake.repositories.contact_repository import ContactRepository
from intake.services.notifier import CONTACT_ADMIN, NotificationDispatcher
from intake.services.validation import validate_contact, validate_contact_update

logger = get_logger(__name__)

NOT_FOUND = "Contact not found"


class ContactService:
    def __init__(self, repo: ContactRepository, dispatcher: NotificationDispatcher):
        self._repo = repo
        self._dispatcher = dispatcher

    def create_contact(self, payload: Any) -> Dict[str, Any]:
        """Validate, store, then notify staff. Returns ``{contact, email_sent}``."""
        result = validate_contact(payload)
        if not result.ok:
            raise ValidationError(result.violations)
        data = result.data
        if not (data.get("name") and data.get("email") and data.get("message")):
            raise ValidationError()

        contact = self._repo.create(data)
        SUBMISSIONS_CREATED.labels(kind="contact").inc()

        email_sent = self._dispatcher.send(CONTACT_ADMIN, contact)
        logger.info("Contact created id=%s service=%s email_sent=%s",
                    contact["id"], contact["service"], email_sent)
        return {"contact": contact, "email_sent": email_sent}

    def list_contacts(self, status: Optional[str] = None, service: Optional[str] = None,
                      page: int = 1, limit: int = 10) -> Tuple[int, List[Dict[str, Any]]]:
        return self._repo.list(page=page, limit=limit, status=status, service=service)

    def get_contact(self, contact_id: str) -> Dict[str, Any]:
        contact = self._repo.get(contact_id)
        if not contact:
            raise NotFoundError(NOT_FOUND)
        return contact

    def update_contact(self, contact_id: str, payload: Any) -> Dict[str, Any]:
        result = validate_contact_update(payload)
        if not result.ok:
            raise ValidationError(result.violations)

        contact = self._repo.update(contact_id, result.data)
        if not contact:
            raise NotFoundError(NOT_FOUND)
        STATUS_UPDATES.labels(kind="contact", status=contact["status"]).inc()
        logger.info("Contact updated id=%s status=%s priority=%s",
                    contact_id, contact["status"], contact["priority"])
        return contact

    def delete_contact(self, contact_id: str) -> None:
        if not self._repo.delete(contact_id):
            raise NotFoundError(NOT_FOUND)
        RECORDS_DELETED.labels(kind="contact").inc()
        logger.info("Contact deleted id=%s", contact_id)
