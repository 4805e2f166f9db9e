# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Repository: contact form submissions."""
from intake.repositories.base import SubmissionRepository


class ContactRepository(SubmissionRepository):
    TABLE = "contacts"
    ENTITY = "contact"
    COLUMNS = (
        "id", "name", "email", "phone", "company", "subject", "message",
        "service", "status", "priority", "notes", "created_at", "updated_at",
    )
    WRITABLE = (
        "name", "email", "phone", "company", "subject", "message",
        "service", "status", "priority", "notes",
    )
    UPDATABLE = ("status", "priority", "notes")
    FILTERS = ("status", "service")
