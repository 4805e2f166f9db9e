# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Repository: demo bookings."""
from intake.repositories.base import SubmissionRepository


class DemoRepository(SubmissionRepository):
    TABLE = "demos"
    ENTITY = "demo booking"
    COLUMNS = (
        "id", "name", "email", "phone", "company", "service", "preferred_date",
        "preferred_time", "project_description", "budget", "timeline", "status",
        "notes", "created_at", "updated_at",
    )
    WRITABLE = (
        "name", "email", "phone", "company", "service", "preferred_date",
        "preferred_time", "project_description", "budget", "timeline", "status", "notes",
    )
    UPDATABLE = ("status", "notes")
    FILTERS = ("status", "service")
