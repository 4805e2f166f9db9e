# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Repository: meeting requests."""
from intake.repositories.base import SubmissionRepository


class MeetingRepository(SubmissionRepository):
    TABLE = "meetings"
    ENTITY = "meeting"
    COLUMNS = (
        "id", "name", "email", "message", "status", "meeting_link",
        "created_at", "updated_at",
    )
    WRITABLE = ("name", "email", "message", "status", "meeting_link")
    UPDATABLE = ("status", "meeting_link")
    FILTERS = ("status",)
