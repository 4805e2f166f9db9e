# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: user accounts.
``password_hash`` is writable but never part of a selected row.
"""
from typing import Any, Dict, Optional

from sqlalchemy import text

from intake.repositories.base import SubmissionRepository


class UserRepository(SubmissionRepository):
    TABLE = "users"
    ENTITY = "user"
    COLUMNS = ("id", "name", "email", "role", "phone", "company", "created_at", "updated_at")
    WRITABLE = ("name", "email", "password_hash", "role", "phone", "company")
    UPDATABLE = ("name", "email", "role", "phone", "company")
    FILTERS = ("role",)
    CONFLICT_MESSAGE = "A user with this email already exists"

    def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        with self._db.connection() as conn:
            row = conn.execute(
                text(f"SELECT {self._columns()} FROM users WHERE email = :email"),
                {"email": email},
            ).mappings().first()
        return self._row_to_dict(row) if row else None
