# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Business logic for admin-managed user accounts."""
from typing import Any, Dict, List, Optional, Tuple

from intake.core.errors import ConflictError, NotFoundError, ValidationError
from intake.core.logging import get_logger
from intake.metrics import RECORDS_DELETED
from intake.repositories.user_repository import UserRepository
from intake.services.auth_service import hash_password
from intake.services.validation import validate_user, validate_user_update

logger = get_logger(__name__)

NOT_FOUND = "User not found"
EMAIL_TAKEN = UserRepository.CONFLICT_MESSAGE


class UserService:
    def __init__(self, repo: UserRepository):
        self._repo = repo

    def create_user(self, payload: Any) -> Dict[str, Any]:
        result = validate_user(payload)
        if not result.ok:
            raise ValidationError(result.violations)
        data = result.data
        if self._repo.get_by_email(data["email"]):
            raise ConflictError(EMAIL_TAKEN)

        data["password_hash"] = hash_password(data.pop("password"))
        user = self._repo.create(data)
        logger.info("User created id=%s role=%s", user["id"], user["role"])
        return user

    def list_users(self, role: Optional[str] = None, page: int = 1,
                   limit: int = 10) -> Tuple[int, List[Dict[str, Any]]]:
        return self._repo.list(page=page, limit=limit, role=role)

    def get_user(self, user_id: str) -> Dict[str, Any]:
        user = self._repo.get(user_id)
        if not user:
            raise NotFoundError(NOT_FOUND)
        return user

    def update_user(self, user_id: str, payload: Any) -> Dict[str, Any]:
        result = validate_user_update(payload)
        if not result.ok:
            raise ValidationError(result.violations)
        data = result.data
        if data.get("email"):
            owner = self._repo.get_by_email(data["email"])
            if owner and owner["id"] != user_id:
                raise ConflictError(EMAIL_TAKEN)

        user = self._repo.update(user_id, data)
        if not user:
            raise NotFoundError(NOT_FOUND)
        logger.info("User updated id=%s role=%s", user_id, user["role"])
        return user

    def delete_user(self, user_id: str) -> None:
        if not self._repo.delete(user_id):
            raise NotFoundError(NOT_FOUND)
        RECORDS_DELETED.labels(kind="user").inc()
        logger.info("User deleted id=%s", user_id)
