# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: user account administration. Password hashes never leave the service."""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends

from intake.core.dependencies import Page, get_page, get_user_service, require_admin
from intake.schemas import UserOut, dump, paginated, success
from intake.services.user_service import UserService

router = APIRouter(prefix="/api/user", tags=["Users"], dependencies=[Depends(require_admin)])


@router.post("", status_code=201)
def create_user(payload: Dict[str, Any] = Body(...),
                service: UserService = Depends(get_user_service)):
    user = service.create_user(payload)
    return success({"user": dump(UserOut, user)}, "User created successfully")


@router.get("")
def list_users(
    role: Optional[str] = None,
    paging: Page = Depends(get_page),
    service: UserService = Depends(get_user_service),
):
    total, users = service.list_users(role, paging.page, paging.limit)
    items = [dump(UserOut, u) for u in users]
    return success(paginated("user", items, total, paging.page, paging.limit))


@router.get("/{user_id}")
def get_user(user_id: str, service: UserService = Depends(get_user_service)):
    return success({"user": dump(UserOut, service.get_user(user_id))})


@router.put("/{user_id}")
def update_user(user_id: str, payload: Dict[str, Any] = Body(...),
                service: UserService = Depends(get_user_service)):
    user = service.update_user(user_id, payload)
    return success({"user": dump(UserOut, user)}, "User updated successfully")


@router.delete("/{user_id}")
def delete_user(user_id: str, service: UserService = Depends(get_user_service)):
    service.delete_user(user_id)
    return success(message="User deleted successfully")
