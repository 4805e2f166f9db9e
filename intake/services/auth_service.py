# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Authentication service: API key roles and password hashing."""
import hmac
from typing import Dict, Optional

from passlib.context import CryptContext

from intake.core.errors import AuthenticationError, PermissionDeniedError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class AuthService:
    def __init__(self, api_keys: Dict[str, str]):
        self._api_keys = dict(api_keys)

    def role_for(self, api_key: Optional[str]) -> Optional[str]:
        if not api_key:
            return None
        for known, role in self._api_keys.items():
            if hmac.compare_digest(known, api_key):
                return role
        return None

    def require_role(self, api_key: Optional[str], *roles: str) -> str:
        """The key's role, or an auth error: 401 unknown key, 403 wrong role."""
        role = self.role_for(api_key)
        if role is None:
            raise AuthenticationError()
        if roles and role not in roles:
            raise PermissionDeniedError()
        return role


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    return pwd_context.verify(password, hashed)
