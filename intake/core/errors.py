# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain exceptions. Each one knows the HTTP status it maps to; the handlers
registered in ``main.py`` render them into the response envelope.
"""

from typing import Any, Dict, List, Optional


class IntakeError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def errors(self) -> Optional[List[Dict[str, Any]]]:
        return None


class ValidationError(IntakeError):
    """Client payload violates field rules."""

    status_code = 400
    default_message = "Validation failed"

    def __init__(self, violations=None, message: Optional[str] = None):
        super().__init__(message)
        self.violations = list(violations or [])

    def errors(self) -> List[Dict[str, Any]]:
        return [{"field": v.field, "reason": v.reason} for v in self.violations]


class NotFoundError(IntakeError):
    status_code = 404
    default_message = "Resource not found"


class ConflictError(IntakeError):
    status_code = 409
    default_message = "Resource already exists"


class PersistenceError(IntakeError):
    """Storage layer refused or failed the operation."""

    status_code = 500
    default_message = "Database error"


class AuthenticationError(IntakeError):
    status_code = 401
    default_message = "Not authorized, valid API key required"


class PermissionDeniedError(IntakeError):
    status_code = 403
    default_message = "You do not have permission to perform this action"
