# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Submission validators.

Each ``validate_*`` function takes a raw payload and returns a
``ValidationResult``: either the sanitized snake_case data or the ordered
list of field violations. They never raise.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from intake.schemas import (
    ContactCreate, ContactUpdate, DemoCreate, DemoUpdate, MeetingCreate,
    MeetingStatusUpdate, UserCreate, UserUpdate,
)

_LOCATION_PREFIXES = ("body", "query", "path", "header")


@dataclass
class Violation:
    field: str
    reason: str


@dataclass
class ValidationResult:
    data: Optional[Dict[str, Any]] = None
    violations: List[Violation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations


def violations_from(errors: Iterable[Mapping[str, Any]]) -> List[Violation]:
    """Flatten pydantic / FastAPI error dicts into ``field: reason`` pairs."""
    out: List[Violation] = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ())]
        if len(loc) > 1 and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        reason = str(err.get("msg", "Invalid value"))
        if reason.startswith("Value error, "):
            reason = reason[len("Value error, "):]
        out.append(Violation(field=".".join(loc) or "body", reason=reason))
    return out


def _run(model: type[BaseModel], payload: Any) -> ValidationResult:
    if not isinstance(payload, Mapping):
        return ValidationResult(violations=[Violation("body", "Request body must be a JSON object")])
    try:
        parsed = model.model_validate(payload)
    except PydanticValidationError as exc:
        return ValidationResult(violations=violations_from(exc.errors()))
    return ValidationResult(data=parsed.model_dump())


def validate_contact(payload: Any) -> ValidationResult:
    return _run(ContactCreate, payload)


def validate_contact_update(payload: Any) -> ValidationResult:
    return _run(ContactUpdate, payload)


def validate_demo(payload: Any) -> ValidationResult:
    return _run(DemoCreate, payload)


def validate_demo_update(payload: Any) -> ValidationResult:
    return _run(DemoUpdate, payload)


def validate_meeting(payload: Any) -> ValidationResult:
    return _run(MeetingCreate, payload)


def validate_meeting_status(payload: Any) -> ValidationResult:
    return _run(MeetingStatusUpdate, payload)


def validate_user(payload: Any) -> ValidationResult:
    return _run(UserCreate, payload)


def validate_user_update(payload: Any) -> ValidationResult:
    return _run(UserUpdate, payload)
