# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Pydantic request/response schemas and the shared response envelope."""
import math
import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

SERVICE_IDS = (
    "website-development",
    "app-development",
    "game-development",
    "logo-design",
    "seo-backlinks",
    "ui-ux-design",
    "video-production",
    "chatbot-development",
    "crm-erp-integration",
    "custom-api-development",
    "content-writing",
)
CONTACT_SERVICES = SERVICE_IDS + ("other",)
DEMO_SERVICES = SERVICE_IDS

CONTACT_STATUSES = ("new", "in-progress", "contacted", "completed")
CONTACT_PRIORITIES = ("low", "medium", "high")
BOOKING_STATUSES = ("pending", "confirmed", "completed", "cancelled")
PREFERRED_TIMES = ("morning", "afternoon", "evening")
BUDGETS = ("under-5k", "5k-10k", "10k-25k", "25k-50k", "50k+", "not-sure")
TIMELINES = ("asap", "1-month", "2-3-months", "3-6-months", "6-months+")
USER_ROLES = ("user", "admin")

MEETING_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _blank_to_none(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    v = v.strip()
    return v or None


def _length(v: str, low: int, high: int, message: str) -> str:
    v = v.strip()
    if not low <= len(v) <= high:
        raise ValueError(message)
    return v


def _status(v: Optional[str], allowed: tuple) -> str:
    if v is None or not str(v).strip():
        raise ValueError("Status is required")
    if v not in allowed:
        raise ValueError(f"status must be one of {', '.join(allowed)}")
    return v


# ── Requests ──────────────────────────────────────────────────────────────

class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ContactCreate(_Payload):
    name: str
    email: EmailStr
    message: str
    subject: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    service: Optional[str] = "other"

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return _length(v, 2, 50, "Name must be between 2 and 50 characters")

    @field_validator("message")
    @classmethod
    def check_message(cls, v: str) -> str:
        return _length(v, 10, 1000, "Message must be between 10 and 1000 characters")

    @field_validator("subject")
    @classmethod
    def check_subject(cls, v: Optional[str]) -> Optional[str]:
        # Only a non-empty subject is length-checked.
        v = _blank_to_none(v)
        if v is not None:
            _length(v, 5, 100, "Subject must be between 5 and 100 characters")
        return v

    @field_validator("phone", "company")
    @classmethod
    def strip_optional(cls, v: Optional[str]) -> Optional[str]:
        return _blank_to_none(v)

    @field_validator("service")
    @classmethod
    def check_service(cls, v: Optional[str]) -> str:
        v = _blank_to_none(v)
        if v is None:
            return "other"
        if v not in CONTACT_SERVICES:
            raise ValueError("Invalid service selection")
        return v


class ContactUpdate(_Payload):
    status: Optional[str] = Field(default=None, validate_default=True)
    priority: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("status")
    @classmethod
    def check_status(cls, v: Optional[str]) -> str:
        return _status(v, CONTACT_STATUSES)

    @field_validator("priority")
    @classmethod
    def check_priority(cls, v: Optional[str]) -> Optional[str]:
        v = _blank_to_none(v)
        if v is not None and v not in CONTACT_PRIORITIES:
            raise ValueError("Invalid priority")
        return v

    @field_validator("notes")
    @classmethod
    def strip_notes(cls, v: Optional[str]) -> Optional[str]:
        return _blank_to_none(v)


class DemoCreate(_Payload):
    name: str
    email: EmailStr
    phone: Optional[str] = Field(default=None, validate_default=True)
    company: Optional[str] = None
    service: Optional[str] = Field(default=None, validate_default=True)
    preferred_date: Optional[str] = Field(default=None, alias="preferredDate", validate_default=True)
    preferred_time: Optional[str] = Field(default=None, alias="preferredTime", validate_default=True)
    project_description: str = Field(..., alias="projectDescription")
    budget: Optional[str] = None
    timeline: Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return _length(v, 2, 50, "Name must be between 2 and 50 characters")

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: Optional[str]) -> str:
        v = _blank_to_none(v)
        if v is None:
            raise ValueError("Phone number is required")
        return v

    @field_validator("company")
    @classmethod
    def strip_company(cls, v: Optional[str]) -> Optional[str]:
        return _blank_to_none(v)

    @field_validator("service")
    @classmethod
    def check_service(cls, v: Optional[str]) -> str:
        v = _blank_to_none(v)
        if v is None:
            raise ValueError("Service is required")
        if v not in DEMO_SERVICES:
            raise ValueError("Invalid service selection")
        return v

    @field_validator("preferred_date")
    @classmethod
    def check_date(cls, v: Optional[str]) -> str:
        parsed = parse_calendar_date(v)
        if parsed is None:
            raise ValueError("Please provide a valid date")
        return parsed.isoformat()

    @field_validator("preferred_time")
    @classmethod
    def check_time(cls, v: Optional[str]) -> str:
        if v not in PREFERRED_TIMES:
            raise ValueError("Invalid time selection")
        return v

    @field_validator("project_description")
    @classmethod
    def check_description(cls, v: str) -> str:
        return _length(v, 10, 500, "Project description must be between 10 and 500 characters")

    @field_validator("budget")
    @classmethod
    def check_budget(cls, v: Optional[str]) -> Optional[str]:
        v = _blank_to_none(v)
        if v is not None and v not in BUDGETS:
            raise ValueError("Invalid budget selection")
        return v

    @field_validator("timeline")
    @classmethod
    def check_timeline(cls, v: Optional[str]) -> Optional[str]:
        v = _blank_to_none(v)
        if v is not None and v not in TIMELINES:
            raise ValueError("Invalid timeline selection")
        return v


class DemoUpdate(_Payload):
    status: Optional[str] = Field(default=None, validate_default=True)
    notes: Optional[str] = None

    @field_validator("status")
    @classmethod
    def check_status(cls, v: Optional[str]) -> str:
        return _status(v, BOOKING_STATUSES)

    @field_validator("notes")
    @classmethod
    def strip_notes(cls, v: Optional[str]) -> Optional[str]:
        return _blank_to_none(v)


class MeetingCreate(_Payload):
    name: Optional[str] = Field(default=None, validate_default=True)
    email: Optional[str] = Field(default=None, validate_default=True)
    message: Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: Optional[str]) -> str:
        v = _blank_to_none(v)
        if v is None:
            raise ValueError("Name is required")
        return v

    @field_validator("email")
    @classmethod
    def check_email(cls, v: Optional[str]) -> str:
        v = _blank_to_none(v)
        if v is None:
            raise ValueError("Email is required")
        if not MEETING_EMAIL_RE.match(v):
            raise ValueError("Please provide a valid email address")
        return v

    @field_validator("message")
    @classmethod
    def strip_message(cls, v: Optional[str]) -> Optional[str]:
        return _blank_to_none(v)


class MeetingStatusUpdate(_Payload):
    status: Optional[str] = Field(default=None, validate_default=True)
    meeting_link: Optional[str] = Field(default=None, alias="meetingLink")

    @field_validator("status")
    @classmethod
    def check_status(cls, v: Optional[str]) -> str:
        return _status(v, BOOKING_STATUSES)

    @field_validator("meeting_link")
    @classmethod
    def strip_link(cls, v: Optional[str]) -> Optional[str]:
        return _blank_to_none(v)


class UserCreate(_Payload):
    name: str
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    role: str = "user"
    phone: Optional[str] = None
    company: Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return _length(v, 2, 50, "Name must be between 2 and 50 characters")

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("role")
    @classmethod
    def check_role(cls, v: str) -> str:
        if v not in USER_ROLES:
            raise ValueError(f"role must be one of {', '.join(USER_ROLES)}")
        return v

    @field_validator("phone", "company")
    @classmethod
    def strip_optional(cls, v: Optional[str]) -> Optional[str]:
        return _blank_to_none(v)


class UserUpdate(_Payload):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    role: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: Optional[str]) -> Optional[str]:
        v = _blank_to_none(v)
        if v is not None:
            v = _length(v, 2, 50, "Name must be between 2 and 50 characters")
        return v

    @field_validator("email", mode="before")
    @classmethod
    def normalise_email(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower() or None
        return v

    @field_validator("role")
    @classmethod
    def check_role(cls, v: Optional[str]) -> Optional[str]:
        v = _blank_to_none(v)
        if v is not None and v not in USER_ROLES:
            raise ValueError(f"role must be one of {', '.join(USER_ROLES)}")
        return v

    @field_validator("phone", "company")
    @classmethod
    def strip_optional(cls, v: Optional[str]) -> Optional[str]:
        return _blank_to_none(v)


def parse_calendar_date(value: Any) -> Optional[date]:
    """Accept an ISO-8601 date or datetime string; ``None`` if it is not a real date."""
    if not isinstance(value, str) or not value.strip():
        return None
    value = value.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        return None


# ── Responses ─────────────────────────────────────────────────────────────

class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContactOut(_Record):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    company: Optional[str] = None
    subject: Optional[str] = None
    message: str
    service: str
    status: str
    priority: Optional[str] = None
    notes: Optional[str] = None
    created_at: str
    updated_at: str


class ContactSummary(_Record):
    id: str
    name: str
    email: str
    subject: Optional[str] = None
    status: str


class DemoOut(_Record):
    id: str
    name: str
    email: str
    phone: str
    company: Optional[str] = None
    service: str
    preferred_date: str
    preferred_time: str
    project_description: str
    budget: Optional[str] = None
    timeline: Optional[str] = None
    status: str
    notes: Optional[str] = None
    created_at: str
    updated_at: str


class DemoSummary(_Record):
    id: str
    name: str
    email: str
    service: str
    preferred_date: str
    preferred_time: str
    status: str


class MeetingOut(_Record):
    id: str
    name: str
    email: str
    message: Optional[str] = None
    status: str
    meeting_link: Optional[str] = None
    created_at: str
    updated_at: str


class MeetingSummary(_Record):
    id: str
    name: str
    email: str
    status: str


class UserOut(_Record):
    id: str
    name: str
    email: str
    role: str
    phone: Optional[str] = None
    company: Optional[str] = None
    created_at: str
    updated_at: str


class ServiceStat(_Record):
    service: str
    count: int
    status_counts: List[str]


class StatisticsTotals(_Record):
    contacts: int
    demos: int
    pending_contacts: int
    pending_demos: int


class Statistics(_Record):
    contact_stats: List[ServiceStat]
    demo_stats: List[ServiceStat]
    totals: StatisticsTotals


# ── Envelope ──────────────────────────────────────────────────────────────

def dump(model: type, record: Dict[str, Any]) -> Dict[str, Any]:
    return model.model_validate(record).model_dump(by_alias=True)


def success(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"status": "success"}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return body


def failure(message: str, errors: Optional[List[Dict[str, Any]]] = None,
            **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"status": "error", "message": message}
    if errors is not None:
        body["errors"] = errors
    body.update(extra)
    return body


def paginated(name: str, items: List[Dict[str, Any]], total: int,
              page: int, limit: int) -> Dict[str, Any]:
    """``{<name>s, totalPages, currentPage, total<Name>s}`` page payload."""
    plural = f"{name}s"
    return {
        plural: items,
        "totalPages": math.ceil(total / limit) if limit else 0,
        "currentPage": page,
        f"total{plural[0].upper()}{plural[1:]}": total,
    }
