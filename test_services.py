"""
Lead Intake Service - Service-layer Tests
==========================================
Validators, repositories, statistics, notifications and auth, exercised
without the HTTP stack.

Run:  pytest test_services.py -v
"""
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from unittest.mock import patch

import pytest
from sqlalchemy import text

from intake.core.config import Settings, _parse_api_keys
from intake.core.database import Database
from intake.core.errors import (
    AuthenticationError, ConflictError, PermissionDeniedError, PersistenceError,
)
from intake.middleware import route_template
from intake.repositories import ContactRepository, DemoRepository, MeetingRepository, UserRepository
from intake.repositories.base import MonotonicClock
from intake.schemas import paginated, parse_calendar_date
from intake.services.auth_service import AuthService, hash_password, pwd_context
from intake.services.notifier import (
    CONTACT_ADMIN, DEMO_ADMIN, DEMO_CONFIRMATION, EmailNotifier, NotificationDispatcher,
)
from intake.services.statistics_service import StatisticsService, group_by_service
from intake.services.user_service import UserService
from intake.services.validation import (
    validate_contact, validate_contact_update, validate_demo, validate_meeting,
    validate_meeting_status, validate_user, validate_user_update, violations_from,
)


@pytest.fixture
def database():
    db = Database("sqlite://")
    db.connect()
    yield db
    db.dispose()


def _reasons(result):
    return {v.field: v.reason for v in result.violations}


CONTACT = {"name": "Priya Sharma", "email": "priya@acme.io", "message": "Please call me back soon."}
DEMO = {
    "name": "Jane Doe", "email": "jane@acme.io", "phone": "555-0100",
    "service": "ui-ux-design", "preferred_date": "2026-11-20", "preferred_time": "evening",
    "project_description": "Redesign of our onboarding flow.",
}


# ═══════════════════════════════════════════════════════════════════════════
# VALIDATION
# ═══════════════════════════════════════════════════════════════════════════
class TestContactValidation:
    def test_defaults_and_trimming(self):
        result = validate_contact({**CONTACT, "name": "  Priya Sharma  ", "subject": "", "phone": " "})
        assert result.ok
        assert result.data["name"] == "Priya Sharma"
        assert result.data["service"] == "other"
        assert result.data["subject"] is None
        assert result.data["phone"] is None

    def test_empty_service_defaults_to_other(self):
        assert validate_contact({**CONTACT, "service": ""}).data["service"] == "other"

    def test_violations_follow_field_order(self):
        result = validate_contact({"name": "A", "email": "bad", "message": "short"})
        assert [v.field for v in result.violations] == ["name", "email", "message"]

    def test_subject_length_checked_when_present(self):
        result = validate_contact({**CONTACT, "subject": "Hey"})
        assert _reasons(result) == {"subject": "Subject must be between 5 and 100 characters"}

    def test_non_object_payload(self):
        result = validate_contact("name=priya")
        assert not result.ok
        assert _reasons(result) == {"body": "Request body must be a JSON object"}

    def test_update_requires_status(self):
        assert _reasons(validate_contact_update({})) == {"status": "Status is required"}

    def test_update_rejects_priority(self):
        result = validate_contact_update({"status": "new", "priority": "urgent"})
        assert _reasons(result) == {"priority": "Invalid priority"}


class TestDemoValidation:
    def test_valid(self):
        result = validate_demo({**DEMO, "email": "JANE@Acme.IO"})
        assert result.ok
        assert result.data["email"] == "jane@acme.io"
        assert result.data["preferred_date"] == "2026-11-20"

    def test_camel_case_accepted(self):
        payload = {k: v for k, v in DEMO.items() if not k.startswith(("preferred", "project"))}
        payload.update(preferredDate="2026-11-20", preferredTime="morning",
                       projectDescription="Redesign of our onboarding flow.")
        assert validate_demo(payload).ok

    def test_missing_service(self):
        payload = {k: v for k, v in DEMO.items() if k != "service"}
        assert _reasons(validate_demo(payload)) == {"service": "Service is required"}

    def test_missing_everything(self):
        fields = [v.field for v in validate_demo({}).violations]
        for name in ("name", "email", "phone", "service", "preferredDate",
                     "preferredTime", "projectDescription"):
            assert name in fields


class TestMeetingValidation:
    @pytest.mark.parametrize("email", ["not-an-email", "a@b", "a b@c.io", "@acme.io"])
    def test_bad_email(self, email):
        result = validate_meeting({"name": "Sam", "email": email})
        assert _reasons(result) == {"email": "Please provide a valid email address"}

    def test_message_optional(self):
        result = validate_meeting({"name": "Sam", "email": "sam@acme.io"})
        assert result.ok
        assert result.data["message"] is None

    def test_status_update(self):
        result = validate_meeting_status({"status": "confirmed", "meetingLink": "https://x.io/m"})
        assert result.data == {"status": "confirmed", "meeting_link": "https://x.io/m"}

    def test_status_update_unknown_status(self):
        result = validate_meeting_status({"status": "done"})
        assert _reasons(result) == {
            "status": "status must be one of pending, confirmed, completed, cancelled",
        }


class TestUserValidation:
    def test_role_default(self):
        result = validate_user({"name": "Ops", "email": "ops@acme.io", "password": "longenough"})
        assert result.data["role"] == "user"

    def test_bad_role(self):
        result = validate_user({"name": "Ops", "email": "ops@acme.io", "password": "longenough",
                                "role": "root"})
        assert "role" in _reasons(result)

    def test_update_blank_email_ignored(self):
        result = validate_user_update({"email": "  ", "company": "Acme"})
        assert result.ok
        assert result.data["email"] is None


class TestViolationsFrom:
    def test_strips_location_and_prefix(self):
        errors = [
            {"loc": ("body", "email"), "msg": "Value error, Please provide a valid email address"},
            {"loc": ("query", "page"), "msg": "Input should be greater than or equal to 1"},
            {"loc": ("body",), "msg": "Field required"},
        ]
        assert [(v.field, v.reason) for v in violations_from(errors)] == [
            ("email", "Please provide a valid email address"),
            ("page", "Input should be greater than or equal to 1"),
            ("body", "Field required"),
        ]


class TestParseCalendarDate:
    @pytest.mark.parametrize("value,expected", [
        ("2026-11-20", date(2026, 11, 20)),
        ("2026-11-20T10:00:00Z", date(2026, 11, 20)),
        ("2026-11-20T10:00:00+05:30", date(2026, 11, 20)),
        ("2026-02-30", None),
        ("next tuesday", None),
        ("", None),
        (None, None),
        (20261120, None),
    ])
    def test_parse(self, value, expected):
        assert parse_calendar_date(value) == expected


# ═══════════════════════════════════════════════════════════════════════════
# REPOSITORIES
# ═══════════════════════════════════════════════════════════════════════════
class TestSubmissionRepository:
    def test_create_applies_table_defaults(self, database):
        repo = ContactRepository(database)
        contact = repo.create({**CONTACT, "service": "other", "bogus": "ignored"})
        assert contact["status"] == "new"
        assert contact["priority"] is None
        assert contact["created_at"] == contact["updated_at"]
        assert "bogus" not in contact
        assert repo.get(contact["id"]) == contact

    def test_check_constraint_is_persistence_error(self, database):
        repo = ContactRepository(database)
        with pytest.raises(PersistenceError):
            repo.create({**CONTACT, "status": "archived"})
        assert repo.count() == 0

    def test_update_merges_supplied_fields(self, database):
        repo = ContactRepository(database)
        contact = repo.create(CONTACT)
        repo.update(contact["id"], {"status": "contacted", "notes": "First call"})
        updated = repo.update(contact["id"], {"status": "completed", "notes": None, "name": "Hacker"})
        assert updated["status"] == "completed"
        assert updated["notes"] == "First call"
        assert updated["name"] == "Priya Sharma"
        assert updated["updated_at"] > contact["updated_at"]
        assert updated["created_at"] == contact["created_at"]

    def test_update_unknown(self, database):
        assert ContactRepository(database).update("missing", {"status": "new"}) is None

    def test_delete(self, database):
        repo = DemoRepository(database)
        demo = repo.create(DEMO)
        assert repo.delete(demo["id"]) is True
        assert repo.delete(demo["id"]) is False
        assert repo.get(demo["id"]) is None

    def test_list_newest_first_with_filters(self, database):
        repo = MeetingRepository(database)
        ids = [repo.create({"name": f"Guest {i}", "email": "g@acme.io"})["id"] for i in range(5)]
        repo.update(ids[1], {"status": "confirmed"})

        total, rows = repo.list(page=1, limit=2)
        assert total == 5
        assert [r["id"] for r in rows] == [ids[4], ids[3]]

        total, rows = repo.list(page=3, limit=2)
        assert [r["id"] for r in rows] == [ids[0]]

        total, rows = repo.list(status="confirmed")
        assert total == 1
        assert rows[0]["id"] == ids[1]

    def test_unknown_filter(self, database):
        with pytest.raises(ValueError):
            MeetingRepository(database).list(service="seo-backlinks")

    def test_status_by_service(self, database):
        repo = DemoRepository(database)
        repo.create(DEMO)
        repo.create({**DEMO, "service": "logo-design", "status": "confirmed"})
        assert repo.status_by_service() == [
            {"service": "ui-ux-design", "status": "pending"},
            {"service": "logo-design", "status": "confirmed"},
        ]

    def test_concurrent_creates_on_shared_memory_db(self, database):
        repo = ContactRepository(database)

        def submit(i):
            return repo.create({**CONTACT, "name": f"Visitor {i:03d}"})["id"]

        with ThreadPoolExecutor(max_workers=8) as pool:
            ids = list(pool.map(submit, range(200)))

        assert len(set(ids)) == 200
        assert repo.count() == 200
        total, _ = repo.list(limit=1)
        assert total == 200


class TestUserRepository:
    def test_password_hash_never_selected(self, database):
        repo = UserRepository(database)
        user = repo.create({"name": "Ops", "email": "ops@acme.io", "password_hash": "x"})
        assert "password_hash" not in user
        assert user["role"] == "user"
        assert repo.get_by_email("ops@acme.io")["id"] == user["id"]
        assert repo.get_by_email("nobody@acme.io") is None

    def test_unique_email_is_conflict(self, database):
        repo = UserRepository(database)
        repo.create({"name": "Ops", "email": "ops@acme.io", "password_hash": "x"})
        with pytest.raises(ConflictError, match="already exists"):
            repo.create({"name": "Ops Two", "email": "ops@acme.io", "password_hash": "y"})

    def test_update_onto_taken_email_is_conflict(self, database):
        repo = UserRepository(database)
        repo.create({"name": "Ops", "email": "ops@acme.io", "password_hash": "x"})
        other = repo.create({"name": "Sales", "email": "sales@acme.io", "password_hash": "y"})
        with pytest.raises(ConflictError):
            repo.update(other["id"], {"email": "ops@acme.io"})
        assert repo.get(other["id"])["email"] == "sales@acme.io"

    def test_lost_email_race_in_service_is_conflict(self, database):
        service = UserService(UserRepository(database))
        payload = {"name": "Ops", "email": "ops@acme.io", "password": "s3cret-pass"}
        service.create_user(payload)
        # Both callers pass the lookup before either insert lands.
        with patch.object(UserRepository, "get_by_email", return_value=None):
            with pytest.raises(ConflictError):
                service.create_user(dict(payload))


class TestMonotonicClock:
    def test_strictly_increasing(self):
        clock = MonotonicClock()
        stamps = [clock() for _ in range(500)]
        assert stamps == sorted(set(stamps))

    def test_fixed_width(self):
        clock = MonotonicClock()
        assert len({len(clock()) for _ in range(50)}) == 1


# ═══════════════════════════════════════════════════════════════════════════
# STATISTICS
# ═══════════════════════════════════════════════════════════════════════════
class TestStatistics:
    def test_group_by_service_keeps_duplicates(self):
        pairs = [
            {"service": "seo-backlinks", "status": "new"},
            {"service": "app-development", "status": "new"},
            {"service": "seo-backlinks", "status": "new"},
            {"service": "seo-backlinks", "status": "completed"},
        ]
        assert group_by_service(pairs) == [
            {"service": "app-development", "count": 1, "status_counts": ["new"]},
            {"service": "seo-backlinks", "count": 3, "status_counts": ["new", "new", "completed"]},
        ]

    def test_group_by_service_empty(self):
        assert group_by_service([]) == []

    def test_totals(self, database):
        contacts, demos = ContactRepository(database), DemoRepository(database)
        contacts.create(CONTACT)
        contacts.create({**CONTACT, "status": "contacted"})
        demos.create({**DEMO, "status": "cancelled"})
        stats = StatisticsService(contacts, demos).get_statistics()
        assert stats["totals"] == {
            "contacts": 2, "demos": 1, "pending_contacts": 1, "pending_demos": 0,
        }
        assert stats["demo_stats"] == [
            {"service": "ui-ux-design", "count": 1, "status_counts": ["cancelled"]},
        ]


# ═══════════════════════════════════════════════════════════════════════════
# NOTIFICATIONS
# ═══════════════════════════════════════════════════════════════════════════
def _smtp_settings(**overrides):
    s = Settings()
    s.SMTP_HOST = "smtp.acme.io"
    s.SMTP_PORT = 587
    s.SMTP_USER = "mailer@acme.io"
    s.SMTP_PASS = "secret"
    s.SMTP_USE_TLS = True
    s.EMAIL_FROM = "mailer@acme.io"
    s.ADMIN_EMAIL = "sales@acme.io"
    s.COMPANY_NAME = "Acme Studio"
    for key, value in overrides.items():
        setattr(s, key, value)
    return s


def _html(message):
    return message.get_body(preferencelist=("html",)).get_content()


class TestEmailNotifier:
    def test_unconfigured_returns_false(self):
        notifier = EmailNotifier(_smtp_settings(SMTP_HOST=""))
        with patch("intake.services.notifier.smtplib.SMTP") as smtp:
            assert notifier.send(CONTACT_ADMIN, CONTACT) is False
        smtp.assert_not_called()

    def test_transport_failure_returns_false(self):
        notifier = EmailNotifier(_smtp_settings())
        with patch("intake.services.notifier.smtplib.SMTP", side_effect=ConnectionRefusedError("refused")):
            assert notifier.send(CONTACT_ADMIN, CONTACT) is False

    def test_login_failure_returns_false(self):
        notifier = EmailNotifier(_smtp_settings())
        with patch("intake.services.notifier.smtplib.SMTP") as smtp:
            smtp.return_value.__enter__.return_value.login.side_effect = OSError("auth failed")
            assert notifier.send(CONTACT_ADMIN, CONTACT) is False

    def test_success(self):
        notifier = EmailNotifier(_smtp_settings())
        with patch("intake.services.notifier.smtplib.SMTP") as smtp:
            assert notifier.send(DEMO_CONFIRMATION, DEMO) is True
        server = smtp.return_value.__enter__.return_value
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("mailer@acme.io", "secret")
        sent = server.send_message.call_args[0][0]
        assert sent["To"] == "jane@acme.io"
        assert sent["Subject"] == "Demo Booking Confirmation - Acme Studio"

    def test_admin_notice_goes_to_staff(self):
        message = EmailNotifier(_smtp_settings()).compose(DEMO_ADMIN, DEMO)
        assert message["To"] == "sales@acme.io"
        assert "November 20, 2026" in _html(message)

    def test_user_input_is_escaped(self):
        payload = {**CONTACT, "name": "<script>alert(1)</script>", "message": "a & b <i>"}
        html = _html(EmailNotifier(_smtp_settings()).compose(CONTACT_ADMIN, payload))
        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert "a &amp; b &lt;i&gt;" in html

    def test_missing_fields_rendered_as_placeholders(self):
        html = _html(EmailNotifier(_smtp_settings()).compose(CONTACT_ADMIN, CONTACT))
        assert "Not provided" in html


class _StubNotifier:
    def __init__(self, results=None, delay=0.0, error=None):
        self.results = results or {}
        self.delay = delay
        self.error = error

    def send(self, kind, payload):
        if self.delay:
            time.sleep(self.delay)
        if self.error:
            raise self.error
        return self.results.get(kind, True)


class TestNotificationDispatcher:
    def test_results_in_job_order(self):
        dispatcher = NotificationDispatcher(_StubNotifier({DEMO_CONFIRMATION: False}), timeout=1.0)
        try:
            assert dispatcher.send_all([(DEMO_CONFIRMATION, DEMO), (DEMO_ADMIN, DEMO)]) == [False, True]
        finally:
            dispatcher.shutdown()

    def test_exception_counts_as_failure(self):
        dispatcher = NotificationDispatcher(_StubNotifier(error=RuntimeError("boom")), timeout=1.0)
        try:
            assert dispatcher.send(CONTACT_ADMIN, CONTACT) is False
        finally:
            dispatcher.shutdown()

    def test_shared_deadline(self):
        dispatcher = NotificationDispatcher(_StubNotifier(delay=0.5), timeout=0.1, max_workers=2)
        try:
            start = time.monotonic()
            results = dispatcher.send_all([(DEMO_CONFIRMATION, DEMO), (DEMO_ADMIN, DEMO)])
            elapsed = time.monotonic() - start
        finally:
            dispatcher.shutdown()
        assert results == [False, False]
        assert elapsed < 0.4

    def test_sends_run_in_parallel(self):
        dispatcher = NotificationDispatcher(_StubNotifier(delay=0.2), timeout=1.0, max_workers=2)
        try:
            start = time.monotonic()
            results = dispatcher.send_all([(DEMO_CONFIRMATION, DEMO), (DEMO_ADMIN, DEMO)])
            elapsed = time.monotonic() - start
        finally:
            dispatcher.shutdown()
        assert results == [True, True]
        assert elapsed < 0.39


# ═══════════════════════════════════════════════════════════════════════════
# AUTH & CONFIG
# ═══════════════════════════════════════════════════════════════════════════
class TestAuthService:
    auth = AuthService({"k-admin": "admin", "k-staff": "staff"})

    def test_roles(self):
        assert self.auth.role_for("k-admin") == "admin"
        assert self.auth.role_for("k-staff") == "staff"
        assert self.auth.role_for("other") is None
        assert self.auth.role_for(None) is None

    def test_require_role(self):
        assert self.auth.require_role("k-admin", "admin") == "admin"
        with pytest.raises(AuthenticationError):
            self.auth.require_role(None, "admin")
        with pytest.raises(PermissionDeniedError):
            self.auth.require_role("k-staff", "admin")

    def test_hash_password(self):
        first, second = hash_password("s3cret-pass"), hash_password("s3cret-pass")
        assert first != second
        assert first.startswith("$2b$")
        assert "s3cret-pass" not in first
        assert pwd_context.verify("s3cret-pass", first)
        assert not pwd_context.verify("wrong-pass", first)

    def test_created_user_stores_verifiable_hash(self, database):
        user = UserService(UserRepository(database)).create_user(
            {"name": "Ops", "email": "ops@acme.io", "password": "s3cret-pass"},
        )
        with database.connection() as conn:
            stored = conn.execute(
                text("SELECT password_hash FROM users WHERE id = :id"), {"id": user["id"]},
            ).scalar_one()
        assert pwd_context.verify("s3cret-pass", stored)


class TestConfig:
    def test_parse_api_keys(self):
        assert _parse_api_keys("a1:admin, s1:staff ,bare,, ") == {
            "a1": "admin", "s1": "staff", "bare": "admin",
        }

    def test_parse_api_keys_empty(self):
        assert _parse_api_keys("") == {}


class TestHelpers:
    @pytest.mark.parametrize("path,expected", [
        ("/api/contact", "/api/contact"),
        ("/api/contact/3f2b9c1e", "/api/contact/{id}"),
        ("/api/meetings/abc/status", "/api/meetings/{id}/status"),
        ("/api/services/statistics", "/api/services/statistics"),
    ])
    def test_route_template(self, path, expected):
        assert route_template(path) == expected

    def test_paginated(self):
        assert paginated("contact", [], 25, 2, 10) == {
            "contacts": [], "totalPages": 3, "currentPage": 2, "totalContacts": 25,
        }
        assert paginated("demo", [], 0, 1, 10)["totalPages"] == 0
