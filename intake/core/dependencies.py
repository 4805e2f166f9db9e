# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection: wire repositories and services.

``build_container`` runs in the application lifespan and ``close_container``
on shutdown; route handlers reach the services through ``request.app.state``.
"""
from dataclasses import dataclass
from typing import Optional

from fastapi import Header, Query, Request

from intake.core.database import Database
from intake.core.errors import ValidationError
from intake.repositories import ContactRepository, DemoRepository, MeetingRepository, UserRepository
from intake.services.auth_service import AuthService
from intake.services.contact_service import ContactService
from intake.services.demo_service import DemoService
from intake.services.meeting_service import MeetingService
from intake.services.notifier import EmailNotifier, NotificationDispatcher, Notifier
from intake.services.statistics_service import StatisticsService
from intake.services.user_service import UserService
from intake.services.validation import Violation


@dataclass
class Container:
    database: Database
    dispatcher: NotificationDispatcher
    auth: AuthService
    contacts: ContactService
    demos: DemoService
    meetings: MeetingService
    users: UserService
    statistics: StatisticsService


def build_container(settings, database: Optional[Database] = None,
                    notifier: Optional[Notifier] = None) -> Container:
    database = database or Database.from_settings(settings)
    database.connect()
    dispatcher = NotificationDispatcher(
        notifier or EmailNotifier(settings),
        timeout=settings.NOTIFICATION_TIMEOUT,
        max_workers=settings.NOTIFICATION_WORKERS,
    )

    contact_repo = ContactRepository(database)
    demo_repo = DemoRepository(database)

    return Container(
        database=database,
        dispatcher=dispatcher,
        auth=AuthService(settings.API_KEYS),
        contacts=ContactService(contact_repo, dispatcher),
        demos=DemoService(demo_repo, dispatcher),
        meetings=MeetingService(MeetingRepository(database)),
        users=UserService(UserRepository(database)),
        statistics=StatisticsService(contact_repo, demo_repo),
    )


def close_container(container: Container) -> None:
    container.dispatcher.shutdown()
    container.database.dispose()


# ── FastAPI dependency functions ──
def get_settings(request: Request):
    return request.app.state.settings


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_contact_service(request: Request) -> ContactService:
    return get_container(request).contacts


def get_demo_service(request: Request) -> DemoService:
    return get_container(request).demos


def get_meeting_service(request: Request) -> MeetingService:
    return get_container(request).meetings


def get_user_service(request: Request) -> UserService:
    return get_container(request).users


def get_statistics_service(request: Request) -> StatisticsService:
    return get_container(request).statistics


def require_admin(
    request: Request,
    x_api_key: Optional[str] = Header(default=None),
    authorization: Optional[str] = Header(default=None),
) -> str:
    """Admin gate: 401 without a known key, 403 for a non-admin key."""
    api_key = x_api_key
    if not api_key and authorization and authorization.lower().startswith("bearer "):
        api_key = authorization[7:].strip()
    return get_container(request).auth.require_role(api_key, "admin")


@dataclass
class Page:
    page: int
    limit: int


def get_page(
    request: Request,
    page: int = Query(default=1, ge=1),
    limit: Optional[int] = Query(default=None, ge=1),
) -> Page:
    """Paging query params, bounded by the running app's page-size settings."""
    config = get_settings(request)
    if limit is None:
        limit = config.DEFAULT_PAGE_SIZE
    elif limit > config.MAX_PAGE_SIZE:
        raise ValidationError([
            Violation("limit", f"Input should be less than or equal to {config.MAX_PAGE_SIZE}"),
        ])
    return Page(page=page, limit=limit)
