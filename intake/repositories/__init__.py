# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Repository package: re-exports the table repositories."""
from intake.repositories.contact_repository import ContactRepository
from intake.repositories.demo_repository import DemoRepository
from intake.repositories.meeting_repository import MeetingRepository
from intake.repositories.user_repository import UserRepository

__all__ = ["ContactRepository", "DemoRepository", "MeetingRepository", "UserRepository"]
