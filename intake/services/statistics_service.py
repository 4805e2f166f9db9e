# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Admin dashboard aggregates over contacts and demos. Read-only, never cached."""
from typing import Any, Dict, List

from intake.repositories.contact_repository import ContactRepository
from intake.repositories.demo_repository import DemoRepository


def group_by_service(pairs: List[Dict[str, str]]) -> List[Dict[str, Any]]:
    """Per-service count plus the raw (not deduplicated) list of statuses seen."""
    groups: Dict[str, Dict[str, Any]] = {}
    for pair in pairs:
        group = groups.setdefault(
            pair["service"], {"service": pair["service"], "count": 0, "status_counts": []},
        )
        group["count"] += 1
        group["status_counts"].append(pair["status"])
    return sorted(groups.values(), key=lambda g: g["service"])


class StatisticsService:
    def __init__(self, contacts: ContactRepository, demos: DemoRepository):
        self._contacts = contacts
        self._demos = demos

    def get_statistics(self) -> Dict[str, Any]:
        return {
            "contact_stats": group_by_service(self._contacts.status_by_service()),
            "demo_stats": group_by_service(self._demos.status_by_service()),
            "totals": {
                "contacts": self._contacts.count(),
                "demos": self._demos.count(),
                "pending_contacts": self._contacts.count(status="new"),
                "pending_demos": self._demos.count(status="pending"),
            },
        }
