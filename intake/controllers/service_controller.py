# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: service catalog (public) and submission statistics (admin)."""
from fastapi import APIRouter, Depends

from intake.core.dependencies import get_statistics_service, require_admin
from intake.core.errors import NotFoundError
from intake.schemas import Statistics, dump, success
from intake.services import catalog
from intake.services.statistics_service import StatisticsService

router = APIRouter(prefix="/api/services", tags=["Services"])


@router.get("")
def list_services():
    return success({"services": catalog.list_services()})


# Declared before /{service_id} so "statistics" is not read as an id.
@router.get("/statistics", dependencies=[Depends(require_admin)])
def get_statistics(service: StatisticsService = Depends(get_statistics_service)):
    return success(dump(Statistics, service.get_statistics()))


@router.get("/{service_id}")
def get_service(service_id: str):
    found = catalog.get_service(service_id)
    if not found:
        raise NotFoundError("Service not found")
    return success({"service": found})
