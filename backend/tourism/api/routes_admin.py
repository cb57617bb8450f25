from fastapi import APIRouter, Depends

from tourism.api import get_repository, require_admin
from tourism.models.domain import Identity
from tourism.models.schemas import AdminStatsResponse
from tourism.services.analytics_service import AnalyticsService
from tourism.storage.repository import Repository

router = APIRouter()


@router.get("/stats", response_model=AdminStatsResponse)
def admin_stats(
    _: Identity = Depends(require_admin),
    repository: Repository = Depends(get_repository),
) -> AdminStatsResponse:
    bookings, users, revenue = AnalyticsService(repository=repository).summary()
    return AdminStatsResponse.from_domain(bookings=bookings, users=users, revenue=revenue)
