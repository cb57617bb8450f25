from fastapi import APIRouter

from tourism.core.config import settings

router = APIRouter()


@router.get("/health")
def healthcheck() -> dict:
    return {"status": "ok", "service": settings.app_name}
