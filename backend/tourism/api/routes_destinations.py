from typing import List, Optional

from fastapi import APIRouter, Depends, status

from tourism.api import get_repository, require_admin
from tourism.models.domain import Identity
from tourism.models.schemas import (
    DestinationCreate,
    DestinationSchema,
    DestinationUpdate,
    SearchQuery,
)
from tourism.services.destination_service import DestinationService
from tourism.storage.repository import Repository

router = APIRouter()


def get_destination_service(
    repository: Repository = Depends(get_repository),
) -> DestinationService:
    return DestinationService(repository=repository)


@router.get("/destinations", response_model=List[DestinationSchema])
def list_destinations(
    category: Optional[str] = None,
    popular: bool = False,
    service: DestinationService = Depends(get_destination_service),
) -> List[DestinationSchema]:
    if category:
        destinations = service.destinations_by_category(category)
    elif popular:
        destinations = service.popular_destinations()
    else:
        destinations = service.list_destinations()
    return [DestinationSchema.from_domain(d) for d in destinations]


@router.get("/destinations/{destination_id}", response_model=DestinationSchema)
def get_destination(
    destination_id: str,
    service: DestinationService = Depends(get_destination_service),
) -> DestinationSchema:
    return DestinationSchema.from_domain(service.get_destination(destination_id))


@router.post("/search", response_model=List[DestinationSchema])
def search(
    query: SearchQuery,
    service: DestinationService = Depends(get_destination_service),
) -> List[DestinationSchema]:
    return [DestinationSchema.from_domain(d) for d in service.search(query)]


@router.post(
    "/destinations",
    response_model=DestinationSchema,
    status_code=status.HTTP_201_CREATED,
)
def create_destination(
    payload: DestinationCreate,
    _: Identity = Depends(require_admin),
    service: DestinationService = Depends(get_destination_service),
) -> DestinationSchema:
    return DestinationSchema.from_domain(service.create_destination(payload))


@router.patch("/destinations/{destination_id}", response_model=DestinationSchema)
def update_destination(
    destination_id: str,
    payload: DestinationUpdate,
    _: Identity = Depends(require_admin),
    service: DestinationService = Depends(get_destination_service),
) -> DestinationSchema:
    return DestinationSchema.from_domain(service.update_destination(destination_id, payload))


@router.delete("/destinations/{destination_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_destination(
    destination_id: str,
    _: Identity = Depends(require_admin),
    service: DestinationService = Depends(get_destination_service),
) -> None:
    service.delete_destination(destination_id)
