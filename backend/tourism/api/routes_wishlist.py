from typing import List

from fastapi import APIRouter, Depends

from tourism.api import get_current_identity, get_repository
from tourism.models.domain import Identity
from tourism.models.schemas import MessageResponse, WishlistAdd, WishlistEntrySchema
from tourism.services.wishlist_service import WishlistService
from tourism.storage.repository import Repository

router = APIRouter()


def get_wishlist_service(
    repository: Repository = Depends(get_repository),
) -> WishlistService:
    return WishlistService(repository=repository)


@router.get("/wishlist", response_model=List[WishlistEntrySchema])
def get_wishlist(
    identity: Identity = Depends(get_current_identity),
    service: WishlistService = Depends(get_wishlist_service),
) -> List[WishlistEntrySchema]:
    return [WishlistEntrySchema.from_domain(e) for e in service.get_user_wishlist(identity)]


@router.post("/wishlist", response_model=WishlistEntrySchema)
def add_to_wishlist(
    body: WishlistAdd,
    identity: Identity = Depends(get_current_identity),
    service: WishlistService = Depends(get_wishlist_service),
) -> WishlistEntrySchema:
    return WishlistEntrySchema.from_domain(service.add_to_wishlist(identity, body.destination_id))


@router.delete("/wishlist/{destination_id}", response_model=MessageResponse)
def remove_from_wishlist(
    destination_id: str,
    identity: Identity = Depends(get_current_identity),
    service: WishlistService = Depends(get_wishlist_service),
) -> MessageResponse:
    service.remove_from_wishlist(identity, destination_id)
    return MessageResponse(message="Removed from wishlist")
