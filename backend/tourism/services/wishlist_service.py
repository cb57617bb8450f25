import logging
from typing import List

from tourism.core.errors import NotFoundError
from tourism.models.domain import Identity, WishlistEntry
from tourism.storage.repository import Repository

logger = logging.getLogger(__name__)


class WishlistService:
    def __init__(self, repository: Repository):
        self.repository = repository

    def _find(self, user_id: str, destination_id: str) -> List[WishlistEntry]:
        return self.repository.list_wishlist_entries(
            lambda e: e.user_id == user_id and e.destination_id == destination_id
        )

    def add_to_wishlist(self, identity: Identity, destination_id: str) -> WishlistEntry:
        with self.repository.transaction():
            if self.repository.get_destination(destination_id) is None:
                raise NotFoundError("Destination", destination_id)
            existing = self._find(identity.user_id, destination_id)
            if existing:
                return existing[0]
            entry = self.repository.create_wishlist_entry(
                WishlistEntry(user_id=identity.user_id, destination_id=destination_id)
            )
        logger.info("User %s saved destination %s", identity.user_id, destination_id)
        return entry

    def remove_from_wishlist(self, identity: Identity, destination_id: str) -> None:
        with self.repository.transaction():
            for entry in self._find(identity.user_id, destination_id):
                self.repository.delete_wishlist_entry(entry.id)

    def get_user_wishlist(self, identity: Identity) -> List[WishlistEntry]:
        return self.repository.list_wishlist_entries(lambda e: e.user_id == identity.user_id)
