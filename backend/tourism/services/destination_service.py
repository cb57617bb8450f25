import logging
from typing import List

from tourism.core.errors import NotFoundError, ValidationFailed
from tourism.models.domain import Category, Coordinates, Destination
from tourism.models.schemas import DestinationCreate, DestinationUpdate, SearchQuery
from tourism.storage.repository import Repository

logger = logging.getLogger(__name__)


class DestinationService:
    def __init__(self, repository: Repository):
        self.repository = repository

    def list_destinations(self) -> List[Destination]:
        return self.repository.list_destinations()

    def get_destination(self, destination_id: str) -> Destination:
        destination = self.repository.get_destination(destination_id)
        if destination is None:
            raise NotFoundError("Destination", destination_id)
        return destination

    def search_destinations(self, query: str) -> List[Destination]:
        needle = query.lower()
        return self.repository.list_destinations(
            lambda d: needle in d.name.lower()
            or needle in d.country.lower()
            or needle in d.description.lower()
        )

    def search(self, query: SearchQuery) -> List[Destination]:
        """Text match plus the optional catalogue filters."""
        results = self.search_destinations(query.query)
        if query.categories:
            wanted = set(query.categories)
            results = [d for d in results if d.category in wanted]
        if query.price_range is not None:
            low, high = query.price_range.min, query.price_range.max
            if low is not None:
                results = [d for d in results if d.price >= low]
            if high is not None:
                results = [d for d in results if d.price <= high]
        if query.season:
            season = query.season.lower()
            results = [d for d in results if season in d.best_season.lower()]
        if query.difficulty is not None:
            results = [d for d in results if d.difficulty == query.difficulty]
        if query.duration:
            duration = query.duration.lower()
            results = [d for d in results if duration in d.duration.lower()]
        return results

    def destinations_by_category(self, category: str) -> List[Destination]:
        try:
            wanted = Category(category)
        except ValueError as exc:
            raise ValidationFailed(f"Unknown category: {category}") from exc
        return self.repository.list_destinations(lambda d: d.category == wanted)

    def popular_destinations(self) -> List[Destination]:
        return self.repository.list_destinations(lambda d: d.is_popular)

    def create_destination(self, payload: DestinationCreate) -> Destination:
        data = payload.model_dump()
        data["coordinates"] = Coordinates(**data["coordinates"])
        data["images"] = [str(u) for u in payload.images]
        data["videos"] = [str(u) for u in payload.videos]
        destination = Destination(**data)
        _check_bounds(destination.price, destination.rating)
        created = self.repository.create_destination(destination)
        logger.info("Created destination %s (%s)", created.id, created.name)
        return created

    def update_destination(self, destination_id: str, payload: DestinationUpdate) -> Destination:
        changes = payload.model_dump(exclude_unset=True)
        if changes.get("coordinates") is not None:
            changes["coordinates"] = Coordinates(**changes["coordinates"])
        for key in ("images", "videos"):
            if changes.get(key) is not None:
                changes[key] = [str(u) for u in getattr(payload, key)]
        # explicit nulls would blank required fields
        changes = {k: v for k, v in changes.items() if v is not None}
        current = self.get_destination(destination_id)
        _check_bounds(changes.get("price", current.price), changes.get("rating", current.rating))
        return self.repository.update_destination(destination_id, changes)

    def delete_destination(self, destination_id: str) -> None:
        self.repository.delete_destination(destination_id)
        logger.info("Deleted destination %s", destination_id)


def _check_bounds(price: float, rating: float) -> None:
    if price <= 0:
        raise ValidationFailed("Destination price must be positive")
    if not 0 <= rating <= 5:
        raise ValidationFailed("Destination rating must be between 0 and 5")
