from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import fields, replace
from datetime import datetime, timezone
from typing import (
    Callable,
    ContextManager,
    Dict,
    Generic,
    Iterator,
    List,
    Mapping,
    Optional,
    Protocol,
    TypeVar,
)
from uuid import uuid4

from tourism.core.errors import NotFoundError, ValidationFailed
from tourism.models.domain import Booking, Destination, User, WishlistEntry

T = TypeVar("T", User, Destination, Booking, WishlistEntry)
Predicate = Callable[[T], bool]

# Fields the store owns; updates may not touch them.
_IMMUTABLE = frozenset({"id", "created_at"})


class Repository(Protocol):
    """Storage interface the services depend on."""

    def transaction(self) -> ContextManager[None]:
        ...

    def create_user(self, user: User) -> User:
        ...

    def get_user(self, user_id: str) -> Optional[User]:
        ...

    def get_user_by_email(self, email: str) -> Optional[User]:
        ...

    def list_users(self, predicate: Optional[Predicate] = None) -> List[User]:
        ...

    def update_user(self, user_id: str, changes: Mapping[str, object]) -> User:
        ...

    def delete_user(self, user_id: str) -> None:
        ...

    def create_destination(self, destination: Destination) -> Destination:
        ...

    def get_destination(self, destination_id: str) -> Optional[Destination]:
        ...

    def list_destinations(self, predicate: Optional[Predicate] = None) -> List[Destination]:
        ...

    def update_destination(self, destination_id: str, changes: Mapping[str, object]) -> Destination:
        ...

    def delete_destination(self, destination_id: str) -> None:
        ...

    def create_booking(self, booking: Booking) -> Booking:
        ...

    def get_booking(self, booking_id: str) -> Optional[Booking]:
        ...

    def list_bookings(self, predicate: Optional[Predicate] = None) -> List[Booking]:
        ...

    def update_booking(self, booking_id: str, changes: Mapping[str, object]) -> Booking:
        ...

    def delete_booking(self, booking_id: str) -> None:
        ...

    def create_wishlist_entry(self, entry: WishlistEntry) -> WishlistEntry:
        ...

    def get_wishlist_entry(self, entry_id: str) -> Optional[WishlistEntry]:
        ...

    def list_wishlist_entries(self, predicate: Optional[Predicate] = None) -> List[WishlistEntry]:
        ...

    def update_wishlist_entry(self, entry_id: str, changes: Mapping[str, object]) -> WishlistEntry:
        ...

    def delete_wishlist_entry(self, entry_id: str) -> None:
        ...


class _Table(Generic[T]):
    def __init__(self, entity: str) -> None:
        self.entity = entity
        self.rows: Dict[str, T] = {}

    def create(self, record: T) -> T:
        stored = replace(
            record,
            id=record.id or uuid4().hex,
            created_at=record.created_at or datetime.now(timezone.utc),
        )
        self.rows[stored.id] = stored
        return stored

    def get(self, record_id: str) -> Optional[T]:
        return self.rows.get(record_id)

    def list(self, predicate: Optional[Predicate] = None) -> List[T]:
        if predicate is None:
            return list(self.rows.values())
        return [r for r in self.rows.values() if predicate(r)]

    def update(self, record_id: str, changes: Mapping[str, object]) -> T:
        current = self.rows.get(record_id)
        if current is None:
            raise NotFoundError(self.entity, record_id)
        allowed = {f.name for f in fields(current)} - _IMMUTABLE
        unknown = set(changes) - allowed
        if unknown:
            raise ValidationFailed(
                f"Cannot update {self.entity} fields: {', '.join(sorted(unknown))}"
            )
        updated = replace(current, **changes)
        self.rows[record_id] = updated
        return updated

    def delete(self, record_id: str) -> None:
        self.rows.pop(record_id, None)


class InMemoryRepository:
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.users: _Table[User] = _Table("User")
        self.destinations: _Table[Destination] = _Table("Destination")
        self.bookings: _Table[Booking] = _Table("Booking")
        self.wishlist: _Table[WishlistEntry] = _Table("Wishlist entry")

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Serialise a check-then-act sequence against other writers."""
        with self._lock:
            yield

    # users
    def create_user(self, user: User) -> User:
        with self._lock:
            return self.users.create(user)

    def get_user(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        needle = email.lower()
        for user in self.users.list():
            if user.email.lower() == needle:
                return user
        return None

    def list_users(self, predicate: Optional[Predicate] = None) -> List[User]:
        return self.users.list(predicate)

    def update_user(self, user_id: str, changes: Mapping[str, object]) -> User:
        with self._lock:
            return self.users.update(user_id, changes)

    def delete_user(self, user_id: str) -> None:
        with self._lock:
            self.users.delete(user_id)

    # destinations
    def create_destination(self, destination: Destination) -> Destination:
        with self._lock:
            return self.destinations.create(destination)

    def get_destination(self, destination_id: str) -> Optional[Destination]:
        return self.destinations.get(destination_id)

    def list_destinations(self, predicate: Optional[Predicate] = None) -> List[Destination]:
        return self.destinations.list(predicate)

    def update_destination(self, destination_id: str, changes: Mapping[str, object]) -> Destination:
        with self._lock:
            return self.destinations.update(destination_id, changes)

    def delete_destination(self, destination_id: str) -> None:
        with self._lock:
            self.destinations.delete(destination_id)

    # bookings
    def create_booking(self, booking: Booking) -> Booking:
        with self._lock:
            return self.bookings.create(booking)

    def get_booking(self, booking_id: str) -> Optional[Booking]:
        return self.bookings.get(booking_id)

    def list_bookings(self, predicate: Optional[Predicate] = None) -> List[Booking]:
        return self.bookings.list(predicate)

    def update_booking(self, booking_id: str, changes: Mapping[str, object]) -> Booking:
        with self._lock:
            return self.bookings.update(booking_id, changes)

    def delete_booking(self, booking_id: str) -> None:
        with self._lock:
            self.bookings.delete(booking_id)

    # wishlist
    def create_wishlist_entry(self, entry: WishlistEntry) -> WishlistEntry:
        with self._lock:
            return self.wishlist.create(entry)

    def get_wishlist_entry(self, entry_id: str) -> Optional[WishlistEntry]:
        return self.wishlist.get(entry_id)

    def list_wishlist_entries(self, predicate: Optional[Predicate] = None) -> List[WishlistEntry]:
        return self.wishlist.list(predicate)

    def update_wishlist_entry(self, entry_id: str, changes: Mapping[str, object]) -> WishlistEntry:
        with self._lock:
            return self.wishlist.update(entry_id, changes)

    def delete_wishlist_entry(self, entry_id: str) -> None:
        with self._lock:
            self.wishlist.delete(entry_id)
