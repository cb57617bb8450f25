from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional, Tuple

from tourism.core.config import settings
from tourism.models.domain import (
    Booking,
    BookingStats,
    BookingStatus,
    PaymentStatus,
    RevenueStats,
    UserStats,
)
from tourism.storage.repository import Repository


def _month_key(moment: datetime) -> Tuple[int, int]:
    return moment.year, moment.month


def _previous_month(key: Tuple[int, int]) -> Tuple[int, int]:
    year, month = key
    return (year - 1, 12) if month == 1 else (year, month - 1)


def _as_utc(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    # stored timestamps are aware; naive input is read as UTC
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def _paid_total(bookings: Iterable[Booking]) -> float:
    return sum(b.total_price for b in bookings if b.payment_status == PaymentStatus.paid)


class AnalyticsService:
    """Admin statistics, recomputed from a full scan on every call."""

    def __init__(self, repository: Repository, active_window_days: Optional[int] = None):
        self.repository = repository
        self.active_window_days = (
            active_window_days
            if active_window_days is not None
            else settings.active_user_window_days
        )

    def booking_stats(self) -> BookingStats:
        bookings = self.repository.list_bookings()
        return BookingStats(
            total=len(bookings),
            confirmed=sum(1 for b in bookings if b.status == BookingStatus.confirmed),
            pending=sum(1 for b in bookings if b.status == BookingStatus.pending),
            cancelled=sum(1 for b in bookings if b.status == BookingStatus.cancelled),
            revenue=_paid_total(bookings),
        )

    def revenue_stats(self, now: Optional[datetime] = None) -> RevenueStats:
        now = _as_utc(now)
        current = _month_key(now)
        previous = _previous_month(current)
        bookings = self.repository.list_bookings()
        this_month = _paid_total(b for b in bookings if _month_key(b.created_at) == current)
        last_month = _paid_total(b for b in bookings if _month_key(b.created_at) == previous)
        growth = None
        if last_month > 0:
            growth = round((this_month - last_month) / last_month * 100, 1)
        return RevenueStats(total=_paid_total(bookings), this_month=this_month, growth=growth)

    def user_stats(self, now: Optional[datetime] = None) -> UserStats:
        now = _as_utc(now)
        cutoff = now - timedelta(days=self.active_window_days)
        user_ids = {u.id for u in self.repository.list_users()}
        active = {
            b.user_id
            for b in self.repository.list_bookings(lambda b: b.created_at >= cutoff)
            if b.user_id in user_ids
        }
        return UserStats(total=len(user_ids), active=len(active))

    def summary(self, now: Optional[datetime] = None) -> Tuple[BookingStats, UserStats, RevenueStats]:
        return self.booking_stats(), self.user_stats(now), self.revenue_stats(now)
