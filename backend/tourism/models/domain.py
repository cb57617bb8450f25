from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional


class Category(str, Enum):
    adventure = "adventure"
    luxury = "luxury"
    culture = "culture"
    beaches = "beaches"
    historical = "historical"


class Difficulty(str, Enum):
    easy = "easy"
    moderate = "moderate"
    challenging = "challenging"


class BookingStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"


class PaymentStatus(str, Enum):
    pending = "pending"
    paid = "paid"
    failed = "failed"
    refunded = "refunded"


@dataclass
class Coordinates:
    lat: float
    lng: float


@dataclass
class User:
    email: str
    username: str
    first_name: str
    last_name: str
    password_hash: str = ""
    avatar: Optional[str] = None
    preferences: List[str] = field(default_factory=list)
    billing_customer_id: Optional[str] = None
    billing_subscription_id: Optional[str] = None
    id: str = ""
    created_at: Optional[datetime] = None


@dataclass
class Destination:
    name: str
    country: str
    description: str
    coordinates: Coordinates
    category: Category
    price: float
    rating: float
    images: List[str] = field(default_factory=list)
    videos: List[str] = field(default_factory=list)
    activities: List[str] = field(default_factory=list)
    highlights: List[str] = field(default_factory=list)
    best_season: str = ""
    duration: str = ""
    difficulty: Difficulty = Difficulty.easy
    is_popular: bool = False
    id: str = ""
    created_at: Optional[datetime] = None


@dataclass
class Booking:
    user_id: str
    destination_id: str
    start_date: date
    end_date: date
    travelers: int
    total_price: float
    contact_email: str
    contact_phone: str
    status: BookingStatus = BookingStatus.pending
    payment_status: PaymentStatus = PaymentStatus.pending
    payment_intent_id: Optional[str] = None
    special_requests: Optional[str] = None
    id: str = ""
    created_at: Optional[datetime] = None


@dataclass
class WishlistEntry:
    user_id: str
    destination_id: str
    id: str = ""
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, resolved once per request from the session."""

    user_id: str
    email: str
    is_admin: bool = False


@dataclass
class BookingStats:
    total: int
    confirmed: int
    pending: int
    cancelled: int
    revenue: float


@dataclass
class RevenueStats:
    total: float
    this_month: float
    growth: Optional[float]


@dataclass
class UserStats:
    total: int
    active: int
