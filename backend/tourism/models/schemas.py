from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, HttpUrl

from tourism.models.domain import (
    Booking,
    BookingStats,
    BookingStatus,
    Category,
    Destination,
    Difficulty,
    PaymentStatus,
    RevenueStats,
    User,
    UserStats,
    WishlistEntry,
)


class MessageResponse(BaseModel):
    message: str


# --- users / auth ---------------------------------------------------------


class UserCreate(BaseModel):
    email: EmailStr
    username: str = Field(min_length=3)
    first_name: str
    last_name: str
    password: str = Field(min_length=8)
    avatar: Optional[HttpUrl] = None
    preferences: List[str] = Field(default_factory=list)


class UserUpdate(BaseModel):
    username: Optional[str] = Field(None, min_length=3)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar: Optional[HttpUrl] = None
    preferences: Optional[List[str]] = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class UserSchema(BaseModel):
    id: str
    email: str
    username: str
    first_name: str
    last_name: str
    avatar: Optional[str] = None
    preferences: List[str]
    billing_customer_id: Optional[str] = None
    billing_subscription_id: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_domain(cls, obj: User) -> "UserSchema":
        # password_hash never leaves the service
        return cls(
            id=obj.id,
            email=obj.email,
            username=obj.username,
            first_name=obj.first_name,
            last_name=obj.last_name,
            avatar=obj.avatar,
            preferences=list(obj.preferences),
            billing_customer_id=obj.billing_customer_id,
            billing_subscription_id=obj.billing_subscription_id,
            created_at=obj.created_at,
        )


class SessionResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserSchema


# --- destinations ---------------------------------------------------------


class CoordinatesSchema(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class DestinationCreate(BaseModel):
    name: str = Field(min_length=1)
    country: str = Field(min_length=1)
    description: str
    coordinates: CoordinatesSchema
    category: Category
    images: List[HttpUrl] = Field(default_factory=list)
    videos: List[HttpUrl] = Field(default_factory=list)
    price: float = Field(gt=0)
    rating: float = Field(ge=0, le=5)
    activities: List[str] = Field(default_factory=list)
    highlights: List[str] = Field(default_factory=list)
    best_season: str = ""
    duration: str = ""
    difficulty: Difficulty = Difficulty.easy
    is_popular: bool = False


class DestinationUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    country: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    coordinates: Optional[CoordinatesSchema] = None
    category: Optional[Category] = None
    images: Optional[List[HttpUrl]] = None
    videos: Optional[List[HttpUrl]] = None
    price: Optional[float] = Field(None, gt=0)
    rating: Optional[float] = Field(None, ge=0, le=5)
    activities: Optional[List[str]] = None
    highlights: Optional[List[str]] = None
    best_season: Optional[str] = None
    duration: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    is_popular: Optional[bool] = None


class DestinationSchema(BaseModel):
    id: str
    name: str
    country: str
    description: str
    coordinates: CoordinatesSchema
    category: Category
    images: List[str]
    videos: List[str]
    price: float
    rating: float
    activities: List[str]
    highlights: List[str]
    best_season: str
    duration: str
    difficulty: Difficulty
    is_popular: bool
    created_at: datetime

    @classmethod
    def from_domain(cls, obj: Destination) -> "DestinationSchema":
        return cls(
            id=obj.id,
            name=obj.name,
            country=obj.country,
            description=obj.description,
            coordinates=CoordinatesSchema(lat=obj.coordinates.lat, lng=obj.coordinates.lng),
            category=obj.category,
            images=list(obj.images),
            videos=list(obj.videos),
            price=obj.price,
            rating=obj.rating,
            activities=list(obj.activities),
            highlights=list(obj.highlights),
            best_season=obj.best_season,
            duration=obj.duration,
            difficulty=obj.difficulty,
            is_popular=obj.is_popular,
            created_at=obj.created_at,
        )


class PriceRange(BaseModel):
    min: Optional[float] = None
    max: Optional[float] = None


class SearchQuery(BaseModel):
    query: str = ""
    categories: Optional[List[Category]] = None
    price_range: Optional[PriceRange] = None
    season: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    duration: Optional[str] = None


# --- bookings -------------------------------------------------------------


class BookingCreate(BaseModel):
    destination_id: str
    start_date: date
    end_date: date
    travelers: int = Field(gt=0)
    contact_email: EmailStr
    contact_phone: str = Field(min_length=1)
    special_requests: Optional[str] = None
    payment_intent_id: Optional[str] = None


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class PaymentConfirmation(BaseModel):
    payment_intent_id: str


class BookingSchema(BaseModel):
    id: str
    user_id: str
    destination_id: str
    start_date: date
    end_date: date
    travelers: int
    total_price: float
    status: BookingStatus
    payment_status: PaymentStatus
    payment_intent_id: Optional[str] = None
    special_requests: Optional[str] = None
    contact_email: str
    contact_phone: str
    created_at: datetime

    @classmethod
    def from_domain(cls, obj: Booking) -> "BookingSchema":
        return cls(
            id=obj.id,
            user_id=obj.user_id,
            destination_id=obj.destination_id,
            start_date=obj.start_date,
            end_date=obj.end_date,
            travelers=obj.travelers,
            total_price=obj.total_price,
            status=obj.status,
            payment_status=obj.payment_status,
            payment_intent_id=obj.payment_intent_id,
            special_requests=obj.special_requests,
            contact_email=obj.contact_email,
            contact_phone=obj.contact_phone,
            created_at=obj.created_at,
        )


# --- wishlist -------------------------------------------------------------


class WishlistAdd(BaseModel):
    destination_id: str


class WishlistEntrySchema(BaseModel):
    id: str
    user_id: str
    destination_id: str
    created_at: datetime

    @classmethod
    def from_domain(cls, obj: WishlistEntry) -> "WishlistEntrySchema":
        return cls(
            id=obj.id,
            user_id=obj.user_id,
            destination_id=obj.destination_id,
            created_at=obj.created_at,
        )


# --- payments -------------------------------------------------------------


class PaymentIntentRequest(BaseModel):
    destination_id: str
    travelers: int = Field(gt=0)
    start_date: date
    end_date: date
    contact_email: EmailStr
    contact_phone: str
    special_requests: Optional[str] = None


class PaymentIntentResponse(BaseModel):
    payment_intent_id: str
    client_secret: Optional[str] = None
    amount: float


class SubscriptionResponse(BaseModel):
    subscription_id: str
    client_secret: Optional[str] = None


# --- admin ----------------------------------------------------------------


class BookingStatsSchema(BaseModel):
    total: int
    confirmed: int
    pending: int
    cancelled: int
    revenue: float


class RevenueStatsSchema(BaseModel):
    total: float
    this_month: float
    growth: Optional[float] = None


class UserStatsSchema(BaseModel):
    total: int
    active: int


class AdminStatsResponse(BaseModel):
    bookings: BookingStatsSchema
    users: UserStatsSchema
    revenue: RevenueStatsSchema

    @classmethod
    def from_domain(
        cls, bookings: BookingStats, users: UserStats, revenue: RevenueStats
    ) -> "AdminStatsResponse":
        return cls(
            bookings=BookingStatsSchema(**vars(bookings)),
            users=UserStatsSchema(**vars(users)),
            revenue=RevenueStatsSchema(**vars(revenue)),
        )
