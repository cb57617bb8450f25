import logging
from typing import List

from fastapi import APIRouter, Depends, status

from tourism.api import get_current_identity, get_repository, get_stripe_client
from tourism.core.errors import ValidationFailed
from tourism.models.domain import Identity
from tourism.models.schemas import (
    BookingCreate,
    BookingSchema,
    BookingStatusUpdate,
    PaymentConfirmation,
)
from tourism.services.booking_service import BookingService
from tourism.services.payment_client import StripeClient, to_minor_units
from tourism.storage.repository import Repository

logger = logging.getLogger(__name__)

router = APIRouter()


def get_booking_service(
    repository: Repository = Depends(get_repository),
) -> BookingService:
    return BookingService(repository=repository)


@router.get("/bookings", response_model=List[BookingSchema])
def list_bookings(
    identity: Identity = Depends(get_current_identity),
    service: BookingService = Depends(get_booking_service),
) -> List[BookingSchema]:
    return [BookingSchema.from_domain(b) for b in service.get_user_bookings(identity)]


@router.get("/bookings/{booking_id}", response_model=BookingSchema)
def get_booking(
    booking_id: str,
    identity: Identity = Depends(get_current_identity),
    service: BookingService = Depends(get_booking_service),
) -> BookingSchema:
    return BookingSchema.from_domain(service.get_booking(identity, booking_id))


@router.post(
    "/confirm-booking",
    response_model=BookingSchema,
    status_code=status.HTTP_201_CREATED,
)
def confirm_booking(
    payload: BookingCreate,
    identity: Identity = Depends(get_current_identity),
    service: BookingService = Depends(get_booking_service),
) -> BookingSchema:
    return BookingSchema.from_domain(service.create_booking(identity, payload))


@router.patch("/bookings/{booking_id}/status", response_model=BookingSchema)
def update_booking_status(
    booking_id: str,
    body: BookingStatusUpdate,
    identity: Identity = Depends(get_current_identity),
    service: BookingService = Depends(get_booking_service),
) -> BookingSchema:
    return BookingSchema.from_domain(service.update_status(identity, booking_id, body.status))


@router.post("/bookings/{booking_id}/payment", response_model=BookingSchema)
def record_payment(
    booking_id: str,
    body: PaymentConfirmation,
    identity: Identity = Depends(get_current_identity),
    service: BookingService = Depends(get_booking_service),
    stripe: StripeClient = Depends(get_stripe_client),
) -> BookingSchema:
    booking = service.get_booking(identity, booking_id)
    intent = stripe.retrieve_payment_intent(body.payment_intent_id)
    if intent.get("amount") != to_minor_units(booking.total_price):
        logger.warning(
            "Payment intent %s amount %s does not match booking %s",
            body.payment_intent_id,
            intent.get("amount"),
            booking_id,
        )
        raise ValidationFailed("Payment amount does not match booking total")
    updated = service.record_payment(
        identity, booking_id, body.payment_intent_id, intent.get("status", "")
    )
    return BookingSchema.from_domain(updated)


@router.post("/bookings/{booking_id}/refund", response_model=BookingSchema)
def refund_booking(
    booking_id: str,
    identity: Identity = Depends(get_current_identity),
    service: BookingService = Depends(get_booking_service),
) -> BookingSchema:
    return BookingSchema.from_domain(service.refund_booking(identity, booking_id))


@router.delete("/bookings/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_booking(
    booking_id: str,
    identity: Identity = Depends(get_current_identity),
    service: BookingService = Depends(get_booking_service),
) -> None:
    service.delete_booking(identity, booking_id)
