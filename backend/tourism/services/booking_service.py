import logging
from typing import Dict, FrozenSet, List

from tourism.core.errors import ConflictError, ForbiddenError, NotFoundError, ValidationFailed
from tourism.models.domain import Booking, BookingStatus, Identity, PaymentStatus
from tourism.models.schemas import BookingCreate
from tourism.storage.repository import Repository

logger = logging.getLogger(__name__)

STATUS_TRANSITIONS: Dict[BookingStatus, FrozenSet[BookingStatus]] = {
    BookingStatus.pending: frozenset({BookingStatus.confirmed, BookingStatus.cancelled}),
    BookingStatus.confirmed: frozenset({BookingStatus.completed, BookingStatus.cancelled}),
    BookingStatus.cancelled: frozenset(),
    BookingStatus.completed: frozenset(),
}

# Processor intent states that settle a booking's payment.
PAYMENT_SUCCEEDED = "succeeded"
PAYMENT_FAILED = frozenset({"canceled", "failed"})


class BookingService:
    def __init__(self, repository: Repository):
        self.repository = repository

    def quote(self, destination_id: str, travelers: int) -> float:
        if travelers <= 0:
            raise ValidationFailed("Travelers must be a positive number")
        destination = self.repository.get_destination(destination_id)
        if destination is None:
            raise NotFoundError("Destination", destination_id)
        return destination.price * travelers

    def create_booking(self, identity: Identity, payload: BookingCreate) -> Booking:
        if payload.end_date < payload.start_date:
            raise ValidationFailed("End date must not be before start date")
        with self.repository.transaction():
            if payload.payment_intent_id:
                self._ensure_intent_unclaimed(payload.payment_intent_id)
            total_price = self.quote(payload.destination_id, payload.travelers)
            booking = self.repository.create_booking(
                Booking(
                    user_id=identity.user_id,
                    destination_id=payload.destination_id,
                    start_date=payload.start_date,
                    end_date=payload.end_date,
                    travelers=payload.travelers,
                    total_price=total_price,
                    contact_email=str(payload.contact_email),
                    contact_phone=payload.contact_phone,
                    special_requests=payload.special_requests,
                    payment_intent_id=payload.payment_intent_id,
                )
            )
        logger.info(
            "Booking %s created for user %s (%s x%d, total %.2f)",
            booking.id,
            identity.user_id,
            booking.destination_id,
            booking.travelers,
            booking.total_price,
        )
        return booking

    def _ensure_intent_unclaimed(self, payment_intent_id: str, booking_id: str = "") -> None:
        # one processor payment settles at most one booking
        claimed = self.repository.list_bookings(
            lambda b: b.payment_intent_id == payment_intent_id and b.id != booking_id
        )
        if claimed:
            logger.warning(
                "Payment intent %s already attached to booking %s", payment_intent_id, claimed[0].id
            )
            raise ConflictError(
                "Payment intent is already attached to another booking",
                details={"payment_intent_id": payment_intent_id},
            )

    def get_booking(self, identity: Identity, booking_id: str) -> Booking:
        booking = self.repository.get_booking(booking_id)
        if booking is None:
            raise NotFoundError("Booking", booking_id)
        if booking.user_id != identity.user_id and not identity.is_admin:
            logger.warning("User %s denied access to booking %s", identity.user_id, booking_id)
            raise ForbiddenError()
        return booking

    def get_user_bookings(self, identity: Identity) -> List[Booking]:
        return self.repository.list_bookings(lambda b: b.user_id == identity.user_id)

    def update_status(self, identity: Identity, booking_id: str, status: BookingStatus) -> Booking:
        with self.repository.transaction():
            booking = self.get_booking(identity, booking_id)
            if booking.status == status:
                return booking
            if status not in STATUS_TRANSITIONS[booking.status]:
                raise ValidationFailed(
                    f"Cannot move booking from {booking.status.value} to {status.value}"
                )
            updated = self.repository.update_booking(booking_id, {"status": status})
        logger.info("Booking %s status %s -> %s", booking_id, booking.status.value, status.value)
        return updated

    def cancel_booking(self, identity: Identity, booking_id: str) -> Booking:
        return self.update_status(identity, booking_id, BookingStatus.cancelled)

    def record_payment(
        self, identity: Identity, booking_id: str, payment_intent_id: str, outcome: str
    ) -> Booking:
        """Apply the processor's verdict on a payment intent to the booking."""
        with self.repository.transaction():
            booking = self.get_booking(identity, booking_id)
            if booking.payment_intent_id and booking.payment_intent_id != payment_intent_id:
                raise ValidationFailed("Payment intent does not belong to this booking")
            self._ensure_intent_unclaimed(payment_intent_id, booking_id)
            if booking.payment_status == PaymentStatus.paid:
                return booking
            if booking.payment_status == PaymentStatus.refunded:
                raise ValidationFailed("Refunded bookings cannot be settled again")
            if booking.status == BookingStatus.cancelled:
                raise ValidationFailed("Cancelled bookings cannot be settled")
            if outcome == PAYMENT_SUCCEEDED:
                changes = {
                    "payment_status": PaymentStatus.paid,
                    "payment_intent_id": payment_intent_id,
                }
                if booking.status == BookingStatus.pending:
                    changes["status"] = BookingStatus.confirmed
            elif outcome in PAYMENT_FAILED:
                changes = {
                    "payment_status": PaymentStatus.failed,
                    "payment_intent_id": payment_intent_id,
                }
            else:
                return booking
            updated = self.repository.update_booking(booking_id, changes)
        logger.info(
            "Booking %s payment %s (intent %s)", booking_id, updated.payment_status.value, payment_intent_id
        )
        return updated

    def refund_booking(self, identity: Identity, booking_id: str) -> Booking:
        if not identity.is_admin:
            raise ForbiddenError("Admin access required")
        with self.repository.transaction():
            booking = self.get_booking(identity, booking_id)
            if booking.payment_status != PaymentStatus.paid:
                raise ValidationFailed("Only paid bookings can be refunded")
            updated = self.repository.update_booking(
                booking_id,
                {"payment_status": PaymentStatus.refunded, "status": BookingStatus.cancelled},
            )
        logger.info("Booking %s refunded", booking_id)
        return updated

    def delete_booking(self, identity: Identity, booking_id: str) -> None:
        with self.repository.transaction():
            if self.repository.get_booking(booking_id) is None:
                return
            self.get_booking(identity, booking_id)
            self.repository.delete_booking(booking_id)
        logger.info("Booking %s deleted by %s", booking_id, identity.user_id)
