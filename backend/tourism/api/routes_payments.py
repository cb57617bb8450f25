from fastapi import APIRouter, Depends

from tourism.api import get_auth_service, get_current_identity, get_repository, get_stripe_client
from tourism.core.config import settings
from tourism.core.errors import ValidationFailed
from tourism.models.domain import Identity
from tourism.models.schemas import (
    PaymentIntentRequest,
    PaymentIntentResponse,
    SubscriptionResponse,
)
from tourism.services.auth_service import AuthService
from tourism.services.booking_service import BookingService
from tourism.services.payment_client import StripeClient, subscription_client_secret
from tourism.storage.repository import Repository

router = APIRouter()


@router.post("/create-payment-intent", response_model=PaymentIntentResponse)
def create_payment_intent(
    body: PaymentIntentRequest,
    repository: Repository = Depends(get_repository),
    stripe: StripeClient = Depends(get_stripe_client),
) -> PaymentIntentResponse:
    if body.end_date < body.start_date:
        raise ValidationFailed("End date must not be before start date")
    amount = BookingService(repository=repository).quote(body.destination_id, body.travelers)
    intent = stripe.create_payment_intent(
        amount,
        metadata={
            "destination_id": body.destination_id,
            "travelers": str(body.travelers),
            "start_date": body.start_date.isoformat(),
            "end_date": body.end_date.isoformat(),
        },
    )
    return PaymentIntentResponse(
        payment_intent_id=intent["id"],
        client_secret=intent.get("client_secret"),
        amount=amount,
    )


@router.post("/get-or-create-subscription", response_model=SubscriptionResponse)
def get_or_create_subscription(
    identity: Identity = Depends(get_current_identity),
    auth: AuthService = Depends(get_auth_service),
    stripe: StripeClient = Depends(get_stripe_client),
) -> SubscriptionResponse:
    user = auth.get_user(identity)
    if user.billing_subscription_id:
        subscription = stripe.retrieve_subscription(user.billing_subscription_id)
    else:
        customer_id = user.billing_customer_id
        if not customer_id:
            customer = stripe.create_customer(
                email=user.email, name=f"{user.first_name} {user.last_name}"
            )
            customer_id = customer["id"]
            auth.attach_billing(user.id, customer_id)
        subscription = stripe.create_subscription(customer_id, settings.stripe_price_id)
        auth.attach_billing(user.id, customer_id, subscription["id"])
    return SubscriptionResponse(
        subscription_id=subscription["id"],
        client_secret=subscription_client_secret(subscription),
    )
