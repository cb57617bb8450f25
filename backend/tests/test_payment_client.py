from unittest.mock import MagicMock, patch

import pytest
import requests

from tourism.core.errors import PaymentError, PaymentNotConfigured
from tourism.services.payment_client import (
    StripeClient,
    StripeConfig,
    subscription_client_secret,
    to_minor_units,
)


def _response(status_code: int, body: dict) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.content = b"{}"
    resp.json.return_value = body
    resp.reason = "Bad Request"
    return resp


def test_unconfigured_client_refuses():
    client = StripeClient(StripeConfig(secret_key=None))
    with pytest.raises(PaymentNotConfigured):
        client.create_payment_intent(100.0, {})


def test_create_payment_intent_sends_minor_units():
    client = StripeClient(StripeConfig(secret_key="sk_test_x"))
    with patch("tourism.services.payment_client.requests.request") as request:
        request.return_value = _response(200, {"id": "pi_1", "client_secret": "pi_1_secret"})
        intent = client.create_payment_intent(5000.0, {"destination_id": "dest_1"})

    assert intent["id"] == "pi_1"
    kwargs = request.call_args.kwargs
    assert kwargs["method"] == "POST"
    assert kwargs["url"] == "https://api.stripe.com/v1/payment_intents"
    assert kwargs["data"]["amount"] == 500000
    assert kwargs["data"]["currency"] == "usd"
    assert kwargs["data"]["metadata[destination_id]"] == "dest_1"
    assert kwargs["auth"] == ("sk_test_x", "")


def test_processor_error_is_raised():
    client = StripeClient(StripeConfig(secret_key="sk_test_x"))
    with patch("tourism.services.payment_client.requests.request") as request:
        request.return_value = _response(402, {"error": {"message": "Your card was declined."}})
        with pytest.raises(PaymentError) as err:
            client.retrieve_payment_intent("pi_1")
    assert "declined" in err.value.message


def test_transport_error_is_raised():
    client = StripeClient(StripeConfig(secret_key="sk_test_x"))
    with patch(
        "tourism.services.payment_client.requests.request",
        side_effect=requests.ConnectionError("boom"),
    ):
        with pytest.raises(PaymentError):
            client.create_customer("a@example.com", "Alice Doe")


def test_helpers():
    assert to_minor_units(19.99) == 1999
    sub = {"id": "sub_1", "latest_invoice": {"payment_intent": {"client_secret": "cs"}}}
    assert subscription_client_secret(sub) == "cs"
    assert subscription_client_secret({"id": "sub_2", "latest_invoice": "in_1"}) is None
