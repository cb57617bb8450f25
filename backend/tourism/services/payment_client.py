import logging
from dataclasses import dataclass
from typing import Dict, Optional

import requests

from tourism.core.config import settings
from tourism.core.errors import PaymentError, PaymentNotConfigured

logger = logging.getLogger(__name__)


@dataclass
class StripeConfig:
    secret_key: Optional[str]
    api_base: str = "https://api.stripe.com/v1"
    currency: str = "usd"
    timeout: int = 15

    @classmethod
    def from_settings(cls) -> "StripeConfig":
        return cls(
            secret_key=settings.stripe_secret_key,
            api_base=settings.stripe_api_base,
            currency=settings.stripe_currency,
            timeout=settings.stripe_timeout,
        )


def to_minor_units(amount: float) -> int:
    return int(round(amount * 100))


class StripeClient:
    """
    Minimal Stripe REST client. Only the calls the checkout and
    subscription flows need; requests are form-encoded as Stripe expects.
    """

    def __init__(self, cfg: StripeConfig):
        self.cfg = cfg

    @property
    def configured(self) -> bool:
        return bool(self.cfg.secret_key)

    def request(self, method: str, path: str, data: Optional[dict] = None) -> dict:
        if not self.configured:
            raise PaymentNotConfigured()
        url = f"{self.cfg.api_base}{path}"
        try:
            resp = requests.request(
                method=method.upper(),
                url=url,
                data=data,
                auth=(self.cfg.secret_key, ""),
                timeout=self.cfg.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Stripe request %s %s failed: %s", method, path, exc)
            raise PaymentError(f"Payment processor unreachable: {exc}") from exc

        body = resp.json() if resp.content else {}
        if resp.status_code >= 400:
            message = body.get("error", {}).get("message") or resp.reason
            logger.warning("Stripe %s %s -> %s: %s", method, path, resp.status_code, message)
            raise PaymentError(
                f"Payment processor error: {message}",
                details={"status_code": resp.status_code},
            )
        return body

    def create_payment_intent(self, amount: float, metadata: Dict[str, str]) -> dict:
        data = {"amount": to_minor_units(amount), "currency": self.cfg.currency}
        for key, value in metadata.items():
            data[f"metadata[{key}]"] = value
        return self.request("POST", "/payment_intents", data)

    def retrieve_payment_intent(self, intent_id: str) -> dict:
        return self.request("GET", f"/payment_intents/{intent_id}")

    def create_customer(self, email: str, name: str) -> dict:
        return self.request("POST", "/customers", {"email": email, "name": name})

    def create_subscription(self, customer_id: str, price_id: str) -> dict:
        return self.request(
            "POST",
            "/subscriptions",
            {
                "customer": customer_id,
                "items[0][price]": price_id,
                "payment_behavior": "default_incomplete",
                "expand[]": "latest_invoice.payment_intent",
            },
        )

    def retrieve_subscription(self, subscription_id: str) -> dict:
        return self.request(
            "GET",
            f"/subscriptions/{subscription_id}?expand[]=latest_invoice.payment_intent",
        )


def subscription_client_secret(subscription: dict) -> Optional[str]:
    invoice = subscription.get("latest_invoice") or {}
    if not isinstance(invoice, dict):
        return None
    intent = invoice.get("payment_intent") or {}
    if not isinstance(intent, dict):
        return None
    return intent.get("client_secret")
