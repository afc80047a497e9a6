"""
Stripe Checkout Service
Creates hosted checkout sessions, checks their payment status and verifies webhook signatures
"""

import json
import logging
from typing import Any, Optional

import stripe

from ..config import FRONTEND_URL, STRIPE_CURRENCY, STRIPE_SECRET_KEY, STRIPE_WEBHOOK_SECRET
from .base import CheckoutSession, PaymentGatewayError, WebhookVerificationError

logger = logging.getLogger(__name__)

stripe.api_key = STRIPE_SECRET_KEY


class StripePaymentGateway:
    """Payment gateway backed by Stripe Checkout"""

    def __init__(
        self,
        webhook_secret: Optional[str] = STRIPE_WEBHOOK_SECRET,
        currency: str = STRIPE_CURRENCY,
        frontend_url: str = FRONTEND_URL,
    ):
        self.webhook_secret = webhook_secret
        self.currency = currency
        self.frontend_url = frontend_url.rstrip("/")

    def create_checkout_session(
        self,
        *,
        customer_email: str,
        product_name: str,
        unit_amount: int,
        metadata: dict[str, str],
    ) -> CheckoutSession:
        try:
            session = stripe.checkout.Session.create(
                payment_method_types=["card"],
                customer_email=customer_email,
                line_items=[
                    {
                        "price_data": {
                            "currency": self.currency,
                            "unit_amount": unit_amount,
                            "product_data": {"name": product_name},
                        },
                        "quantity": 1,
                    }
                ],
                mode="payment",
                success_url=f"{self.frontend_url}/success?session_id={{CHECKOUT_SESSION_ID}}",
                cancel_url=f"{self.frontend_url}/cancel",
                metadata=metadata,
            )
        except stripe.StripeError as e:
            logger.error(f"❌ Stripe checkout session creation failed: {e}")
            raise PaymentGatewayError(str(e)) from e

        logger.info(f"✅ Stripe checkout session created: {session.id}")
        return CheckoutSession(id=session.id, url=session.url, payment_status=session.payment_status)

    def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        try:
            session = stripe.checkout.Session.retrieve(session_id)
        except stripe.StripeError as e:
            logger.error(f"❌ Stripe checkout session lookup failed for {session_id}: {e}")
            raise PaymentGatewayError(str(e)) from e
        return CheckoutSession(id=session.id, url=session.url, payment_status=session.payment_status)

    def construct_webhook_event(self, payload: bytes, signature_header: Optional[str]) -> dict[str, Any]:
        """
        Verify a Stripe webhook and decode it.

        The Stripe-Signature header has the form "t=<timestamp>,v1=<signature>"; the signature
        is an HMAC-SHA256 of "<timestamp>.<payload>" with the endpoint secret.
        """
        if not self.webhook_secret:
            raise WebhookVerificationError("Webhook secret not configured")
        if not signature_header:
            raise WebhookVerificationError("Missing Stripe-Signature header")

        try:
            body = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise WebhookVerificationError("Payload is not valid UTF-8") from e

        try:
            stripe.WebhookSignature.verify_header(
                body, signature_header, self.webhook_secret, stripe.Webhook.DEFAULT_TOLERANCE
            )
        except stripe.SignatureVerificationError as e:
            raise WebhookVerificationError(f"Invalid signature: {e}") from e

        try:
            event = json.loads(body)
        except json.JSONDecodeError as e:
            raise WebhookVerificationError(f"Invalid payload: {e}") from e

        if not isinstance(event, dict) or "type" not in event:
            raise WebhookVerificationError("Invalid payload: missing event type")
        return event
