"""
Stripe Webhook Handler
Verifies Stripe events and hands completed checkouts to the reservation orchestrator
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from ..database import get_db
from ..domain.reservations.orchestrator import ReservationOrchestrator
from ..domain.reservations.schemas import VerifyPaymentRequest
from ..services import get_meeting_scheduler, get_notifier, get_payment_gateway
from ..services.base import (
    MeetingScheduler,
    Notifier,
    PaymentGateway,
    PaymentGatewayError,
    WebhookVerificationError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/stripe", tags=["webhooks"])


def get_orchestrator(
    db: Session = Depends(get_db),
    scheduler: MeetingScheduler = Depends(get_meeting_scheduler),
    notifier: Notifier = Depends(get_notifier),
) -> ReservationOrchestrator:
    return ReservationOrchestrator(db, scheduler, notifier)


@router.post("/webhook")
async def handle_stripe_webhook(
    request: Request,
    gateway: PaymentGateway = Depends(get_payment_gateway),
    orchestrator: ReservationOrchestrator = Depends(get_orchestrator),
):
    """
    Handle Stripe webhook events

    Events handled:
    - checkout.session.completed - reservation paid, slot booked, meeting + email sent

    The body must be read raw: the signature covers the exact bytes Stripe sent.
    """
    body = await request.body()
    signature = request.headers.get("stripe-signature")

    try:
        event = gateway.construct_webhook_event(body, signature)
    except WebhookVerificationError as e:
        logger.error(f"❌ Webhook signature error: {e}")
        return PlainTextResponse(f"Webhook Error: {e}", status_code=400)

    logger.info(f"📥 Received Stripe webhook: {event.get('id')} ({event.get('type')})")

    result = await orchestrator.handle_event(event)
    if result is not None:
        logger.info(f"✅ Webhook processed: {result}")

    return {"received": True}


@router.post("/verify")
def verify_payment(
    data: VerifyPaymentRequest,
    gateway: PaymentGateway = Depends(get_payment_gateway),
):
    """Let the frontend confirm a checkout session was paid after the success redirect"""
    if not data.sessionId:
        raise HTTPException(status_code=400, detail="Missing sessionId.")

    try:
        session = gateway.retrieve_checkout_session(data.sessionId)
    except PaymentGatewayError as e:
        logger.error(f"❌ Error in /api/stripe/verify: {e}")
        raise HTTPException(status_code=500, detail="Internal error.") from e

    if session.payment_status != "paid":
        raise HTTPException(status_code=400, detail="Payment not completed.")
    return {"status": "paid"}
