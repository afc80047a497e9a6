"""Adapter factories used as FastAPI dependencies. Tests override them with fakes."""

from functools import lru_cache

from .base import MeetingScheduler, Notifier, PaymentGateway


@lru_cache
def get_payment_gateway() -> PaymentGateway:
    from .stripe_service import StripePaymentGateway

    return StripePaymentGateway()


@lru_cache
def get_meeting_scheduler() -> MeetingScheduler:
    from .google_calendar_service import GoogleMeetScheduler

    return GoogleMeetScheduler()


@lru_cache
def get_notifier() -> Notifier:
    from ..email_service import SmtpNotifier

    return SmtpNotifier()
