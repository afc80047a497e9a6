"""Interfaces for the external services the booking flow talks to. Fakes in tests implement the same contracts."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Protocol


class PaymentGatewayError(Exception):
    """Raised when the payment provider rejects or fails a request"""


class WebhookVerificationError(Exception):
    """Raised when a webhook payload or its signature cannot be verified"""


class MeetingSchedulerError(Exception):
    """Raised when a calendar event with a meeting link cannot be created"""


class NotificationError(Exception):
    """Raised when an email cannot be delivered"""


@dataclass
class CheckoutSession:
    id: str
    url: str
    payment_status: Optional[str] = None


class PaymentGateway(Protocol):
    def create_checkout_session(
        self,
        *,
        customer_email: str,
        product_name: str,
        unit_amount: int,
        metadata: dict[str, str],
    ) -> CheckoutSession:
        """Create a hosted checkout for a single line item. unit_amount is in minor units."""
        ...

    def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        ...

    def construct_webhook_event(self, payload: bytes, signature_header: Optional[str]) -> dict[str, Any]:
        """Verify the signature and return the decoded event. Raises WebhookVerificationError."""
        ...


class MeetingScheduler(Protocol):
    async def create_meeting(
        self,
        start: datetime,
        duration_minutes: int,
        summary: str,
        attendees: list[str],
    ) -> str:
        """Create a calendar event and return its video meeting link"""
        ...


class Notifier(Protocol):
    async def send_reservation_confirmation(
        self,
        *,
        to: str,
        first_name: str,
        service_title: str,
        start: datetime,
        meeting_link: Optional[str],
    ) -> None:
        ...
