"""
Pytest configuration and shared fixtures.
"""

import hashlib
import hmac
import os
import time
from datetime import datetime
from typing import Optional

# Environment must be in place before the package reads its config
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ADMIN_USER", "admin")
os.environ.setdefault("ADMIN_PASS", "s3cret-pass")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_123")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_test_123")
os.environ.setdefault("FRONTEND_URL", "http://frontend.test")
os.environ.setdefault("SMTP_HOST", "smtp.test")
os.environ.setdefault("SMTP_PORT", "587")
os.environ.setdefault("SMTP_USER", "bookings@mentor.test")
os.environ.setdefault("SMTP_PASS", "smtp-pass")
os.environ.setdefault("DISPLAY_TIMEZONE", "UTC")
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from mentor_booking.database import Base, get_db  # noqa: E402
from mentor_booking.main import app  # noqa: E402
from mentor_booking.models import SLOT_FREE, Service, Slot  # noqa: E402
from mentor_booking.security_utils import create_jwt_token  # noqa: E402
from mentor_booking.services import get_meeting_scheduler, get_notifier, get_payment_gateway  # noqa: E402
from mentor_booking.services.base import (  # noqa: E402
    CheckoutSession,
    MeetingSchedulerError,
    NotificationError,
    PaymentGatewayError,
)
from mentor_booking.services.stripe_service import StripePaymentGateway  # noqa: E402

WEBHOOK_SECRET = os.environ["STRIPE_WEBHOOK_SECRET"]
MEET_LINK = "https://meet.google.com/abc-defg-hij"


def sign_payload(payload: bytes, secret: str = WEBHOOK_SECRET, timestamp: Optional[int] = None) -> str:
    """Build a Stripe-Signature header: t=<ts>,v1=HMAC-SHA256(secret, '<ts>.<payload>')"""
    ts = timestamp if timestamp is not None else int(time.time())
    signed = f"{ts}.{payload.decode('utf-8')}".encode("utf-8")
    signature = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={ts},v1={signature}"


class FakePaymentGateway(StripePaymentGateway):
    """Real webhook verification, canned checkout sessions"""

    def __init__(self):
        super().__init__(webhook_secret=WEBHOOK_SECRET, currency="nzd", frontend_url="http://frontend.test")
        self.created: list[dict] = []
        self.fail_create = False
        self.payment_status = "paid"
        self.fail_retrieve = False

    def create_checkout_session(self, **kwargs) -> CheckoutSession:
        if self.fail_create:
            raise PaymentGatewayError("card network down")
        self.created.append(kwargs)
        session_id = f"cs_test_{len(self.created)}"
        return CheckoutSession(id=session_id, url=f"https://checkout.stripe.test/{session_id}")

    def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        if self.fail_retrieve:
            raise PaymentGatewayError("no such session")
        return CheckoutSession(id=session_id, url="", payment_status=self.payment_status)


class FakeMeetingScheduler:
    def __init__(self):
        self.calls: list[dict] = []
        self.fail = False

    async def create_meeting(self, start, duration_minutes, summary, attendees):
        self.calls.append(
            {"start": start, "duration_minutes": duration_minutes, "summary": summary, "attendees": attendees}
        )
        if self.fail:
            raise MeetingSchedulerError("calendar unavailable")
        return MEET_LINK


class FakeNotifier:
    def __init__(self):
        self.sent: list[dict] = []
        self.fail = False

    async def send_reservation_confirmation(self, **kwargs):
        if self.fail:
            raise NotificationError("smtp down")
        self.sent.append(kwargs)


@pytest.fixture
def session_factory():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def gateway():
    return FakePaymentGateway()


@pytest.fixture
def scheduler():
    return FakeMeetingScheduler()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def client(session_factory, gateway, scheduler, notifier):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    app.dependency_overrides[get_meeting_scheduler] = lambda: scheduler
    app.dependency_overrides[get_notifier] = lambda: notifier
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {create_jwt_token({'role': 'admin'})}"}


@pytest.fixture
def make_service(db_session):
    def _make(**overrides) -> Service:
        data = {
            "title": "Career mentoring",
            "description": "One-on-one session",
            "duration": 45,
            "price": 49.99,
            "mentor_email": "mentor@mentor.test",
        }
        data.update(overrides)
        service = Service(**data)
        db_session.add(service)
        db_session.commit()
        db_session.refresh(service)
        return service

    return _make


@pytest.fixture
def make_slot(db_session):
    def _make(start: datetime, status: str = SLOT_FREE, **overrides) -> Slot:
        slot = Slot(start=start, status=status, **overrides)
        db_session.add(slot)
        db_session.commit()
        db_session.refresh(slot)
        return slot

    return _make
