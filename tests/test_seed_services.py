"""
Tests for the services seed script.
"""

import pytest
from pydantic import ValidationError

from mentor_booking.models import Service
from seed_services import seed_services

ENTRIES = [
    {
        "title": "Career mentoring",
        "description": "One-on-one session",
        "duration": 45,
        "price": 49.99,
        "mentorEmail": "mentor@mentor.test",
    },
    {"title": "Code review", "duration": 30, "price": 25, "mentorEmail": "reviewer@mentor.test"},
]


def test_seed_inserts_services(db_session):
    inserted, skipped = seed_services(db_session, ENTRIES)

    assert (inserted, skipped) == (2, 0)
    review = db_session.query(Service).filter(Service.title == "Code review").one()
    assert review.mentor_email == "reviewer@mentor.test"
    assert review.description is None


def test_seed_is_idempotent_on_title(db_session):
    seed_services(db_session, ENTRIES)

    inserted, skipped = seed_services(db_session, ENTRIES)

    assert (inserted, skipped) == (0, 2)
    assert db_session.query(Service).count() == 2


def test_seed_rejects_entry_without_mentor(db_session):
    with pytest.raises(ValidationError):
        seed_services(db_session, [{"title": "Broken", "duration": 30, "price": 10}])
