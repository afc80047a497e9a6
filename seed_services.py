#!/usr/bin/env python3
"""
Script to insert mentoring services from a JSON file

Usage: python seed_services.py services.json

The file holds a list of {"title", "description", "duration", "price", "mentorEmail"}.
Services whose title already exists are skipped.
"""

import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from mentor_booking import models  # noqa: F401
from mentor_booking.database import Base, SessionLocal, engine
from mentor_booking.domain.catalog.repository import ServiceRepository
from mentor_booking.domain.catalog.schemas import ServiceSeed

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def seed_services(db, entries: list[dict]) -> tuple[int, int]:
    """Insert services, returning (inserted, skipped)"""
    inserted = skipped = 0
    for entry in entries:
        seed = ServiceSeed.model_validate(entry)
        if ServiceRepository.get_service_by_title(db, seed.title):
            logger.info(f"⏭️  '{seed.title}' already exists")
            skipped += 1
            continue
        ServiceRepository.create_service(
            db,
            title=seed.title,
            description=seed.description,
            duration=seed.duration,
            price=seed.price,
            mentor_email=seed.mentorEmail,
        )
        logger.info(f"✅ Inserted '{seed.title}'")
        inserted += 1
    return inserted, skipped


def main(argv: list[str]) -> int:
    if len(argv) != 2:
        logger.error("Usage: python seed_services.py <services.json>")
        return 2

    entries = json.loads(Path(argv[1]).read_text(encoding="utf-8"))
    Base.metadata.create_all(bind=engine, checkfirst=True)

    db = SessionLocal()
    try:
        inserted, skipped = seed_services(db, entries)
    except ValidationError as e:
        logger.error(f"❌ Invalid service entry: {e}")
        return 1
    finally:
        db.close()

    logger.info(f"🎉 Done: {inserted} inserted, {skipped} skipped")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
