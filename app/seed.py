"""
Seed the database with demo users and events.

    python -m app.seed
"""
import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.clock import as_utc
from app.core.logging_config import setup_logging
from app.database.db import Base, SessionLocal, engine, transaction
from app.models.events import Event
from app.models.users import User

logger = logging.getLogger(__name__)

DEMO_USERS = [
    {"name": "Alice", "email": "alice@example.com"},
    {"name": "Bob", "email": "bob@example.com"},
]

DEMO_EVENTS = [
    {
        "title": "Tech Meetup",
        "date": datetime(2025, 11, 20, 18, 0, tzinfo=timezone.utc),
        "location": "Burdwan",
        "capacity": 100,
    },
    {
        "title": "Node.js Workshop",
        "date": datetime(2025, 12, 5, 15, 0, tzinfo=timezone.utc),
        "location": "Kolkata",
        "capacity": 50,
    },
]


def seed(db: Session) -> None:
    """Insert the demo rows. Safe to re-run: users match on email, events on title and date."""
    with transaction(db):
        existing_users = set(db.scalars(select(User.email)).all())
        for data in DEMO_USERS:
            if data["email"] not in existing_users:
                db.add(User(**data))

        existing_events = {(title, as_utc(date)) for title, date in db.execute(select(Event.title, Event.date))}
        for data in DEMO_EVENTS:
            if (data["title"], data["date"]) not in existing_events:
                db.add(Event(**data))
    logger.info("Seed data created!")


def main() -> None:
    setup_logging()
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
