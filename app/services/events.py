"""
Event directory: creation, lookup, upcoming listing and capacity stats.
"""
import logging
from typing import Any

import pydantic
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.clock import as_utc, utcnow
from app.core.exceptions import NotFoundError, ValidationError
from app.database.db import transaction
from app.models.events import Event
from app.models.registrations import event_registrations
from app.schemas.common import describe_validation_errors
from app.schemas.events import EventCreate

logger = logging.getLogger(__name__)


def create_event(db: Session, *, title: Any, date: Any, location: Any, capacity: Any) -> Event:
    """
    Validate and insert a new event. Past dates are accepted here; only
    registration refuses them.
    """
    try:
        payload = EventCreate(title=title, date=date, location=location, capacity=capacity)
    except pydantic.ValidationError as e:
        raise ValidationError(describe_validation_errors(e.errors())) from e

    event = Event(
        title=payload.title,
        date=payload.date,
        location=payload.location,
        capacity=payload.capacity,
    )
    with transaction(db):
        db.add(event)
        db.flush()  # gets event.id
    logger.info("Created event %s (%r, capacity=%s)", event.id, event.title, event.capacity)
    return event


def get_event(db: Session, event_id: int) -> Event:
    event = db.get(Event, event_id)
    if not event:
        raise NotFoundError("Event not found")
    return event


def list_upcoming_events(db: Session) -> list[Event]:
    """Events dated strictly after now, ordered by date then location."""
    now = utcnow()
    events = db.scalars(select(Event).where(Event.date > now).order_by(Event.id)).all()
    # Sorted here so location ties break on plain string order, whatever the DB collation.
    return sorted(events, key=lambda e: (as_utc(e.date), e.location))


def count_registrations(db: Session, event_id: int) -> int:
    total = db.scalar(
        select(func.count()).select_from(event_registrations).where(event_registrations.c.event_id == event_id)
    )
    return int(total or 0)


def get_event_stats(db: Session, event_id: int) -> dict:
    event = db.get(Event, event_id)
    if not event:
        raise NotFoundError("Event not found")

    total = count_registrations(db, event_id)
    used = total / event.capacity * 100

    return {
        "event_id": event.id,
        "title": event.title,
        "total_registrations": total,
        "remaining_capacity": event.capacity - total,
        "capacity_used_percentage": f"{used:.2f}%",
    }
