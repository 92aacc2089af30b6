
import logging
from contextlib import contextmanager
from typing import Iterator

import redis
from sqlalchemy import delete, exists, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.clock import as_utc, utcnow
from app.core.config import REGISTRATION_LOCK_BLOCKING_TIMEOUT, REGISTRATION_LOCK_TIMEOUT
from app.core.exceptions import (
    DuplicateRegistrationError,
    EventFullError,
    NotFoundError,
    NotRegisteredError,
    PastEventError,
    RegistrationBusyError,
    ValidationError,
)
from app.database.db import transaction
from app.models.events import Event
from app.models.registrations import event_registrations
from app.models.users import User
from app.services.events import count_registrations

logger = logging.getLogger(__name__)


@contextmanager
def event_lock(redis_client: redis.Redis | None, event_id: int) -> Iterator[None]:
    """
    Hold the per-event Redis lock for the duration of the block.

    Only registrants of the same event contend. The lock carries a TTL so a
    crashed holder cannot block the event forever.
    """
    if redis_client is None:
        yield
        return

    lock = redis_client.lock(
        f"event_lock:{event_id}",
        timeout=REGISTRATION_LOCK_TIMEOUT,
        blocking_timeout=REGISTRATION_LOCK_BLOCKING_TIMEOUT,
    )
    try:
        acquired = lock.acquire(blocking=True)
    except redis.exceptions.LockError as e:
        raise RegistrationBusyError() from e
    if not acquired:
        logger.warning("Timed out waiting for registration lock on event %s", event_id)
        raise RegistrationBusyError()

    try:
        yield
    finally:
        try:
            lock.release()
        except redis.exceptions.LockNotOwnedError:
            # TTL ran out first; the event row lock kept the transaction ordered
            logger.warning("Registration lock on event %s expired before release", event_id)


def register_user(
    db: Session,
    *,
    event_id: int,
    user_id: int,
    redis_client: redis.Redis | None = None,
) -> None:
    """
    Claim one seat of the event for the user.

    The event row is locked before anything is read, inside a single
    transaction, so the capacity and duplicate checks see every committed
    claim and no concurrent one. The Redis lock (when given) is an extra
    per-event queue in front of that and is released only after commit or
    rollback.
    """
    with event_lock(redis_client, event_id):
        with transaction(db):
            _register_in_transaction(db, event_id, user_id)
    logger.info("User %s registered for event %s", user_id, event_id)


def _lock_event_row(db: Session, event_id: int):
    """Read (id, date, capacity) of the event, holding its lock until the transaction ends."""
    if db.get_bind().dialect.name == "sqlite":
        # SQLite has no FOR UPDATE; a no-op write takes the database write lock
        # first, so concurrent registrations queue here until this one commits.
        events = Event.__table__
        db.execute(update(events).where(events.c.id == event_id).values(capacity=events.c.capacity))
    return db.execute(
        select(Event.id, Event.date, Event.capacity).where(Event.id == event_id).with_for_update()
    ).first()


def _register_in_transaction(db: Session, event_id: int, user_id: int) -> None:
    row = _lock_event_row(db, event_id)
    if row is None:
        raise NotFoundError("Event not found")

    if as_utc(row.date) <= utcnow():
        raise PastEventError()

    if count_registrations(db, event_id) >= row.capacity:
        raise EventFullError()

    if _is_registered(db, event_id, user_id):
        raise DuplicateRegistrationError()

    if db.get(User, user_id) is None:
        raise NotFoundError("User not found")

    try:
        db.execute(insert(event_registrations).values(event_id=event_id, user_id=user_id))
    except IntegrityError as e:
        raise DuplicateRegistrationError() from e


def cancel_registration(db: Session, *, event_id: int | None, user_id: int | None) -> None:
    """Release the user's seat. Losing a race with another cancel reads as not registered."""
    if not event_id or not user_id:
        raise ValidationError("eventId and userId are required")

    with transaction(db):
        event = db.get(Event, event_id)
        if not event:
            raise NotFoundError("Event not found")

        if not _is_registered(db, event_id, user_id):
            raise NotRegisteredError()

        res = db.execute(
            delete(event_registrations).where(
                event_registrations.c.event_id == event_id,
                event_registrations.c.user_id == user_id,
            )
        )
        if res.rowcount != 1:  # type: ignore
            raise NotRegisteredError()
    logger.info("User %s cancelled registration for event %s", user_id, event_id)


def _is_registered(db: Session, event_id: int, user_id: int) -> bool:
    return bool(
        db.scalar(
            select(
                exists().where(
                    event_registrations.c.event_id == event_id,
                    event_registrations.c.user_id == user_id,
                )
            )
        )
    )
