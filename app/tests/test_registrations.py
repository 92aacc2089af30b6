"""
Test the registration coordinator (register / cancel).
"""
from datetime import timedelta

import pytest
from sqlalchemy.orm import Session

from app.core.clock import utcnow
from app.core.exceptions import (
    DuplicateRegistrationError,
    EventFullError,
    NotFoundError,
    NotRegisteredError,
    PastEventError,
    ValidationError,
)
from app.services.events import count_registrations, get_event_stats
from app.services.registrations import cancel_registration, register_user


class TestRegisterUser:
    def test_register_success(self, db_session: Session, make_event, make_users):
        event = make_event(capacity=10)
        (user_id,) = make_users(1)

        register_user(db_session, event_id=event.id, user_id=user_id)

        assert count_registrations(db_session, event.id) == 1
        assert get_event_stats(db_session, event.id)["remaining_capacity"] == 9

    def test_register_with_lock(self, db_session: Session, make_event, make_users, fake_redis):
        event = make_event()
        (user_id,) = make_users(1)

        register_user(db_session, event_id=event.id, user_id=user_id, redis_client=fake_redis)

        assert count_registrations(db_session, event.id) == 1
        assert fake_redis.get(f"event_lock:{event.id}") is None

    def test_event_not_found(self, db_session: Session, make_users):
        (user_id,) = make_users(1)

        with pytest.raises(NotFoundError, match="Event not found"):
            register_user(db_session, event_id=99999, user_id=user_id)

    def test_user_not_found(self, db_session: Session, make_event):
        event = make_event()

        with pytest.raises(NotFoundError, match="User not found"):
            register_user(db_session, event_id=event.id, user_id=99999)
        assert count_registrations(db_session, event.id) == 0

    def test_past_event_rejected_without_mutation(self, db_session: Session, make_event, make_users):
        event = make_event(date=utcnow() - timedelta(hours=1))
        (user_id,) = make_users(1)

        with pytest.raises(PastEventError, match="Cannot register for past events"):
            register_user(db_session, event_id=event.id, user_id=user_id)
        assert count_registrations(db_session, event.id) == 0

    def test_full_event_rejected(self, db_session: Session, make_event, make_users, add_registrations):
        event = make_event(capacity=2)
        first, second, third = make_users(3)
        add_registrations(event.id, [first, second])

        with pytest.raises(EventFullError, match="Event is full"):
            register_user(db_session, event_id=event.id, user_id=third)
        assert count_registrations(db_session, event.id) == 2

    def test_last_seat(self, db_session: Session, make_event, make_users):
        event = make_event(capacity=5)
        user_ids = make_users(6)

        for user_id in user_ids[:5]:
            register_user(db_session, event_id=event.id, user_id=user_id)

        with pytest.raises(EventFullError):
            register_user(db_session, event_id=event.id, user_id=user_ids[5])
        assert count_registrations(db_session, event.id) == 5

    def test_duplicate_rejected(self, db_session: Session, make_event, make_users):
        event = make_event()
        (user_id,) = make_users(1)

        register_user(db_session, event_id=event.id, user_id=user_id)
        with pytest.raises(DuplicateRegistrationError, match="User already registered for this event"):
            register_user(db_session, event_id=event.id, user_id=user_id)
        assert count_registrations(db_session, event.id) == 1

    def test_full_is_checked_before_duplicate(self, db_session: Session, make_event, make_users):
        event = make_event(capacity=1)
        (user_id,) = make_users(1)
        register_user(db_session, event_id=event.id, user_id=user_id)

        with pytest.raises(EventFullError):
            register_user(db_session, event_id=event.id, user_id=user_id)


class TestCancelRegistration:
    def test_cancel_success(self, db_session: Session, make_event, make_users):
        event = make_event()
        (user_id,) = make_users(1)
        register_user(db_session, event_id=event.id, user_id=user_id)

        cancel_registration(db_session, event_id=event.id, user_id=user_id)

        assert count_registrations(db_session, event.id) == 0

    def test_cancel_twice(self, db_session: Session, make_event, make_users):
        event = make_event()
        (user_id,) = make_users(1)
        register_user(db_session, event_id=event.id, user_id=user_id)

        cancel_registration(db_session, event_id=event.id, user_id=user_id)
        with pytest.raises(NotRegisteredError, match="User is not registered for this event"):
            cancel_registration(db_session, event_id=event.id, user_id=user_id)

    @pytest.mark.parametrize("event_id,user_id", [(None, 1), (1, None), (0, 1), (1, 0)])
    def test_ids_required(self, db_session: Session, event_id, user_id):
        with pytest.raises(ValidationError, match="eventId and userId are required"):
            cancel_registration(db_session, event_id=event_id, user_id=user_id)

    def test_cancel_event_not_found(self, db_session: Session):
        with pytest.raises(NotFoundError):
            cancel_registration(db_session, event_id=99999, user_id=1)

    def test_cancel_only_removes_own_seat(self, db_session: Session, make_event, make_users):
        event = make_event()
        alice, bob = make_users(2)
        register_user(db_session, event_id=event.id, user_id=alice)
        register_user(db_session, event_id=event.id, user_id=bob)

        cancel_registration(db_session, event_id=event.id, user_id=alice)

        event_users = [u.id for u in event.registrations]
        assert event_users == [bob]

    def test_cancel_frees_seat(self, db_session: Session, make_event, make_users):
        event = make_event(capacity=1)
        alice, bob = make_users(2)
        register_user(db_session, event_id=event.id, user_id=alice)

        cancel_registration(db_session, event_id=event.id, user_id=alice)
        register_user(db_session, event_id=event.id, user_id=bob)

        assert [u.id for u in event.registrations] == [bob]

    def test_pair_can_cycle(self, db_session: Session, make_event, make_users):
        event = make_event(capacity=1)
        (user_id,) = make_users(1)

        for _ in range(3):
            register_user(db_session, event_id=event.id, user_id=user_id)
            cancel_registration(db_session, event_id=event.id, user_id=user_id)

        assert count_registrations(db_session, event.id) == 0
