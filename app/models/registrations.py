from sqlalchemy import Column, ForeignKey, Integer, PrimaryKeyConstraint, Table

from app.database.db import Base

# Pure membership relation: a row exists iff the user is registered for the event.
# The composite primary key keeps (event_id, user_id) unique at the storage layer.
event_registrations = Table(
    "event_registrations",
    Base.metadata,
    Column("event_id", Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
    PrimaryKeyConstraint("event_id", "user_id", name="pk_event_registrations"),
)
