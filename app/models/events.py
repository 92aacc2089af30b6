from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database.db import Base
from app.models.registrations import event_registrations
from app.models.users import User

MIN_CAPACITY = 1
MAX_CAPACITY = 1000


class Event(Base):
    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint(
            f"capacity >= {MIN_CAPACITY} AND capacity <= {MAX_CAPACITY}",
            name="ck_events_capacity_range",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    location: Mapped[str] = mapped_column(String(200), nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)

    registrations: Mapped[list[User]] = relationship(
        secondary=event_registrations,
        order_by=User.id,
        lazy="selectin",
    )
