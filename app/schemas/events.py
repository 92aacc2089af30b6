from datetime import datetime

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from app.core.clock import as_utc
from app.models.events import MAX_CAPACITY, MIN_CAPACITY


# ---------- Event ----------
class EventCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    date: datetime
    location: str = Field(min_length=1, max_length=200)
    capacity: int = Field(ge=MIN_CAPACITY, le=MAX_CAPACITY)

    class Config:
        str_strip_whitespace = True
        coerce_numbers_to_str = True

    @field_validator("date")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class EventCreatedOut(BaseModel):
    message: str
    event_id: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class RegistrantOut(BaseModel):
    id: int
    name: str
    email: str

    class Config:
        from_attributes = True


class EventOut(BaseModel):
    id: int
    title: str
    date: datetime
    location: str
    capacity: int
    registrations: list[RegistrantOut]

    class Config:
        from_attributes = True

    @field_validator("date")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class EventStatsOut(BaseModel):
    event_id: int
    title: str
    total_registrations: int
    remaining_capacity: int
    capacity_used_percentage: str

    class Config:
        alias_generator = to_camel
        populate_by_name = True
