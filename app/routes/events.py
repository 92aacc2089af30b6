from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database.db import get_db
from app.schemas.common import ErrorOut
from app.schemas.events import EventCreate, EventCreatedOut, EventOut, EventStatsOut
from app.services.events import create_event, get_event, get_event_stats, list_upcoming_events

router = APIRouter(prefix="/event", tags=["events"])


@router.post(
    "",
    response_model=EventCreatedOut,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorOut}},
)
def create_event_route(payload: EventCreate, db: Session = Depends(get_db)):
    event = create_event(
        db,
        title=payload.title,
        date=payload.date,
        location=payload.location,
        capacity=payload.capacity,
    )
    return {"message": "Event created successfully", "event_id": event.id}


# Declared before /{event_id} so "upcoming" is not parsed as an id.
@router.get("/upcoming", response_model=list[EventOut])
def upcoming_events(db: Session = Depends(get_db)):
    return list_upcoming_events(db)


@router.get("/{event_id}/stats", response_model=EventStatsOut, responses={404: {"model": ErrorOut}})
def event_stats(event_id: int, db: Session = Depends(get_db)):
    return get_event_stats(db, event_id)


@router.get("/{event_id}", response_model=EventOut, responses={404: {"model": ErrorOut}})
def event_detail(event_id: int, db: Session = Depends(get_db)):
    return get_event(db, event_id)
