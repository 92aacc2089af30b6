import redis
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.redis_config import get_redis
from app.database.db import get_db
from app.schemas.common import ErrorOut, MessageOut
from app.schemas.registrations import RegistrationRequest
from app.services.registrations import cancel_registration, register_user

router = APIRouter(prefix="/event", tags=["registrations"])


@router.post("/register", response_model=MessageOut, responses={400: {"model": ErrorOut}, 404: {"model": ErrorOut}})
def register(
    payload: RegistrationRequest,
    db: Session = Depends(get_db),
    redis_client: redis.Redis | None = Depends(get_redis),
):
    register_user(db, event_id=payload.event_id, user_id=payload.user_id, redis_client=redis_client)
    return {"message": "User registered successfully"}


@router.post("/cancel", response_model=MessageOut, responses={400: {"model": ErrorOut}, 404: {"model": ErrorOut}})
def cancel(payload: RegistrationRequest, db: Session = Depends(get_db)):
    cancel_registration(db, event_id=payload.event_id, user_id=payload.user_id)
    return {"message": "Registration cancelled successfully"}
