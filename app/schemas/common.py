from typing import Any, Iterable

from pydantic import BaseModel

EVENT_REQUIRED = "title, date, location and capacity are required"
CAPACITY_INVALID = "capacity must be an integer between 1 and 1000"
DATE_INVALID = "date must be a valid ISO date string"
IDS_REQUIRED = "eventId and userId are required"
IDS_INVALID = "eventId and userId must be integers"
PATH_ID_INVALID = "event id must be an integer"
BODY_INVALID = "Request body must be a JSON object"
TEXT_TOO_LONG = "{field} must be at most {limit} characters"
TEXT_INVALID = "{field} must be a string"

# Lower rank wins when several fields fail at once.
_RANKED_FIELDS = {
    "title": (1, EVENT_REQUIRED),
    "location": (1, EVENT_REQUIRED),
    "capacity": (2, CAPACITY_INVALID),
    "date": (3, DATE_INVALID),
    "eventId": (4, IDS_INVALID),
    "userId": (4, IDS_INVALID),
    "event_id": (5, PATH_ID_INVALID),
}
_EVENT_FIELDS = {"title", "date", "location", "capacity"}
_ID_FIELDS = {"eventId", "userId"}
_TEXT_FIELDS = {"title", "location"}


class MessageOut(BaseModel):
    message: str


class ErrorOut(BaseModel):
    error: str


def _field_name(loc: Iterable[Any]) -> str:
    return next((part for part in reversed(tuple(loc)) if isinstance(part, str)), "")


def describe_validation_errors(errors: list[dict]) -> str:
    """Collapse pydantic errors into the single message clients get back."""
    best: tuple[int, str] | None = None
    for error in errors:
        field = _field_name(error.get("loc", ()))
        kind = error.get("type", "")
        absent = kind == "missing" or ("input" in error and error["input"] is None)
        if field in _EVENT_FIELDS and absent:
            candidate = (0, EVENT_REQUIRED)
        elif field in _TEXT_FIELDS and kind == "string_too_long":
            limit = error.get("ctx", {}).get("max_length")
            candidate = (1, TEXT_TOO_LONG.format(field=field, limit=limit))
        elif field in _TEXT_FIELDS and kind == "string_type":
            candidate = (1, TEXT_INVALID.format(field=field))
        elif field in _ID_FIELDS and (absent or kind == "greater_than_equal"):
            candidate = (0, IDS_REQUIRED)
        else:
            candidate = _RANKED_FIELDS.get(field, (9, BODY_INVALID))
        if best is None or candidate[0] < best[0]:
            best = candidate
    return best[1] if best else BODY_INVALID
