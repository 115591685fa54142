"""Data models for workout logging."""
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from workout_logger_api.services.workout_normalizer import clean_text, finite_number

Number = Union[int, float]


class MissingFieldsError(ValueError):
    """Raised when title, date or type is absent from the payload."""


class RunDetails(BaseModel):
    """Cardio numbers for a run. Only finite numbers are kept."""
    distance_km: Optional[Number] = None
    time_min: Optional[Number] = None
    start_time: Optional[str] = None  # Label such as "morning", stored as a select
    # True when any raw field was truthy, even if it failed cleaning
    present: bool = False

    @classmethod
    def from_payload(cls, raw: Any) -> Optional["RunDetails"]:
        if not isinstance(raw, dict):
            return None
        return cls(
            distance_km=finite_number(raw.get("distance_km")),
            time_min=finite_number(raw.get("time_min")),
            start_time=clean_text(raw.get("start_time")),
            present=bool(
                raw.get("distance_km") or raw.get("time_min") or raw.get("start_time")
            ),
        )


class StrengthSet(BaseModel):
    """One strength exercise entry."""
    exercise: str
    weight: Optional[Number] = None
    reps: Optional[Number] = None
    sets: Optional[Number] = None

    @classmethod
    def from_payload(cls, raw: Any) -> Optional["StrengthSet"]:
        """Returns None for entries without an exercise name."""
        if not isinstance(raw, dict):
            return None
        exercise = raw.get("exercise")
        name = str(exercise).strip() if exercise else ""
        if not name:
            return None
        return cls(
            exercise=name,
            weight=finite_number(raw.get("weight")),
            reps=finite_number(raw.get("reps")),
            sets=finite_number(raw.get("sets")),
        )


class WorkoutLogRequest(BaseModel):
    """
    Incoming webhook payload, before type and body-part normalization.

    Fields keep the caller's raw values; ``body_part`` may be a delimited
    string or a list.
    """
    title: str
    date: str
    type: Any
    body_part: Any = None
    memo: Optional[str] = None
    sets: List[StrengthSet] = Field(default_factory=list)
    run: Optional[RunDetails] = None

    @classmethod
    def from_payload(cls, body: Any) -> "WorkoutLogRequest":
        """
        Build a request from a decoded JSON document.

        Raises:
            MissingFieldsError: If title, date or type is missing or empty
        """
        if not isinstance(body, dict):
            body = {}

        title, date, session_type = body.get("title"), body.get("date"), body.get("type")
        if not title or not date or not session_type:
            raise MissingFieldsError("Missing fields (title/date/type)")

        raw_sets = body.get("sets")
        sets: List[StrengthSet] = []
        if isinstance(raw_sets, list):
            for raw in raw_sets:
                parsed = StrengthSet.from_payload(raw)
                if parsed is not None:
                    sets.append(parsed)

        memo = body.get("memo")
        return cls(
            title=str(title),
            date=str(date),
            type=session_type,
            body_part=body.get("bodyPart"),
            memo=str(memo) if memo else None,
            sets=sets,
            run=RunDetails.from_payload(body.get("run")),
        )


class WorkoutSession(BaseModel):
    """A normalized session, ready to be written as a Notion page."""
    title: str
    date: str
    type: Any
    body_parts: List[str] = Field(default_factory=list)
    memo: Optional[str] = None


class WorkoutLogResponse(BaseModel):
    """JSON body returned by the webhook."""
    success: bool
    message: str
    session_page_id: Optional[str] = None
    sets_created: Optional[int] = None
    error: Optional[str] = None

    def to_content(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)
