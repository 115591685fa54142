"""
Workout log service.

Turns a parsed webhook payload into Notion pages:

1. one page in the log database for the session
2. if a sets database is configured, pages linked back to the session:
   - a single cardio page for runs
   - one page per exercise entry for strength sessions

Calls run one after another. A failure stops the sequence; pages that were
already created stay in Notion.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from workout_logger_api.models import RunDetails, StrengthSet, WorkoutLogRequest, WorkoutSession
from workout_logger_api.services.notion_service import NotionService, NotionServiceError
from workout_logger_api.services.workout_normalizer import (
    CARDIO_EXERCISE_LABEL,
    TYPE_RUN,
    TYPE_STRENGTH,
    normalize_type,
    number_labels,
    resolve_body_parts,
)

logger = logging.getLogger(__name__)

SESSION_STAGE = "Notion(Create Session) error"
RUN_SET_STAGE = "Notion(Create Run Set) error"
STRENGTH_SET_STAGE = "Notion(Create Strength Set) error"


class WorkoutLogError(RuntimeError):
    """A Notion call failed part-way through logging a workout."""

    def __init__(self, message: str, error: str = ""):
        super().__init__(message)
        self.message = message
        self.error = error


@dataclass
class WorkoutLogResult:
    session_page_id: str
    sets_created: int


# ---------------------------------------------------------------------------
# Page payloads
# ---------------------------------------------------------------------------

def _title(content: str) -> Dict[str, Any]:
    return {"title": [{"text": {"content": content}}]}


def _number_properties(values: Dict[str, Any]) -> Dict[str, Any]:
    return {name: {"number": value} for name, value in values.items() if value is not None}


def build_session_page(database_id: str, session: WorkoutSession) -> Dict[str, Any]:
    """Page body for the log database; Body Part and Memo are omitted when empty."""
    properties: Dict[str, Any] = {
        "Session Title": _title(session.title),
        "Date": {"date": {"start": session.date}},
        "Type": {"select": {"name": session.type}},
    }
    if session.body_parts:
        properties["Body Part"] = {
            "multi_select": [{"name": name} for name in session.body_parts]
        }
    if session.memo:
        properties["Memo"] = {"rich_text": [{"text": {"content": session.memo}}]}

    return {"parent": {"database_id": database_id}, "properties": properties}


def build_run_set_page(database_id: str, session_page_id: str, run: RunDetails) -> Dict[str, Any]:
    properties: Dict[str, Any] = {
        "Session": {"relation": [{"id": session_page_id}]},
        "Exercise": _title(CARDIO_EXERCISE_LABEL),
    }
    properties.update(_number_properties({"Distance": run.distance_km, "Time": run.time_min}))
    if run.start_time:
        properties["Start Time"] = {"select": {"name": run.start_time}}

    return {"parent": {"database_id": database_id}, "properties": properties}


def build_strength_set_page(
    database_id: str,
    session_page_id: str,
    label: str,
    strength_set: StrengthSet,
) -> Dict[str, Any]:
    properties: Dict[str, Any] = {
        "Session": {"relation": [{"id": session_page_id}]},
        "Exercise": _title(label),
    }
    properties.update(
        _number_properties(
            {
                "Weight": strength_set.weight,
                "Reps": strength_set.reps,
                "Sets": strength_set.sets,
            }
        )
    )
    return {"parent": {"database_id": database_id}, "properties": properties}


def label_strength_sets(sets: List[StrengthSet]):
    """Pair each set with its numbered label ("Bench Press1", "Bench Press2", ...)."""
    return number_labels((s.exercise, s) for s in sets)


def normalize_session(request: WorkoutLogRequest) -> WorkoutSession:
    session_type = normalize_type(request.type)
    return WorkoutSession(
        title=request.title,
        date=request.date,
        type=session_type,
        body_parts=resolve_body_parts(session_type, request.body_part),
        memo=request.memo,
    )


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class WorkoutLogService:
    """Writes one workout session (and its sets) to Notion."""

    def __init__(
        self,
        notion: NotionService,
        log_database_id: str,
        sets_database_id: Optional[str] = None,
    ):
        self.notion = notion
        self.log_database_id = log_database_id
        self.sets_database_id = sets_database_id

    async def log_workout(self, request: WorkoutLogRequest) -> WorkoutLogResult:
        """
        Create the session page, then its set pages.

        Raises:
            WorkoutLogError: When any Notion call fails
        """
        session = normalize_session(request)
        logger.info(
            f"Logging workout: title={session.title!r}, type={session.type!r}, "
            f"body_parts={session.body_parts}"
        )

        page = await self._create(SESSION_STAGE, build_session_page(self.log_database_id, session))
        session_page_id = page.get("id")
        logger.info(f"Created session page {session_page_id}")

        sets_created = 0
        if not self.sets_database_id:
            return WorkoutLogResult(session_page_id=session_page_id, sets_created=sets_created)

        if session.type == TYPE_RUN and request.run is not None and request.run.present:
            await self._create(
                RUN_SET_STAGE,
                build_run_set_page(self.sets_database_id, session_page_id, request.run),
            )
            sets_created += 1

        if session.type == TYPE_STRENGTH and request.sets:
            for label, strength_set in label_strength_sets(request.sets):
                await self._create(
                    STRENGTH_SET_STAGE,
                    build_strength_set_page(
                        self.sets_database_id, session_page_id, label, strength_set
                    ),
                )
                sets_created += 1

        logger.info(f"Session {session_page_id}: {sets_created} set page(s) created")
        return WorkoutLogResult(session_page_id=session_page_id, sets_created=sets_created)

    async def _create(self, stage: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            return await self.notion.create_page(payload)
        except NotionServiceError as e:
            logger.warning(f"{stage}: status={e.status_code}")
            raise WorkoutLogError(stage, error=e.body) from e
