"""API routes: liveness probe and workout-log webhook."""

import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse, Response

from workout_logger_api.auth import is_authorized
from workout_logger_api.config import Settings, get_settings
from workout_logger_api.models import MissingFieldsError, WorkoutLogRequest, WorkoutLogResponse
from workout_logger_api.services.notion_service import NotionService
from workout_logger_api.services.workout_log_service import WorkoutLogError, WorkoutLogService

logger = logging.getLogger(__name__)

router = APIRouter()

# Routes accept every method so unsupported ones get the endpoint's own 405 body
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def get_notion_service(settings: Settings = Depends(get_settings)) -> NotionService:
    """FastAPI dependency building the Notion client from settings."""
    return NotionService.from_settings(settings)


def _reject_constant(name: str):
    """NaN and Infinity are not valid JSON."""
    raise ValueError(f"Invalid JSON constant: {name}")


def _fail(status_code: int, message: str, error: Optional[str] = None) -> JSONResponse:
    return JSONResponse(
        WorkoutLogResponse(success=False, message=message, error=error).to_content(),
        status_code=status_code,
    )


# ---------------------------------------------------------------------------
# Liveness
# ---------------------------------------------------------------------------

@router.api_route("/liveness", methods=ALL_METHODS)
async def liveness(request: Request) -> Response:
    """GET returns {"status": "alive"}; HEAD returns an empty 200."""
    if request.method == "HEAD":
        return Response(status_code=200, media_type="application/json")
    if request.method == "GET":
        return JSONResponse({"status": "alive"})
    return JSONResponse({"error": "Method Not Allowed"}, status_code=405)


# ---------------------------------------------------------------------------
# Workout log webhook
# ---------------------------------------------------------------------------

@router.api_route("/logWorkout", methods=ALL_METHODS)
async def log_workout(
    request: Request,
    authorization: Optional[str] = Header(None),
    x_webhook_secret: Optional[str] = Header(None, alias="X-Webhook-Secret"),
    settings: Settings = Depends(get_settings),
    notion: NotionService = Depends(get_notion_service),
) -> JSONResponse:
    """
    Log a workout session to Notion.

    ## Request Body
    - **title**, **date**, **type**: required
    - **bodyPart**: delimited string or list of body parts (ignored for runs)
    - **memo**: optional free text
    - **sets**: strength entries `{exercise, weight?, reps?, sets?}`
    - **run**: cardio details `{distance_km?, time_min?, start_time?}`

    ## Response
    `{success, message, session_page_id?, sets_created?, error?}`
    """
    if request.method != "POST":
        return _fail(405, "Method Not Allowed")

    if not is_authorized(settings.WEBHOOK_SECRET, authorization, x_webhook_secret):
        return _fail(401, "Unauthorized (Invalid Secret)")

    logger.debug(
        f"NOTION_TOKEN: {'set' if settings.NOTION_TOKEN else 'missing'}, "
        f"DB_LOG: {settings.NOTION_DATABASE_ID_LOG}, DB_SETS: {settings.NOTION_DATABASE_ID_SETS}"
    )
    if not settings.is_notion_configured:
        logger.error("Notion is not configured (NOTION_TOKEN / NOTION_DATABASE_ID_LOG)")
        return _fail(500, "Server misconfig (NOTION_TOKEN/DB_LOG)")

    raw = await request.body()
    try:
        body = json.loads(raw.decode("utf-8") or "{}", parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return _fail(400, "Bad JSON")

    try:
        workout = WorkoutLogRequest.from_payload(body)
    except MissingFieldsError as e:
        return _fail(400, str(e))
    except Exception as e:
        logger.exception("Unhandled error while parsing workout payload")
        return _fail(500, "Server error", error=str(e))

    service = WorkoutLogService(
        notion,
        log_database_id=settings.NOTION_DATABASE_ID_LOG,
        sets_database_id=settings.NOTION_DATABASE_ID_SETS,
    )
    try:
        result = await service.log_workout(workout)
    except WorkoutLogError as e:
        return _fail(500, e.message, error=e.error)
    except Exception as e:
        logger.exception("Unhandled error while logging workout")
        return _fail(500, "Server error", error=str(e))

    return JSONResponse(
        WorkoutLogResponse(
            success=True,
            message="Workout logged successfully",
            session_page_id=result.session_page_id,
            sets_created=result.sets_created,
        ).to_content()
    )
