"""Main FastAPI application."""
import logging

from fastapi import FastAPI

from workout_logger_api.api.routes import router
from workout_logger_api.config import get_settings

logging.basicConfig(
    level=get_settings().LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

app = FastAPI(title="Workout Logger API")

app.include_router(router)
