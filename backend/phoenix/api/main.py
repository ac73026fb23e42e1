"""
Phoenix Predictions - FastAPI Application

Builds the app: logging in the service timezone, CORS for the static
frontend, the prediction routes and the optional prefetch scheduler.
Run with `python -m phoenix.api.main` or any ASGI server.
"""

import os
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from phoenix.api.dependencies import get_cache_service
from phoenix.api.routes import matches
from phoenix.application.dtos.dtos import CacheStatusDTO, ErrorResponseDTO, HealthResponseDTO
from phoenix.config import AppSettings, get_settings
from phoenix.infrastructure.cache.cache_service import DailyCache
from phoenix.utils.time_utils import get_current_time


class ServiceTimeFormatter(logging.Formatter):
    """Stamps records with the service wall clock instead of the host's."""

    def __init__(self, fmt: str, tz_name: str):
        super().__init__(fmt)
        self.tz_name = tz_name

    def formatTime(self, record, datefmt=None):
        stamp = get_current_time(self.tz_name)
        if datefmt:
            return stamp.strftime(datefmt)
        return f"{stamp:%Y-%m-%d %H:%M:%S},{int(record.msecs):03d}"


def configure_logging(app_settings: AppSettings) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(ServiceTimeFormatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", app_settings.timezone,
    ))
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(getattr(logging, app_settings.log_level, logging.INFO))


settings = get_settings()
configure_logging(settings)
logger = logging.getLogger(__name__)


APP_TITLE = "Phoenix Predictions"
APP_DESCRIPTION = """
**Daily football predictions**

Fetches today's fixtures from API-Football, derives a heuristic prediction
per match from the last 10 results of both teams and their injury reports,
and caches the day's payload.

Each prediction carries:

- Expected goals for each team and predicted scoreline
- Home Win / Draw / Away Win percentages
- Confidence label (High / Medium / Low) from squad data completeness
- Squad adjustments applied for missing attackers, defenders and top scorers
"""
APP_VERSION = "1.0.0"

FRONTEND_DIR = Path(os.getenv("FRONTEND_DIR", Path(__file__).resolve().parents[3] / "frontend"))

# Static frontend hosts allowed to call the API (extended by CORS_ORIGINS)
DEFAULT_ORIGINS = [
    "https://phoenixapk.github.io",
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {APP_TITLE} v{APP_VERSION} ({settings.timezone})")
    if settings.demo_mode:
        logger.warning("API-Football not configured, serving demo payloads")

    scheduler = None
    if settings.enable_scheduler and not settings.demo_mode:
        from phoenix.scheduler import get_scheduler
        scheduler = get_scheduler()
        scheduler.start(run_immediate=True)

    yield

    if scheduler is not None:
        scheduler.shutdown()
    logger.info(f"{APP_TITLE} stopped")


app = FastAPI(
    title=APP_TITLE,
    description=APP_DESCRIPTION,
    version=APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(dict.fromkeys(DEFAULT_ORIGINS + settings.cors_origins)),
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    """Last-resort handler: log and answer with the error envelope."""
    logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=ErrorResponseDTO(
            error="internal_server_error",
            message="An unexpected error occurred",
            details={"path": request.url.path},
        ).model_dump(),
    )


@app.get(
    "/health",
    response_model=HealthResponseDTO,
    response_model_by_alias=True,
    tags=["Health"],
    summary="Liveness probe with the service clock",
)
async def health_check(app_settings: AppSettings = Depends(get_settings)) -> HealthResponseDTO:
    return HealthResponseDTO(
        ok=True,
        server_time=get_current_time(app_settings.timezone).isoformat(),
        tz=app_settings.timezone,
    )


@app.get(
    "/cache/status",
    response_model=CacheStatusDTO,
    tags=["Health"],
    summary="Cached days and hit/miss counters",
)
async def cache_status(cache: DailyCache = Depends(get_cache_service)) -> CacheStatusDTO:
    return CacheStatusDTO(
        redis_connected=cache.redis_connected,
        keys=cache.keys(),
        ttl_seconds=cache.ttl_seconds,
        cache_hits=cache.hits,
        cache_misses=cache.misses,
    )


@app.get("/", tags=["Root"], summary="API index")
async def root():
    return {
        "name": APP_TITLE,
        "version": APP_VERSION,
        "documentation": "/docs",
        "health": "/health",
        "endpoints": {
            "today": "/today",
            "matches": "/matches/today",
            "team_stats": "/team/{team_id}/stats",
            "frontend": "/app/",
        },
    }


app.include_router(matches.router)

if FRONTEND_DIR.is_dir():
    app.mount("/app", StaticFiles(directory=str(FRONTEND_DIR), html=True), name="frontend")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("phoenix.api.main:app", host="0.0.0.0", port=settings.port)
