"""HTTP server exposing cached Google Calendar events."""
import json
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Response

from fetcher.google_calendar import GoogleCalendarClient
from settings import Settings
from storage.event_cache import EventCacheManager
from storage.refresh_scheduler import RefreshScheduler

MIME_TYPE_JSON = 'application/json'

LOG_LEVEL_ALIASES = {
    'TRACE': logging.DEBUG,
    'WARN': logging.WARNING,
    'FATAL': logging.CRITICAL
}

logger = logging.getLogger(__name__)


# Configure JSON logging
class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def setup_logging(log_level: str = 'info') -> None:
    """
    Configure logging with JSON formatter.

    Args:
        log_level: Level name (trace, debug, info, warn, error, fatal);
            unknown names fall back to INFO
    """
    root_logger = logging.getLogger()

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)

    name = log_level.upper()
    level = LOG_LEVEL_ALIASES.get(name, getattr(logging, name, logging.INFO))
    if not isinstance(level, int):
        level = logging.INFO
    root_logger.setLevel(level)


def create_app(
    settings: Settings,
    cache_manager: Optional[EventCacheManager] = None,
    scheduler: Optional[RefreshScheduler] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    The scheduler runs the first refresh at startup and then repeats it
    every SECONDS_BETWEEN_CACHE_REFRESH seconds until shutdown.

    Args:
        settings: Process configuration
        cache_manager: Cache to serve (default: one backed by Google Calendar)
        scheduler: Refresh scheduler (default: one driving cache_manager.refresh)

    Returns:
        Configured FastAPI application
    """
    if cache_manager is None:
        client = GoogleCalendarClient(
            calendar_id=settings.calendar_id,
            api_key=settings.api_key
        )
        cache_manager = EventCacheManager(
            client=client,
            max_results=settings.num_events_to_fetch
        )
    if scheduler is None:
        scheduler = RefreshScheduler(
            callback=cache_manager.refresh,
            interval_seconds=settings.seconds_between_cache_refresh
        )

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        logger.info(f"Starting server on port: {settings.http_port}")
        scheduler.start()
        try:
            yield
        finally:
            scheduler.stop()

    app = FastAPI(title="Calendar Events Proxy", lifespan=lifespan)
    app.state.cache_manager = cache_manager
    app.state.scheduler = scheduler

    @app.get("/events")
    def get_events() -> Response:
        """Return the cached events; always 200."""
        payload = cache_manager.get_events()
        if payload is None:
            payload = EventCacheManager.EMPTY_PAYLOAD
        return Response(content=payload, status_code=200, media_type=MIME_TYPE_JSON)

    return app


def main() -> None:
    """Load configuration, then serve until interrupted."""
    # Missing configuration aborts here, before the port is bound
    settings = Settings.from_env()

    setup_logging(settings.log_verbosity)
    app = create_app(settings)

    try:
        uvicorn.run(app, host='0.0.0.0', port=settings.http_port, log_config=None)
    except (OSError, SystemExit) as e:
        logger.error(
            f"Error in starting HTTP server: {str(e)}",
            extra={'error_type': type(e).__name__},
            exc_info=True
        )
        raise


if __name__ == '__main__':
    main()
