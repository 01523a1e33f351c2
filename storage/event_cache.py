"""In-memory cache manager for transformed calendar events."""
import json
import logging
import threading
import time
from typing import Optional

from fetcher.google_calendar import GoogleCalendarClient
from processor.event_transformer import EventTransformer

logger = logging.getLogger(__name__)


class EventCacheManager:
    """Owner of the cached, serialized list of upcoming events."""

    EMPTY_PAYLOAD = '[]'

    def __init__(
        self,
        client: GoogleCalendarClient,
        max_results: int = 10,
        transformer: Optional[EventTransformer] = None
    ):
        """
        Initialize an unpopulated cache.

        Args:
            client: Calendar client used to fetch raw events
            max_results: Maximum number of events per fetch (default: 10)
            transformer: Event transformer (default: a new EventTransformer)
        """
        self.client = client
        self.max_results = max_results
        self.transformer = transformer or EventTransformer()
        self.last_refreshed_at: Optional[float] = None
        self._payload: Optional[str] = None
        self._populate_lock = threading.Lock()

    @property
    def is_populated(self) -> bool:
        """Whether any refresh has completed successfully."""
        return self._payload is not None

    def refresh(self) -> None:
        """
        Fetch, transform and store the upcoming events.

        The cache is replaced wholesale on success. If the fetch fails or the
        response holds malformed events, the error is logged and the previous
        content stays in place.
        """
        try:
            raw_events = self.client.fetch_events(max_results=self.max_results)
        except Exception as e:
            logger.error(
                f"Failed to fetch calendar events: {str(e)}",
                extra={'error_type': type(e).__name__},
                exc_info=True
            )
            return

        if not raw_events or not isinstance(raw_events, list):
            logger.debug("No upcoming events found.")
            payload = self.EMPTY_PAYLOAD
            event_count = 0
        else:
            try:
                events = self.transformer.transform_events(raw_events)
                payload = json.dumps([event.to_dict() for event in events])
            except (AttributeError, TypeError, ValueError) as e:
                logger.error(
                    f"Malformed calendar events response: {str(e)}",
                    extra={'error_type': type(e).__name__},
                    exc_info=True
                )
                return
            event_count = len(events)

        self._payload = payload
        self.last_refreshed_at = time.time()

        logger.debug(payload)
        logger.info(
            "Refreshed cache",
            extra={'event_count': event_count, 'refreshed_at': self.last_refreshed_at}
        )

    def get_events(self) -> Optional[str]:
        """
        Return the cached events as a JSON array string.

        An unpopulated cache is refreshed first and the caller blocks until
        that refresh finishes. Concurrent first callers wait on one fetch.
        While the provider keeps failing, each read of an unpopulated cache
        retries in turn and can wait up to the client's request timeout.

        Returns:
            Serialized events, or None if no refresh has ever succeeded
        """
        if self._payload is None:
            with self._populate_lock:
                if self._payload is None:
                    self.refresh()
        return self._payload
