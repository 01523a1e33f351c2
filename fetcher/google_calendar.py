"""Google Calendar client for fetching upcoming events."""
import logging
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

import requests

logger = logging.getLogger(__name__)


class GoogleCalendarClient:
    """Client for the Google Calendar v3 events API using an API key."""

    EVENTS_URL_TEMPLATE = "https://www.googleapis.com/calendar/v3/calendars/{calendar_id}/events"

    def __init__(self, calendar_id: str, api_key: str, timeout: int = 30):
        """
        Initialize the calendar client.

        Args:
            calendar_id: Calendar to read events from
            api_key: Google Cloud API key
            timeout: HTTP request timeout in seconds (default: 30)
        """
        self.calendar_id = calendar_id
        self.api_key = api_key
        self.timeout = timeout

    @property
    def events_url(self) -> str:
        return self.EVENTS_URL_TEMPLATE.format(
            calendar_id=quote(self.calendar_id, safe="@._-+")
        )

    def fetch_events(self, max_results: int = 10) -> Any:
        """
        Fetch upcoming single events ordered by start time.

        Recurring events are expanded into their instances by the API. Only
        one page is requested.

        Args:
            max_results: Maximum number of events to request (default: 10)

        Returns:
            The response's items value, normally a list of event dicts

        Raises:
            requests.RequestException: If the request fails or returns an error status
            ValueError: If the response body is not valid JSON
        """
        params = {
            'key': self.api_key,
            'timeMin': datetime.now(timezone.utc).isoformat(),
            'maxResults': max_results,
            'singleEvents': 'true',
            'orderBy': 'startTime'
        }

        logger.info(f"Fetching up to {max_results} upcoming events")
        response = requests.get(
            self.events_url,
            params=params,
            timeout=self.timeout
        )
        response.raise_for_status()

        data = response.json()
        if not isinstance(data, dict):
            logger.warning("Unexpected events response body, expected a JSON object")
            return None

        items = data.get('items')
        if isinstance(items, list):
            logger.info(f"Successfully fetched {len(items)} events")
        return items
