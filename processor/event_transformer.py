"""Event transformer converting Google Calendar events to simplified records."""
import logging
from typing import Any, Dict, List, Optional

from processor.models import SimplifiedEvent

logger = logging.getLogger(__name__)


def format_event_detail(event: SimplifiedEvent) -> str:
    """
    Build a human-readable multi-line summary of an event for debug logs.

    Args:
        event: SimplifiedEvent to describe

    Returns:
        Multi-line description string
    """
    return (
        f"\nSummary: {event.summary}"
        f"\nHangout Link: {event.hangout_link}"
        f"\nHTML Link: {event.html_link}"
        f"\nLocation: {event.location}"
        f"\nStart: {event.start}"
        f"\nEnd: {event.end}"
        f"\nDescription: {event.description}\n"
    )


class EventTransformer:
    """Transformer from raw Google Calendar events to SimplifiedEvent."""

    def transform_events(self, raw_events: List[Dict[str, Any]]) -> List[SimplifiedEvent]:
        """
        Transform raw events, keeping the provider's order.

        Args:
            raw_events: Items from a Google Calendar events.list response

        Returns:
            List of SimplifiedEvent objects, one per raw event
        """
        logger.debug(f"Next (max) {len(raw_events)} events:")

        events = []
        for raw_event in raw_events:
            event = self.transform_event(raw_event)
            logger.debug(format_event_detail(event))
            events.append(event)

        return events

    def transform_event(self, raw_event: Dict[str, Any]) -> SimplifiedEvent:
        """
        Transform a single raw event.

        Start and end prefer the timed value over the all-day date. Missing
        values are left as None; the event is still returned.

        Args:
            raw_event: One item from a Google Calendar events.list response

        Returns:
            SimplifiedEvent object
        """
        return SimplifiedEvent(
            start=self._resolve_time(raw_event.get('start')),
            end=self._resolve_time(raw_event.get('end')),
            summary=raw_event.get('summary'),
            hangout_link=raw_event.get('hangoutLink'),
            html_link=raw_event.get('htmlLink'),
            location=raw_event.get('location'),
            description=raw_event.get('description')
        )

    def _resolve_time(self, boundary: Optional[Dict[str, Any]]) -> Optional[str]:
        """
        Pick dateTime if present, else date.

        Args:
            boundary: The raw event's start or end object

        Returns:
            Date-time or date string, or None if neither is present
        """
        if not boundary:
            return None
        return boundary.get('dateTime') or boundary.get('date')
