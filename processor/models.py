"""Data models for calendar event transformation."""
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class SimplifiedEvent:
    """Flattened calendar event served to clients."""
    start: Optional[str]
    end: Optional[str]
    summary: Optional[str] = None
    hangout_link: Optional[str] = None
    html_link: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the JSON wire form.

        Keys whose value is None are left out rather than emitted as null.

        Returns:
            Dictionary with camelCase keys
        """
        item = {
            'start': self.start,
            'end': self.end,
            'summary': self.summary,
            'hangoutLink': self.hangout_link,
            'htmlLink': self.html_link,
            'location': self.location,
            'description': self.description
        }
        return {key: value for key, value in item.items() if value is not None}
