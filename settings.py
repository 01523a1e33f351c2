"""Configuration loaded from environment variables or a .env file."""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv


class ConfigurationError(ValueError):
    """Raised when required configuration is missing or invalid."""


@dataclass
class Settings:
    """Process configuration for the calendar events proxy."""
    calendar_id: str
    api_key: str
    num_events_to_fetch: int = 10
    log_verbosity: str = 'info'
    http_port: int = 3000
    seconds_between_cache_refresh: int = 60

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Settings':
        """
        Build settings from the environment.

        When no mapping is given, a .env file in the working directory is
        loaded into os.environ first. Variables already set take precedence.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            Settings object

        Raises:
            ConfigurationError: If CALENDAR_ID or API_KEY is missing, or a
                numeric value is not a positive integer
        """
        if environ is None:
            load_dotenv(find_dotenv(usecwd=True))
            environ = os.environ

        calendar_id = environ.get('CALENDAR_ID')
        if not calendar_id:
            raise ConfigurationError(
                "env var 'CALENDAR_ID' is required. Attain from Google Calendar > "
                "Calendar Settings > Integrate Calendar"
            )

        api_key = environ.get('API_KEY')
        if not api_key:
            raise ConfigurationError(
                "env var 'API_KEY' is required. Attain from Google Cloud Console > "
                "Google API > Credentials"
            )

        return cls(
            calendar_id=calendar_id,
            api_key=api_key,
            num_events_to_fetch=_positive_int(environ, 'NUM_EVENTS_TO_FETCH', 10),
            log_verbosity=environ.get('LOG_VERBOSITY') or 'info',
            http_port=_positive_int(environ, 'HTTP_PORT', 3000),
            seconds_between_cache_refresh=_positive_int(
                environ, 'SECONDS_BETWEEN_CACHE_REFRESH', 60
            )
        )


def _positive_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw_value = environ.get(name)
    if not raw_value:
        return default
    try:
        value = int(raw_value)
    except ValueError:
        raise ConfigurationError(f"env var '{name}' must be an integer, got '{raw_value}'")
    if value <= 0:
        raise ConfigurationError(f"env var '{name}' must be positive, got {value}")
    return value
