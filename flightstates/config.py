"""
Configuration management for flightstates.

Loads settings from environment variables (and a .env file, if present)
with sensible defaults. Only the bootstrap layer reads configuration;
the client itself takes explicit constructor arguments.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_BASE_URL = 'https://opensky-network.org/api'


def _env(name: str) -> Optional[str]:
    """Environment variable, with empty strings treated as unset."""
    return os.getenv(name) or None


@dataclass(frozen=True)
class OpenSkyConfig:
    """OpenSky API configuration."""
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 30.0

    @property
    def is_authenticated(self) -> bool:
        return self.client_id is not None and self.client_secret is not None

    @property
    def rate_limit_seconds(self) -> int:
        # Authenticated users can poll more frequently
        return 5 if self.is_authenticated else 10


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    opensky: OpenSkyConfig
    debug: bool


def load_config(dotenv_path: Optional[str] = None) -> AppConfig:
    """
    Load and validate all configuration.

    Variables already set in the environment win over the .env file;
    without dotenv_path the file is searched for the usual way.
    """
    load_dotenv(dotenv_path)
    return AppConfig(
        opensky=OpenSkyConfig(
            client_id=_env('OPENSKY_CLIENT_ID'),
            client_secret=_env('OPENSKY_CLIENT_SECRET'),
            base_url=_env('OPENSKY_BASE_URL') or DEFAULT_BASE_URL,
            timeout_seconds=float(os.getenv('OPENSKY_TIMEOUT_SECONDS', '30')),
        ),
        debug=os.getenv('FLIGHTSTATES_DEBUG', '0') == '1',
    )
