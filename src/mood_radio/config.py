"""Configuration management for Mood Radio."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

# Default paths
STATE_DIR = Path.home() / ".mood_radio"
LOG_FILE_NAME = "mood_radio.log"

# Spotify credentials
SPOTIFY_ACCESS_TOKEN_ENV = "SPOTIFY_ACCESS_TOKEN"
SPOTIFY_ACCESS_TOKEN_FILE = STATE_DIR / "spotify_token"
SPOTIFY_CLIENT_ID_ENV = "SPOTIFY_CLIENT_ID"
SPOTIFY_CLIENT_SECRET_ENV = "SPOTIFY_CLIENT_SECRET"
SPOTIFY_REDIRECT_URI_ENV = "SPOTIFY_REDIRECT_URI"
DEFAULT_REDIRECT_URI = "http://localhost:3000/callback"

# Spotify Web API endpoints
SPOTIFY_API_BASE = "https://api.spotify.com/v1"
SPOTIFY_ACCOUNTS_BASE = "https://accounts.spotify.com"
SPOTIFY_SCOPES = (
    "user-read-private",
    "user-read-email",
    "playlist-modify-public",
    "playlist-modify-private",
    "user-library-read",
    "user-top-read",
)


def get_spotify_access_token() -> Optional[str]:
    """Get a user access token from environment variable or file.

    Checks the SPOTIFY_ACCESS_TOKEN environment variable first, then falls
    back to the ~/.mood_radio/spotify_token file.

    Returns:
        Token string, or None if not configured.
    """
    import os

    token = os.environ.get(SPOTIFY_ACCESS_TOKEN_ENV)
    if token:
        return token.strip()
    if SPOTIFY_ACCESS_TOKEN_FILE.exists():
        return SPOTIFY_ACCESS_TOKEN_FILE.read_text().strip() or None
    return None


def get_spotify_client_credentials() -> Optional[tuple[str, str]]:
    """Get the (client_id, client_secret) pair from the environment.

    Returns:
        Credential pair, or None unless both variables are set.
    """
    import os

    client_id = os.environ.get(SPOTIFY_CLIENT_ID_ENV, "").strip()
    client_secret = os.environ.get(SPOTIFY_CLIENT_SECRET_ENV, "").strip()
    if client_id and client_secret:
        return client_id, client_secret
    return None


def get_spotify_redirect_uri() -> str:
    """OAuth redirect URI, overridable through SPOTIFY_REDIRECT_URI."""
    import os

    return os.environ.get(SPOTIFY_REDIRECT_URI_ENV) or DEFAULT_REDIRECT_URI


# Recommendation parameters
CACHE_TTL_SECONDS = 300.0
STATION_RESULT_LIMIT = 20
PROMPT_RESULT_LIMIT = 3
RECENCY_CONSTRAINT = "year:2000-2024"
MIN_IMAGE_CONFIDENCE = 0.2
SEED_TRACK_LIMIT = 5

# Catalog request parameters
SEARCH_LIMIT = 20
SEARCH_MARKET = "US"
HTTP_TIMEOUT = 10.0


class Config:
    """Application configuration."""

    def __init__(
        self,
        cache_ttl: Optional[float] = None,
        station_limit: Optional[int] = None,
        prompt_limit: Optional[int] = None,
        min_image_confidence: Optional[float] = None,
        search_limit: Optional[int] = None,
        market: Optional[str] = None,
        timeout: Optional[float] = None,
        state_dir: Optional[Path] = None,
    ):
        self.cache_ttl = CACHE_TTL_SECONDS if cache_ttl is None else cache_ttl
        self.station_limit = station_limit or STATION_RESULT_LIMIT
        self.prompt_limit = prompt_limit or PROMPT_RESULT_LIMIT
        self.min_image_confidence = (
            MIN_IMAGE_CONFIDENCE if min_image_confidence is None else min_image_confidence
        )
        self.search_limit = search_limit or SEARCH_LIMIT
        self.market = market or SEARCH_MARKET
        self.timeout = timeout or HTTP_TIMEOUT
        self.state_dir = state_dir or STATE_DIR

    @property
    def log_file(self) -> Path:
        """Rotating log file kept under the state directory."""
        return self.state_dir / "logs" / LOG_FILE_NAME

    def ensure_state_dir(self) -> Path:
        """Create the state directory if it doesn't exist."""
        self.state_dir.mkdir(parents=True, exist_ok=True)
        return self.state_dir


def setup_logging(verbose: bool = False, settings: Optional[Config] = None) -> None:
    """Attach console and rotating-file handlers to the ``mood_radio`` logger.

    The log file lives at ``settings.log_file`` (the global config when
    omitted). Child loggers such as ``mood_radio.recommend.pipeline``
    propagate to these handlers. Repeated calls are no-ops.

    Args:
        verbose: Console level DEBUG instead of INFO. The file always
                 receives DEBUG.
        settings: Configuration supplying the state directory.
    """
    level = logging.DEBUG if verbose else logging.INFO

    root = logging.getLogger("mood_radio")
    root.setLevel(logging.DEBUG)

    # Avoid duplicate handlers on repeated calls
    if root.handlers:
        return

    log_format = "%(asctime)s %(name)s %(levelname)s %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(log_format, datefmt=date_format))
    root.addHandler(console)

    # Rotating file handler: 5 MB max, keep 3 backups
    log_file = (settings or config).log_file
    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(log_format, datefmt=date_format))
    root.addHandler(file_handler)


# Global config instance
config = Config()
