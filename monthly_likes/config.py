"""
Configuration module for the monthly playlist job.

All environment variables and configuration constants are defined here.
Credentials are read at call time (not import time) so a scheduler can
inject them per invocation.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .error_handling import ConfigurationError

# ============================================================================
# SPOTIFY ENDPOINTS
# ============================================================================

TOKEN_URL = "https://accounts.spotify.com/api/token"
API_BASE_URL = "https://api.spotify.com/v1"
DEFAULT_REDIRECT_URI = "http://127.0.0.1:8888/callback"

# Scopes the refresh token must have been granted with
SCOPES = "user-library-read playlist-read-private playlist-modify-private"

# ============================================================================
# ENVIRONMENT VARIABLE NAMES
# ============================================================================

ENV_CLIENT_ID = "SPOTIFY_CLIENT_ID"
ENV_CLIENT_SECRET = "SPOTIFY_CLIENT_SECRET"
ENV_REFRESH_TOKEN = "SPOTIFY_REFRESH_TOKEN"
ENV_OWNER_ID = "SPOTIFY_OWNER_ID"
ENV_REDIRECT_URI = "SPOTIFY_REDIRECT_URI"

DEFAULT_ENV_FILE = ".env.local"

# ============================================================================
# PAGE SIZES
# ============================================================================
# Every listing is a single page. The job is expected to run daily, so a
# month's likes fit in one page of liked tracks and the monthly playlist
# stays well under one page of playlist tracks.

SPOTIFY_API_MAX_SAVED_TRACKS = 50
SPOTIFY_API_MAX_PLAYLISTS = 50
SPOTIFY_API_MAX_PLAYLIST_ITEMS = 100

DEFAULT_LIKED_TRACKS_LIMIT = SPOTIFY_API_MAX_SAVED_TRACKS
DEFAULT_PLAYLISTS_LIMIT = SPOTIFY_API_MAX_PLAYLISTS
DEFAULT_PLAYLIST_TRACKS_LIMIT = SPOTIFY_API_MAX_PLAYLIST_ITEMS

# ============================================================================
# PLAYLIST DEFAULTS
# ============================================================================

DEFAULT_DESCRIPTION = "Monthly Playlist"
DEFAULT_REQUESTS_TIMEOUT = 20
TRACK_URI_PREFIX = "spotify:track:"

MONTH_NAMES_SHORT = {
    1: "Jan", 2: "Feb", 3: "Mar", 4: "Apr",
    5: "May", 6: "Jun", 7: "Jul", 8: "Aug",
    9: "Sep", 10: "Oct", 11: "Nov", 12: "Dec"
}


# ============================================================================
# ENV HELPERS
# ============================================================================

def load_env_file(path: str = DEFAULT_ENV_FILE) -> bool:
    """
    Load variables from a local env file if it exists.

    Variables already present in the environment win. A missing file is
    not an error.

    Returns:
        True if a file was loaded
    """
    env_path = Path(path)
    if not env_path.exists():
        return False
    load_dotenv(env_path, override=False)
    return True


def get_env_or_none(name: str) -> Optional[str]:
    """Return the stripped value of an env var, or None if unset/blank."""
    value = os.environ.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def require_env(name: str) -> str:
    """Return a required env var or raise ConfigurationError."""
    value = get_env_or_none(name)
    if value is None:
        raise ConfigurationError(f"Missing required environment variable: {name}")
    return value


def parse_str_env(name: str, default: str) -> str:
    value = get_env_or_none(name)
    return default if value is None else value


def parse_int_env(name: str, default: int) -> int:
    value = get_env_or_none(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from None


def parse_bool_env(name: str, default: bool) -> bool:
    value = get_env_or_none(name)
    if value is None:
        return default
    return value.lower() in ("1", "true", "yes", "on")


# ============================================================================
# CONFIG OBJECTS
# ============================================================================

@dataclass(frozen=True)
class Credentials:
    client_id: str
    client_secret: str
    refresh_token: str
    redirect_uri: str = DEFAULT_REDIRECT_URI

    def __repr__(self) -> str:
        return f"Credentials(client_id={self.client_id!r}, client_secret='***', refresh_token='***')"


@dataclass(frozen=True)
class SyncConfig:
    """Runtime options for one sync run."""

    owner_id: Optional[str] = None
    description: str = DEFAULT_DESCRIPTION
    liked_tracks_limit: int = DEFAULT_LIKED_TRACKS_LIMIT
    playlists_limit: int = DEFAULT_PLAYLISTS_LIMIT
    playlist_tracks_limit: int = DEFAULT_PLAYLIST_TRACKS_LIMIT
    requests_timeout: int = DEFAULT_REQUESTS_TIMEOUT
    dry_run: bool = False

    def __post_init__(self):
        _check_limit("liked_tracks_limit", self.liked_tracks_limit, SPOTIFY_API_MAX_SAVED_TRACKS)
        _check_limit("playlists_limit", self.playlists_limit, SPOTIFY_API_MAX_PLAYLISTS)
        _check_limit("playlist_tracks_limit", self.playlist_tracks_limit, SPOTIFY_API_MAX_PLAYLIST_ITEMS)
        if self.requests_timeout <= 0:
            raise ConfigurationError("requests_timeout must be positive")


def _check_limit(name: str, value: int, maximum: int) -> None:
    if not 1 <= value <= maximum:
        raise ConfigurationError(f"{name} must be between 1 and {maximum}, got {value}")


def load_credentials() -> Credentials:
    """Read the three required credentials from the environment."""
    return Credentials(
        client_id=require_env(ENV_CLIENT_ID),
        client_secret=require_env(ENV_CLIENT_SECRET),
        refresh_token=require_env(ENV_REFRESH_TOKEN),
        redirect_uri=parse_str_env(ENV_REDIRECT_URI, DEFAULT_REDIRECT_URI),
    )


def load_config(owner_id: Optional[str] = None, dry_run: Optional[bool] = None) -> SyncConfig:
    """
    Build SyncConfig from the environment.

    Args:
        owner_id: Overrides SPOTIFY_OWNER_ID when given
        dry_run: Overrides MONTHLY_PLAYLIST_DRY_RUN when given

    Raises:
        ConfigurationError: On malformed or out-of-range values
    """
    return SyncConfig(
        owner_id=owner_id or get_env_or_none(ENV_OWNER_ID),
        description=parse_str_env("MONTHLY_PLAYLIST_DESCRIPTION", DEFAULT_DESCRIPTION),
        liked_tracks_limit=parse_int_env("LIKED_TRACKS_LIMIT", DEFAULT_LIKED_TRACKS_LIMIT),
        playlists_limit=parse_int_env("PLAYLISTS_LIMIT", DEFAULT_PLAYLISTS_LIMIT),
        playlist_tracks_limit=parse_int_env("PLAYLIST_TRACKS_LIMIT", DEFAULT_PLAYLIST_TRACKS_LIMIT),
        requests_timeout=parse_int_env("REQUESTS_TIMEOUT", DEFAULT_REQUESTS_TIMEOUT),
        dry_run=parse_bool_env("MONTHLY_PLAYLIST_DRY_RUN", False) if dry_run is None else dry_run,
    )
