"""
monthly_likes - copy this month's liked songs into a month-named playlist.

Usage:
    from monthly_likes import load_credentials, run_sync

    result = run_sync(load_credentials())
    print(result.playlist_name, len(result.added))
"""

from .config import Credentials, SyncConfig, load_config, load_credentials, load_env_file
from .error_handling import (
    AuthError,
    ConfigurationError,
    DecodeError,
    SyncError,
    TransportError,
)
from .formatting import format_playlist_name
from .models import Artist, LikedSong, Playlist, Track
from .sync import SyncResult, SyncState, main, run_sync

__version__ = "0.1.0"

__all__ = [
    # Driver
    "run_sync",
    "main",
    "SyncResult",
    "SyncState",
    # Configuration
    "Credentials",
    "SyncConfig",
    "load_config",
    "load_credentials",
    "load_env_file",
    # Models
    "Artist",
    "Track",
    "LikedSong",
    "Playlist",
    "format_playlist_name",
    # Errors
    "SyncError",
    "ConfigurationError",
    "AuthError",
    "TransportError",
    "DecodeError",
]
