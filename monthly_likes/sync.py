#!/usr/bin/env python3
"""
Monthly Liked Songs Sync

This script:
1. Refreshes an access token from the stored refresh token
2. Fetches the latest page of liked songs and keeps this month's likes
3. Finds this month's playlist (e.g. "Jan'25"), creating it if needed
4. Adds every liked song that is not already in the playlist

The script only ADDS tracks. Running it several times in the same month is
safe: the playlist is looked up by name before creating it, and each track
is checked for membership before it is added. A run that fails halfway is
completed by the next scheduled run.

Usage:
    python -m monthly_likes              # Run the sync
    python -m monthly_likes --dry-run    # Log what would be added
    python -m monthly_likes --owner-id someone

Environment Variables (set in the environment or a .env.local file):
    Required:
        SPOTIFY_CLIENT_ID       - Spotify app client ID
        SPOTIFY_CLIENT_SECRET   - Spotify app client secret
        SPOTIFY_REFRESH_TOKEN   - Refresh token for headless auth

    Optional:
        SPOTIFY_OWNER_ID        - User that owns created playlists (default: token's user)
        SPOTIFY_REDIRECT_URI    - Redirect URI registered for the app
        MONTHLY_PLAYLIST_DESCRIPTION - Description for new playlists
        LIKED_TRACKS_LIMIT, PLAYLISTS_LIMIT, PLAYLIST_TRACKS_LIMIT - page sizes
        LOG_LEVEL, LOG_DIR      - Logging

Run via cron (every day at midnight):
    0 0 * * * cd /path/to/monthly-likes && /path/to/venv/bin/monthly-likes
"""

import argparse
import enum
import os
import sys
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

import spotipy

from .api import get_spotify_client
from .auth import get_access_token
from .config import (
    DEFAULT_ENV_FILE,
    Credentials,
    SyncConfig,
    load_config,
    load_credentials,
    load_env_file,
)
from .error_handling import ConfigurationError, SyncError, get_logger, setup_logging
from .formatting import format_playlist_name
from .logger import timed_step
from .models import Track
from .playlist_creation import resolve_playlist
from .playlist_update import add_tracks_to_playlist
from .tracks import get_liked_tracks

EXIT_OK = 0
EXIT_SYNC_FAILED = 1
EXIT_CONFIG_ERROR = 2

_RESOLVE_MESSAGES = {
    "search_playlist": "Error searching playlist",
    "create_playlist": "Error creating playlist",
}


class SyncState(enum.Enum):
    START = "start"
    AUTHENTICATED = "authenticated"
    LIKED_TRACKS_FETCHED = "liked_tracks_fetched"
    PLAYLIST_RESOLVED = "playlist_resolved"
    TRACKS_APPENDED = "tracks_appended"
    DONE = "done"
    FAILED = "failed"


@dataclass
class SyncResult:
    playlist_name: str
    state: SyncState = SyncState.START
    playlist_id: Optional[str] = None
    created: bool = False
    candidates: List[Track] = field(default_factory=list)
    added: List[Track] = field(default_factory=list)
    skipped: List[Track] = field(default_factory=list)
    failed_step: Optional[str] = None
    error: Optional[SyncError] = None

    @property
    def ok(self) -> bool:
        return self.state is SyncState.DONE


class _StepFailed(Exception):
    pass


def _fail(result: SyncResult, step: str, message: str, error: SyncError) -> None:
    get_logger().error("%s: %s", message, error)
    result.state = SyncState.FAILED
    result.failed_step = step
    result.error = error
    raise _StepFailed(step)


def run_sync(
    credentials: Credentials,
    config: Optional[SyncConfig] = None,
    now: Optional[datetime] = None,
    token_provider: Callable[..., str] = get_access_token,
    client_factory: Callable[..., spotipy.Spotify] = get_spotify_client,
) -> SyncResult:
    """
    Run one sync: authenticate, fetch likes, resolve playlist, append.

    Failures are logged with the step that failed and reported in the
    returned result; nothing already done is rolled back.

    Args:
        credentials: Client id/secret and refresh token
        config: Runtime options (defaults when None)
        now: Clock used for the playlist name and month filter
        token_provider: Exchanges credentials for an access token
        client_factory: Builds the API client from an access token

    Returns:
        SyncResult describing the final state
    """
    logger = get_logger()
    config = config or SyncConfig()
    now = now or datetime.now()
    result = SyncResult(playlist_name=format_playlist_name(now))

    try:
        with timed_step("Authenticate"):
            try:
                access_token = token_provider(credentials, requests_timeout=config.requests_timeout)
            except SyncError as e:
                _fail(result, "authenticate", "Error getting access token", e)
            sp = client_factory(access_token, requests_timeout=config.requests_timeout)
            result.state = SyncState.AUTHENTICATED

        with timed_step("Fetch Liked Songs"):
            try:
                result.candidates = get_liked_tracks(sp, now, limit=config.liked_tracks_limit)
            except SyncError as e:
                _fail(result, "fetch_liked_songs", "Error getting liked songs", e)
            result.state = SyncState.LIKED_TRACKS_FETCHED

        with timed_step(f"Resolve Playlist {result.playlist_name}"):
            try:
                result.playlist_id, result.created = resolve_playlist(sp, result.playlist_name, config)
            except SyncError as e:
                step = e.step or "search_playlist"
                _fail(result, step, _RESOLVE_MESSAGES[step], e)
            if result.playlist_id is None:
                # Dry run and no playlist yet: every candidate would be added
                result.state = SyncState.DONE
                result.added = list(result.candidates)
                return result
            result.state = SyncState.PLAYLIST_RESOLVED

        with timed_step("Add Songs"):
            try:
                appended = add_tracks_to_playlist(
                    sp,
                    result.playlist_id,
                    result.candidates,
                    limit=config.playlist_tracks_limit,
                    dry_run=config.dry_run,
                )
            except SyncError as e:
                _fail(result, "add_tracks", "Error adding song to playlist", e)
            result.added = appended.added
            result.skipped = appended.skipped
            result.state = SyncState.TRACKS_APPENDED
    except _StepFailed:
        return result

    result.state = SyncState.DONE
    logger.info(
        "Synced playlist %s (+%d, %d already present)",
        result.playlist_name, len(result.added), len(result.skipped),
    )
    return result


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="monthly-likes",
        description="Copy this month's liked songs into a month-named playlist",
    )
    parser.add_argument(
        "--owner-id",
        default=None,
        help="User id that owns newly created playlists (default: SPOTIFY_OWNER_ID or the token's user)",
    )
    parser.add_argument(
        "--env-file",
        default=DEFAULT_ENV_FILE,
        help=f"Env file loaded before reading the environment if it exists (default: {DEFAULT_ENV_FILE})",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Log what would be added without creating or modifying playlists",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: LOG_LEVEL or INFO)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Command line entry point; returns the process exit status."""
    args = _build_parser().parse_args(argv)

    load_env_file(args.env_file)
    log_dir = os.environ.get("LOG_DIR")
    logger = setup_logging(
        log_level=args.log_level or os.environ.get("LOG_LEVEL", "INFO"),
        log_dir=Path(log_dir) if log_dir else None,
    )

    try:
        credentials = load_credentials()
        config = load_config(owner_id=args.owner_id, dry_run=args.dry_run)
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        return EXIT_CONFIG_ERROR

    result = run_sync(credentials, config)
    if not result.ok:
        return EXIT_SYNC_FAILED
    if config.dry_run:
        print(f"[DRY RUN] No changes made to playlist: {result.playlist_name}")
    else:
        print(f"Song added to playlist: {result.playlist_name}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
