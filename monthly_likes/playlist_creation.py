"""
Playlist creation utilities.

Find this month's playlist by name, creating it only when it does not exist
yet, so repeated runs in the same month keep writing to one playlist.
"""

from typing import Optional, Tuple

import spotipy

from .api import api_call
from .config import DEFAULT_DESCRIPTION, DEFAULT_PLAYLISTS_LIMIT, SyncConfig
from .error_handling import SyncError, get_logger
from .models import Playlist, require_dict, require_items, require_str


def search_playlist(
    sp: spotipy.Spotify,
    playlist_name: str,
    limit: int = DEFAULT_PLAYLISTS_LIMIT,
) -> Optional[str]:
    """
    Look up one of the current user's playlists by exact name.

    Only the first page of playlists is inspected.

    Returns:
        Playlist ID of the first match, or None
    """
    page = api_call(sp.current_user_playlists, limit=limit)
    for item in require_items(page, "playlists"):
        if item is None:
            continue
        playlist = Playlist.from_api(item)
        if playlist.name == playlist_name:
            get_logger().info("Found existing playlist %s (%s)", playlist_name, playlist.id)
            return playlist.id
    return None


def get_owner_id(sp: spotipy.Spotify, config: SyncConfig) -> str:
    """Configured owner id, or the id of the user the token belongs to."""
    # Needed because creation goes through POST /users/{id}/playlists.
    # spotipy warns that user_playlist_create is deprecated; the endpoint
    # still works and is the one this job targets.
    if config.owner_id:
        return config.owner_id
    user = require_dict(api_call(sp.current_user), "user")
    return require_str(user, "id", "user")


def create_playlist(
    sp: spotipy.Spotify,
    user_id: str,
    playlist_name: str,
    description: str = DEFAULT_DESCRIPTION,
) -> str:
    """
    Create a private playlist owned by `user_id`.

    Returns:
        Playlist ID

    Raises:
        DecodeError: If the response carries no playlist id
    """
    get_logger().info("Creating new playlist %s", playlist_name)
    created = api_call(
        sp.user_playlist_create,
        user_id,
        playlist_name,
        public=False,
        description=description,
    )
    return Playlist.from_api(created).id


def resolve_playlist(
    sp: spotipy.Spotify,
    playlist_name: str,
    config: SyncConfig,
) -> Tuple[Optional[str], bool]:
    """
    Search first; create only if no playlist has this name.

    In dry-run mode a missing playlist is not created and the returned id
    is None.

    Returns:
        (playlist_id, created)

    Raises:
        SyncError: With `step` set to "search_playlist" or "create_playlist"
    """
    try:
        playlist_id = search_playlist(sp, playlist_name, limit=config.playlists_limit)
    except SyncError as e:
        e.step = "search_playlist"
        raise
    if playlist_id is not None:
        return playlist_id, False

    if config.dry_run:
        get_logger().info("[DRY RUN] Would create playlist %s", playlist_name)
        return None, False

    try:
        owner_id = get_owner_id(sp, config)
        return create_playlist(sp, owner_id, playlist_name, config.description), True
    except SyncError as e:
        e.step = "create_playlist"
        raise
