"""
Playlist update utilities.

Appends tracks to the monthly playlist one at a time, checking membership
before every add. This function only ADDS tracks; it never removes tracks,
and manually added tracks are preserved.
"""

from dataclasses import dataclass, field
from typing import List, Set

import spotipy

from .api import api_call
from .config import DEFAULT_PLAYLIST_TRACKS_LIMIT
from .error_handling import get_logger
from .models import Track, require_items


@dataclass
class AppendResult:
    added: List[Track] = field(default_factory=list)
    skipped: List[Track] = field(default_factory=list)


def get_playlist_track_ids(
    sp: spotipy.Spotify,
    playlist_id: str,
    limit: int = DEFAULT_PLAYLIST_TRACKS_LIMIT,
) -> Set[str]:
    """
    Track IDs in the first page of a playlist.

    Tracks past the first page are not seen, so a playlist that grows beyond
    one page can receive duplicates.
    """
    page = api_call(sp.playlist_items, playlist_id, limit=limit)
    track_ids = set()
    for item in require_items(page, "playlist tracks"):
        track = item.get("track") if isinstance(item, dict) else None
        if isinstance(track, dict) and track.get("id"):
            track_ids.add(track["id"])
    return track_ids


def add_track_to_playlist(sp: spotipy.Spotify, playlist_id: str, track: Track) -> None:
    """Add a single track by URI."""
    api_call(sp.playlist_add_items, playlist_id, [track.uri])


def add_tracks_to_playlist(
    sp: spotipy.Spotify,
    playlist_id: str,
    tracks: List[Track],
    limit: int = DEFAULT_PLAYLIST_TRACKS_LIMIT,
    dry_run: bool = False,
) -> AppendResult:
    """
    Add each track that is not already in the playlist, in order.

    Membership is re-read before every track. The first failing request
    aborts the loop; tracks after it are not attempted.

    Args:
        sp: Spotify client
        playlist_id: Target playlist
        tracks: Candidate tracks
        limit: Page size for the membership check
        dry_run: Log and count would-be additions without writing

    Returns:
        AppendResult with the added and skipped tracks
    """
    logger = get_logger()
    result = AppendResult()

    for track in tracks:
        logger.info("Checking if the track %s is already in the playlist.", track)
        if track.id in get_playlist_track_ids(sp, playlist_id, limit=limit):
            logger.info("  Skipping %s (already in playlist)", track)
            result.skipped.append(track)
            continue

        if dry_run:
            logger.info("  [DRY RUN] Would add the track %s to the playlist.", track)
        else:
            logger.info("Adding the track %s to the playlist.", track)
            add_track_to_playlist(sp, playlist_id, track)
        result.added.append(track)

    return result
