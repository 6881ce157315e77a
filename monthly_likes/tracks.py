"""
Liked tracks: fetch the most recent page and keep this month's likes.
"""

from datetime import datetime
from typing import List, Optional

import spotipy

from .api import api_call
from .config import DEFAULT_LIKED_TRACKS_LIMIT
from .error_handling import get_logger
from .models import LikedSong, Track, require_items


def fetch_liked_songs(sp: spotipy.Spotify, limit: int = DEFAULT_LIKED_TRACKS_LIMIT) -> List[LikedSong]:
    """
    Fetch one page of the user's liked tracks, most recently liked first.

    No pagination: a daily run never has more than a page of new likes.
    """
    page = api_call(sp.current_user_saved_tracks, limit=limit)
    songs = []
    for item in require_items(page, "saved tracks"):
        song = LikedSong.from_api(item)
        if song is not None:
            songs.append(song)
    return songs


def filter_current_month(songs: List[LikedSong], now: Optional[datetime] = None) -> List[Track]:
    """
    Keep the tracks liked in the calendar month of `now`, in input order.

    Only the month number is compared, not the year: a track liked in the
    same month of an earlier year is kept too.
    """
    if now is None:
        now = datetime.now()
    return [song.track for song in songs if song.added_at.month == now.month]


def get_liked_tracks(
    sp: spotipy.Spotify,
    now: Optional[datetime] = None,
    limit: int = DEFAULT_LIKED_TRACKS_LIMIT,
) -> List[Track]:
    """Liked tracks added this month, from the latest page of likes."""
    songs = fetch_liked_songs(sp, limit=limit)
    tracks = filter_current_month(songs, now)
    get_logger().info("Found %d liked song(s) for this month", len(tracks))
    return tracks
