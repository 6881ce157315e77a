"""In-memory stand-in for the spotipy.Spotify methods the job calls."""

import itertools
from typing import Dict, List, Optional


def saved_track(track_id: str, added_at: str, name: Optional[str] = None, artist: str = "Some Artist") -> dict:
    """Build one item of a GET /me/tracks response."""
    return {
        "added_at": added_at,
        "track": {
            "id": track_id,
            "name": name or f"Song {track_id}",
            "artists": [{"id": f"artist-{artist}", "name": artist}],
        },
    }


class FakeSpotify:
    """
    Keeps liked songs, playlists and playlist membership in memory.

    Every call is recorded in `calls` as (method_name, args, kwargs).
    """

    def __init__(self, user_id: str = "test_user"):
        self.user_id = user_id
        self.liked: List[dict] = []
        self.playlists: List[dict] = []
        self.playlist_tracks: Dict[str, List[str]] = {}
        self.calls: List[tuple] = []
        self._ids = itertools.count(1)

    # -- setup helpers -----------------------------------------------------

    def add_playlist(self, name: str, track_ids=(), playlist_id: Optional[str] = None) -> str:
        playlist_id = playlist_id or f"pl{next(self._ids)}"
        self.playlists.append({"id": playlist_id, "name": name, "owner": {"id": self.user_id}})
        self.playlist_tracks[playlist_id] = list(track_ids)
        return playlist_id

    def call_names(self) -> List[str]:
        return [name for name, _, _ in self.calls]

    # -- spotipy surface ---------------------------------------------------

    def current_user(self):
        self.calls.append(("current_user", (), {}))
        return {"id": self.user_id}

    def current_user_saved_tracks(self, limit=20, offset=0, market=None):
        self.calls.append(("current_user_saved_tracks", (), {"limit": limit}))
        return {"items": self.liked[offset:offset + limit], "total": len(self.liked)}

    def current_user_playlists(self, limit=50, offset=0):
        self.calls.append(("current_user_playlists", (), {"limit": limit}))
        return {"items": self.playlists[offset:offset + limit], "total": len(self.playlists)}

    def user_playlist_create(self, user, name, public=True, collaborative=False, description=""):
        self.calls.append((
            "user_playlist_create",
            (user, name),
            {"public": public, "description": description},
        ))
        playlist_id = self.add_playlist(name)
        return {"id": playlist_id, "name": name, "public": public, "owner": {"id": user}}

    def playlist_items(self, playlist_id, fields=None, limit=100, offset=0, market=None,
                       additional_types=("track", "episode")):
        self.calls.append(("playlist_items", (playlist_id,), {"limit": limit}))
        ids = self.playlist_tracks[playlist_id][offset:offset + limit]
        return {"items": [{"track": {"id": tid}} for tid in ids]}

    def playlist_add_items(self, playlist_id, items, position=None):
        self.calls.append(("playlist_add_items", (playlist_id, list(items)), {}))
        for uri in items:
            self.playlist_tracks[playlist_id].append(uri.rsplit(":", 1)[-1])
        return {"snapshot_id": f"snap{next(self._ids)}"}
