"""
Typed views of the Web API payloads the job reads.

Each decoder checks the fields it needs and raises DecodeError instead of
letting a KeyError or TypeError escape from a malformed response.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Tuple

import pandas as pd

from .config import TRACK_URI_PREFIX
from .error_handling import DecodeError


def require_dict(payload: Any, what: str) -> dict:
    if not isinstance(payload, dict):
        raise DecodeError(f"Expected {what} object, got {type(payload).__name__}")
    return payload


def require_str(payload: dict, key: str, what: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value:
        raise DecodeError(f"{what} is missing a string '{key}' field")
    return value


def require_items(payload: Any, what: str) -> list:
    """Return the `items` list of a paging object."""
    page = require_dict(payload, what)
    items = page.get("items")
    if not isinstance(items, list):
        raise DecodeError(f"{what} response has no 'items' list")
    return items


@dataclass(frozen=True)
class Artist:
    id: str
    name: str

    @classmethod
    def from_api(cls, payload: Any) -> "Artist":
        data = require_dict(payload, "artist")
        # Local files come back with a null artist id
        return cls(id=data.get("id") or "", name=data.get("name") or "")


@dataclass(frozen=True)
class Track:
    id: str
    name: str
    artists: Tuple[Artist, ...]

    @property
    def uri(self) -> str:
        return f"{TRACK_URI_PREFIX}{self.id}"

    @property
    def primary_artist(self) -> str:
        return self.artists[0].name

    @classmethod
    def from_api(cls, payload: Any) -> "Track":
        data = require_dict(payload, "track")
        artists = data.get("artists")
        if not isinstance(artists, list) or not artists:
            raise DecodeError("track has no artists")
        return cls(
            id=require_str(data, "id", "track"),
            name=data.get("name") or "",
            artists=tuple(Artist.from_api(a) for a in artists),
        )

    def __str__(self) -> str:
        return f"{self.name} by {self.primary_artist}"


@dataclass(frozen=True)
class LikedSong:
    track: Track
    added_at: datetime

    @classmethod
    def from_api(cls, payload: Any) -> Optional["LikedSong"]:
        """
        Decode one saved-track item.

        Returns None for items whose track has been removed from the catalog
        (the API sends `"track": null` for those).
        """
        data = require_dict(payload, "saved track")
        if data.get("track") is None:
            return None
        raw_added_at = require_str(data, "added_at", "saved track")
        try:
            added_at = pd.to_datetime(raw_added_at, utc=True)
        except (ValueError, TypeError) as e:
            raise DecodeError(f"Unparseable added_at {raw_added_at!r}: {e}") from e
        if pd.isna(added_at):
            raise DecodeError(f"Unparseable added_at {raw_added_at!r}")
        return cls(track=Track.from_api(data["track"]), added_at=added_at.to_pydatetime())


@dataclass(frozen=True)
class Playlist:
    id: str
    name: str
    owner_id: str = ""

    @classmethod
    def from_api(cls, payload: Any) -> "Playlist":
        data = require_dict(payload, "playlist")
        owner = data.get("owner") if isinstance(data.get("owner"), dict) else {}
        return cls(
            id=require_str(data, "id", "playlist"),
            name=data.get("name") or "",
            owner_id=owner.get("id") or "",
        )
