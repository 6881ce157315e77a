"""
Playlist formatting utilities.
"""

from datetime import datetime
from typing import Optional

from .config import MONTH_NAMES_SHORT


def format_playlist_name(now: Optional[datetime] = None) -> str:
    """
    Name of the playlist for the month containing `now`.

    Format is the abbreviated English month, an apostrophe and the
    two-digit year, e.g. "Jan'25" or "Mar'05". Two runs in the same
    calendar month always produce the same name.
    """
    if now is None:
        now = datetime.now()
    return f"{MONTH_NAMES_SHORT[now.month]}'{now.year % 100:02d}"
