"""
API layer: Spotify client construction and error-translating API calls.

Unlike a long-running sync, this job never retries: a failed call ends the
run and the next scheduled invocation starts over.
"""

from typing import Any, Callable

import requests
import spotipy
from spotipy.exceptions import SpotifyException

from .config import DEFAULT_REQUESTS_TIMEOUT
from .error_handling import TransportError, get_logger


def get_spotify_client(access_token: str, requests_timeout: int = DEFAULT_REQUESTS_TIMEOUT) -> spotipy.Spotify:
    """
    Get a Spotify client bound to an already refreshed access token.

    Connection and status retries are disabled so every request is sent
    exactly once.
    """
    return spotipy.Spotify(
        auth=access_token,
        requests_timeout=requests_timeout,
        retries=0,
        status_retries=0,
    )


def api_call(fn: Callable, *args, **kwargs) -> Any:
    """
    Call a Spotify API method once.

    Args:
        fn: Callable (typically a bound method on spotipy.Spotify client)
        *args: Positional arguments to pass to fn
        **kwargs: Keyword arguments to pass to fn

    Returns:
        Decoded JSON result from the API call (may be None for empty bodies)

    Raises:
        TransportError: For error statuses and connection failures
    """
    logger = get_logger()
    fn_name = getattr(fn, '__name__', str(fn))
    logger.debug(f"API call: {fn_name}()")

    try:
        return fn(*args, **kwargs)
    except SpotifyException as e:
        # spotipy reports an exhausted status retry (5xx/429) as HTTP 429
        if str(e.msg).rstrip().endswith("Max Retries"):
            raise TransportError(f"{fn_name}() failed: {e.reason or e.msg}") from e
        raise TransportError(f"{fn_name}() failed with HTTP {e.http_status}: {e.msg}") from e
    except requests.exceptions.RequestException as e:
        raise TransportError(f"{fn_name}() failed: {e}") from e
