"""
Access token retrieval for headless runs.

Exchanges the long-lived refresh token for a short-lived access token.
"""

from typing import Optional

import requests
from spotipy.cache_handler import MemoryCacheHandler
from spotipy.oauth2 import SpotifyOAuth, SpotifyOauthError

from .config import SCOPES, Credentials
from .error_handling import AuthError, get_logger


def get_access_token(credentials: Credentials, requests_timeout: Optional[int] = None) -> str:
    """
    Refresh an access token using the refresh-token grant.

    Posts `grant_type=refresh_token` to the accounts token endpoint with the
    client id/secret as Basic auth. The token is kept in memory only.

    Raises:
        AuthError: On transport failure, error status, undecodable body or
            a response without an access token
    """
    logger = get_logger()
    auth = SpotifyOAuth(
        client_id=credentials.client_id,
        client_secret=credentials.client_secret,
        redirect_uri=credentials.redirect_uri,
        scope=SCOPES,
        cache_handler=MemoryCacheHandler(),
        open_browser=False,
        requests_timeout=requests_timeout,
    )
    try:
        token_info = auth.refresh_access_token(credentials.refresh_token)
    except SpotifyOauthError as e:
        raise AuthError(f"token endpoint rejected the refresh token: {e}") from e
    except requests.exceptions.RequestException as e:
        raise AuthError(f"token request failed: {e}") from e
    except (KeyError, ValueError, TypeError) as e:
        raise AuthError(f"unexpected token response: {e}") from e

    access_token = token_info.get("access_token") if isinstance(token_info, dict) else None
    if not isinstance(access_token, str) or not access_token:
        raise AuthError("token response has no access_token")

    logger.debug("Obtained access token (expires in %ss)", token_info.get("expires_in", "?"))
    return access_token
