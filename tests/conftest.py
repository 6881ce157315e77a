import logging
import os
import sys

import pytest

# Ensure project root is on sys.path so 'monthly_likes' imports without installing
_TESTS_DIR = os.path.dirname(__file__)
_ROOT_DIR = os.path.abspath(os.path.join(_TESTS_DIR, os.pardir))
if _ROOT_DIR not in sys.path:
    sys.path.insert(0, _ROOT_DIR)

from tests.support.fake_spotify import FakeSpotify


_ENV_VARS = (
    "SPOTIFY_CLIENT_ID",
    "SPOTIFY_CLIENT_SECRET",
    "SPOTIFY_REFRESH_TOKEN",
    "SPOTIFY_OWNER_ID",
    "SPOTIFY_REDIRECT_URI",
    "MONTHLY_PLAYLIST_DESCRIPTION",
    "MONTHLY_PLAYLIST_DRY_RUN",
    "LIKED_TRACKS_LIMIT",
    "PLAYLISTS_LIMIT",
    "PLAYLIST_TRACKS_LIMIT",
    "REQUESTS_TIMEOUT",
    "LOG_LEVEL",
    "LOG_DIR",
)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Start every test without any of the job's variables set."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def fake_sp():
    return FakeSpotify()


@pytest.fixture(autouse=True)
def _reset_logger():
    """Drop handlers main() installs so they don't outlive captured streams."""
    yield
    from monthly_likes import error_handling
    logger = logging.getLogger(error_handling.LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    error_handling._logger = None
