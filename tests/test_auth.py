import unittest
from unittest.mock import MagicMock, patch

import requests
from spotipy.cache_handler import MemoryCacheHandler
from spotipy.oauth2 import SpotifyOauthError

from monthly_likes.auth import get_access_token
from monthly_likes.config import Credentials
from monthly_likes.error_handling import AuthError


class TestGetAccessToken(unittest.TestCase):
    def setUp(self):
        self.credentials = Credentials("cid", "secret", "refresh-token")
        patcher = patch("monthly_likes.auth.SpotifyOAuth")
        self.mock_oauth_cls = patcher.start()
        self.addCleanup(patcher.stop)
        self.mock_oauth = MagicMock()
        self.mock_oauth_cls.return_value = self.mock_oauth

    def test_returns_access_token(self):
        self.mock_oauth.refresh_access_token.return_value = {
            "access_token": "access-123",
            "expires_in": 3600,
        }

        token = get_access_token(self.credentials)

        self.assertEqual(token, "access-123")
        self.mock_oauth.refresh_access_token.assert_called_once_with("refresh-token")

    def test_uses_client_credentials_and_memory_cache(self):
        self.mock_oauth.refresh_access_token.return_value = {"access_token": "a"}

        get_access_token(self.credentials, requests_timeout=7)

        kwargs = self.mock_oauth_cls.call_args.kwargs
        self.assertEqual(kwargs["client_id"], "cid")
        self.assertEqual(kwargs["client_secret"], "secret")
        self.assertEqual(kwargs["requests_timeout"], 7)
        # Tokens are never written to disk
        self.assertIsInstance(kwargs["cache_handler"], MemoryCacheHandler)

    def test_timeout_defaults_to_none(self):
        self.mock_oauth.refresh_access_token.return_value = {"access_token": "a"}

        get_access_token(self.credentials)

        self.assertIsNone(self.mock_oauth_cls.call_args.kwargs["requests_timeout"])

    def test_rejected_refresh_token(self):
        self.mock_oauth.refresh_access_token.side_effect = SpotifyOauthError("invalid_grant")

        with self.assertRaises(AuthError):
            get_access_token(self.credentials)

    def test_connection_failure(self):
        self.mock_oauth.refresh_access_token.side_effect = requests.exceptions.ConnectionError("down")

        with self.assertRaises(AuthError):
            get_access_token(self.credentials)

    def test_undecodable_response(self):
        self.mock_oauth.refresh_access_token.side_effect = ValueError("Expecting value")

        with self.assertRaises(AuthError):
            get_access_token(self.credentials)

    def test_missing_access_token(self):
        self.mock_oauth.refresh_access_token.return_value = {"token_type": "Bearer"}

        with self.assertRaises(AuthError):
            get_access_token(self.credentials)


if __name__ == "__main__":
    unittest.main()
