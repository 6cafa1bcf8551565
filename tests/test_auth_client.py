from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from speleodb_client.auth import (
    AuthenticationError,
    CredentialRejectedError,
    InvalidSessionStateError,
    SpeleoDBAuthClient,
)
from speleodb_client.http import HttpClient, NetworkFailureError


def _response(status_code: int, body: dict | None = None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.content = b"{}" if body is not None else b""
    response.json.return_value = body
    return response


@pytest.fixture
def auth_client() -> SpeleoDBAuthClient:
    return SpeleoDBAuthClient(HttpClient(timeout_seconds=5))


def test_password_login_posts_credentials(auth_client) -> None:
    with patch.object(requests.Session, "post", return_value=_response(200, {"token": "abc"})) as post:
        auth_client.authenticate("a@b.com", "x", None, "www.speleoDB.org")

    post.assert_called_once()
    args, kwargs = post.call_args
    assert args[0] == "https://www.speleoDB.org/api/v1/user/auth-token/"
    assert kwargs["json"] == {"email": "a@b.com", "password": "x"}
    assert kwargs["timeout"] == 5
    assert "Authorization" not in kwargs["headers"]
    assert auth_client.is_authenticated()
    assert auth_client.get_instance() == "https://www.speleoDB.org"


def test_oauth_login_sends_token_header(auth_client) -> None:
    with patch.object(requests.Session, "get", return_value=_response(200, {"token": "abc"})) as get:
        auth_client.authenticate(None, None, "oauth-123", "localhost:8000")

    args, kwargs = get.call_args
    assert args[0] == "http://localhost:8000/api/v1/user/auth-token/"
    assert kwargs["headers"]["Authorization"] == "Token oauth-123"
    assert auth_client.get_instance() == "http://localhost:8000"


def test_rejected_login_clears_session(auth_client) -> None:
    with patch.object(requests.Session, "post", return_value=_response(200, {"token": "abc"})):
        auth_client.authenticate("a@b.com", "x", None, "www.speleoDB.org")

    with patch.object(requests.Session, "post", return_value=_response(401, {"detail": "nope"})):
        with pytest.raises(CredentialRejectedError, match="status code: 401"):
            auth_client.authenticate("a@b.com", "bad", None, "www.speleoDB.org")

    assert auth_client.is_authenticated() is False


def test_response_without_token_is_an_error(auth_client) -> None:
    with patch.object(requests.Session, "post", return_value=_response(200, {})):
        with pytest.raises(AuthenticationError, match="did not contain a token"):
            auth_client.authenticate("a@b.com", "x", None, "www.speleoDB.org")

    assert auth_client.is_authenticated() is False


def test_transport_error_is_network_failure(auth_client) -> None:
    with patch.object(requests.Session, "post", side_effect=requests.ConnectTimeout("connect timeout")):
        with pytest.raises(NetworkFailureError, match="connect timeout") as excinfo:
            auth_client.authenticate("a@b.com", "x", None, "www.speleoDB.org")

    assert excinfo.value.status_code == 0


def test_instance_query_while_disconnected_raises(auth_client) -> None:
    assert auth_client.is_authenticated() is False
    with pytest.raises(InvalidSessionStateError):
        auth_client.get_instance()


def test_logout_clears_session(auth_client) -> None:
    with patch.object(requests.Session, "post", return_value=_response(200, {"token": "abc"})):
        auth_client.authenticate("a@b.com", "x", None, "www.speleoDB.org")

    auth_client.logout()

    assert auth_client.is_authenticated() is False
    with pytest.raises(InvalidSessionStateError):
        auth_client.get_instance()
