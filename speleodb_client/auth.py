from __future__ import annotations

import logging
import threading

from speleodb_client.http import HttpClient
from speleodb_client.instance import build_instance_url
from speleodb_client.models import AuthToken

logger = logging.getLogger(__name__)

AUTH_TOKEN_PATH = "/api/v1/user/auth-token/"


class AuthenticationError(RuntimeError):
    pass


class CredentialRejectedError(AuthenticationError):
    def __init__(self, status_code: int):
        super().__init__(f"Authentication failed with status code: {status_code}")
        self.status_code = status_code


class InvalidSessionStateError(RuntimeError):
    pass


class SpeleoDBAuthClient:
    """Holds the SpeleoDB session: the instance URL and its auth token.

    This is the single source of truth for the session. Calls may come from
    several worker threads, so every read and write of the session goes
    through a lock.
    """

    def __init__(self, http_client: HttpClient):
        self._http_client = http_client
        self._lock = threading.Lock()
        self._token = AuthToken()
        self._instance_url = ""

    def authenticate(
        self,
        email: str | None,
        password: str | None,
        oauth_token: str | None,
        instance: str,
    ) -> None:
        instance_url = build_instance_url(instance)
        url = f"{instance_url}{AUTH_TOKEN_PATH}"

        if oauth_token:
            status_code, body = self._http_client.get_json(url, token=oauth_token)
        else:
            status_code, body = self._http_client.post_json(
                url,
                {"email": email or "", "password": password or ""},
            )

        if status_code != 200:
            self.logout()
            raise CredentialRejectedError(status_code)

        try:
            token = AuthToken.of(str(body.get("token") or ""))
        except ValueError as error:
            self.logout()
            raise AuthenticationError("Authentication response did not contain a token") from error

        with self._lock:
            self._token = token
            self._instance_url = instance_url
        logger.debug("Session opened on %s", instance_url)

    def logout(self) -> None:
        with self._lock:
            self._token = AuthToken()
            self._instance_url = ""

    def is_authenticated(self) -> bool:
        with self._lock:
            return self._token.is_valid and bool(self._instance_url)

    def get_instance(self) -> str:
        with self._lock:
            if not (self._token.is_valid and self._instance_url):
                raise InvalidSessionStateError("User is not authenticated. Please log in.")
            return self._instance_url
