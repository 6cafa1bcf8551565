from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
import threading

import pytest

from speleodb_client.auth import InvalidSessionStateError
from speleodb_client.services import SessionOrchestrator


class RecordingCallback:
    """Collects every lifecycle event, in emission order."""

    def __init__(self):
        self.events: list[tuple[str, str | None]] = []
        self.threads: dict[str, str] = {}

    def _record(self, name: str, message: str | None = None) -> None:
        self.threads.setdefault(name, threading.current_thread().name)
        self.events.append((name, message))

    def on_authentication_started(self) -> None:
        self._record("started")

    def on_authentication_success(self) -> None:
        self._record("success")

    def on_authentication_failed(self, message: str) -> None:
        self._record("failed", message)

    def on_disconnected(self) -> None:
        self._record("disconnected")

    def log_message(self, message: str) -> None:
        self._record("log", message)

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    @property
    def log_messages(self) -> list[str]:
        return [message for name, message in self.events if name == "log"]

    def count(self, name: str) -> int:
        return self.names.count(name)


class FakeSessionClient:
    def __init__(self):
        self.authenticate_error: Exception | None = None
        self.logout_error: Exception | None = None
        self.instance_error: Exception | None = None
        self.authenticated = False
        self.instance: str | None = None
        self.authenticate_calls: list[tuple] = []
        self.logout_calls = 0

    def authenticate(self, email, password, oauth_token, instance) -> None:
        self.authenticate_calls.append((email, password, oauth_token, instance))
        if self.authenticate_error is not None:
            raise self.authenticate_error
        self.authenticated = True
        self.instance = instance

    def logout(self) -> None:
        self.logout_calls += 1
        if self.logout_error is not None:
            raise self.logout_error
        self.authenticated = False
        self.instance = None

    def is_authenticated(self) -> bool:
        return self.authenticated

    def get_instance(self) -> str:
        if self.instance_error is not None:
            raise self.instance_error
        if not self.authenticated or self.instance is None:
            raise InvalidSessionStateError("User is not authenticated. Please log in.")
        return self.instance


@pytest.fixture
def executor():
    pool = ThreadPoolExecutor(max_workers=2, thread_name_prefix="test-pool")
    yield pool
    pool.shutdown(wait=True)


@pytest.fixture
def client() -> FakeSessionClient:
    return FakeSessionClient()


@pytest.fixture
def callback() -> RecordingCallback:
    return RecordingCallback()


@pytest.fixture
def orchestrator(client, executor, callback) -> SessionOrchestrator:
    return SessionOrchestrator(client=client, executor=executor, callback=callback)
