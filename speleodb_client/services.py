from __future__ import annotations

from concurrent.futures import CancelledError, Executor, Future
from concurrent.futures import TimeoutError as FutureTimeoutError
import logging
from typing import Protocol

from speleodb_client.auth import InvalidSessionStateError
from speleodb_client.callbacks import AuthenticationCallback
from speleodb_client.models import AuthenticationRequest, AuthenticationResult, AuthState

logger = logging.getLogger(__name__)


class SessionClient(Protocol):
    def authenticate(
        self,
        email: str | None,
        password: str | None,
        oauth_token: str | None,
        instance: str,
    ) -> None: ...

    def logout(self) -> None: ...

    def is_authenticated(self) -> bool: ...

    def get_instance(self) -> str: ...


class SessionOrchestrator:
    """Runs connect and disconnect requests on an executor.

    The orchestrator keeps no session state of its own: every query goes to
    the client. Client failures never escape as exceptions, they come back
    as an ``AuthenticationResult`` failure or a log event on the callback.

    Events for one call are emitted in order: started, connecting log,
    outcome log, outcome callback, then the future resolves. Concurrent
    calls may interleave.

    The executor belongs to the caller, who is responsible for shutting it
    down.
    """

    def __init__(
        self,
        client: SessionClient,
        executor: Executor,
        callback: AuthenticationCallback,
        wait_timeout_seconds: float | None = None,
    ):
        if client is None:
            raise ValueError("client is required")
        if executor is None:
            raise ValueError("executor is required")
        if callback is None:
            raise ValueError("callback is required")
        self._client = client
        self._executor = executor
        self._callback = callback
        self._wait_timeout_seconds = wait_timeout_seconds

    def authenticate_async(self, request: AuthenticationRequest) -> Future[AuthenticationResult]:
        self._callback.on_authentication_started()
        instance = request.effective_instance
        try:
            return self._executor.submit(self._run_authentication, request, instance)
        except Exception as exc:
            message = f"Authentication failed: {self._describe_error(exc)}"
            self._log(message)
            self._callback.on_authentication_failed(message)
            return _resolved(AuthenticationResult.failure(message))

    def authenticate(
        self,
        request: AuthenticationRequest,
        timeout: float | None = None,
    ) -> AuthenticationResult:
        """Connect and wait for the outcome.

        When the wait times out the returned failure only reflects the wait.
        The attempt keeps running, and its own success or failure callback
        may still fire afterwards.
        """
        timeout = self._resolve_timeout(timeout)
        try:
            return self.authenticate_async(request).result(timeout=timeout)
        except Exception as exc:
            return AuthenticationResult.failure(
                f"Authentication failed: {self._describe_wait_failure(exc, timeout)}"
            )

    def disconnect_async(self) -> Future[None]:
        try:
            return self._executor.submit(self._run_disconnect)
        except Exception as exc:
            try:
                self._log(f"Error during disconnection: {self._describe_error(exc)}")
            finally:
                self._callback.on_disconnected()
            return _resolved(None)

    def disconnect(self, timeout: float | None = None) -> None:
        timeout = self._resolve_timeout(timeout)
        try:
            self.disconnect_async().result(timeout=timeout)
        except Exception as exc:
            self._log(f"Error during disconnection: {self._describe_wait_failure(exc, timeout)}")

    def is_authenticated(self) -> bool:
        return self._client.is_authenticated()

    def get_current_instance(self) -> str | None:
        try:
            if not self._client.is_authenticated():
                return None
            return self._client.get_instance()
        except InvalidSessionStateError:
            return None

    def auth_state(self) -> AuthState:
        instance = self.get_current_instance()
        return AuthState(is_signed_in=instance is not None, instance=instance)

    def _run_authentication(
        self,
        request: AuthenticationRequest,
        instance: str,
    ) -> AuthenticationResult:
        self._log(f"Connecting to {instance}")
        try:
            self._client.authenticate(
                request.email,
                request.password,
                request.oauth_token,
                instance,
            )
        except Exception as exc:
            message = f"Connection failed: {self._describe_error(exc)}"
            self._log(message)
            self._callback.on_authentication_failed(message)
            return AuthenticationResult.failure(message)

        self._log("Connected successfully.")
        self._callback.on_authentication_success()
        return AuthenticationResult.success(instance)

    def _run_disconnect(self) -> None:
        try:
            if self._client.is_authenticated():
                instance = self._client.get_instance()
                self._client.logout()
                self._log(f"Disconnected from {instance}")
        except Exception as exc:
            self._log(f"Error during disconnection: {self._describe_error(exc)}")
        finally:
            self._callback.on_disconnected()

    def _log(self, message: str) -> None:
        logger.debug(message)
        self._callback.log_message(message)

    def _resolve_timeout(self, timeout: float | None) -> float | None:
        if timeout is not None:
            return timeout
        return self._wait_timeout_seconds

    @staticmethod
    def _describe_error(exc: BaseException) -> str:
        return str(exc) or type(exc).__name__

    @classmethod
    def _describe_wait_failure(cls, exc: BaseException, timeout: float | None) -> str:
        if isinstance(exc, FutureTimeoutError) and timeout is not None:
            return f"timed out after {timeout:g}s"
        if isinstance(exc, CancelledError):
            return "cancelled"
        return cls._describe_error(exc)


def _resolved(value):
    future: Future = Future()
    future.set_result(value)
    return future
