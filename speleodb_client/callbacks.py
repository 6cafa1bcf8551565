from __future__ import annotations

import logging
from typing import Protocol


class AuthenticationCallback(Protocol):
    def on_authentication_started(self) -> None: ...

    def on_authentication_success(self) -> None: ...

    def on_authentication_failed(self, message: str) -> None: ...

    def on_disconnected(self) -> None: ...

    def log_message(self, message: str) -> None: ...


class LoggingAuthenticationCallback:
    """Event sink that writes every lifecycle event to a logger."""

    def __init__(self, logger: logging.Logger | None = None):
        self._logger = logger or logging.getLogger("speleodb_client.session")

    def on_authentication_started(self) -> None:
        self._logger.info("Connecting...")

    def on_authentication_success(self) -> None:
        self._logger.info("Connected")

    def on_authentication_failed(self, message: str) -> None:
        self._logger.error(message)

    def on_disconnected(self) -> None:
        self._logger.info("Disconnected")

    def log_message(self, message: str) -> None:
        self._logger.info(message)
