from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
import logging
import sys

from speleodb_client.auth import SpeleoDBAuthClient
from speleodb_client.callbacks import AuthenticationCallback, LoggingAuthenticationCallback
from speleodb_client.config import AppSettings, ConfigurationError
from speleodb_client.http import HttpClient
from speleodb_client.logging_utils import configure_logging
from speleodb_client.models import AuthenticationRequest
from speleodb_client.services import SessionOrchestrator

logger = logging.getLogger(__name__)


def build_orchestrator(
    settings: AppSettings,
    executor: ThreadPoolExecutor,
    http_client: HttpClient,
    callback: AuthenticationCallback | None = None,
) -> SessionOrchestrator:
    return SessionOrchestrator(
        client=SpeleoDBAuthClient(http_client),
        executor=executor,
        callback=callback or LoggingAuthenticationCallback(),
        wait_timeout_seconds=settings.wait_timeout,
    )


def run_app() -> int:
    try:
        settings = AppSettings.from_env()
    except ConfigurationError as exc:
        configure_logging()
        logger.error("Configuration error. Fix the environment and restart: %s", exc)
        return 2

    configure_logging(settings.log_level)

    if not settings.oauth_token and not (settings.email and settings.password):
        logger.error("Set SPELEODB_OAUTH_TOKEN, or SPELEODB_EMAIL and SPELEODB_PASSWORD")
        return 2

    http_client = HttpClient(settings.timeout_seconds)
    try:
        with ThreadPoolExecutor(
            max_workers=settings.max_workers,
            thread_name_prefix="speleodb",
        ) as executor:
            orchestrator = build_orchestrator(settings, executor, http_client)
            request = AuthenticationRequest(
                email=settings.email,
                password=settings.password,
                oauth_token=settings.oauth_token,
                instance=settings.instance,
            )

            result = orchestrator.authenticate(request)
            if not result.is_success:
                return 1

            state = orchestrator.auth_state()
            logger.info("Session active on %s", state.instance)
            orchestrator.disconnect()
    finally:
        http_client.close()
    return 0


if __name__ == "__main__":
    sys.exit(run_app())
