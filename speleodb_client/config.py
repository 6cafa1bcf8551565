from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path

from speleodb_client.models import DEFAULT_INSTANCE


class ConfigurationError(ValueError):
    pass


@dataclass(frozen=True)
class AppSettings:
    instance: str
    timeout_seconds: int
    wait_timeout_seconds: float
    max_workers: int
    log_level: str
    email: str
    password: str
    oauth_token: str

    @property
    def wait_timeout(self) -> float | None:
        # 0 disables the deadline on blocking waits.
        if self.wait_timeout_seconds <= 0:
            return None
        return self.wait_timeout_seconds

    @staticmethod
    def from_env() -> "AppSettings":
        _load_dotenv_if_present()

        instance = os.getenv("SPELEODB_INSTANCE", DEFAULT_INSTANCE).strip()

        try:
            timeout_seconds = int(os.getenv("SPELEODB_TIMEOUT_SECONDS", "30"))
            wait_timeout_seconds = float(os.getenv("SPELEODB_WAIT_TIMEOUT_SECONDS", "0"))
            max_workers = int(os.getenv("SPELEODB_MAX_WORKERS", "4"))
        except ValueError as error:
            raise ConfigurationError(f"Invalid numeric setting: {error}") from error

        log_level = os.getenv("SPELEODB_LOG_LEVEL", "INFO").strip().upper()

        settings = AppSettings(
            instance=instance,
            timeout_seconds=timeout_seconds,
            wait_timeout_seconds=wait_timeout_seconds,
            max_workers=max_workers,
            log_level=log_level,
            email=os.getenv("SPELEODB_EMAIL", "").strip(),
            password=os.getenv("SPELEODB_PASSWORD", ""),
            oauth_token=os.getenv("SPELEODB_OAUTH_TOKEN", "").strip(),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        if self.timeout_seconds <= 0:
            raise ConfigurationError("SPELEODB_TIMEOUT_SECONDS must be greater than 0")

        if self.wait_timeout_seconds < 0:
            raise ConfigurationError("SPELEODB_WAIT_TIMEOUT_SECONDS must be 0 or greater")

        if self.max_workers <= 0:
            raise ConfigurationError("SPELEODB_MAX_WORKERS must be greater than 0")

        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigurationError(
                "SPELEODB_LOG_LEVEL must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL"
            )


def _load_dotenv_if_present() -> None:
    explicit = os.getenv("SPELEODB_ENV_FILE", "").strip()
    path = Path(explicit).expanduser() if explicit else Path.cwd() / ".env"
    if not path.is_file():
        return

    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError:
        return

    for raw_line in lines:
        key, sep, value = raw_line.strip().partition("=")
        key = key.strip()
        # Only our own settings; the environment always wins.
        if not sep or not key.startswith("SPELEODB_") or key in os.environ:
            continue
        os.environ[key] = value.strip().strip('"').strip("'")
