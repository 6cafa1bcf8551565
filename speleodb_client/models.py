from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_INSTANCE = "www.speleoDB.org"


def resolve_instance(instance: str | None) -> str:
    """Return the trimmed instance, or the default one when it is blank."""
    value = (instance or "").strip()
    return value or DEFAULT_INSTANCE


@dataclass(frozen=True)
class AuthenticationRequest:
    email: str | None = None
    password: str | None = field(default=None, repr=False)
    oauth_token: str | None = field(default=None, repr=False)
    instance: str | None = None

    @property
    def effective_instance(self) -> str:
        return resolve_instance(self.instance)


@dataclass(frozen=True)
class AuthenticationResult:
    """Outcome of a connection attempt.

    Either a success holding the instance that was connected to, or a
    failure holding a human readable message. Use the ``success`` and
    ``failure`` constructors; the two payloads are never set together.
    """

    _instance: str | None = None
    _message: str | None = None

    def __post_init__(self):
        if (self._instance is None) == (self._message is None):
            raise ValueError("AuthenticationResult needs exactly one of instance or message")
        if self._instance is not None and not self._instance:
            raise ValueError("Successful result requires a non-empty instance")
        if self._message is not None and not self._message:
            raise ValueError("Failed result requires a non-empty message")

    @classmethod
    def success(cls, instance: str) -> "AuthenticationResult":
        return cls(_instance=instance)

    @classmethod
    def failure(cls, message: str) -> "AuthenticationResult":
        return cls(_message=message)

    @property
    def is_success(self) -> bool:
        return self._instance is not None

    @property
    def instance(self) -> str | None:
        return self._instance

    @property
    def message(self) -> str | None:
        return self._message

    def __repr__(self) -> str:
        if self.is_success:
            return f"AuthenticationResult.success({self._instance!r})"
        return f"AuthenticationResult.failure({self._message!r})"


@dataclass(frozen=True)
class AuthToken:
    value: str = field(default="", repr=False)

    @classmethod
    def of(cls, token: str | None) -> "AuthToken":
        value = (token or "").strip()
        if not value:
            raise ValueError("Auth token cannot be empty")
        return cls(value)

    @property
    def is_valid(self) -> bool:
        return bool(self.value)

    def __repr__(self) -> str:
        return f"AuthToken({'***' if self.is_valid else 'empty'})"


@dataclass(frozen=True)
class AuthState:
    is_signed_in: bool
    instance: str | None = None
