from .callbacks import AuthenticationCallback, LoggingAuthenticationCallback
from .models import DEFAULT_INSTANCE, AuthenticationRequest, AuthenticationResult
from .services import SessionClient, SessionOrchestrator

__all__ = [
    "AuthenticationCallback",
    "LoggingAuthenticationCallback",
    "DEFAULT_INSTANCE",
    "AuthenticationRequest",
    "AuthenticationResult",
    "SessionClient",
    "SessionOrchestrator",
]
