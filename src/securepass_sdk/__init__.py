"""SecurePass Python SDK."""

from .async_client import AsyncSecurePassClient
from .client import SecurePassClient
from .config import ClientConfig, __version__
from .exceptions import (
    InvalidCredentialError,
    InvalidRequestError,
    NetworkError,
    ParseError,
    RemoteError,
    RequestTimeoutError,
    SecurePassError,
)
from .models import ConnectionStatus, PasswordOptions

__all__ = [
    "AsyncSecurePassClient",
    "ClientConfig",
    "ConnectionStatus",
    "InvalidCredentialError",
    "InvalidRequestError",
    "NetworkError",
    "ParseError",
    "PasswordOptions",
    "RemoteError",
    "RequestTimeoutError",
    "SecurePassClient",
    "SecurePassError",
    "__version__",
]
