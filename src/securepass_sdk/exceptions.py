"""Exception hierarchy raised by the SecurePass SDK."""

from __future__ import annotations

from typing import Optional


class SecurePassError(Exception):
    """Base class for every failure surfaced by the SDK."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def with_prefix(self, prefix: str) -> "SecurePassError":
        """Return a copy of this error with ``prefix`` prepended to the message."""
        prefixed = self.__class__.__new__(self.__class__)
        prefixed.__dict__.update(self.__dict__)
        prefixed.message = f"{prefix}: {self.message}"
        prefixed.args = (prefixed.message,)
        return prefixed

    def __str__(self) -> str:
        return self.message


class InvalidCredentialError(SecurePassError):
    pass


class InvalidRequestError(SecurePassError):
    pass


class RequestTimeoutError(SecurePassError):
    pass


class NetworkError(SecurePassError):
    pass


class ParseError(SecurePassError):
    pass


class RemoteError(SecurePassError):
    """Non-2xx response from the API."""

    def __init__(self, message: str, status_code: int, status_text: Optional[str] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.status_text = status_text


__all__ = [
    "SecurePassError",
    "InvalidCredentialError",
    "InvalidRequestError",
    "RequestTimeoutError",
    "NetworkError",
    "ParseError",
    "RemoteError",
]
