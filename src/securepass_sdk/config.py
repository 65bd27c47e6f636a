"""Configuration objects for the SecurePass Python SDK."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from .exceptions import InvalidCredentialError, InvalidRequestError

__version__ = "1.0.0"

DEFAULT_BASE_URL = "https://securepasspro.com/api"
DEFAULT_TIMEOUT_MS = 10000
DEFAULT_USER_AGENT = f"securepass-sdk-python/{__version__}"
MIN_API_KEY_LENGTH = 10

OriginResolver = Callable[[], Optional[str]]


def env_origin_resolver() -> Optional[str]:
    """Return the current origin from ``SECUREPASS_ORIGIN``, if set."""
    origin = os.environ.get("SECUREPASS_ORIGIN", "").strip()
    return origin or None


def resolve_base_url(override: Optional[str] = None, origin_resolver: Optional[OriginResolver] = None) -> str:
    if override:
        return override
    resolver = origin_resolver or env_origin_resolver
    origin = resolver()
    if origin:
        return f"{origin.rstrip('/')}/api"
    return DEFAULT_BASE_URL


@dataclass(frozen=True)
class ClientConfig:
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    user_agent: str = DEFAULT_USER_AGENT
    headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.api_key or not isinstance(self.api_key, str) or len(self.api_key) < MIN_API_KEY_LENGTH:
            raise InvalidCredentialError("Invalid API key provided")
        if isinstance(self.timeout_ms, bool) or not isinstance(self.timeout_ms, int) or self.timeout_ms <= 0:
            raise InvalidRequestError(f"Invalid timeout: {self.timeout_ms!r}")

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0

    @classmethod
    def create(
        cls,
        api_key: str,
        *,
        base_url: Optional[str] = None,
        timeout_ms: Optional[int] = None,
        user_agent: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        origin_resolver: Optional[OriginResolver] = None,
    ) -> "ClientConfig":
        return cls(
            api_key=api_key,
            base_url=resolve_base_url(base_url, origin_resolver),
            timeout_ms=DEFAULT_TIMEOUT_MS if timeout_ms is None else timeout_ms,
            user_agent=user_agent or DEFAULT_USER_AGENT,
            headers=dict(headers or {}),
        )

    @classmethod
    def from_env(cls) -> "ClientConfig":
        raw_timeout = os.environ.get("SECUREPASS_TIMEOUT_MS", "").strip()
        try:
            timeout_ms = int(raw_timeout) if raw_timeout else None
        except ValueError as exc:
            raise InvalidRequestError(f"Invalid SECUREPASS_TIMEOUT_MS: {raw_timeout!r}") from exc
        return cls.create(
            os.environ.get("SECUREPASS_API_KEY", ""),
            base_url=os.environ.get("SECUREPASS_BASE_URL") or None,
            timeout_ms=timeout_ms,
        )


__all__ = [
    "ClientConfig",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT_MS",
    "DEFAULT_USER_AGENT",
    "OriginResolver",
    "env_origin_resolver",
    "resolve_base_url",
]
