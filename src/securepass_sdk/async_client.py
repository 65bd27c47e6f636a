"""Async variant of the SecurePass client."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, Optional

import httpx

from .client import (
    RequestSpec,
    _BaseClient,
    bulk_password_request,
    password_request,
    team_action_request,
    team_info_request,
    usage_request,
)
from .config import ClientConfig
from .exceptions import SecurePassError
from .models import ConnectionStatus

logger = logging.getLogger("securepass_sdk.async_client")


class AsyncSecurePassClient(_BaseClient):
    def __init__(self, api_key: Any = None, *, transport: Optional[httpx.AsyncBaseTransport] = None, **options: Any) -> None:
        super().__init__(api_key, **options)
        self._client = httpx.AsyncClient(
            base_url=self._config.base_url,
            timeout=self._config.timeout_seconds,
            transport=transport,
        )

    @classmethod
    def from_env(cls, *, transport: Optional[httpx.AsyncBaseTransport] = None) -> "AsyncSecurePassClient":
        return cls(config=ClientConfig.from_env(), transport=transport)

    async def __aenter__(self) -> "AsyncSecurePassClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def send(
        self,
        path: str,
        method: str = "GET",
        body: Optional[Any] = None,
        *,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        request = self._build_request(self._client, path, method, body, params)
        logger.debug("SecurePass request method=%s url=%s", request.method, request.url.path)
        try:
            # httpx timeouts apply per phase; wait_for bounds the whole call
            response = await asyncio.wait_for(self._client.send(request), timeout=self._config.timeout_seconds)
        except asyncio.TimeoutError as exc:
            raise self._deadline_exceeded(request) from exc
        except httpx.HTTPError as exc:
            raise self._translate_transport_error(exc, request) from exc
        return self._decode_response(response)

    async def _call(self, prefix: str, build: Callable[..., RequestSpec], *args: Any, **kwargs: Any) -> Any:
        try:
            spec = build(*args, **kwargs)
            return await self.send(spec.path, spec.method, spec.body, params=spec.params)
        except SecurePassError as exc:
            raise exc.with_prefix(prefix) from exc

    async def generate_password(self, options: Any = None, **kwargs: Any) -> Any:
        return await self._call("Password generation failed", password_request, options, **kwargs)

    async def generate_bulk_passwords(self, count: int, options: Any = None, **kwargs: Any) -> Any:
        return await self._call("Bulk password generation failed", bulk_password_request, count, options, **kwargs)

    async def get_team_info(self, team_id: str) -> Any:
        return await self._call("Failed to get team info", team_info_request, team_id)

    async def add_team_member(self, team_id: str, member_email: str, role: str = "member") -> Any:
        return await self._call(
            "Failed to add team member", team_action_request, "add_member", team_id, member_email, role
        )

    async def remove_team_member(self, team_id: str, member_email: str) -> Any:
        return await self._call(
            "Failed to remove team member", team_action_request, "remove_member", team_id, member_email
        )

    async def update_team_member_role(self, team_id: str, member_email: str, role: str) -> Any:
        return await self._call(
            "Failed to update team member role", team_action_request, "update_role", team_id, member_email, role
        )

    async def get_usage(self) -> Any:
        return await self._call("Failed to get usage data", usage_request)

    async def test_connection(self) -> ConnectionStatus:
        try:
            data = await self.send("/test")
        except SecurePassError as exc:
            return self._connection_status(error=exc)
        return self._connection_status(data=data)

    async def aclose(self) -> None:
        await self._client.aclose()


__all__ = ["AsyncSecurePassClient"]
