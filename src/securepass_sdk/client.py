"""Python client for the SecurePass password API."""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Dict, NamedTuple, Optional

import httpx

from .config import ClientConfig, OriginResolver
from .exceptions import (
    InvalidRequestError,
    NetworkError,
    ParseError,
    RemoteError,
    RequestTimeoutError,
    SecurePassError,
)
from .models import (
    BulkRequest,
    ConnectionStatus,
    PasswordOptions,
    TeamMemberAction,
    TeamQuery,
    build_model,
)

logger = logging.getLogger("securepass_sdk.client")

ALLOWED_METHODS = ("GET", "POST")
CONNECTION_OK_MESSAGE = "API connection successful"


class RequestSpec(NamedTuple):
    path: str
    method: str = "GET"
    body: Optional[Any] = None
    params: Optional[Dict[str, Any]] = None


def _merge_options(options: Any, overrides: Dict[str, Any]) -> PasswordOptions:
    if options is None:
        data: Dict[str, Any] = {}
    elif isinstance(options, PasswordOptions):
        data = options.model_dump(exclude_none=True)
    elif isinstance(options, dict):
        data = dict(options)
    else:
        raise InvalidRequestError(f"Invalid password options: {options!r}")
    data.update(overrides)
    return build_model(PasswordOptions, data)


def password_request(options: Any = None, **overrides: Any) -> RequestSpec:
    opts = _merge_options(options, overrides)
    return RequestSpec("/password", "POST", body=opts.to_payload())


def bulk_password_request(count: int, options: Any = None, **overrides: Any) -> RequestSpec:
    opts = _merge_options(options, overrides)
    bulk = build_model(BulkRequest, {"count": count})
    return RequestSpec("/generate-bulk", "POST", params=bulk.to_params(opts))


def team_info_request(team_id: str) -> RequestSpec:
    query = build_model(TeamQuery, {"team_id": team_id})
    return RequestSpec("/team", "GET", params=query.to_params())


def team_action_request(action: str, team_id: str, member_email: str, role: Optional[str] = None) -> RequestSpec:
    payload = build_model(
        TeamMemberAction,
        {"action": action, "team_id": team_id, "member_email": member_email, "role": role},
    )
    return RequestSpec("/team", "POST", body=payload.to_payload())


def usage_request() -> RequestSpec:
    return RequestSpec("/user", "GET")


class _BaseClient:
    """Request building and response decoding shared by the sync and async clients."""

    def __init__(
        self,
        api_key: Any = None,
        *,
        config: Optional[ClientConfig] = None,
        base_url: Optional[str] = None,
        timeout_ms: Optional[int] = None,
        user_agent: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        origin_resolver: Optional[OriginResolver] = None,
    ) -> None:
        if config is not None:
            conflicting = [
                name
                for name, value in (
                    ("api_key", api_key),
                    ("base_url", base_url),
                    ("timeout_ms", timeout_ms),
                    ("user_agent", user_agent),
                    ("headers", headers),
                    ("origin_resolver", origin_resolver),
                )
                if value is not None
            ]
            if conflicting:
                raise InvalidRequestError(f"Cannot combine config with: {', '.join(conflicting)}")
        else:
            config = ClientConfig.create(
                api_key,
                base_url=base_url,
                timeout_ms=timeout_ms,
                user_agent=user_agent,
                headers=headers,
                origin_resolver=origin_resolver,
            )
        self._config = config

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def api_key(self) -> str:
        return self._config.api_key

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def timeout_ms(self) -> int:
        return self._config.timeout_ms

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._config.api_key}",
            "User-Agent": self._config.user_agent,
        }
        headers.update(self._config.headers)
        return headers

    def _build_request(
        self,
        client: httpx.Client | httpx.AsyncClient,
        path: Any,
        method: Any,
        body: Optional[Any],
        params: Optional[Dict[str, Any]],
    ) -> httpx.Request:
        if not path or not isinstance(path, str):
            raise InvalidRequestError("Invalid endpoint")
        if not isinstance(method, str) or method.upper() not in ALLOWED_METHODS:
            raise InvalidRequestError(f"Unsupported method: {method!r}")
        content = None
        if body is not None:
            try:
                content = body if isinstance(body, (str, bytes)) else json.dumps(body, separators=(",", ":"))
            except (TypeError, ValueError) as exc:
                raise InvalidRequestError(f"Request body is not JSON serializable: {exc}") from exc
        try:
            return client.build_request(
                method.upper(),
                path,
                content=content,
                params=params,
                headers=self._headers(),
            )
        except httpx.InvalidURL as exc:
            raise InvalidRequestError(f"Invalid endpoint: {exc}") from exc

    @staticmethod
    def _deadline_exceeded(request: httpx.Request) -> RequestTimeoutError:
        logger.warning(
            "SecurePass request exceeded deadline method=%s url=%s", request.method, request.url.path
        )
        return RequestTimeoutError("Request timeout")

    @staticmethod
    def _buffered(response: httpx.Response, content: bytes) -> httpx.Response:
        """Rebuild a streamed response around its already-decoded body."""
        headers = [
            (key, value)
            for key, value in response.headers.multi_items()
            if key.lower() not in ("content-encoding", "content-length", "transfer-encoding")
        ]
        return httpx.Response(
            response.status_code,
            headers=headers,
            content=content,
            request=response.request,
            extensions=dict(response.extensions),
        )

    @staticmethod
    def _translate_transport_error(exc: httpx.HTTPError, request: httpx.Request) -> SecurePassError:
        if isinstance(exc, httpx.TimeoutException):
            logger.warning("SecurePass request timed out method=%s url=%s", request.method, request.url.path)
            return RequestTimeoutError("Request timeout")
        logger.warning("SecurePass request failed method=%s url=%s error=%s", request.method, request.url.path, exc)
        return NetworkError(str(exc) or exc.__class__.__name__)

    @staticmethod
    def _decode_response(response: httpx.Response) -> Any:
        logger.debug(
            "SecurePass response method=%s url=%s status=%s",
            response.request.method,
            response.request.url.path,
            response.status_code,
        )
        if not response.is_success:
            try:
                error_data = response.json()
            except (ValueError, RecursionError):
                error_data = {}
            message = error_data.get("message") if isinstance(error_data, dict) else None
            if not message:
                message = f"HTTP {response.status_code}: {response.reason_phrase}"
            logger.warning(
                "SecurePass request rejected status=%s body=%s", response.status_code, response.text[:200]
            )
            raise RemoteError(str(message), status_code=response.status_code, status_text=response.reason_phrase)
        try:
            return response.json()
        except (ValueError, RecursionError) as exc:
            raise ParseError(f"Invalid JSON in response: {exc}") from exc

    @staticmethod
    def _connection_status(data: Any = None, error: Optional[SecurePassError] = None) -> ConnectionStatus:
        if error is not None:
            logger.info("SecurePass connection test failed: %s", error.message)
            return ConnectionStatus(success=False, message=error.message)
        return ConnectionStatus(success=True, message=CONNECTION_OK_MESSAGE, data=data)


class SecurePassClient(_BaseClient):
    """Blocking client. One HTTP round trip per operation, no retries."""

    def __init__(self, api_key: Any = None, *, transport: Optional[httpx.BaseTransport] = None, **options: Any) -> None:
        super().__init__(api_key, **options)
        self._client = httpx.Client(
            base_url=self._config.base_url,
            timeout=self._config.timeout_seconds,
            transport=transport,
        )

    @classmethod
    def from_env(cls, *, transport: Optional[httpx.BaseTransport] = None) -> "SecurePassClient":
        return cls(config=ClientConfig.from_env(), transport=transport)

    def __enter__(self) -> "SecurePassClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def send(
        self,
        path: str,
        method: str = "GET",
        body: Optional[Any] = None,
        *,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Perform one authenticated call and return the decoded JSON body."""
        request = self._build_request(self._client, path, method, body, params)
        logger.debug("SecurePass request method=%s url=%s", request.method, request.url.path)
        # httpx timeouts apply per phase; the deadline bounds the whole call
        deadline = time.monotonic() + self._config.timeout_seconds
        try:
            response = self._client.send(request, stream=True)
            try:
                if time.monotonic() > deadline:
                    raise self._deadline_exceeded(request)
                chunks = []
                for chunk in response.iter_bytes():
                    chunks.append(chunk)
                    if time.monotonic() > deadline:
                        raise self._deadline_exceeded(request)
            finally:
                response.close()
        except httpx.HTTPError as exc:
            raise self._translate_transport_error(exc, request) from exc
        return self._decode_response(self._buffered(response, b"".join(chunks)))

    def _call(self, prefix: str, build: Callable[..., RequestSpec], *args: Any, **kwargs: Any) -> Any:
        try:
            spec = build(*args, **kwargs)
            return self.send(spec.path, spec.method, spec.body, params=spec.params)
        except SecurePassError as exc:
            raise exc.with_prefix(prefix) from exc

    def generate_password(self, options: Any = None, **kwargs: Any) -> Any:
        return self._call("Password generation failed", password_request, options, **kwargs)

    def generate_bulk_passwords(self, count: int, options: Any = None, **kwargs: Any) -> Any:
        return self._call("Bulk password generation failed", bulk_password_request, count, options, **kwargs)

    def get_team_info(self, team_id: str) -> Any:
        return self._call("Failed to get team info", team_info_request, team_id)

    def add_team_member(self, team_id: str, member_email: str, role: str = "member") -> Any:
        return self._call("Failed to add team member", team_action_request, "add_member", team_id, member_email, role)

    def remove_team_member(self, team_id: str, member_email: str) -> Any:
        return self._call("Failed to remove team member", team_action_request, "remove_member", team_id, member_email)

    def update_team_member_role(self, team_id: str, member_email: str, role: str) -> Any:
        return self._call(
            "Failed to update team member role", team_action_request, "update_role", team_id, member_email, role
        )

    def get_usage(self) -> Any:
        return self._call("Failed to get usage data", usage_request)

    def test_connection(self) -> ConnectionStatus:
        """Check connectivity. Failures are reported in the result, never raised."""
        try:
            data = self.send("/test")
        except SecurePassError as exc:
            return self._connection_status(error=exc)
        return self._connection_status(data=data)

    def close(self) -> None:
        self._client.close()


__all__ = [
    "RequestSpec",
    "SecurePassClient",
    "bulk_password_request",
    "password_request",
    "team_action_request",
    "team_info_request",
    "usage_request",
]
