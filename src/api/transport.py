"""Async HTTP transport for the marketplace backend.

Owns one ``httpx.AsyncClient`` per session. Adds the bearer token, retries
once after a token refresh on 401, enforces the configured timeout, and
maps every failure to an ``ApiError`` subclass.
"""

import logging
import os
from collections.abc import Callable
from types import TracebackType
from typing import Any, TypeVar

import httpx

from src.core.config import ApiConfig
from src.core.errors import OfflineError, ServerError, error_from_response

logger = logging.getLogger(__name__)

_REFRESH_PATH = "/auth/token/refresh/"

T = TypeVar("T")


class TokenStore:
    """Bearer token pair for one client session. Passed in, never global."""

    def __init__(self, access_token: str | None = None, refresh_token: str | None = None) -> None:
        self.access_token = access_token
        self.refresh_token = refresh_token

    @classmethod
    def from_env(cls, config: ApiConfig) -> "TokenStore":
        return cls(
            access_token=os.environ.get(config.access_token_env) or None,
            refresh_token=os.environ.get(config.refresh_token_env) or None,
        )

    def set_tokens(self, access_token: str, refresh_token: str | None = None) -> None:
        self.access_token = access_token
        if refresh_token is not None:
            self.refresh_token = refresh_token

    def clear(self) -> None:
        self.access_token = None
        self.refresh_token = None


class ApiClient:
    """Async context manager wrapping the backend REST API.

    Usage::

        async with ApiClient(settings.api, TokenStore.from_env(settings.api)) as api:
            data = await api.get("/jobs/", params={"query": "barista"})
    """

    def __init__(
        self,
        config: ApiConfig,
        tokens: TokenStore | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._tokens = tokens or TokenStore()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def tokens(self) -> TokenStore:
        return self._tokens

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            msg = "ApiClient not entered: use 'async with'"
            raise RuntimeError(msg)
        return self._client

    async def __aenter__(self) -> "ApiClient":
        self._client = httpx.AsyncClient(
            base_url=self._config.base_url,
            timeout=httpx.Timeout(self._config.timeout_s),
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            transport=self._transport,
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send a request and return the decoded body.

        Raises:
            OfflineError: Backend unreachable or the request timed out.
            AuthExpiredError: 401 that a token refresh could not fix.
            FieldValidationError: Any other 4xx.
            ServerError: 5xx.
        """
        response = await self._send(method, path, params, json)
        if response.status_code == 401 and await self._refresh():
            response = await self._send(method, path, params, json)
        body = _decode(response)
        if response.is_error:
            logger.debug("API error %d on %s %s: %s", response.status_code, method, path, body)
            raise error_from_response(response.status_code, body)
        return body

    async def _send(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None,
        json: Any,
    ) -> httpx.Response:
        headers: dict[str, str] = {}
        if self._tokens.access_token:
            headers["Authorization"] = f"Bearer {self._tokens.access_token}"
        logger.debug(
            "API request: %s %s [%s]",
            method, path, "Authenticated" if headers else "No Auth",
        )
        try:
            return await self.client.request(
                method, path, params=_clean_params(params), json=json, headers=headers,
            )
        except httpx.TimeoutException as e:
            msg = f"Request timed out after {self._config.timeout_s:g}s: {method} {path}"
            raise OfflineError(msg) from e
        except httpx.TransportError as e:
            msg = "Unable to connect to server. Please check your internet connection and try again."
            raise OfflineError(msg) from e

    async def _refresh(self) -> bool:
        """Exchange the refresh token for a new access token. True on success."""
        refresh_token = self._tokens.refresh_token
        if not refresh_token:
            return False
        try:
            response = await self.client.post(_REFRESH_PATH, json={"refresh": refresh_token})
        except httpx.TransportError:
            logger.warning("Token refresh failed: backend unreachable")
            return False
        body = _decode(response)
        access = body.get("access") if isinstance(body, dict) else None
        if response.is_error or not access:
            logger.info("Token refresh rejected (%d), clearing tokens", response.status_code)
            self._tokens.clear()
            return False
        self._tokens.set_tokens(access, body.get("refresh"))
        logger.debug("Access token refreshed")
        return True


def _clean_params(params: dict[str, Any] | None) -> dict[str, Any] | None:
    """Drop unset query parameters and lower-case booleans."""
    if params is None:
        return None
    cleaned: dict[str, Any] = {}
    for key, value in params.items():
        if value is None:
            continue
        cleaned[key] = str(value).lower() if isinstance(value, bool) else value
    return cleaned


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def unwrap_results(data: Any) -> list[Any]:
    """Return the item list of a paginated (``results``) or bare list body."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get("results"), list):
        return data["results"]  # type: ignore[no-any-return]
    return []


def parse_or_raise(parser: Callable[[Any], T], data: Any, what: str) -> T:
    """Run a response parser, turning malformed bodies into ``ServerError``."""
    try:
        return parser(data)
    except (ValueError, TypeError, AttributeError, KeyError) as e:
        msg = f"Malformed {what} response: {e}"
        raise ServerError(msg) from e
