"""Thin async client for the Argo CD REST API."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx

from argoflow.constants.timeouts import API_CONNECT_TIMEOUT
from argoflow.constants.values import EVENT_STREAM_CONTENT_TYPE
from argoflow.models.state.app_settings import AppSettings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Transport-level failure talking to the API server."""

    def __init__(self, message: str, *, status_code: int | None = None, url: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


def summarize_http_error(error: BaseException) -> str:
    """Build a concise, user-facing message for a transport failure."""
    if isinstance(error, ApiError):
        return str(error)
    if isinstance(error, httpx.TimeoutException):
        return "Request timed out"
    if isinstance(error, httpx.ConnectError):
        detail = str(error).strip()
        return f"Unable to connect to the server: {detail}" if detail else (
            "Unable to connect to the server"
        )
    message = str(error).strip() or type(error).__name__
    if len(message) > 160:
        return f"{message[:157].rstrip()}..."
    return message


def _status_error(response: httpx.Response) -> ApiError:
    reason = response.reason_phrase or "error"
    return ApiError(
        f"HTTP {response.status_code} {reason}",
        status_code=response.status_code,
        url=str(response.request.url),
    )


class ArgoApiClient:
    """Owns one ``httpx.AsyncClient`` configured from settings.

    Args:
        settings: Connection settings (server URL, token, TLS, timeouts).
        transport: Optional transport override, used by tests.
    """

    def __init__(
        self,
        settings: AppSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if settings.auth_token:
            headers["Authorization"] = f"Bearer {settings.auth_token}"
        self._client = httpx.AsyncClient(
            base_url=settings.server_url,
            headers=headers,
            timeout=httpx.Timeout(settings.request_timeout, connect=API_CONNECT_TIMEOUT),
            verify=settings.verify_tls,
            transport=transport,
        )

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def get_json(self, path: str, params: dict[str, str] | None = None) -> Any:
        """GET ``path`` and decode the JSON body.

        Raises:
            ApiError: On connection failure, non-2xx status or an undecodable body.
        """
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as exc:
            raise ApiError(summarize_http_error(exc), url=path) from exc
        if response.is_error:
            raise _status_error(response)
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError("Response body is not valid JSON", url=path) from exc

    @asynccontextmanager
    async def open_stream(self, path: str) -> AsyncIterator[httpx.Response]:
        """Open a long-lived event stream; read timeout is disabled.

        Raises:
            ApiError: On connection failure or non-2xx status.
        """
        timeout = httpx.Timeout(None, connect=API_CONNECT_TIMEOUT)
        try:
            async with self._client.stream(
                "GET",
                path,
                headers={"Accept": EVENT_STREAM_CONTENT_TYPE},
                timeout=timeout,
            ) as response:
                if response.is_error:
                    raise _status_error(response)
                yield response
        except httpx.HTTPError as exc:
            raise ApiError(summarize_http_error(exc), url=path) from exc

    async def aclose(self) -> None:
        await self._client.aclose()
