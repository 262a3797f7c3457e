"""Async client for the Caddy admin API.

Every operation is a fixed verb and path sent through one dispatcher that
never raises: transport errors, timeouts, non-2xx statuses and decode
failures all come back as ``Err`` with a message.

Usage:
    async with CaddyAdminClient("http://localhost:2019") as caddy:
        result = await caddy.load_config(caddyfile_text)
        if result.is_err():
            print(result.unwrap_err())
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Self

import httpx

from caddy_admin.codec import CADDYFILE, JSON, decode_body, empty_value, encode_payload
from caddy_admin.config import DEFAULT_TIMEOUT, DEFAULT_URL, ClientSettings
from caddy_admin.exceptions import AdminApiError
from caddy_admin.result import Err, Ok, Result

if TYPE_CHECKING:
    from types import TracebackType

logger = logging.getLogger(__name__)

# Caddy exits as soon as it handles /stop, often before the response is written.
_SHUTDOWN_ERRORS = (httpx.TimeoutException, TimeoutError, httpx.RemoteProtocolError, httpx.ReadError)


class CaddyAdminClient:
    def __init__(
        self,
        base_url: str = DEFAULT_URL,
        username: str | None = None,
        password: str | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = ClientSettings(base_url=base_url, username=username, password=password, timeout=timeout)
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))
        self._configure(self._client)

    @classmethod
    def from_settings(cls, settings: ClientSettings, client: httpx.AsyncClient | None = None) -> Self:
        return cls(
            settings.base_url,
            settings.username,
            settings.password,
            timeout=settings.timeout,
            client=client,
        )

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    def _configure(self, client: httpx.AsyncClient) -> None:
        client.base_url = httpx.URL(self._settings.base_url)
        client.headers["Accept"] = JSON
        if self._settings.has_credentials:
            client.auth = httpx.BasicAuth(self._settings.username or "", self._settings.password or "")

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    # -- endpoints ---------------------------------------------------------

    async def load_config(
        self,
        config: object,
        content_type: str = CADDYFILE,
        *,
        response_type: Any = Any,
        timeout: float | None = None,
    ) -> Result[Any]:
        """POST /load: replace the running configuration, Caddyfile by default."""
        return await self._send("POST", "/load", config, content_type, response_type=response_type, timeout=timeout)

    async def stop(self, *, response_type: Any = Any, timeout: float | None = None) -> Result[Any]:
        """POST /stop: fire-and-forget shutdown.

        The status code is not checked, and a connection dropped or timed out
        by the exiting server still counts as success.
        """
        deadline = self._deadline(timeout)
        try:
            request = self._client.build_request("POST", "/stop", timeout=deadline)
            logger.debug("POST %s", request.url)
            async with asyncio.timeout(deadline):
                await self._client.send(request)
        except _SHUTDOWN_ERRORS as e:
            logger.debug("Connection closed during stop: %s", _describe(e))
        except Exception as e:
            logger.warning("POST /stop failed: %s", _describe(e))
            return Err(_describe(e))
        return Ok(empty_value(response_type))

    async def get_config(
        self, path: str = "", *, response_type: Any = Any, timeout: float | None = None
    ) -> Result[Any]:
        """GET /config/[path]: an empty path returns the whole configuration."""
        return await self._send("GET", _config_path(path), response_type=response_type, timeout=timeout)

    async def set_config(
        self, path: str, config: object, *, response_type: Any = Any, timeout: float | None = None
    ) -> Result[Any]:
        """POST /config/[path]: set or replace the value, appending to arrays."""
        return await self._send("POST", _config_path(path), config, JSON, response_type=response_type, timeout=timeout)

    async def create_config(
        self, path: str, config: object, *, response_type: Any = Any, timeout: float | None = None
    ) -> Result[Any]:
        """PUT /config/[path]: create a new value, inserting into arrays."""
        return await self._send("PUT", _config_path(path), config, JSON, response_type=response_type, timeout=timeout)

    async def update_config(
        self, path: str, config: object, *, response_type: Any = Any, timeout: float | None = None
    ) -> Result[Any]:
        """PATCH /config/[path]: replace an existing value."""
        return await self._send(
            "PATCH", _config_path(path), config, JSON, response_type=response_type, timeout=timeout
        )

    async def delete_config(
        self, path: str, *, response_type: Any = Any, timeout: float | None = None
    ) -> Result[Any]:
        """DELETE /config/[path]."""
        return await self._send("DELETE", _config_path(path), response_type=response_type, timeout=timeout)

    async def adapt_config(
        self,
        config: object,
        content_type: str = CADDYFILE,
        *,
        response_type: Any = Any,
        timeout: float | None = None,
    ) -> Result[Any]:
        """POST /adapt: convert a config (Caddyfile by default) to JSON without loading it."""
        return await self._send("POST", "/adapt", config, content_type, response_type=response_type, timeout=timeout)

    async def get_ca_info(
        self, ca_id: str = "local", *, response_type: Any = Any, timeout: float | None = None
    ) -> Result[Any]:
        """GET /pki/ca/<id>."""
        return await self._send("GET", f"/pki/ca/{ca_id}", response_type=response_type, timeout=timeout)

    async def get_ca_certificates(
        self, ca_id: str = "local", *, response_type: Any = Any, timeout: float | None = None
    ) -> Result[Any]:
        """GET /pki/ca/<id>/certificates: the CA's certificate chain as PEM."""
        return await self._send("GET", f"/pki/ca/{ca_id}/certificates", response_type=response_type, timeout=timeout)

    async def get_reverse_proxy_upstreams(
        self, *, response_type: Any = Any, timeout: float | None = None
    ) -> Result[Any]:
        """GET /reverse_proxy/upstreams."""
        return await self._send("GET", "/reverse_proxy/upstreams", response_type=response_type, timeout=timeout)

    # -- dispatcher --------------------------------------------------------

    async def _send(
        self,
        method: str,
        path: str,
        payload: object | None = None,
        content_type: str = JSON,
        *,
        response_type: Any = Any,
        timeout: float | None = None,
    ) -> Result[Any]:
        deadline = self._deadline(timeout)
        try:
            request = self._build_request(method, path, payload, content_type, deadline)
            logger.debug("%s %s", method, request.url)
            async with asyncio.timeout(deadline):
                response = await self._client.send(request)
            _raise_for_status(response)
            return Ok(decode_body(response.text, response_type))
        except TimeoutError:
            message = f"{method} {path} timed out after {deadline}s"
            logger.warning(message)
            return Err(message)
        except Exception as e:
            logger.warning("%s %s failed: %s", method, path, _describe(e))
            return Err(_describe(e))

    def _build_request(
        self, method: str, path: str, payload: object | None, content_type: str, deadline: float
    ) -> httpx.Request:
        if payload is None:
            return self._client.build_request(method, path, timeout=deadline)
        return self._client.build_request(
            method,
            path,
            timeout=deadline,
            content=encode_payload(payload, content_type),
            headers={"Content-Type": content_type},
        )

    def _deadline(self, timeout: float | None) -> float:
        return self._settings.timeout if timeout is None else timeout


def _config_path(path: str) -> str:
    return f"/config/{path.lstrip('/')}"


def _raise_for_status(response: httpx.Response) -> None:
    if not response.is_success:
        raise AdminApiError(response.status_code, response.reason_phrase, response.text.strip())


def _describe(error: BaseException) -> str:
    return str(error).strip() or type(error).__name__
