"""HTTP transport built on aiohttp; one session per transport instance."""
from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import aiohttp

from .exceptions import DecodeError, TransportError

logger = logging.getLogger(__name__)


@dataclass
class RestResponse:
    status: int
    url: str
    body: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Case-insensitive header lookup."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return default

    def json(self) -> Any:
        if not self.body:
            return None
        try:
            return json.loads(self.body)
        except ValueError as exc:
            raise DecodeError(self.url, f"invalid JSON: {exc}") from exc


class AiohttpTransport:
    """Performs requests on an owned aiohttp session.

    Use as an async context manager. A session passed in by the caller is
    used as-is and left open on exit.
    """

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        connection_pool_size: int = 20,
        connection_timeout: float = 10,
        read_timeout: float = 30,
        keep_alive: bool = True,
    ):
        self.session = session
        self._owns_session = session is None
        self.connection_pool_size = connection_pool_size
        self.connection_timeout = connection_timeout
        self.read_timeout = read_timeout
        self.keep_alive = keep_alive

    @classmethod
    def from_config(cls, http_config: Dict[str, Any]) -> "AiohttpTransport":
        return cls(
            connection_pool_size=http_config.get("connection_pool_size", 20),
            connection_timeout=http_config.get("connection_timeout", 10),
            read_timeout=http_config.get("read_timeout", 30),
            keep_alive=http_config.get("keep_alive", True),
        )

    async def __aenter__(self):
        if self.session is None:
            connector = aiohttp.TCPConnector(
                limit=self.connection_pool_size,
                ttl_dns_cache=300,
                use_dns_cache=True,
                keepalive_timeout=60 if self.keep_alive else 0,
                enable_cleanup_closed=True,
            )
            timeout = aiohttp.ClientTimeout(total=None, connect=self.connection_timeout, sock_read=self.read_timeout)
            self.session = aiohttp.ClientSession(connector=connector, timeout=timeout)
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        if self.session and self._owns_session:
            await self.session.close()
            self.session = None

    async def request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        body: Any = None,
        params: Optional[Dict[str, str]] = None,
    ) -> RestResponse:
        if self.session is None:
            raise RuntimeError("AiohttpTransport not initialized; use async context manager")

        data = json.dumps(body) if body is not None else None
        try:
            async with self.session.request(method, url, headers=headers, data=data, params=params) as response:
                try:
                    text = await response.text()
                except UnicodeDecodeError as exc:
                    raise DecodeError(str(response.url), f"body is not valid {exc.encoding}") from exc
                return RestResponse(
                    status=response.status,
                    url=str(response.url),
                    body=text,
                    headers=response.headers,
                )
        except asyncio.TimeoutError as exc:
            raise TransportError(method, url, "timeout") from exc
        except aiohttp.ClientError as exc:
            raise TransportError(method, url, str(exc) or type(exc).__name__) from exc
