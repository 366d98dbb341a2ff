"""Authenticated REST client with marker-based pagination."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Set, TypeVar

from .exceptions import (
    DecodeError,
    InvalidArgument,
    NotFound,
    PaginationLoopDetected,
    UnexpectedStatus,
)
from .pagination import PageDecoder, PageEnvelope, has_marker_param
from .transport import RestResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRYABLE_STATUSES = (429, 503)
# Methods replayed after a 429/503
IDEMPOTENT_METHODS = ("GET", "HEAD", "DELETE")
DEFAULT_MAX_PAGES = 1000


class ApiClient:
    def __init__(
        self,
        base_url: str,
        transport,
        authenticator=None,
        max_retries: int = 0,
        retry_delay: float = 10,
        backoff_multiplier: float = 1.5,
        max_retry_delay: float = 300,
        max_pages: Optional[int] = DEFAULT_MAX_PAGES,
    ):
        self.base_url = base_url.rstrip("/")
        self.transport = transport
        self.authenticator = authenticator
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.backoff_multiplier = backoff_multiplier
        self.max_retry_delay = max_retry_delay
        self.max_pages = max_pages
        self.debug = False

    @classmethod
    def from_config(cls, base_url: str, transport, authenticator, config_loader) -> "ApiClient":
        http_config = config_loader.get("http", {}) if config_loader else {}
        return cls(
            base_url,
            transport,
            authenticator=authenticator,
            max_retries=http_config.get("max_retries", 0),
            retry_delay=http_config.get("retry_delay", 10),
            backoff_multiplier=http_config.get("backoff_multiplier", 1.5),
            max_retry_delay=http_config.get("max_retry_delay", 300),
            max_pages=config_loader.get("pagination.max_pages", DEFAULT_MAX_PAGES) if config_loader else DEFAULT_MAX_PAGES,
        )

    def set_debug(self, debug: bool):
        self.debug = debug

    def url_for(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self.base_url}{path}"

    async def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if self.authenticator is not None:
            headers.update(await self.authenticator.get_headers())
        return headers

    async def request(
        self,
        method: str,
        path: str,
        expected_status_codes: Iterable[int] = (200,),
        body: Any = None,
        params: Optional[Dict[str, str]] = None,
    ) -> RestResponse:
        """Perform one call; raise unless the status is one the caller accepts."""
        expected = tuple(expected_status_codes)
        url = self.url_for(path)
        headers = await self._headers()
        log = logger.info if self.debug else logger.debug

        backoff = self.retry_delay
        attempt = 0
        retries = self.max_retries if method.upper() in IDEMPOTENT_METHODS else 0
        while True:
            response = await self.transport.request(method, url, headers=headers, body=body, params=params)
            log("%s %s %s -> Status: %s", method, url, params or "", response.status)
            if response.status in expected:
                return response
            if response.status in RETRYABLE_STATUSES and attempt < retries:
                attempt += 1
                delay = self._retry_after(response, backoff)
                logger.warning(
                    "%s %s returned %s, retry %d/%d in %.1fs",
                    method, url, response.status, attempt, retries, delay,
                )
                await asyncio.sleep(delay)
                backoff = min(backoff * self.backoff_multiplier, self.max_retry_delay)
                continue
            if response.status == 404:
                raise NotFound(response.status, method, url, response.body)
            raise UnexpectedStatus(response.status, method, url, response.body)

    def _retry_after(self, response: RestResponse, default: float) -> float:
        retry_after = response.header("Retry-After")
        try:
            return min(float(retry_after), self.max_retry_delay)
        except (TypeError, ValueError):
            return default

    @staticmethod
    def decode(response: RestResponse, decoder: Callable[[Any], T]) -> T:
        payload = response.json()
        try:
            return decoder(payload)
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise DecodeError(response.url, f"{type(exc).__name__}: {exc}") from exc

    async def get_json(
        self,
        path: str,
        decoder: Callable[[Any], T],
        expected_status_codes: Iterable[int] = (200,),
    ) -> T:
        response = await self.request("GET", path, expected_status_codes)
        return self.decode(response, decoder)

    async def fetch_paginated(
        self,
        path: str,
        decoder: PageDecoder,
        max_pages: Optional[int] = None,
    ) -> List[Any]:
        """Follow next markers until the server stops handing them out.

        Either every item from every page is returned in page order, or the
        first error raised aborts the whole listing.
        """
        if has_marker_param(path):
            raise InvalidArgument("path", path, "list path must not carry a marker")
        limit = max_pages if max_pages is not None else self.max_pages

        all_items: List[Any] = []
        seen_markers: Set[str] = set()
        marker: Optional[str] = None
        pages = 0

        while True:
            params = {"marker": marker} if marker is not None else None
            response = await self.request("GET", path, (200,), params=params)
            page: PageEnvelope = self.decode(response, decoder)
            all_items.extend(page.items)
            pages += 1
            logger.debug("%s page %d: %d items, next marker %r", path, pages, len(page.items), page.next_marker)

            next_marker = page.next_marker
            if not next_marker:
                break
            if next_marker in seen_markers:
                raise PaginationLoopDetected(path, next_marker, pages)
            if limit and pages >= limit:
                raise PaginationLoopDetected(path, next_marker, pages)
            seen_markers.add(next_marker)
            marker = next_marker

        return all_items
