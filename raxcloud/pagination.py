"""Page envelopes and the decoders that turn raw list bodies into them."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, TypeVar
from urllib.parse import parse_qs, urlparse

T = TypeVar("T")

ItemDecoder = Callable[[Dict[str, Any]], T]


@dataclass(frozen=True)
class PageEnvelope(Generic[T]):
    items: Sequence[T]
    next_marker: Optional[str] = None


PageDecoder = Callable[[Any], PageEnvelope]


def values_page(item_decoder: ItemDecoder) -> PageDecoder:
    """Decoder for monitoring lists: {"values": [...], "metadata": {"next_marker": ...}}."""

    def decode(payload: Any) -> PageEnvelope:
        items = [item_decoder(raw) for raw in payload["values"]]
        metadata = payload.get("metadata") or {}
        return PageEnvelope(items=items, next_marker=metadata.get("next_marker"))

    return decode


def collection_page(key: str, item_decoder: ItemDecoder) -> PageDecoder:
    """Decoder for compute lists: {"<key>": [...], "<key>_links": [{"rel": "next", ...}]}."""

    def decode(payload: Any) -> PageEnvelope:
        items = [item_decoder(raw) for raw in payload[key]]
        next_href = _extract_next_href(payload.get(f"{key}_links"))
        return PageEnvelope(items=items, next_marker=_marker_from_href(next_href))

    return decode


def _extract_next_href(links: Optional[List[Dict[str, Any]]]) -> Optional[str]:
    if not links:
        return None
    for link in links:
        if link.get("rel") == "next":
            return link.get("href")
    return None


def _marker_from_href(href: Optional[str]) -> Optional[str]:
    if not href:
        return None
    qs = parse_qs(urlparse(href).query)
    if "marker" in qs:
        return qs["marker"][0]
    return None


def has_marker_param(path: str) -> bool:
    return "marker" in parse_qs(urlparse(path).query, keep_blank_values=True)
