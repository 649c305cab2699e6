"""Async client for OpenStreetMap Nominatim address lookup.

Results are bounded to the configured view box (Seattle by default). Any
network or HTTP failure yields "no result" and is logged; callers never see
an exception.
"""

import time
from typing import Any

import httpx

from clearview.config import get_settings
from clearview.core.enums import MIN_ADDRESS_QUERY_LENGTH
from clearview.core.logging import log_external_call
from clearview.models.location import GeocodeResult


class GeocodingClient:
    """Async client for the Nominatim search API."""

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        settings = get_settings()
        self.base_url = settings.nominatim_base_url.rstrip("/")
        self.viewbox = settings.geocode_viewbox
        self.client = client or httpx.AsyncClient(
            headers={
                "Accept": "application/json",
                "User-Agent": settings.geocode_user_agent,
            },
            timeout=settings.geocode_timeout,
        )

    async def _search(self, query: str, limit: int) -> list[dict[str, Any]] | None:
        start = time.time()
        try:
            resp = await self.client.get(
                f"{self.base_url}/search",
                params={
                    "q": query,
                    "format": "json",
                    "limit": limit,
                    "viewbox": self.viewbox,
                    "bounded": 1,
                },
            )
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError):
            log_external_call("nominatim", "search", False, (time.time() - start) * 1000)
            return None
        log_external_call("nominatim", "search", True, (time.time() - start) * 1000)
        return data if isinstance(data, list) else []

    @staticmethod
    def _to_result(item: Any) -> GeocodeResult | None:
        if not isinstance(item, dict):
            return None
        try:
            return GeocodeResult(
                lat=float(item["lat"]),
                lon=float(item["lon"]),
                display_name=item["display_name"],
            )
        except (KeyError, TypeError, ValueError):
            return None

    async def search(self, address: str | None) -> GeocodeResult | None:
        """Best match for an address, or None."""
        query = (address or "").strip()
        if not query:
            return None
        data = await self._search(query, limit=1)
        if not data:
            return None
        return self._to_result(data[0])

    async def suggest(self, address: str | None, limit: int = 5) -> list[GeocodeResult]:
        """Address autocomplete. Empty below three characters."""
        query = (address or "").strip()
        if len(query) < MIN_ADDRESS_QUERY_LENGTH:
            return []
        data = await self._search(query, limit=limit)
        if not data:
            return []
        results = [self._to_result(item) for item in data]
        return [r for r in results if r is not None]

    async def close(self) -> None:
        await self.client.aclose()


_geocoder: GeocodingClient | None = None


def get_geocoder() -> GeocodingClient:
    """Shared geocoding client, created on first use."""
    global _geocoder
    if _geocoder is None:
        _geocoder = GeocodingClient()
    return _geocoder


async def close_geocoder() -> None:
    global _geocoder
    if _geocoder is not None:
        await _geocoder.close()
        _geocoder = None
