"""Async httpx client wrapper for the catalog HTTP API."""

from __future__ import annotations

from urllib.parse import quote

import httpx


class CatalogClient:
    def __init__(self, base_url: str | None = None) -> None:
        if base_url is None:
            from gastips.server.config import get_api_url

            base_url = get_api_url()
        self._base_url = base_url
        self._client = httpx.AsyncClient(base_url=base_url, timeout=10.0)

    async def close(self) -> None:
        await self._client.aclose()

    async def health(self) -> dict:
        resp = await self._client.get("/health")
        resp.raise_for_status()
        return resp.json()

    async def list_tips(self, query: str | None = None) -> dict:
        params: dict = {}
        if query:
            params["q"] = query
        resp = await self._client.get("/api/tips", params=params)
        resp.raise_for_status()
        return resp.json()

    async def get_tip(self, tip_id: str) -> dict | None:
        """Return the tip, or None when the API reports it unknown."""
        resp = await self._client.get(f"/api/tips/{quote(tip_id, safe='')}")
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return resp.json()
