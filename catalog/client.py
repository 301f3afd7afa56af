"""
Product catalog client — read-through proxy over the upstream catalog API
(DummyJSON-compatible).

One ``httpx.AsyncClient`` is shared for the life of the app.  Every call is
a single attempt bounded by the configured timeout; any transport, status
or decode failure becomes ``UpstreamError``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError as SchemaError

from catalog.query import ListingQuery, apply_price_filter
from utils.errors import UpstreamError
from utils.schemas import ProductPage

logger = logging.getLogger(__name__)

CATEGORY_LIST_PATH = "/products/category-list"


class CatalogClient:
    def __init__(self, http: httpx.AsyncClient) -> None:
        self._http = http

    @classmethod
    def create(
        cls,
        base_url: str,
        timeout: float,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "CatalogClient":
        return cls(httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport))

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _get_json(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        try:
            resp = await self._http.get(path, params=params)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPError as exc:
            logger.warning("Catalog request failed: %s %s", path, exc)
            raise UpstreamError("Failed to fetch products") from exc
        except ValueError as exc:
            logger.warning("Catalog returned invalid JSON: %s", path)
            raise UpstreamError("Failed to parse products") from exc

    async def list_products(self, query: ListingQuery) -> ProductPage:
        upstream = query.upstream_request()
        data = await self._get_json(upstream.path, upstream.params)
        try:
            page = ProductPage.model_validate(data)
        except SchemaError as exc:
            logger.warning("Catalog payload did not match schema: %s", exc)
            raise UpstreamError("Failed to parse products") from exc

        page = apply_price_filter(page, query)
        logger.debug(
            "catalog → path=%s  products=%d  total=%d",
            upstream.path, len(page.products), page.total,
        )
        return page

    async def list_categories(self) -> List[str]:
        data = await self._get_json(CATEGORY_LIST_PATH)
        if not isinstance(data, list) or not all(isinstance(c, str) for c in data):
            logger.warning("Catalog returned unexpected category payload")
            raise UpstreamError("Failed to parse categories")
        return data
