"""
Listing query — normalization of product-listing parameters and their
translation into an upstream catalog request.

The upstream API pages, sorts, searches and scopes by category, but it has
no price range.  ``apply_price_filter`` narrows the fetched page instead and
rewrites ``total`` to the filtered count, so the total only describes the
current page after filtering.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Optional
from urllib.parse import quote

from utils.schemas import ProductPage

DEFAULT_LIMIT = 12
MAX_LIMIT = 100
SORT_FIELDS = ("price", "title", "rating")
_INT_RE = re.compile(r"^[+-]?[0-9]+\Z")


@dataclass(frozen=True)
class UpstreamRequest:
    path: str
    params: Dict[str, str]


@dataclass(frozen=True)
class ListingQuery:
    limit: int = DEFAULT_LIMIT
    skip: int = 0
    search: str = ""
    category: str = ""
    sort_by: Optional[str] = "title"
    sort_order: str = "asc"
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    price_filter: bool = False

    @classmethod
    def from_params(
        cls,
        limit: Optional[str] = None,
        skip: Optional[str] = None,
        search: Optional[str] = None,
        category: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
        price_min: Optional[str] = None,
        price_max: Optional[str] = None,
    ) -> "ListingQuery":
        """Build a query from raw query-string values, clamping what is out of range."""
        sort_by = "title" if sort_by is None else sort_by
        return cls(
            limit=_parse_limit(limit),
            skip=_parse_skip(skip),
            search=search or "",
            category=category or "",
            sort_by=sort_by if sort_by in SORT_FIELDS else None,
            sort_order="desc" if sort_order == "desc" else "asc",
            price_min=_parse_price(price_min),
            price_max=_parse_price(price_max),
            price_filter=bool(price_min) or bool(price_max),
        )

    @property
    def has_price_filter(self) -> bool:
        """True when either bound was sent, even if it did not parse."""
        return self.price_filter

    def upstream_request(self) -> UpstreamRequest:
        """
        Route to exactly one upstream endpoint.

        A search term beats a category, and a category beats the plain
        listing.
        """
        params = {"limit": str(self.limit), "skip": str(self.skip)}
        if self.sort_by:
            params["sortBy"] = self.sort_by
            params["order"] = self.sort_order

        if self.search:
            params["q"] = self.search
            return UpstreamRequest("/products/search", params)
        if self.category:
            return UpstreamRequest(
                f"/products/category/{quote(self.category, safe='')}", params
            )
        return UpstreamRequest("/products", params)

    def matches_price(self, price: float) -> bool:
        if self.price_min is not None and price < self.price_min:
            return False
        if self.price_max is not None and price > self.price_max:
            return False
        return True


def apply_price_filter(page: ProductPage, query: ListingQuery) -> ProductPage:
    """Keep items priced within [price_min, price_max]; ``total`` becomes the kept count."""
    if not query.has_price_filter:
        return page
    kept = [p for p in page.products if query.matches_price(p.price)]
    return page.model_copy(update={"products": kept, "total": len(kept)})


def _parse_int(raw: Optional[str]) -> Optional[int]:
    if raw is None or not _INT_RE.match(raw):
        return None
    return int(raw)


def _parse_limit(raw: Optional[str]) -> int:
    value = _parse_int(raw)
    if value is None or value <= 0 or value > MAX_LIMIT:
        return DEFAULT_LIMIT
    return value


def _parse_skip(raw: Optional[str]) -> int:
    value = _parse_int(raw)
    if value is None or value < 0:
        return 0
    return value


def _parse_price(raw: Optional[str]) -> Optional[float]:
    # NaN parses and then matches no bound, so every item is kept.
    if not raw or raw != raw.strip() or "_" in raw:
        return None
    try:
        return float(raw)
    except ValueError:
        return None
