"""
Catalog API routes — product listing, categories.

Route prefix: /api
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from catalog.client import CatalogClient
from catalog.query import ListingQuery
from utils.schemas import CategoriesResponse, ProductPage

router = APIRouter(tags=["catalog"])


def get_catalog_client(request: Request) -> CatalogClient:
    return request.app.state.catalog


@router.get("/products", response_model=ProductPage)
async def list_products(
    limit: Optional[str] = None,
    skip: Optional[str] = None,
    search: Optional[str] = None,
    category: Optional[str] = None,
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    price_min: Optional[str] = Query(None, alias="priceMin"),
    price_max: Optional[str] = Query(None, alias="priceMax"),
    catalog: CatalogClient = Depends(get_catalog_client),
) -> ProductPage:
    """Browse, search or filter the upstream catalog."""
    query = ListingQuery.from_params(
        limit=limit,
        skip=skip,
        search=search,
        category=category,
        sort_by=sort_by,
        sort_order=sort_order,
        price_min=price_min,
        price_max=price_max,
    )
    return await catalog.list_products(query)


@router.get("/categories", response_model=CategoriesResponse)
async def list_categories(
    catalog: CatalogClient = Depends(get_catalog_client),
) -> CategoriesResponse:
    return CategoriesResponse(categories=await catalog.list_categories())
