"""
catalog — read-through proxy over the upstream product catalog.

Provides:
  • ``ListingQuery`` normalization and upstream routing
  • client-side price-range filtering
  • ``CatalogClient`` (httpx) and the ``/products`` + ``/categories`` routes
"""
