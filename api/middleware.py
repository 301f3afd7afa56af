"""
Global middleware.
"""

from __future__ import annotations

import logging
import time
from typing import List

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

logger = logging.getLogger(__name__)


def register_middleware(
    app: FastAPI,
    cors_origins: List[str],
    trusted_proxies: List[str],
) -> None:
    """Attach CORS, proxy-header trust and request timing."""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["Origin", "Content-Length", "Content-Type", "Authorization"],
    )

    # X-Forwarded-For / -Proto are only honoured from these hosts.
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=trusted_proxies)

    @app.middleware("http")
    async def request_timer(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        logger.debug("%s %s — %.3fs", request.method, request.url.path, elapsed)
        return response
