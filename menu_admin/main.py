"""
Menu Admin: best-seller management screen over the shop's menu API.
FastAPI async service; JWT manager role; menu API integration over httpx.
"""
from __future__ import annotations

import time
import uuid as uuid_lib
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import Counter, Histogram, generate_latest
from starlette.responses import Response

from menu_admin.api import best_sellers
from menu_admin.config import get_settings
from menu_admin.core.logging import get_logger, request_id_ctx
from menu_admin.services.best_seller_manager import BestSellerManager

logger = get_logger("menu_admin")  # parent of every service logger
settings = get_settings()

# Sentry (configurable via SENTRY_DSN)
if settings.sentry_dsn:
    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.app_env,
        traces_sample_rate=0.1,
        integrations=[FastApiIntegration()],
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    app.state.best_seller_manager.unmount()
    logger.info("best_seller_screen_unmounted")


app = FastAPI(
    title="Menu Admin API",
    description="Best-seller management for the restaurant menu.",
    version="1.0.0",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "best-sellers", "description": "Best-seller screen (manager only)"},
    ],
)
app.state.best_seller_manager = BestSellerManager()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Prometheus metrics
REQUEST_COUNT = Counter("http_requests_total", "Total requests", ["method", "path", "status"])
REQUEST_LATENCY = Histogram("http_request_duration_seconds", "Request latency", ["method", "path"])


@app.middleware("http")
async def request_id_and_metrics(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid_lib.uuid4())
    request_id_ctx.set(request_id)
    start = time.perf_counter()
    path = request.scope.get("path", "")
    method = request.scope.get("method", "")
    response = await call_next(request)
    duration = time.perf_counter() - start
    REQUEST_COUNT.labels(method=method, path=path, status=response.status_code).inc()
    REQUEST_LATENCY.labels(method=method, path=path).observe(duration)
    response.headers["X-Request-ID"] = request_id
    return response


app.include_router(best_sellers.router, prefix=settings.api_prefix)


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/metrics")
async def metrics():
    return Response(generate_latest(), media_type="text/plain")


@app.get("/")
async def root():
    return {"message": "Menu Admin API", "docs": "/docs"}
