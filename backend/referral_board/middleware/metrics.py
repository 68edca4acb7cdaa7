"""
Prometheus Metrics Middleware

Provides request/response metrics for monitoring:
- HTTP request latency
- Request count by endpoint and status
- Active request gauge
- Referral status transitions and deletions

Usage:
    from referral_board.middleware.metrics import setup_metrics

    # In main.py
    app = FastAPI()
    setup_metrics(app)

Metrics Endpoint:
    GET /metrics - Prometheus-format metrics
"""

import time
import logging
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    CONTENT_TYPE_LATEST,
    generate_latest,
    REGISTRY,
)
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Match

logger = logging.getLogger(__name__)

METRICS_PATH = "/metrics"

# ==================== Prometheus Metrics ====================

REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint", "status"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"]
)

ACTIVE_REQUESTS = Gauge(
    "http_requests_active",
    "Number of active HTTP requests",
    ["method", "endpoint"]
)

REFERRAL_TRANSITIONS = Counter(
    "referral_transitions_total",
    "Referrals entering each status",
    ["status"]  # pending on create, accepted/rejected on update
)

REFERRALS_DELETED = Counter(
    "referrals_deleted_total",
    "Referrals deleted",
    ["reason"]  # rejected_expired, orphaned, employer_delete, cleared
)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Records latency, count and in-flight gauge per route template.

    Requests are labelled with the matched route pattern (e.g.
    /api/referrals/{referral_id}) so ids do not become label values.
    Scrapes of /metrics are not counted.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        endpoint = route_template(request)
        if endpoint == METRICS_PATH:
            return await call_next(request)

        method = request.method
        ACTIVE_REQUESTS.labels(method=method, endpoint=endpoint).inc()
        start_time = time.perf_counter()
        status = "500"

        try:
            response = await call_next(request)
            status = str(response.status_code)
        except Exception as e:
            logger.error(f"Request to {method} {endpoint} failed: {e}")
            raise
        finally:
            template = served_template(request, endpoint)
            REQUEST_LATENCY.labels(method=method, endpoint=template, status=status).observe(
                time.perf_counter() - start_time
            )
            REQUEST_COUNT.labels(method=method, endpoint=template, status=status).inc()
            ACTIVE_REQUESTS.labels(method=method, endpoint=endpoint).dec()

        return response


def route_template(request: Request) -> str:
    """
    Path pattern of the route serving ``request``, or the raw path if none matches.

    Router entries without a ``path`` (mounted or included routers on newer
    FastAPI releases) are skipped.
    """
    for route in request.app.routes:
        path = getattr(route, "path", None)
        if not path:
            continue
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return path

    return request.url.path


def served_template(request: Request, fallback: str) -> str:
    """Pattern of the route FastAPI dispatched to, recorded in the scope once routing ran."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or fallback


def metrics_endpoint(request: Request) -> Response:
    """Prometheus scrape endpoint."""
    return PlainTextResponse(content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)


def setup_metrics(app: FastAPI) -> None:
    """Install the metrics middleware and expose ``GET /metrics``."""
    app.add_middleware(PrometheusMiddleware)
    app.add_route(METRICS_PATH, metrics_endpoint, methods=["GET"])

    logger.info("Prometheus metrics configured")


# ==================== Helper Functions ====================

def record_referral_transition(status: str) -> None:
    """Record a referral entering ``status``."""
    REFERRAL_TRANSITIONS.labels(status=status).inc()


def record_referrals_deleted(reason: str, count: int) -> None:
    if count:
        REFERRALS_DELETED.labels(reason=reason).inc(count)
