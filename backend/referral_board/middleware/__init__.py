"""
Middleware Package

Contains FastAPI middleware for:
- Prometheus metrics collection
- Request logging
"""

from referral_board.middleware.metrics import (
    PrometheusMiddleware,
    setup_metrics,
    record_referral_transition,
    record_referrals_deleted,
    REQUEST_LATENCY,
    REQUEST_COUNT,
    ACTIVE_REQUESTS,
    REFERRAL_TRANSITIONS,
    REFERRALS_DELETED,
)
from referral_board.middleware.request_logging import RequestLoggingMiddleware, configure_logging

__all__ = [
    "PrometheusMiddleware",
    "setup_metrics",
    "record_referral_transition",
    "record_referrals_deleted",
    "REQUEST_LATENCY",
    "REQUEST_COUNT",
    "ACTIVE_REQUESTS",
    "REFERRAL_TRANSITIONS",
    "REFERRALS_DELETED",
    "RequestLoggingMiddleware",
    "configure_logging",
]
