# treasury_observability/metrics.py
"""
Prometheus metrics for the Griffin orchestration layer.

Collectors are created through :func:`get_metric` so that re-importing a
module (pytest does this with ``importlib.reload``) never registers the same
collector twice.

This module does NOT start an HTTP server on import. Long-running callers
can expose the default registry with ``maybe_start_http_server()``.
"""
from __future__ import annotations

import os
import threading
from typing import Any, Dict, Tuple, Type

from prometheus_client import Counter, Histogram, start_http_server

_METRICS: Dict[Tuple[Type[Any], str], Any] = {}


def get_metric(cls: Type[Any], name: str, *args, **kwargs):
    key = (cls, name)
    if key in _METRICS:
        return _METRICS[key]
    metric = cls(name, *args, **kwargs)
    _METRICS[key] = metric
    return metric


# ----------------------------
# Optional standalone server
# ----------------------------
_METRICS_PORT = int(os.getenv("METRICS_PORT", "8001"))
_server_started = False
_server_lock = threading.Lock()


def maybe_start_http_server() -> None:
    """Start a metrics HTTP server once, only if METRICS_HTTP_SERVER=1."""
    global _server_started
    if _server_started or os.getenv("METRICS_HTTP_SERVER") != "1":
        return
    with _server_lock:
        if not _server_started:
            start_http_server(_METRICS_PORT)
            _server_started = True


# ----------------------------
# Griffin HTTP transport
# ----------------------------
griffin_http_requests_total = get_metric(
    Counter, "griffin_http_requests_total",
    "HTTP requests sent to the Griffin API",
    ["endpoint", "method", "status"],
)

griffin_http_latency_seconds = get_metric(
    Histogram, "griffin_http_latency_seconds",
    "Latency of Griffin API requests (seconds)",
    ["method"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10),
)

griffin_http_retries_total = get_metric(
    Counter, "griffin_http_retries_total",
    "GET requests retried after a transient failure",
    ["reason"],
)

# ----------------------------
# Workflows
# ----------------------------
griffin_payments_total = get_metric(
    Counter, "griffin_payments_total",
    "Create-and-submit payment workflow outcomes per stage",
    ["stage", "result"],
)

griffin_account_polls_total = get_metric(
    Counter, "griffin_account_polls_total",
    "Operational account provisioning outcomes",
    ["outcome"],
)

griffin_operations_total = get_metric(
    Counter, "griffin_operations_total",
    "Boundary operation results",
    ["operation", "result"],
)
