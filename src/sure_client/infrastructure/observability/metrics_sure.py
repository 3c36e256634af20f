# Copyright (c)
# SPDX-License-Identifier: MIT
"""Sure client Prometheus metrics.

Exports
-------
Collectors (names are part of the public contract):

* ``sure_client_request_latency_seconds`` (Histogram: method, endpoint, outcome)
* ``sure_client_http_status_total`` (Counter: endpoint, status)
* ``sure_client_errors_total`` (Counter: endpoint, reason)

Helpers:

* :func:`observe_sure_request` – context manager wrapping one API call.
* :func:`record_http_status` – count a received status code.

Design
------
Collectors are created against the *current* default registry
(:data:`prometheus_client.REGISTRY`); an existing collector with the same name
is reused so module re-imports and registry swaps in tests never raise
``Duplicated timeseries``. ``endpoint`` labels are logical operation names
(``"accounts.get"``), never raw paths, so resource ids do not explode label
cardinality. Recording is best-effort and never raises into callers.
"""

from __future__ import annotations

from collections.abc import Generator, Sequence
from contextlib import contextmanager, suppress
from dataclasses import dataclass, field
from time import perf_counter

import prometheus_client as prom
from prometheus_client import Counter, Histogram
from prometheus_client.registry import CollectorRegistry

__all__ = [
    "RequestObservation",
    "get_sure_errors_total",
    "get_sure_http_status_total",
    "get_sure_request_latency_seconds",
    "observe_sure_request",
    "record_http_status",
]


def _get_or_create_histogram(
    name: str,
    doc: str,
    labelnames: Sequence[str] | None = None,
) -> Histogram:
    """Return a histogram bound to the current default registry.

    Reuses an existing :class:`Histogram` of the same name, otherwise registers
    a new one. A concurrent ``Duplicated timeseries`` registration falls back to
    the collector that won the race.

    Args:
        name: Metric name.
        doc: Human-readable metric description.
        labelnames: Optional iterable of label names.

    Returns:
        A :class:`Histogram` bound to the current :data:`prom.REGISTRY`.
    """
    registry: CollectorRegistry = prom.REGISTRY
    mapping = getattr(registry, "_names_to_collectors", {})
    existing = mapping.get(name)
    if isinstance(existing, Histogram):
        return existing

    labels = tuple(labelnames) if labelnames is not None else ()
    try:
        return Histogram(name, doc, labels, registry=registry)
    except ValueError as exc:
        if "Duplicated timeseries" in str(exc):
            again = getattr(registry, "_names_to_collectors", {}).get(name)
            if isinstance(again, Histogram):
                return again
        raise


def _get_or_create_counter(
    name: str,
    doc: str,
    labelnames: Sequence[str] | None = None,
) -> Counter:
    """Counter twin of :func:`_get_or_create_histogram`."""
    registry: CollectorRegistry = prom.REGISTRY
    mapping = getattr(registry, "_names_to_collectors", {})
    # Counters register under both "x" and "x_total"; look up either.
    existing = mapping.get(name) or mapping.get(name.removesuffix("_total"))
    if isinstance(existing, Counter):
        return existing

    labels = tuple(labelnames) if labelnames is not None else ()
    try:
        return Counter(name, doc, labels, registry=registry)
    except ValueError as exc:
        if "Duplicated timeseries" in str(exc):
            mapping = getattr(registry, "_names_to_collectors", {})
            again = mapping.get(name) or mapping.get(name.removesuffix("_total"))
            if isinstance(again, Counter):
                return again
        raise


# ---------------------------------------------------------------------------
# Collectors
# ---------------------------------------------------------------------------

sure_request_latency_seconds: Histogram = _get_or_create_histogram(
    "sure_client_request_latency_seconds",
    "Latency of Sure API calls made by the client (seconds).",
    labelnames=("method", "endpoint", "outcome"),
)

sure_http_status_total: Counter = _get_or_create_counter(
    "sure_client_http_status_total",
    "HTTP status codes returned by the Sure API.",
    labelnames=("endpoint", "status"),
)

sure_errors_total: Counter = _get_or_create_counter(
    "sure_client_errors_total",
    "Errors raised by the Sure client, by reason.",
    labelnames=("endpoint", "reason"),
)


# ---------------------------------------------------------------------------
# Observation helpers
# ---------------------------------------------------------------------------


@dataclass
class RequestObservation:
    """State captured while observing one API call.

    Attributes:
        method: HTTP method.
        endpoint: Logical endpoint name.
        start: Monotonic start time in seconds.
        outcome: ``"success"`` or ``"error"``.
        error_reason: Machine-readable error code, if the call failed.
    """

    method: str
    endpoint: str
    start: float = field(default_factory=perf_counter)
    outcome: str = "success"
    error_reason: str | None = None

    def mark_error(self, reason: str) -> None:
        self.outcome = "error"
        self.error_reason = reason


@contextmanager
def observe_sure_request(*, method: str, endpoint: str) -> Generator[RequestObservation, None, None]:
    """Observe a Sure API request.

    Records a latency sample and, when the call fails (either via
    :meth:`RequestObservation.mark_error` or an escaping exception), an error
    increment.

    Args:
        method: HTTP method (``"GET"``, ``"POST"``, ...).
        endpoint: Logical endpoint name (e.g. ``"transactions.list"``).

    Yields:
        A mutable :class:`RequestObservation`.
    """
    obs = RequestObservation(method=method, endpoint=endpoint)
    try:
        yield obs
    except Exception as exc:
        if obs.error_reason is None:
            obs.mark_error(str(getattr(exc, "code", None) or "exception").lower())
        raise
    finally:
        elapsed = perf_counter() - obs.start
        with suppress(Exception):
            sure_request_latency_seconds.labels(
                method=obs.method,
                endpoint=obs.endpoint,
                outcome=obs.outcome,
            ).observe(elapsed)
            if obs.error_reason is not None:
                sure_errors_total.labels(endpoint=obs.endpoint, reason=obs.error_reason).inc()


def record_http_status(endpoint: str, status: int) -> None:
    """Count one HTTP status for an endpoint (best-effort)."""
    with suppress(Exception):
        sure_http_status_total.labels(endpoint=endpoint, status=str(status)).inc()


def get_sure_request_latency_seconds() -> Histogram:
    return sure_request_latency_seconds


def get_sure_http_status_total() -> Counter:
    return sure_http_status_total


def get_sure_errors_total() -> Counter:
    return sure_errors_total
