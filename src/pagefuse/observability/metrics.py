"""
Defines Prometheus metrics for the extraction and scraping flows.
"""

from __future__ import annotations

from typing import Any, Dict

from prometheus_client import REGISTRY as _PROM_REGISTRY
from prometheus_client import Counter as _OrigCounter
from prometheus_client import Histogram as _OrigHistogram


def _duplicate_safe_factory(metric_cls):
    """Return a factory that reuses an existing collector if already present."""

    def _factory(name: str, documentation: str, *args, **kwargs):  # type: ignore[override]
        existing = _PROM_REGISTRY._names_to_collectors.get(name)
        if existing is not None:
            return existing  # type: ignore[return-value]

        try:
            return metric_cls(name, documentation, *args, **kwargs)  # type: ignore[call-arg]
        except ValueError:
            # Registration lost the race, fall back to the now-existing collector.
            return _PROM_REGISTRY._names_to_collectors[name]  # type: ignore[return-value]

    return _factory


Counter = _duplicate_safe_factory(_OrigCounter)  # type: ignore[assignment]
Histogram = _duplicate_safe_factory(_OrigHistogram)  # type: ignore[assignment]


def _create_metrics() -> Dict[str, Any]:
    # Counters register under their base name, the "_total" suffix is added on export.
    return {
        "requests": Counter(
            "pagefuse_requests",
            "Requests handled per endpoint and outcome",
            ["endpoint", "outcome"],
        ),
        "assets_extracted": Counter(
            "pagefuse_assets_extracted",
            "Assets recovered from HTML, by category",
            ["category"],
        ),
        "provider_latency_seconds": Histogram(
            "pagefuse_provider_latency_seconds",
            "Time taken by the scraping provider to answer",
            buckets=[0.5, 1.0, 2.0, 5.0, 10.0, 20.0, 30.0, 60.0, 90.0],
        ),
        "provider_responses": Counter(
            "pagefuse_provider_responses",
            "Provider HTTP responses by status class",
            ["status_class"],
        ),
        "enrichment_failures": Counter(
            "pagefuse_enrichment_failures",
            "Secondary asset extraction passes that degraded to no manifest",
        ),
    }


METRICS: Dict[str, Any] = _create_metrics()
