"""
Unit tests for logging configuration and metric helpers.
"""

import json
import logging

import pytest
import structlog
from prometheus_client import REGISTRY

from pagefuse.config import MonitoringConfig
from pagefuse.observability import METRICS, configure_logging, export_prometheus, histogram, increment


def test_file_logging_renders_json(tmp_path, restore_logging):
    log_file = tmp_path / "logs" / "pagefuse.log"
    configure_logging(MonitoringConfig(log_level="DEBUG", log_file=str(log_file)))

    structlog.contextvars.bind_contextvars(request_id="req-1")
    try:
        structlog.get_logger("pagefuse.test").info("Asset pass done", component="extract-assets", images=3)
    finally:
        structlog.contextvars.unbind_contextvars("request_id")

    for handler in logging.getLogger().handlers:
        handler.flush()
    records = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    event = next(record for record in records if record["event"] == "Asset pass done")
    assert event["component"] == "extract-assets"
    assert event["images"] == 3
    assert event["request_id"] == "req-1"
    assert event["level"] == "info"


def test_log_level_applied(restore_logging):
    configure_logging(MonitoringConfig(log_level="warning"))
    assert logging.getLogger().level == logging.WARNING


def test_increment_and_histogram():
    before = REGISTRY.get_sample_value("pagefuse_requests_total", {"endpoint": "unit", "outcome": "success"}) or 0.0
    increment("requests", labels={"endpoint": "unit", "outcome": "success"})
    after = REGISTRY.get_sample_value("pagefuse_requests_total", {"endpoint": "unit", "outcome": "success"})
    assert after == before + 1

    count_before = REGISTRY.get_sample_value("pagefuse_provider_latency_seconds_count") or 0.0
    histogram("provider_latency_seconds", 0.25)
    assert REGISTRY.get_sample_value("pagefuse_provider_latency_seconds_count") == count_before + 1


def test_unknown_metric_ignored():
    increment("no_such_metric")
    histogram("no_such_metric", 1.0)
    assert "no_such_metric" not in METRICS


def test_export_prometheus():
    increment("enrichment_failures", 0)
    exported = export_prometheus().decode()
    assert "pagefuse_enrichment_failures_total" in exported
    assert "pagefuse_provider_latency_seconds_bucket" in exported
