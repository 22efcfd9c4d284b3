"""
Prometheus metrics collection for formcheck

This module provides metrics instrumentation for monitoring
field evaluations, rule failures and submission outcomes.
"""
import os
from typing import Optional

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

# Registry for all formcheck metrics
REGISTRY = CollectorRegistry()


# =======================
# EVALUATION METRICS
# =======================

field_evaluations_total = Counter(
    name="formcheck_field_evaluations_total",
    documentation="Total number of field evaluations",
    labelnames=["field_name", "outcome"],  # outcome: valid, invalid
    registry=REGISTRY,
)

rule_failures_total = Counter(
    name="formcheck_rule_failures_total",
    documentation="Total number of failed rule checks",
    labelnames=["field_name", "rule_name"],
    registry=REGISTRY,
)

revalidation_duration_seconds = Histogram(
    name="formcheck_revalidation_duration_seconds",
    documentation="Time spent re-evaluating every field of a form",
    labelnames=["form_id"],
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5],
    registry=REGISTRY,
)

# =======================
# FORM METRICS
# =======================

invalid_fields = Gauge(
    name="formcheck_invalid_fields",
    documentation="Number of fields whose current result is invalid",
    labelnames=["form_id"],
    registry=REGISTRY,
)

submit_attempts_total = Counter(
    name="formcheck_submit_attempts_total",
    documentation="Total number of intercepted submission attempts",
    labelnames=["form_id", "outcome"],  # outcome: allowed, blocked
    registry=REGISTRY,
)


# =======================
# EXPOSITION
# =======================

def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics in text format

    Returns:
        Metrics in Prometheus text format
    """
    return generate_latest(REGISTRY)


def start_metrics_server(port: Optional[int] = None) -> None:
    """
    Start HTTP server for Prometheus metrics

    Args:
        port: Port to listen on (defaults to env var METRICS_PORT or 8000)
    """
    # Lazy import: only bind a port when the endpoint is actually wanted
    from prometheus_client import start_http_server

    metrics_port = port or int(os.getenv("METRICS_PORT", "8000"))
    start_http_server(metrics_port, registry=REGISTRY)


# =======================
# HELPERS
# =======================

class track_duration:
    """
    Context manager for tracking operation duration

    Usage:
        with track_duration(revalidation_duration_seconds, form_id="signup"):
            # do work
            pass
    """

    def __init__(self, histogram: Histogram, **labels):
        """
        Initialize duration tracker

        Args:
            histogram: Prometheus Histogram metric
            **labels: Label values for the metric
        """
        self.histogram = histogram
        self.labels = labels
        self.timer = None

    def __enter__(self):
        """Start timer"""
        self.timer = self.histogram.labels(**self.labels).time()
        self.timer.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Stop timer"""
        self.timer.__exit__(exc_type, exc_val, exc_tb)
        return False


def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    """
    Increment a counter metric

    Args:
        counter: Prometheus Counter metric
        value: Amount to increment (default: 1.0)
        **labels: Label values for the metric
    """
    counter.labels(**labels).inc(value)


def set_gauge(gauge: Gauge, value: float, **labels) -> None:
    """
    Set a gauge metric value

    Args:
        gauge: Prometheus Gauge metric
        value: Value to set
        **labels: Label values for the metric
    """
    gauge.labels(**labels).set(value)


def get_sample_value(name: str, **labels) -> float | None:
    """Read the current value of a sample, mostly for diagnostics and tests."""
    return REGISTRY.get_sample_value(name, labels)
