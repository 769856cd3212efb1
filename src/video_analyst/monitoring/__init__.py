"""Monitoring and metrics instrumentation for the Video Analyst generation layer.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from video_analyst.monitoring.metrics import (
    backend_attempts_total,
    backend_fallbacks_total,
    backend_latency_seconds,
    generation_exhausted_total,
    grounding_dropped_total,
    salvage_parses_total,
    topic_fallbacks_total,
)

__all__ = [
    "backend_attempts_total",
    "backend_latency_seconds",
    "backend_fallbacks_total",
    "generation_exhausted_total",
    "salvage_parses_total",
    "grounding_dropped_total",
    "topic_fallbacks_total",
]
