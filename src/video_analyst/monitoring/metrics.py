"""Custom Prometheus metrics for the Video Analyst generation layer.

These metrics are exposed at /metrics endpoint and should be scraped by Prometheus.
Alert rules should be configured for:
- generation_exhausted_total (every backend failed for a request)
- backend_fallbacks_total (preferred model is failing or rate-limited)
- salvage_parses_total (backends drifting away from valid JSON)
- topic_fallbacks_total (models citing timestamps that do not exist)
"""

from prometheus_client import Counter, Histogram

# === Backend Call Metrics ===

backend_attempts_total = Counter(
    "backend_attempts_total",
    "Total backend call attempts by backend and outcome",
    ["backend", "outcome"],
)
"""
Backend attempts counter.

Labels:
- backend: Model identifier (e.g., gemini-2.0-flash-lite)
- outcome: success, failure, cancelled
"""

backend_latency_seconds = Histogram(
    "backend_latency_seconds",
    "Backend call latency in seconds",
    ["backend", "success"],
    buckets=[0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0],
)

# === Fallback Metrics ===

backend_fallbacks_total = Counter(
    "backend_fallbacks_total",
    "Backends whose full retry budget was spent, triggering fallback",
    ["backend"],
)
"""
Labels:
- backend: The exhausted backend (the next one in priority order is tried)

Alert thresholds:
- WARN: fallback rate on the primary backend > 10% of requests
"""

generation_exhausted_total = Counter(
    "generation_exhausted_total",
    "Requests for which every configured backend was exhausted",
)

# === Parsing & Grounding Metrics ===

salvage_parses_total = Counter(
    "salvage_parses_total",
    "Strict JSON decoding failures handled by the salvage parser",
    ["kind", "recovered"],
)
"""
Labels:
- kind: chat_answer, topics
- recovered: true (at least the main field was recovered), false (placeholder returned)
"""

grounding_dropped_total = Counter(
    "grounding_dropped_total",
    "References dropped because their timestamp is not in the transcript",
    ["kind"],
)
"""
Labels:
- kind: topic, citation
"""

topic_fallbacks_total = Counter(
    "topic_fallbacks_total",
    "Topic lists replaced by the deterministic transcript-head fallback",
)
