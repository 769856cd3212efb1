"""
Unit tests for the Video Analyst generation layer.

Test individual components in isolation:
- Data models (defaults, aliases, immutability)
- Backend client (payload, error mapping) against httpx.MockTransport
- Retry policy (backoff schedule, exhaustion, cancellation)
- Fallback orchestrator (priority order, first success wins)
- Parser (strict decoding, salvage)
- Grounded validator (exact-match filtering, fallback, sanitization)
- Service and API wiring
"""
