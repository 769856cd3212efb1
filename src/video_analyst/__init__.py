"""
Video Analyst generation layer.

Turns a video transcript into grounded, structured output:
- Topics timeline (timestamps that exist in the transcript)
- Question answering with transcript citations

Architecture: prioritized model fallback + per-model retry with backoff,
followed by salvage parsing and transcript grounding.
"""

__version__ = "0.1.0"
