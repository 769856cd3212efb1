"""Application services composing generation, parsing and grounding."""

from video_analyst.services.analysis import VideoAnalysisService
from video_analyst.services.exceptions import InvalidRequestError

__all__ = ["InvalidRequestError", "VideoAnalysisService"]
