"""Models package - domain entities and interfaces."""
from .schemas import (
    Bucket,
    ErrorResponse,
    IngestResponse,
    IngestResult,
    RankingConfig,
    RankingEntryView,
    RankingsResponse,
    RankingView,
    VideoRecord,
)

__all__ = [
    "Bucket",
    "ErrorResponse",
    "IngestResponse",
    "IngestResult",
    "RankingConfig",
    "RankingEntryView",
    "RankingsResponse",
    "RankingView",
    "VideoRecord",
]
