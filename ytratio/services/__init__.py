"""Services package - ranking logic layer."""
from .bucketizer import BucketBoundaries, bucketize
from .ranking import RankingService, ingest, rank
from .retention import enforce

__all__ = [
    "BucketBoundaries",
    "RankingService",
    "bucketize",
    "enforce",
    "ingest",
    "rank",
]
